# src/fun_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path

# Loggers that write from worker threads; on the console they would break the prompt line.
BACKGROUND_LOGGERS: tuple[str, ...] = ("fun_todo.storage.saver",)


class _ConsoleFilter(logging.Filter):
    """
    Console rules:
    - fun_todo records pass, except background loggers below WARNING
    - everything else (third-party, 'py.warnings') only at ERROR+
    """

    def __init__(self, background: Iterable[str] = BACKGROUND_LOGGERS) -> None:
        super().__init__()
        self._background = tuple(background)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "fun_todo" or name.startswith("fun_todo."):
            if name.startswith(self._background):
                return record.levelno >= logging.WARNING
            return True
        return record.levelno >= logging.ERROR


def level_from_name(name: str | int, default: int = logging.INFO) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    *,
    log_file: str | Path = ".local/fun_todo/fun_todo.log",
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
    logger_levels: Mapping[str, int | str] | None = None,
) -> Path:
    """
    Configure the root logger once, at startup:
    - stderr handler at console_level, filtered for the interactive REPL
    - UTF-8 file handler at file_level
    - per-logger overrides from logger_levels (e.g. {"fun_todo.storage": "DEBUG"})

    Returns the log file path.
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level_from_name(console_level))
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_path), encoding="utf-8")
    fh.setLevel(level_from_name(file_level, logging.DEBUG))
    fh.setFormatter(fmt)
    root.addHandler(fh)

    for name, level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(level_from_name(level))

    logging.captureWarnings(True)
    return log_path
