# src/fun_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a local default.
- Local data lives under a gitignored directory (.local/fun_todo by default).
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "FUNTODO"

STORAGE_BACKENDS = ("sqlite", "json")
DEFAULT_STORAGE_KEY = "TASKS_V1"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_levels(name: str) -> dict[str, str]:
    """Parse "logger=LEVEL" pairs separated by commas or spaces."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return {}
    out: dict[str, str] = {}
    for part in raw.replace(",", " ").split():
        logger_name, sep, level = part.partition("=")
        if sep and logger_name.strip() and level.strip():
            out[logger_name.strip()] = level.strip().upper()
    return out


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _default_color_enabled() -> bool:
    # NO_COLOR wins; FORCE_COLOR turns colors on even without a TTY.
    if os.getenv("NO_COLOR") is not None:
        return False
    if _env_bool("FORCE_COLOR", False):
        return True
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file: Path
    log_levels: dict[str, str]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path
    tasks_json_path: Path

    # ---- Persistence ----
    storage_backend: str
    storage_key: str
    save_timeout_seconds: float

    # ---- Console ----
    color_enabled: bool

    @property
    def storage_path(self) -> Path:
        """Path of the blob store used by the selected backend."""
        return self.tasks_json_path if self.storage_backend == "json" else self.tasks_db_path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "fun-todo").strip() or "fun-todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/fun_todo"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        tasks_json_path = _env_path(_k("TASKS_JSON_PATH"), data_dir / "tasks.json")
        log_file = _env_path(_k("LOG_FILE"), data_dir / "fun_todo.log")
        log_levels = _env_levels(_k("LOG_LEVELS"))

        # Unknown values are kept as-is; bootstrap warns and falls back to sqlite.
        storage_backend = _env(_k("STORAGE_BACKEND"), "sqlite").strip().lower() or "sqlite"
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY
        save_timeout_seconds = max(0.0, _env_float(_k("SAVE_TIMEOUT"), 5.0))

        color_enabled = _env_bool(_k("COLOR"), _default_color_enabled())

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file=log_file,
            log_levels=log_levels,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            tasks_json_path=tasks_json_path,
            storage_backend=storage_backend,
            storage_key=storage_key,
            save_timeout_seconds=save_timeout_seconds,
            color_enabled=color_enabled,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
