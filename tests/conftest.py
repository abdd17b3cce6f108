# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from fun_todo.cli.bootstrap import create_initial_state
from fun_todo.core.state import AppState

from .fakes import FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="fun-todo-test",
        log_level="DEBUG",
        log_file=tmp_path / "fun_todo.log",
        log_levels={},
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        tasks_json_path=tmp_path / "tasks.json",
        storage_path=tmp_path / "tasks.sqlite3",
        storage_backend="sqlite",
        storage_key="TASKS_V1",
        save_timeout_seconds=5.0,
        color_enabled=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired by the real bootstrap, with synchronous saves.

    NOTE: We keep the real SQLite store here because its correctness
    is part of what we want to test.
    """
    return create_initial_state(settings=settings, background_save=False)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 10, 9, 30, tzinfo=UTC))
