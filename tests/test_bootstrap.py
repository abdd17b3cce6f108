# tests/test_bootstrap.py

from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from fun_todo.cli.bootstrap import create_initial_state, create_kv_store, shutdown_state
from fun_todo.config import Settings
from fun_todo.storage.kv_store import JsonFileKVStore, SQLiteKVStore


@pytest.mark.parametrize("backend", ["sqlite", "json"])
def test_tasks_survive_restart(settings: SimpleNamespace, backend: str) -> None:
    settings.storage_backend = backend
    tomorrow = datetime.now().astimezone() + timedelta(days=1)

    first = create_initial_state(settings=settings)
    store = first.task_store
    a = store.add_task("water plants", tomorrow)
    b = store.add_task("pay rent", tomorrow)
    assert a is not None and b is not None
    store.toggle_task(a.id)
    shutdown_state(first)

    second = create_initial_state(settings=settings)
    try:
        assert second.task_store.tasks == store.tasks
        assert [t.text for t in second.task_store.tasks] == ["pay rent", "water plants"]
        assert second.task_store.tasks[1].completed is True
    finally:
        shutdown_state(second)


def test_kv_store_selection(settings: SimpleNamespace) -> None:
    assert isinstance(create_kv_store(settings), SQLiteKVStore)

    settings.storage_backend = "json"
    assert isinstance(create_kv_store(settings), JsonFileKVStore)

    settings.storage_backend = "floppy"
    assert isinstance(create_kv_store(settings), SQLiteKVStore)


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("FUNTODO_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FUNTODO_STORAGE_BACKEND", "JSON")
    monkeypatch.setenv("FUNTODO_COLOR", "off")
    monkeypatch.setenv("FUNTODO_SAVE_TIMEOUT", "not-a-number")
    monkeypatch.delenv("FUNTODO_STORAGE_KEY", raising=False)
    monkeypatch.delenv("FUNTODO_TASKS_JSON_PATH", raising=False)
    monkeypatch.delenv("FUNTODO_LOG_FILE", raising=False)

    s = Settings.from_env()

    assert s.storage_backend == "json"
    assert s.storage_key == "TASKS_V1"
    assert s.tasks_json_path == tmp_path / "data" / "tasks.json"
    assert s.storage_path == s.tasks_json_path
    assert s.color_enabled is False
    assert s.save_timeout_seconds == 5.0
    assert s.log_file == tmp_path / "data" / "fun_todo.log"


def test_settings_log_levels_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("FUNTODO_LOG_LEVELS", "fun_todo.storage=debug, fun_todo.cli=WARNING broken =INFO")
    monkeypatch.setenv("FUNTODO_LOG_FILE", str(tmp_path / "elsewhere.log"))

    s = Settings.from_env()

    assert s.log_levels == {"fun_todo.storage": "DEBUG", "fun_todo.cli": "WARNING"}
    assert s.log_file == tmp_path / "elsewhere.log"
