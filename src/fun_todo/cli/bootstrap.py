# src/fun_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the KV store, persistence adapter, background saver and TaskStore into AppState,
- shuts everything down best-effort.
"""

from __future__ import annotations

import logging

from ..config import STORAGE_BACKENDS, get_settings
from ..connectors.theme import Theme
from ..core.ports import KVStore
from ..core.state import AppState
from ..storage.kv_store import JsonFileKVStore, SQLiteKVStore
from ..storage.saver import BackgroundSaver
from ..storage.task_storage import TaskStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.tasks_json_path.parent.mkdir(parents=True, exist_ok=True)


def create_kv_store(settings) -> KVStore:
    backend = str(getattr(settings, "storage_backend", "sqlite")).lower()
    if backend not in STORAGE_BACKENDS:
        logger.warning("Unknown storage backend %r; falling back to sqlite.", backend)
        backend = "sqlite"

    if backend == "json":
        return JsonFileKVStore(settings.tasks_json_path)
    return SQLiteKVStore(settings.tasks_db_path)


def create_initial_state(*, settings=None, background_save: bool = True) -> AppState:
    """
    Create AppState from the provided settings and load the task list.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv = create_kv_store(settings)
    storage = TaskStorage(kv, key=settings.storage_key)

    saver: BackgroundSaver | None = None
    if background_save:
        saver = BackgroundSaver(storage)
        task_store = TaskStore(saver)
    else:
        task_store = TaskStore(storage)

    task_store.initialize()

    return AppState(
        settings=settings,
        task_store=task_store,
        kv=kv,
        theme=Theme(enabled=bool(getattr(settings, "color_enabled", False))),
        saver=saver,
    )


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    timeout = float(getattr(state.settings, "save_timeout_seconds", 5.0))
    if state.saver is not None:
        try:
            state.saver.shutdown(timeout=timeout)
        except Exception:
            logger.exception("Saver shutdown failed.")

    try:
        state.kv.close()
    except Exception:
        logger.debug("KV store close failed.", exc_info=True)
