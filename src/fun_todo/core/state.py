# src/fun_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..connectors.theme import Theme
from ..core.ports import KVStore
from ..storage.saver import BackgroundSaver
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    kv: KVStore
    theme: Theme
    saver: BackgroundSaver | None = None
