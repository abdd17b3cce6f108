# src/fun_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends and the front end swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, Protocol

Clock = Callable[[], datetime]
# Returns "now" as a timezone-aware datetime.

TasksListener = Callable[[tuple[Any, ...]], None]
# Receives the store snapshot (tuple of Task) after every change.


class RandomSource(Protocol):
    """Subset of random.Random the store needs for the decoration pick."""

    def randrange(self, stop: int) -> int: ...


class KVStore(Protocol):
    """String key -> string blob store."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
    def close(self) -> None: ...


class TaskPersistence(Protocol):
    """
    Durable save/load of the whole task collection.

    Implementations never raise: save failures are logged, load failures
    return an empty list.
    """

    def save(self, tasks: Sequence[Any]) -> None: ...
    def load(self) -> list[Any]: ...
