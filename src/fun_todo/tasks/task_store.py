# src/fun_todo/tasks/task_store.py

from __future__ import annotations

import logging
import random
import threading
from dataclasses import replace
from datetime import datetime

from ..core.ports import Clock, RandomSource, TaskPersistence, TasksListener
from .task_models import COLORS, EMOJIS, Task, id_sort_key

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _aware(ts: datetime) -> datetime:
    """Naive timestamps are read as local time."""
    return ts if ts.tzinfo is not None else ts.astimezone()


class TaskStore:
    """
    In-memory, newest-first task collection.

    The store is the single writer of the collection. Every effective mutation:
    - replaces the snapshot (a tuple of frozen Task objects),
    - notifies subscribers with the new snapshot,
    - hands the whole collection to the persistence port (best-effort).

    Invalid input (empty text, missing due date, unknown id) is a silent no-op.

    Thread-safety:
    - read-modify-write of the collection happens under one RLock
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        *,
        clock: Clock | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self._persistence = persistence
        self._clock: Clock = clock or _local_now
        self._rng: RandomSource = rng or random.Random()

        self._lock = threading.RLock()
        self._tasks: tuple[Task, ...] = ()
        self._initialized = False
        self._celebrate = False
        self._listeners: list[TasksListener] = []

    # ---- lifecycle ----

    def initialize(self) -> None:
        """Load the persisted collection once and install it newest-first."""
        with self._lock:
            if self._initialized:
                logger.warning("TaskStore.initialize() called twice; ignoring.")
                return

            try:
                loaded = self._persistence.load() or []
            except Exception:
                logger.exception("Loading tasks failed; starting with an empty list.")
                loaded = []

            self._tasks = tuple(sorted(loaded, key=id_sort_key, reverse=True))
            self._initialized = True
            snapshot = self._tasks

        logger.info("TaskStore ready total=%s", len(snapshot))
        self._notify(snapshot)

    @property
    def initialized(self) -> bool:
        return self._initialized

    # ---- read API ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def count_tasks(self) -> int:
        return len(self._tasks)

    # ---- celebration signal ----

    @property
    def celebrate(self) -> bool:
        return self._celebrate

    def consume_celebration(self) -> bool:
        """Return the celebrate flag and reset it (one-shot)."""
        with self._lock:
            fired = self._celebrate
            self._celebrate = False
            return fired

    def reset_celebration(self) -> None:
        self._celebrate = False

    # ---- subscriptions ----

    def subscribe(self, listener: TasksListener):
        """Register listener(snapshot); returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ---- mutations ----

    def add_task(self, text: str | None, due_date: datetime | None) -> Task | None:
        """
        Create a task and make it the newest item.

        Returns the new Task, or None when the input is rejected
        (empty/whitespace text or no due date).
        """
        clean = (text or "").strip()
        if not clean or due_date is None:
            logger.debug("add_task rejected (text=%r due_date=%r)", text, due_date)
            return None

        with self._lock:
            if not self._ready("add_task"):
                return None

            now = _aware(self._clock())
            idx = self._rng.randrange(len(EMOJIS))
            task = Task(
                id=self._next_id(now),
                text=clean,
                completed=False,
                emoji=EMOJIS[idx],
                color=COLORS[idx],
                created_at=now,
                due_date=_aware(due_date),
            )
            self._tasks = (task, *self._tasks)
            snapshot = self._tasks
            self._persist(snapshot)

        logger.debug("Task added id=%s due_date=%s", task.id, task.due_date)
        self._notify(snapshot)
        return task

    def toggle_task(self, task_id: str) -> Task | None:
        """Flip `completed` of the matching task; returns the updated Task or None."""
        with self._lock:
            if not self._ready("toggle_task"):
                return None

            updated: Task | None = None
            out: list[Task] = []
            for t in self._tasks:
                if updated is None and t.id == task_id:
                    updated = replace(t, completed=not t.completed)
                    out.append(updated)
                else:
                    out.append(t)

            if updated is None:
                logger.debug("toggle_task: unknown id=%s", task_id)
                return None

            if updated.completed:
                self._celebrate = True
            self._tasks = tuple(out)
            snapshot = self._tasks
            self._persist(snapshot)

        logger.debug("Task toggled id=%s completed=%s", task_id, updated.completed)
        self._notify(snapshot)
        return updated

    def delete_task(self, task_id: str) -> bool:
        """Remove the matching task; returns True if something was removed."""
        with self._lock:
            if not self._ready("delete_task"):
                return False

            remaining = tuple(t for t in self._tasks if t.id != task_id)
            if len(remaining) == len(self._tasks):
                logger.debug("delete_task: unknown id=%s", task_id)
                return False

            self._tasks = remaining
            snapshot = self._tasks
            self._persist(snapshot)

        logger.debug("Task deleted id=%s", task_id)
        self._notify(snapshot)
        return True

    # ---- internals ----

    def _ready(self, op: str) -> bool:
        if self._initialized:
            return True
        logger.warning("%s ignored: TaskStore is not initialized yet.", op)
        return False

    def _next_id(self, now: datetime) -> str:
        candidate = int(now.timestamp() * 1000)
        if self._tasks:
            newest = max(id_sort_key(t) for t in self._tasks)
            if candidate <= newest:
                candidate = newest + 1
        return str(candidate)

    def _persist(self, snapshot: tuple[Task, ...]) -> None:
        # Called under the lock so saves are handed off in mutation order.
        try:
            self._persistence.save(snapshot)
        except Exception:
            # The in-memory change stands even if the save fails.
            logger.exception("Persisting tasks failed (total=%s).", len(snapshot))

    def _notify(self, snapshot: tuple[Task, ...]) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Task listener %r failed.", listener)
