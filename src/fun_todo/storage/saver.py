# src/fun_todo/storage/saver.py

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any

from ..core.ports import TaskPersistence

logger = logging.getLogger(__name__)


class BackgroundSaver:
    """
    Fire-and-forget wrapper around a TaskPersistence.

    - save() only records the latest snapshot and wakes the worker; it never blocks on I/O.
    - One daemon worker thread writes snapshots; if several arrive while a write is
      running, only the newest one is written next.
    - load() is passed through synchronously (startup needs the data anyway).
    - After shutdown(), save() writes synchronously so late changes are not dropped.
    """

    def __init__(self, persistence: TaskPersistence, *, name: str = "task-saver") -> None:
        self._persistence = persistence
        self._cond = threading.Condition()
        self._pending: tuple[Any, ...] | None = None
        self._busy = False
        self._stopped = False

        self._worker = threading.Thread(target=self._run, name=name, daemon=True)
        self._worker.start()
        logger.info("Background saver started (thread=%s).", name)

    def load(self) -> list[Any]:
        return self._persistence.load()

    def save(self, tasks: Sequence[Any]) -> None:
        snapshot = tuple(tasks)
        with self._cond:
            if not self._stopped:
                if self._pending is not None:
                    logger.debug("Coalescing queued save (%d -> %d tasks).", len(self._pending), len(snapshot))
                self._pending = snapshot
                self._cond.notify_all()
                return

        logger.debug("Saver stopped; saving %d tasks synchronously.", len(snapshot))
        self._write(snapshot)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every queued snapshot is written. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending is None and not self._busy, timeout)

    def shutdown(self, timeout: float | None = 5.0) -> None:
        drained = self.flush(timeout)
        if not drained:
            logger.warning("Saver did not drain within %ss; latest changes may be lost.", timeout)
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        self._worker.join(timeout)
        logger.info("Background saver stopped.")

    # ---- worker ----

    def _write(self, snapshot: tuple[Any, ...]) -> None:
        try:
            self._persistence.save(snapshot)
        except Exception:
            logger.exception("Background save failed (tasks=%d).", len(snapshot))

    def _run(self) -> None:
        while True:
            with self._cond:
                while self._pending is None and not self._stopped:
                    self._cond.wait()
                if self._pending is None:
                    return
                snapshot = self._pending
                self._pending = None
                self._busy = True

            self._write(snapshot)

            with self._cond:
                self._busy = False
                self._cond.notify_all()
