# src/fun_todo/storage/task_storage.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..config import DEFAULT_STORAGE_KEY
from ..core.ports import KVStore
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class TaskStorage:
    """
    Persistence adapter: the whole task list as one JSON array under a fixed key.

    Never raises to its caller:
    - save failures are logged and dropped
    - load failures (missing key, bad JSON, wrong shape) give an empty list
    """

    def __init__(self, kv: KVStore, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            blob = json.dumps([t.to_record() for t in tasks], ensure_ascii=False)
            self._kv.set(self._key, blob)
            logger.debug("Saved %d tasks under key=%s", len(tasks), self._key)
        except Exception:
            logger.exception("Save error (key=%s, tasks=%d)", self._key, len(tasks))

    def load(self) -> list[Task]:
        try:
            blob = self._kv.get(self._key)
        except Exception:
            logger.exception("Load error (key=%s)", self._key)
            return []

        if not blob:
            return []

        try:
            data = json.loads(blob)
        except ValueError:
            logger.exception("Stored tasks under key=%s are not valid JSON", self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Stored tasks under key=%s are not a JSON array; ignoring.", self._key)
            return []

        out: list[Task] = []
        for raw in data:
            if not isinstance(raw, dict):
                continue
            try:
                out.append(Task.from_record(raw))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping malformed task record id=%r: %s", raw.get("id"), e)

        logger.info("Loaded %d tasks from key=%s", len(out), self._key)
        return out
