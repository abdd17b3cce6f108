# src/fun_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal

# Index-aligned: one random index picks both the emoji and its color.
EMOJIS: tuple[str, ...] = ("📝", "📌", "🎯", "⚡", "💡")
COLORS: tuple[str, ...] = ("#FFD700", "#FF6F61", "#6BCB77", "#4D96FF", "#FF6EC7")


class Urgency(StrEnum):
    """Due-date urgency tier (derived on every render, never stored)."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    COMFORTABLE = "comfortable"

    @property
    def color(self) -> str:
        return _URGENCY_COLORS[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


_URGENCY_COLORS: dict[Urgency, str] = {
    Urgency.OVERDUE: "#FF6F61",
    Urgency.DUE_SOON: "#FFD700",
    Urgency.COMFORTABLE: "#6BCB77",
}


def _to_iso(ts: datetime) -> str:
    # Naive values are local time, like everywhere else in the app.
    return ts.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _from_iso(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"not a timestamp: {raw!r}")
    s = raw.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    ts = datetime.fromisoformat(s)
    if ts.tzinfo is None:
        ts = ts.astimezone()
    return ts


def _parse_completed(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
        return raw.strip().lower() == "true"
    raise ValueError(f"not a completion flag: {raw!r}")


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    completed: bool
    emoji: str
    color: str
    created_at: datetime
    due_date: datetime

    def to_record(self) -> dict[str, Any]:
        """Primitive key/value form used by the persisted blob."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "emoji": self.emoji,
            "color": self.color,
            "date": _to_iso(self.created_at),
            "dueDate": _to_iso(self.due_date),
        }

    @classmethod
    def from_record(cls, raw: dict[str, Any]) -> Task:
        """
        Rebuild a Task from a persisted record.

        Raises ValueError for records that break the invariants
        (no id/text, no creation or due timestamp).
        """
        tid = raw.get("id")
        if tid is None or str(tid).strip() == "":
            raise ValueError("record has no id")
        text = raw.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValueError("record has no text")

        created_raw = raw.get("date", raw.get("createdAt"))
        return cls(
            id=str(tid),
            text=text,
            completed=_parse_completed(raw.get("completed", False)),
            emoji=str(raw.get("emoji") or ""),
            color=str(raw.get("color") or ""),
            created_at=_from_iso(created_raw),
            due_date=_from_iso(raw.get("dueDate")),
        )


def id_sort_key(task: Task) -> int:
    """Numeric id for newest-first ordering; non-numeric ids fall back to creation ms."""
    try:
        return int(task.id)
    except ValueError:
        return int(task.created_at.timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class HeaderEntry:
    label: str
    kind: Literal["header"] = "header"


@dataclass(frozen=True, slots=True)
class TaskEntry:
    task: Task
    kind: Literal["item"] = "item"


DisplayEntry = HeaderEntry | TaskEntry
