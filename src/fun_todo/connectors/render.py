# src/fun_todo/connectors/render.py

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..tasks.projection import format_day, group_by_day
from ..tasks.task_models import HeaderEntry, Task
from ..tasks.urgency import classify_urgency
from .theme import DIM, STRIKE, Theme

EMPTY_TEXT = "No tasks yet. Add one with /add <due> <text>."


def _day(ts: datetime, now: datetime) -> str:
    if ts.tzinfo is not None and now.tzinfo is not None:
        ts = ts.astimezone(now.tzinfo)
    return format_day(ts.date())


def render_task(task: Task, number: int, *, now: datetime, theme: Theme) -> str:
    urgency = classify_urgency(task, now)
    mark = "[x]" if task.completed else "[ ]"
    text = theme.paint(task.text, STRIKE) if task.completed else task.text
    emoji = f"{task.emoji} " if task.emoji else ""
    tier = theme.hex(f"({urgency.label})", urgency.color)
    dates = theme.paint(
        f"created {_day(task.created_at, now)}, due {_day(task.due_date, now)}", DIM
    )
    return f"  {number:>2}. {mark} {emoji}{text}  {tier} {dates}"


def render_task_list(tasks: Sequence[Task], *, now: datetime | None = None, theme: Theme | None = None) -> str:
    """Grouped, numbered listing; numbers follow collection order."""
    if now is None:
        now = datetime.now().astimezone()
    if theme is None:
        theme = Theme(enabled=False)

    if not tasks:
        return EMPTY_TEXT

    numbers = {t.id: i for i, t in enumerate(tasks, start=1)}
    lines: list[str] = []
    for entry in group_by_day(tasks, now):
        if isinstance(entry, HeaderEntry):
            lines.append(theme.header(entry.label))
        else:
            lines.append(render_task(entry.task, numbers[entry.task.id], now=now, theme=theme))
    return "\n".join(lines)
