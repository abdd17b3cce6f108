# src/fun_todo/tasks/projection.py

from __future__ import annotations

"""
Presentation projection.

Turns the store's newest-first collection into a flat display sequence:
a HeaderEntry whenever the creation-day label changes, followed by TaskEntry
items. Pure and recomputed on every call; task lists are small.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from .task_models import DisplayEntry, HeaderEntry, Task, TaskEntry

TODAY = "Today"
YESTERDAY = "Yesterday"


def _local_day(ts: datetime, now: datetime) -> date:
    """Calendar day of `ts` in the timezone `now` is expressed in."""
    if ts.tzinfo is not None and now.tzinfo is not None:
        ts = ts.astimezone(now.tzinfo)
    return ts.date()


def format_day(day: date) -> str:
    """Short month, day, year (e.g. "Jan 5, 2024")."""
    return f"{day:%b} {day.day}, {day.year}"


def date_label(created_at: datetime, now: datetime | None = None) -> str:
    if now is None:
        now = datetime.now().astimezone()

    today = now.date()
    day = _local_day(created_at, now)

    if day == today:
        return TODAY
    if day == today - timedelta(days=1):
        return YESTERDAY
    return format_day(day)


def group_by_day(tasks: Iterable[Task], now: datetime | None = None) -> list[DisplayEntry]:
    if now is None:
        now = datetime.now().astimezone()

    out: list[DisplayEntry] = []
    last_label: str | None = None
    for task in tasks:
        label = date_label(task.created_at, now)
        if label != last_label:
            out.append(HeaderEntry(label=label))
            last_label = label
        out.append(TaskEntry(task=task))
    return out
