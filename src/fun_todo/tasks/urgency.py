# src/fun_todo/tasks/urgency.py

from __future__ import annotations

import math
from datetime import datetime, timedelta

from .task_models import Task, Urgency

DUE_SOON_DAYS = 2
_DAY_SECONDS = timedelta(days=1).total_seconds()


def days_until_due(due: Task | datetime, now: datetime | None = None) -> int:
    """ceil((due - now) / 1 day); negative once the due moment has passed."""
    due_date = due.due_date if isinstance(due, Task) else due
    if now is None:
        now = datetime.now().astimezone() if due_date.tzinfo is not None else datetime.now()
    return math.ceil((due_date - now).total_seconds() / _DAY_SECONDS)


def classify_urgency(task: Task, now: datetime | None = None) -> Urgency:
    diff_days = days_until_due(task, now)
    if diff_days < 0:
        return Urgency.OVERDUE
    if diff_days <= DUE_SOON_DAYS:
        return Urgency.DUE_SOON
    return Urgency.COMFORTABLE
