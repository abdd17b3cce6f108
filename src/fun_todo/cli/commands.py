# src/fun_todo/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import cast

from ..connectors.render import render_task_list
from ..core.state import AppState
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_OFFSET_RE = re.compile(r"^\+(\d{1,4})d?$")

CELEBRATION = "🎉 🎊 ✨ Nice work! ✨ 🎊 🎉"


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- date selection ----


def parse_due_date(raw: str, now: datetime | None = None) -> datetime:
    """
    Turn a user-typed due date into a timestamp.

    Accepts: today, tomorrow, +N (days from today), YYYY-MM-DD.
    The chosen day keeps the current time of day. Days before today are rejected.

    Raises ValueError with a user-facing message.
    """
    if now is None:
        now = datetime.now().astimezone()

    s = (raw or "").strip().lower()
    if s == "today":
        due = now
    elif s == "tomorrow":
        due = now + timedelta(days=1)
    elif m := _OFFSET_RE.match(s):
        due = now + timedelta(days=int(m.group(1)))
    elif _DATE_RE.match(s):
        try:
            day = datetime.strptime(s, "%Y-%m-%d").date()
        except ValueError:
            raise ValueError(f"Not a valid date: {raw}") from None
        due = now.replace(year=day.year, month=day.month, day=day.day)
    else:
        raise ValueError(f"Unrecognized due date: {raw!r}. Use today, tomorrow, +N or YYYY-MM-DD.")

    if due.date() < now.date():
        raise ValueError("Due date cannot be in the past.")
    return due


def resolve_task_ref(state: AppState, ref: str) -> Task | None:
    """Find a task by its /list number (1-based) or by raw id."""
    tasks = state.task_store.tasks
    task = state.task_store.get_task(ref)
    if task is not None:
        return task
    if ref.isdigit():
        n = int(ref)
        if 1 <= n <= len(tasks):
            return tasks[n - 1]
    return None


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state.task_store.tasks, theme=getattr(state, "theme", None))


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <due> <text...>
    """
    if len(args) < 2:
        return "Usage: /add <today|tomorrow|+N|YYYY-MM-DD> <text>"

    try:
        due = parse_due_date(args[0])
    except ValueError as e:
        return str(e)

    task = state.task_store.add_task(" ".join(args[1:]), due)
    if task is None:
        return "Nothing added: a task needs some text and a due date."

    logger.debug("Added task id=%s via console", task.id)
    return f"Added {task.emoji} {task.text}"


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /done <n|id>  -> toggle completion (prints a celebration on completion)
    """
    if not args:
        return "Usage: /done <number|id>"

    task = resolve_task_ref(state, args[0])
    if task is None:
        return f"No task {args[0]}."

    updated = state.task_store.toggle_task(task.id)
    if updated is None:
        return f"No task {args[0]}."

    verb = "Completed" if updated.completed else "Reopened"
    reply = f"{verb} {updated.emoji} {updated.text}"

    if state.task_store.consume_celebration():
        if emit is None:
            return f"{CELEBRATION}\n{reply}"
        with contextlib.suppress(Exception):
            emit(CELEBRATION)
    return reply


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <number|id>"

    task = resolve_task_ref(state, args[0])
    if task is None or not state.task_store.delete_task(task.id):
        return f"No task {args[0]}."
    return f"Deleted {task.emoji} {task.text}"


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    tasks = state.task_store.tasks
    done = sum(1 for t in tasks if t.completed)
    backend = getattr(settings, "storage_backend", "sqlite")
    path = getattr(settings, "storage_path", None) or getattr(settings, "tasks_db_path", "?")
    return (
        "Status:\n"
        f"  Storage: {backend} ({path})\n"
        f"  Tasks: {len(tasks)} total, {done} done, {len(tasks) - done} open"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks grouped by creation day.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <today|tomorrow|+N|YYYY-MM-DD> <text>."
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <number|id>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <number|id>.", aliases=["rm", "delete"])
registry.register("status", cmd_status, help_text="Show storage and task counts.")
