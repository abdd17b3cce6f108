# src/fun_todo/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..connectors.render import render_task_list
from ..core.state import AppState

logger = logging.getLogger(__name__)

LIST_COMMANDS = ("/list", "/ls")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    try:
        if sys.stdout.isatty():
            sys.stdout.write("\033[1A\033[2K\r")
            sys.stdout.write(line + "\n")
            sys.stdout.flush()
        else:
            print(line)
    except Exception:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%s).", state.task_store.count_tasks())
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "fun-todo"))
    _print_ts(f"[{app_name}] Use /help for commands, /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    # The store tells us when the collection changed; re-render after such commands.
    changed = {"flag": False}

    def on_change(_snapshot) -> None:
        changed["flag"] = True

    unsubscribe = state.task_store.subscribe(on_change)

    print(render_task_list(state.task_store.tasks, theme=state.theme))
    print()

    try:
        while True:
            try:
                user_input = input("> ").strip()
                _rewrite_prev_line(f"[{_ts_local()}] > {user_input}")
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                _print_ts("Pick a due date first: /add <today|tomorrow|+N|YYYY-MM-DD> <text>\n")
                continue

            changed["flag"] = False
            try:
                cmd_response = command_registry.handle(state, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                cmd_response = "Internal error while handling a command."

            if cmd_response is not None:
                _print_ts(cmd_response)

            if changed["flag"] and user_input.split()[0].lower() not in LIST_COMMANDS:
                print(render_task_list(state.task_store.tasks, theme=state.theme))
            print()
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
