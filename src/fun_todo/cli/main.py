# src/fun_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the saved task list),
runs the console REPL and flushes pending saves on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    log_path = setup_logging(
        log_file=settings.log_file,
        console_level=settings.log_level,
        logger_levels=settings.log_levels,
    )

    logger.info("Starting %s (log file %s)...", settings.app_name, log_path)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
