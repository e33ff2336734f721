# src/schedule_manager/cli/main.py

"""
CLI entrypoint.

Initializes logging, picks the schedule file, builds AppState, loads the
file, then runs the console menu in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import choose_schedule_file, create_initial_state, load_schedules
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "schedule-manager"))

    try:
        path = settings.schedule_file or choose_schedule_file(settings, input)
    except (EOFError, KeyboardInterrupt):
        logger.info("No schedule file chosen. Bye.")
        return
    except OSError:
        logger.exception("Could not prepare a schedule file.")
        return

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings, path=path)

    try:
        summary = load_schedules(state)
    except OSError:
        logger.exception("Failed to load schedules from %s", path)
    else:
        print(
            f"Successfully loaded {summary.tasks} task(s) across "
            f"{summary.schedules} schedule(s).\n"
        )

    try:
        run_console_loop(state)
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
