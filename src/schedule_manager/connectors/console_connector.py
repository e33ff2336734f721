# src/schedule_manager/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import EXIT_CHOICE, Prompt
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _print(text: str) -> None:
    print(text, flush=True)


def run_console_loop(state: AppState, ask: Prompt = input) -> None:
    """
    Menu REPL: show the menu, read a choice, run the command, print its reply.

    Invalid input is re-prompted. A crashing handler is logged and reported,
    then the loop continues. EOF / Ctrl+C / choice 7 leave the loop.
    """
    logger.info("Console connector started (file=%s).", state.store.path)

    while True:
        _print("\n" + command_registry.build_menu())
        try:
            choice = ask("Enter your choice: ").strip()
            if choice == EXIT_CHOICE:
                logger.info("Console exit command received.")
                _print("Exiting Schedule Manager. Goodbye!")
                break

            try:
                reply = command_registry.handle(state, choice, ask, emit=_print)
            except (EOFError, KeyboardInterrupt):
                raise
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        _print(reply)
