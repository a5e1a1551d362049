# src/noteee/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from ..cli.commands import cmd_add, cmd_list
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one line of input: slash commands go to the registry,
    plain text is shorthand for /add.
    """
    line = line.strip()
    if not line:
        return None
    reply = command_registry.handle(state, line)
    if reply is not None:
        return reply
    return cmd_add(state, line.split())


def run_console_loop(state: AppState) -> None:
    logger.info("Console started (tasks=%d).", len(state.store))
    # no escape codes when piped
    state.color = state.color and sys.stdout.isatty()
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "noteee"))
    _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(cmd_list(state, []))

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        try:
            reply = handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            print(reply)

        if not state.running:
            logger.info("Console exit command received.")
            break

    logger.info("Console finished.")
