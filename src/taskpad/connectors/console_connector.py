# src/taskpad/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..cli.commands import render_task_list
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Apply one line of user input and return the reply to print.

    Slash commands go through the registry; any other text is added as a
    task. Returns None for blank input.
    """
    line = line.strip()
    if not line:
        return None

    try:
        reply = command_registry.handle(state, line)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if reply is not None:
        return reply

    task = state.task_store.add(line)
    if task is None:
        return None
    return render_task_list(state.task_store)


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    logger.info("Console started (tasks=%d).", len(state.task_store))
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskpad"))

    write(f"[{app_name}] Type a task to add it. Use /help for commands, /exit to quit.\n")
    write(render_task_list(state.task_store))

    while True:
        try:
            user_input = read("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            write(reply)

    logger.info("Console finished.")
