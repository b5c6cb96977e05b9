# src/pocket_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import EXIT_COMMANDS, add_task_reply
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def ask_yes_no(question: str, *, input_fn: InputFn = input) -> bool:
    """Blocking y/N prompt; anything but y/yes (including EOF) means no."""
    try:
        answer = input_fn(f"{question} [y/N] ")
    except (EOFError, KeyboardInterrupt):
        return False
    return answer.strip().lower() in ("y", "yes")


def handle_line(
    state: AppState,
    line: str,
    *,
    confirm: Callable[[str], bool] | None,
) -> str | None:
    """
    Turn one line of user input into a reply.

    Slash commands go through the registry; plain text is the quick-add path
    and is stored exactly as typed.
    """
    try:
        if not line.lstrip().startswith("/"):
            return add_task_reply(state, line)
        return command_registry.handle(state, line.lstrip(), confirm=confirm)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


def run_console_loop(
    state: AppState,
    *,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> None:
    logger.info("Console connector started (tasks=%d).", state.task_store.count())
    output_fn(command_registry.handle(state, "/list") or "")
    output_fn("\nType a task to add it. Use /help for commands. Use /exit to quit.\n")

    def confirm(question: str) -> bool:
        return ask_yes_no(question, input_fn=input_fn)

    while True:
        try:
            user_input = input_fn("> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output_fn("")
            break

        stripped = user_input.strip()
        if not stripped:
            continue

        if stripped.startswith("/") and stripped[1:].lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input, confirm=confirm)
        if reply is not None:
            output_fn(reply + "\n")

    logger.info("Console connector finished.")
