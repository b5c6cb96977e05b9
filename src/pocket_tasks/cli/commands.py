# src/pocket_tasks/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable

from ..connectors.render import format_task_details, format_task_list
from ..core.state import AppState
from ..storage.kv_store import StorageError
from ..tasks.task_api import (
    AmbiguousTaskIdError,
    create_task,
    edit_task_text,
    find_task,
    short_id,
    task_counts,
    visible_tasks,
)
from ..tasks.task_models import TaskFilter
from ..tasks.task_store import TaskStoreError, TaskValidationError

ConfirmPrompt = Callable[[str], bool]
CommandHandler = Callable[..., str]

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit", "q")


def split_head(text: str) -> tuple[str, str]:
    """
    Split "word rest" into ("word", "rest").

    Only the one separator after the word is consumed; the rest is returned
    exactly as typed (runs of spaces, tabs, trailing blanks included).
    """
    body = text.lstrip()
    parts = body.split(maxsplit=1)
    if not parts:
        return "", ""
    head = parts[0]
    return head, body[len(head) + 1 :]


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
        confirm: ConfirmPrompt | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Every handler gets (state, args) with args split on whitespace.
        Handlers that declare `rest` also get the raw text after the command
        name; handlers that declare `confirm` also get the y/N prompt.
        """
        if not line.startswith("/"):
            return None

        head, rest = split_head(line[1:])
        if not head:
            return "Empty command. Use /help to list available commands."

        name = head.lower()
        args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            params = inspect.signature(handler).parameters
        except (TypeError, ValueError):
            params = {}

        extra: dict[str, object] = {}
        if "rest" in params:
            extra["rest"] = rest
        if "confirm" in params:
            extra["confirm"] = confirm
        return handler(state, args, **extra)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit (/quit, /q) - Leave the console.")
        lines.append("  Plain text (without /) adds it as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def _list_view(state: AppState) -> str:
    title = f"{getattr(state.settings, 'app_name', 'Tasks')} - Tasks:"
    return format_task_list(
        visible_tasks(state), state.current_filter, title=title, color=state.color
    )


def _with_list(state: AppState, message: str) -> str:
    return f"{message}\n\n{_list_view(state)}"


def _resolve(state: AppState, args: list[str], usage: str):
    """Return (task, None) or (None, error message)."""
    if not args:
        return None, usage
    try:
        task = find_task(state, args[0])
    except AmbiguousTaskIdError as e:
        return None, str(e)
    if task is None:
        return None, f"Task {args[0]} not found."
    return task, None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list            -> tasks under the current filter
    /list <filter>   -> switch filter (all | active | completed) and list
    """
    if args:
        try:
            state.current_filter = TaskFilter.parse(args[0])
        except ValueError as e:
            return str(e)
    return _list_view(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Current filter: {state.current_filter.value}. Use /filter all | active | completed."
    return cmd_list(state, args)


def add_task_reply(state: AppState, text: str) -> str:
    """Create a task from text exactly as typed and reply with the list."""
    try:
        task = create_task(state, text)
    except TaskValidationError as e:
        return str(e)
    except TaskStoreError as e:
        return f"[storage] {e}"
    return _with_list(state, f"Added task {short_id(task)}.")


def cmd_add(state: AppState, args: list[str], rest: str) -> str:
    return add_task_reply(state, rest)


def cmd_show(state: AppState, args: list[str]) -> str:
    task, err = _resolve(state, args, "Usage: /show <id>")
    if err:
        return err
    return format_task_details(task)


def cmd_edit(state: AppState, args: list[str], rest: str) -> str:
    task, err = _resolve(state, args, "Usage: /edit <id> <new text>")
    if err:
        return err
    try:
        updated = edit_task_text(state, task, split_head(rest)[1])
    except TaskValidationError as e:
        return str(e)
    except TaskStoreError as e:
        return f"[storage] {e}"
    if updated is None:
        return f"Task {args[0]} not found."
    return _with_list(state, f"Updated task {short_id(updated)}.")


def cmd_done(state: AppState, args: list[str]) -> str:
    task, err = _resolve(state, args, "Usage: /done <id>")
    if err:
        return err
    try:
        updated = state.task_store.toggle_completion(task.id)
    except TaskStoreError as e:
        return f"[storage] {e}"
    if updated is None:
        return f"Task {args[0]} not found."
    status = "completed" if updated.completed else "active again"
    return _with_list(state, f"Task {short_id(updated)} is {status}.")


def cmd_rm(
    state: AppState,
    args: list[str],
    confirm: ConfirmPrompt | None = None,
) -> str:
    """
    /rm <id> -> delete a task after a y/N confirmation.

    Without a confirm prompt (non-interactive caller) deletion is refused unless
    POCKET_CONFIRM_DELETE is off.
    """
    task, err = _resolve(state, args, "Usage: /rm <id>")
    if err:
        return err

    if getattr(state.settings, "confirm_delete", True):
        if confirm is None:
            return "Deletion needs confirmation; run it from the interactive console."
        if not confirm(f"Are you sure you want to delete this task? \"{task.text}\""):
            return "Cancelled."

    try:
        removed = state.task_store.delete(task.id)
    except TaskStoreError as e:
        return f"[storage] {e}"
    if not removed:
        return f"Task {args[0]} not found."
    logger.debug("Deleted task id=%s via console", task.id)
    return _with_list(state, f"Deleted task {short_id(task)}.")


def cmd_stats(state: AppState, args: list[str]) -> str:
    counts = task_counts(state)
    backend = getattr(state.settings, "storage_backend", "?")
    return (
        "Status:\n"
        f"  Tasks: {counts['total']} ({counts['active']} active, {counts['completed']} completed)\n"
        f"  Filter: {state.current_filter.value}\n"
        f"  Storage: {backend}"
    )


def cmd_reload(state: AppState, args: list[str]) -> str:
    try:
        state.task_store.load()
    except (TaskStoreError, StorageError) as e:
        logger.warning("Reload failed: %s", e)
        return f"[storage] Reload failed: {e}"
    return _list_view(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "list", cmd_list, help_text="List tasks: /list [all | active | completed].", aliases=["ls"]
)
registry.register("filter", cmd_filter, help_text="Switch filter: /filter all | active | completed.")
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["new"])
registry.register("show", cmd_show, help_text="Show task details: /show <id>.")
registry.register("edit", cmd_edit, help_text="Change task text: /edit <id> <new text>.")
registry.register(
    "done", cmd_done, help_text="Toggle completed/active: /done <id>.", aliases=["toggle"]
)
registry.register("rm", cmd_rm, help_text="Delete a task (asks first): /rm <id>.", aliases=["delete"])
registry.register("stats", cmd_stats, help_text="Show task counts and storage backend.")
registry.register("reload", cmd_reload, help_text="Re-read tasks from storage.")
