# src/pocket_tasks/connectors/render.py

"""Plain-text rendering of the task list view.

Colors are ANSI SGR codes and are only emitted when the caller asks for them
(AppState.color, which already honors NO_COLOR and non-TTY output).
"""

from __future__ import annotations

from collections.abc import Iterable

from ..tasks.task_api import short_id
from ..tasks.task_models import Task, TaskFilter

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
STRIKE = "\033[9m"
GREEN = "\033[32m"
BLUE = "\033[34m"

CHECK_DONE = "[x]"
CHECK_OPEN = "[ ]"
EMPTY_LIST_TEXT = "No tasks."


def _style(text: str, *codes: str, enabled: bool) -> str:
    if not enabled or not codes:
        return text
    return "".join(codes) + text + RESET


def _first_line(text: str) -> str:
    # The list shows one line per task, like numberOfLines={1} on the phone.
    line = text.strip().splitlines()[0] if text.strip() else ""
    return line if line == text.strip() else line + " ..."


def format_filter_bar(current: TaskFilter, *, color: bool = False) -> str:
    parts: list[str] = []
    for option in TaskFilter:
        if option is current:
            parts.append(_style(f"[{option.value}]", BOLD, BLUE, enabled=color))
        else:
            parts.append(_style(f" {option.value} ", DIM, enabled=color))
    return " ".join(parts)


def format_task_line(task: Task, *, color: bool = False) -> str:
    short = short_id(task)
    text = _first_line(task.text)
    if task.completed:
        mark = _style(CHECK_DONE, GREEN, enabled=color)
        body = _style(text, STRIKE, DIM, enabled=color)
    else:
        mark = _style(CHECK_OPEN, BLUE, enabled=color)
        body = text
    return f"{mark} {_style(short, DIM, enabled=color)}  {body}"


def format_task_list(
    tasks: Iterable[Task],
    current: TaskFilter,
    *,
    title: str = "Tasks:",
    color: bool = False,
) -> str:
    lines = [_style(title, BOLD, enabled=color), format_filter_bar(current, color=color), ""]
    rendered = [format_task_line(t, color=color) for t in tasks]
    if rendered:
        lines.extend(rendered)
    else:
        lines.append(EMPTY_LIST_TEXT)
    return "\n".join(lines)


def format_task_details(task: Task) -> str:
    status = "completed" if task.completed else "active"
    return f"Task {task.id}\n  Status: {status}\n  Text:\n    " + task.text.replace(
        "\n", "\n    "
    )
