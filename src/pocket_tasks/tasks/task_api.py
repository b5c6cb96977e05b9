# src/pocket_tasks/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .task_models import Task
from .task_store import TaskValidationError, validate_task_text

logger = logging.getLogger(__name__)

SHORT_ID_LEN = 8


class AmbiguousTaskIdError(LookupError):
    def __init__(self, prefix: str, matches: list[Task]) -> None:
        super().__init__(f"Id {prefix!r} matches {len(matches)} tasks; type more characters.")
        self.prefix = prefix
        self.matches = matches


def short_id(task: Task) -> str:
    return task.id[:SHORT_ID_LEN]


def find_task(state: AppState, id_or_prefix: str) -> Task | None:
    """
    Resolve what the user typed to one task.

    Exact id wins; otherwise any unique prefix of an id is accepted.
    Raises AmbiguousTaskIdError when a prefix matches several tasks.
    """
    needle = (id_or_prefix or "").strip()
    if not needle:
        return None

    store = state.task_store
    exact = store.get(needle)
    if exact is not None:
        return exact

    matches = [t for t in store.tasks if t.id.startswith(needle)]
    if len(matches) > 1:
        raise AmbiguousTaskIdError(needle, matches)
    return matches[0] if matches else None


def create_task(state: AppState, text: str) -> Task:
    """Add a task from raw user input (the "Save Task" action)."""
    task = state.task_store.add(text)
    logger.info("Created task id=%s", task.id)
    return task


def edit_task_text(state: AppState, task: Task, text: str) -> Task | None:
    """
    Change the text of an existing task (the task-details "update" action).

    Returns the updated task, or None if it disappeared in the meantime.
    """
    validate_task_text(text)
    updated = task.with_text(text)
    if not state.task_store.update(updated):
        return None
    return updated


def visible_tasks(state: AppState) -> list[Task]:
    """Tasks under the currently selected filter tab."""
    store = state.task_store
    return store.filter(store.tasks, state.current_filter)


def task_counts(state: AppState) -> dict[str, int]:
    tasks = state.task_store.tasks
    done = sum(1 for t in tasks if t.completed)
    return {"total": len(tasks), "active": len(tasks) - done, "completed": done}


__all__ = [
    "AmbiguousTaskIdError",
    "TaskValidationError",
    "create_task",
    "edit_task_text",
    "find_task",
    "short_id",
    "task_counts",
    "visible_tasks",
]
