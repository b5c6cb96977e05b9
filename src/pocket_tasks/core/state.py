# src/pocket_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import TaskFilter
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    task_store: TaskStore

    # The list view's selected tab; a view setting, never persisted.
    current_filter: TaskFilter = TaskFilter.ALL
    color: bool = False
