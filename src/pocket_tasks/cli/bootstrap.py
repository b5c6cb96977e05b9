# src/pocket_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the configured key-value backend into TaskStore and AppState,
- loads the stored task list.
"""

from __future__ import annotations

import logging
import sys

from ..config import STORAGE_BACKENDS, get_settings
from ..core.state import AppState
from ..storage.kv_store import open_kv_store
from ..tasks.task_models import TaskFilter
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.json_path.parent.mkdir(parents=True, exist_ok=True)


def _initial_filter(settings) -> TaskFilter:
    raw = getattr(settings, "default_filter", TaskFilter.ALL.value)
    try:
        return TaskFilter.parse(raw)
    except ValueError:
        logger.warning("Unknown default filter %r; using All.", raw)
        return TaskFilter.ALL


def create_initial_state(*, settings=None, color: bool | None = None) -> AppState:
    """
    Create AppState from the provided settings (tasks are NOT loaded yet).

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if settings.storage_backend not in STORAGE_BACKENDS:
        logger.warning(
            "POCKET_STORAGE_BACKEND=%r is not one of %s.", settings.storage_backend, STORAGE_BACKENDS
        )

    kv = open_kv_store(settings)
    task_store = TaskStore(kv, key=settings.storage_key)

    if color is None:
        color = bool(settings.color) and sys.stdout.isatty()

    return AppState(
        settings=settings,
        task_store=task_store,
        current_filter=_initial_filter(settings),
        color=color,
    )
