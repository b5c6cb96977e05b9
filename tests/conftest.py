# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_tasks.core.state import AppState
from pocket_tasks.tasks.task_models import TaskFilter
from pocket_tasks.tasks.task_store import TaskStore

from .fakes import FakeKeyValueStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap code.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="pocket-tasks",
        log_level="INFO",
        data_dir=tmp_path,
        storage_backend="sqlite",
        db_path=tmp_path / "tasks.sqlite3",
        json_path=tmp_path / "tasks.json",
        storage_key="tasks",
        default_filter="All",
        color=False,
        confirm_delete=True,
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def store(kv: FakeKeyValueStore) -> TaskStore:
    """A loaded TaskStore on an empty fake backend."""
    s = TaskStore(kv)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store, current_filter=TaskFilter.ALL, color=False)
