# tests/test_kv_store.py

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_tasks.storage.kv_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    SqliteKeyValueStore,
    StorageError,
    open_kv_store,
)
from pocket_tasks.tasks.task_store import TaskStore


def test_sqlite_get_set_and_overwrite(tmp_path: Path) -> None:
    kv = SqliteKeyValueStore(tmp_path / "nested" / "kv.sqlite3")
    assert kv.get("tasks") is None

    assert kv.set("tasks", "[]") is True
    assert kv.get("tasks") == "[]"

    assert kv.set("tasks", '[{"id": "1"}]') is True
    assert kv.get("tasks") == '[{"id": "1"}]'


def test_sqlite_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "kv.sqlite3"
    SqliteKeyValueStore(db).set("tasks", "payload")
    assert SqliteKeyValueStore(db).get("tasks") == "payload"


def test_sqlite_read_of_broken_db_raises_storage_error(tmp_path: Path) -> None:
    db = tmp_path / "kv.sqlite3"
    kv = SqliteKeyValueStore(db)
    conn = sqlite3.connect(str(db))
    conn.execute("DROP TABLE kv")
    conn.commit()
    conn.close()

    with pytest.raises(StorageError):
        kv.get("tasks")
    assert kv.set("tasks", "x") is False


def test_json_store_round_trip_and_file_shape(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    kv = JsonFileKeyValueStore(path)
    assert kv.get("tasks") is None

    assert kv.set("tasks", "[]") is True
    assert kv.set("other", "x") is True

    assert JsonFileKeyValueStore(path).get("tasks") == "[]"
    assert json.loads(path.read_text("utf-8")) == {"tasks": "[]", "other": "x"}
    assert not (tmp_path / "store.json.tmp").exists()


def test_json_store_does_not_overwrite_unreadable_file(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{broken", "utf-8")
    kv = JsonFileKeyValueStore(path)

    with pytest.raises(StorageError):
        kv.get("tasks")
    assert kv.set("tasks", "[]") is False
    assert path.read_text("utf-8") == "{broken"


def test_in_memory_store() -> None:
    kv = InMemoryKeyValueStore({"a": "1"})
    assert kv.get("a") == "1"
    assert kv.get("b") is None
    assert kv.set("b", "2") is True
    assert kv.get("b") == "2"


@pytest.mark.parametrize(
    ("backend", "expected"),
    [
        ("sqlite", SqliteKeyValueStore),
        ("json", JsonFileKeyValueStore),
        ("memory", InMemoryKeyValueStore),
        ("nonsense", SqliteKeyValueStore),
    ],
)
def test_open_kv_store_picks_backend(settings: SimpleNamespace, backend: str, expected: type) -> None:
    settings.storage_backend = backend
    assert isinstance(open_kv_store(settings), expected)


@pytest.mark.parametrize("backend", ["sqlite", "json"])
def test_task_store_persists_across_instances(settings: SimpleNamespace, backend: str) -> None:
    settings.storage_backend = backend
    first = TaskStore(open_kv_store(settings))
    first.load()
    task = first.add("Buy milk")
    first.toggle_completion(task.id)

    second = TaskStore(open_kv_store(settings))
    assert second.load() == first.tasks
