# src/pocket_tasks/storage/kv_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """A durable-store read failed (I/O error, broken database, ...)."""


class SqliteKeyValueStore:
    """
    SQLite key-value store (default backend).

    One table, one row per key:
      kv(key TEXT PRIMARY KEY, value TEXT NOT NULL, updated_at REAL NOT NULL)

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteKeyValueStore ready db=%s", self._db_path)

    @property
    def path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get(self, key: str) -> str | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read key {key!r} from {self._db_path}: {e}") from e
        return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> bool:
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv(key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, time.time()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("SQLite write failed key=%s db=%s", key, self._db_path)
            return False
        logger.debug("kv set key=%s bytes=%d", key, len(value))
        return True


class JsonFileKeyValueStore:
    """
    Whole map kept in one JSON object file.

    Writes go to a temp file and are moved into place with os.replace, so a crash
    mid-write leaves the previous file intact.
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFileKeyValueStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} does not contain a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> bool:
        try:
            data = self._read_all()
        except StorageError:
            logger.exception("Refusing to overwrite unreadable store %s", self._path)
            return False

        data[key] = value
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            logger.exception("JSON store write failed key=%s path=%s", key, self._path)
            return False

        with contextlib.suppress(OSError):
            # Task text is personal data; keep the file private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("kv set key=%s bytes=%d", key, len(value))
        return True


class InMemoryKeyValueStore:
    """Dict-backed store for demos and tests. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True


def open_kv_store(settings) -> SqliteKeyValueStore | JsonFileKeyValueStore | InMemoryKeyValueStore:
    """Pick the backend named by settings.storage_backend (unknown -> sqlite)."""
    backend = str(getattr(settings, "storage_backend", "sqlite") or "sqlite").lower()

    if backend == "json":
        return JsonFileKeyValueStore(settings.json_path)
    if backend == "memory":
        logger.warning("Using in-memory storage; tasks will not survive a restart.")
        return InMemoryKeyValueStore()
    if backend != "sqlite":
        logger.warning("Unknown storage backend %r; falling back to sqlite.", backend)
    return SqliteKeyValueStore(settings.db_path)
