# src/pocket_tasks/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from ..core.ports import KeyValueStore
from .task_models import Task, TaskFilter, new_task_id

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


class TaskValidationError(ValueError):
    """User input rejected (e.g. empty task text). Nothing was changed."""


class TaskStoreError(RuntimeError):
    """Base class for store-level failures."""


class StorageWriteError(TaskStoreError):
    """The durable store refused the write; the in-memory list was left as it was."""


class CorruptTaskDataError(TaskStoreError):
    """The stored payload is not a JSON array of task records."""


def validate_task_text(text: str) -> None:
    if not text or not text.strip():
        raise TaskValidationError("Task text cannot be empty")


class TaskStore:
    """
    Owner of the task list and its durable mirror.

    The whole list lives under one key as a JSON array of
    {"id", "text", "completed"} objects and is rewritten after every mutation.
    The in-memory list only changes after the durable write succeeded, so the two
    copies never drift apart.

    Callers only ever get copies of the list (Task itself is frozen).
    """

    def __init__(self, kv: KeyValueStore, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key
        self._tasks: list[Task] = []
        self._loaded = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    # ---- serialization ----

    @staticmethod
    def _encode(tasks: Iterable[Task]) -> str:
        return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)

    @staticmethod
    def _decode(raw: str) -> list[Task]:
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise CorruptTaskDataError(f"Stored tasks are not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise CorruptTaskDataError(
                f"Stored tasks must be a JSON array, got {type(data).__name__}"
            )

        out: list[Task] = []
        for item in data:
            if not isinstance(item, dict):
                logger.warning("Skipping non-object task record: %r", item)
                continue
            task = Task.from_dict(item)
            if task is not None:
                out.append(task)
        return out

    # ---- lifecycle ----

    def load(self) -> list[Task]:
        """
        Read the list from the durable store.

        Absent key is the normal first-run state and yields [].
        StorageError (read failed) and CorruptTaskDataError propagate; the store
        stays unloaded so nothing gets overwritten by accident.
        """
        raw = self._kv.get(self._key)
        tasks = [] if raw is None else self._decode(raw)
        self._tasks = tasks
        self._loaded = True
        logger.info("TaskStore loaded key=%s total=%d", self._key, len(tasks))
        return list(tasks)

    def save(self, tasks: Iterable[Task]) -> list[Task]:
        """Write the full list (last writer wins), then adopt it in memory."""
        new_tasks = list(tasks)
        if not self._kv.set(self._key, self._encode(new_tasks)):
            logger.warning("TaskStore save failed key=%s total=%d", self._key, len(new_tasks))
            raise StorageWriteError("Could not save tasks; your last change was not applied.")
        self._tasks = new_tasks
        self._loaded = True
        return list(new_tasks)

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise TaskStoreError("TaskStore.load() must run before tasks are changed")

    # ---- mutations ----

    def add(self, text: str) -> Task:
        validate_task_text(text)
        self._require_loaded()

        task = Task(id=new_task_id(), text=text, completed=False)
        self.save([*self._tasks, task])
        logger.debug("Task added id=%s", task.id)
        return task

    def update(self, task: Task) -> bool:
        """Replace the record(s) with task.id. Unknown id -> False, nothing written."""
        self._require_loaded()
        if not any(t.id == task.id for t in self._tasks):
            return False

        self.save([task if t.id == task.id else t for t in self._tasks])
        logger.debug("Task updated id=%s", task.id)
        return True

    def toggle_completion(self, task_id: str) -> Task | None:
        self._require_loaded()
        current = self.get(task_id)
        if current is None:
            return None

        updated = current.toggled()
        self.save([t.toggled() if t.id == task_id else t for t in self._tasks])
        logger.debug("Task toggled id=%s completed=%s", task_id, updated.completed)
        return updated

    def delete(self, task_id: str) -> bool:
        self._require_loaded()
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) == len(self._tasks):
            return False

        self.save(remaining)
        logger.debug("Task deleted id=%s", task_id)
        return True

    # ---- reads ----

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def count(self) -> int:
        return len(self._tasks)

    @staticmethod
    def filter(tasks: Iterable[Task], criterion: TaskFilter | str) -> list[Task]:
        """Subsequence of tasks matching criterion, order preserved."""
        if not isinstance(criterion, TaskFilter):
            criterion = TaskFilter.parse(criterion)
        return [t for t in tasks if criterion.matches(t)]
