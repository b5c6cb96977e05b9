# src/pocket_tasks/tasks/task_models.py

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class TaskFilter(StrEnum):
    """
    List criterion.

    Values are the tab labels of the list view, so they are also what gets shown
    to the user and what POCKET_DEFAULT_FILTER expects.
    """

    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        """Parse user input (case-insensitive, short aliases allowed)."""
        key = (raw or "").strip().lower()
        try:
            return _FILTER_ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown filter: {raw!r} (use all, active or completed)") from None

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True


_FILTER_ALIASES: dict[str, TaskFilter] = {
    "all": TaskFilter.ALL,
    "a": TaskFilter.ALL,
    "active": TaskFilter.ACTIVE,
    "open": TaskFilter.ACTIVE,
    "todo": TaskFilter.ACTIVE,
    "completed": TaskFilter.COMPLETED,
    "done": TaskFilter.COMPLETED,
}


def new_task_id() -> str:
    """Random 32-char hex id; safe under rapid creation, unlike a timestamp."""
    return uuid.uuid4().hex


_COMPLETED_STRINGS = {"true": True, "false": False}


def _parse_completed(raw: Any) -> bool:
    """Stored "completed" flag -> bool. Unknown shapes count as not completed."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in _COMPLETED_STRINGS:
        return _COMPLETED_STRINGS[raw.strip().lower()]
    if isinstance(raw, int | float) and raw in (0, 1):
        return bool(raw)
    logger.warning("Unrecognised completed flag %r; treating the task as active", raw)
    return False


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task | None:
        """
        Build a Task from one stored record.

        Lenient on purpose so one odd record does not lose the whole list:
        - numeric ids are coerced to str
        - missing "completed" means False; "true"/"false" strings and 0/1 are
          accepted, anything else is treated as False
        - a record without id or text is skipped (returns None)
        """
        raw_id = raw.get("id")
        raw_text = raw.get("text")
        if raw_id is None or raw_id == "" or raw_text is None:
            logger.warning("Skipping stored task without id/text: %r", raw)
            return None
        return cls(
            id=str(raw_id),
            text=str(raw_text),
            completed=_parse_completed(raw.get("completed", False)),
        )

    def toggled(self) -> Task:
        return Task(id=self.id, text=self.text, completed=not self.completed)

    def with_text(self, text: str) -> Task:
        return Task(id=self.id, text=text, completed=self.completed)
