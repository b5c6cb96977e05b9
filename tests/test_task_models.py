# tests/test_task_models.py

from __future__ import annotations

import pytest

from pocket_tasks.tasks.task_models import Task, TaskFilter, new_task_id


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("All", TaskFilter.ALL),
        ("all", TaskFilter.ALL),
        ("a", TaskFilter.ALL),
        (" ACTIVE ", TaskFilter.ACTIVE),
        ("todo", TaskFilter.ACTIVE),
        ("Completed", TaskFilter.COMPLETED),
        ("done", TaskFilter.COMPLETED),
    ],
)
def test_filter_parse(raw: str, expected: TaskFilter) -> None:
    assert TaskFilter.parse(raw) is expected


@pytest.mark.parametrize("raw", ["", None, "later"])
def test_filter_parse_rejects_unknown(raw) -> None:
    with pytest.raises(ValueError):
        TaskFilter.parse(raw)


def test_filter_values_are_tab_labels() -> None:
    assert [f.value for f in TaskFilter] == ["All", "Active", "Completed"]


def test_task_dict_shape() -> None:
    t = Task(id="abc", text="Buy milk")
    assert t.to_dict() == {"id": "abc", "text": "Buy milk", "completed": False}
    assert Task.from_dict(t.to_dict()) == t


def test_from_dict_rejects_records_without_id_or_text() -> None:
    assert Task.from_dict({"text": "x"}) is None
    assert Task.from_dict({"id": "", "text": "x"}) is None
    assert Task.from_dict({"id": "1"}) is None


def test_toggled_and_with_text_return_new_tasks() -> None:
    t = Task(id="1", text="a")
    assert t.toggled() == Task(id="1", text="a", completed=True)
    assert t.toggled().toggled() == t
    assert t.with_text("b") == Task(id="1", text="b")
    assert t.text == "a"


def test_new_task_id_is_hex_and_unique() -> None:
    ids = [new_task_id() for _ in range(100)]
    assert len(set(ids)) == 100
    assert all(len(i) == 32 and int(i, 16) >= 0 for i in ids)
