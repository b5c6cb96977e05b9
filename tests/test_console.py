# tests/test_console.py

from __future__ import annotations

from types import SimpleNamespace

from pocket_tasks.cli.bootstrap import create_initial_state
from pocket_tasks.connectors.console_connector import ask_yes_no, handle_line, run_console_loop
from pocket_tasks.core.state import AppState
from pocket_tasks.tasks.task_models import TaskFilter

from .fakes import ScriptedInput


def test_plain_text_adds_a_task(state: AppState) -> None:
    reply = handle_line(state, "Buy milk", confirm=None) or ""
    assert reply.startswith("Added task ")
    assert [t.text for t in state.task_store.tasks] == ["Buy milk"]


def test_plain_text_keeps_whitespace_as_typed(state: AppState) -> None:
    handle_line(state, "Buy  2   eggs", confirm=None)
    handle_line(state, "  indented note ", confirm=None)
    assert [t.text for t in state.task_store.tasks] == ["Buy  2   eggs", "  indented note "]


def test_console_loop_passes_input_unstripped(state: AppState) -> None:
    out: list[str] = []
    inputs = ScriptedInput("Call  mom ", "  /add\tTab\tseparated", "  /quit  ")

    run_console_loop(state, input_fn=inputs, output_fn=out.append)

    assert [t.text for t in state.task_store.tasks] == ["Call  mom ", "Tab\tseparated"]
    assert inputs.answers == []


def test_handler_crash_is_contained(state: AppState, monkeypatch) -> None:
    def boom(*_args, **_kwargs):
        raise KeyError("x")

    monkeypatch.setattr(state.task_store, "add", boom)
    reply = handle_line(state, "/add x", confirm=None)
    assert reply == "Internal error while handling a command."


def test_ask_yes_no() -> None:
    assert ask_yes_no("Delete?", input_fn=ScriptedInput("y")) is True
    assert ask_yes_no("Delete?", input_fn=ScriptedInput("YES ")) is True
    assert ask_yes_no("Delete?", input_fn=ScriptedInput("")) is False
    assert ask_yes_no("Delete?", input_fn=ScriptedInput("n")) is False
    assert ask_yes_no("Delete?", input_fn=ScriptedInput()) is False


def test_console_session_add_toggle_delete(state: AppState) -> None:
    out: list[str] = []
    inputs = ScriptedInput("Buy milk", "", "/list", "/exit", "never read")

    run_console_loop(state, input_fn=inputs, output_fn=out.append)

    assert "No tasks." in out[0]
    assert [t.text for t in state.task_store.tasks] == ["Buy milk"]
    assert inputs.answers == ["never read"]

    task = state.task_store.tasks[0]
    out.clear()
    inputs = ScriptedInput(f"/done {task.id[:8]}", f"/rm {task.id[:8]}", "y")
    run_console_loop(state, input_fn=inputs, output_fn=out.append)

    assert state.task_store.tasks == []
    assert any("is completed" in line for line in out)
    assert any(line.startswith("Deleted task ") for line in out)
    assert any("Are you sure" in p for p in inputs.prompts)


def test_bootstrap_wires_settings(settings: SimpleNamespace) -> None:
    settings.storage_backend = "json"
    settings.default_filter = "completed"

    state = create_initial_state(settings=settings, color=False)

    assert state.current_filter is TaskFilter.COMPLETED
    assert not state.task_store.is_loaded
    assert state.task_store.load() == []
    state.task_store.add("persisted")
    assert settings.json_path.exists()


def test_bootstrap_unknown_default_filter_falls_back(settings: SimpleNamespace) -> None:
    settings.default_filter = "someday"
    state = create_initial_state(settings=settings, color=False)
    assert state.current_filter is TaskFilter.ALL
