# tests/test_dispatch.py

from __future__ import annotations

from datetime import date

from todo_home.connectors.dispatch import run_command
from todo_home.core.state import AppState
from todo_home.home.handlers import HomeOutcome
from todo_home.home.view import FormKind
from todo_home.tasks.task_models import FilterMode
from todo_home.tasks.task_store import TaskStore

from .fakes import BrokenTaskRepo


def test_end_to_end_create_complete_delete(state: AppState) -> None:
    out = run_command(state, "/add Water plants", "u1")
    assert isinstance(out, HomeOutcome)
    [entry] = out.home.entries()

    out = run_command(state, f"/done {entry.task_id}", "u1")
    assert out.home.entries() == []
    assert [e.task_id for e in out.home.completed()] == [entry.task_id]

    out = run_command(state, f"/delete {entry.task_id}", "u1")
    assert out.home.completed() == []
    assert state.task_store.find_by_owner("u1") == []


def test_foreign_edit_is_silent(state: AppState) -> None:
    task = state.task_store.create_task(owner_id="u2", text="theirs")
    out = run_command(state, f"/update {task.id} stolen", "u1")
    assert isinstance(out, HomeOutcome)
    assert out.is_empty
    assert state.task_store.find_one(task.id, "u2").text == "theirs"


def test_errors_become_replies(state: AppState) -> None:
    state.filters.set("u1", "upcoming")
    reply = run_command(state, "/filter bogus", "u1")
    assert isinstance(reply, str) and "bogus" in reply
    assert state.filters.get("u1") is FilterMode.UPCOMING

    assert "Cannot handle" in run_command(state, "/done abc", "u1")
    assert run_command(state, "hello", "u1") is None


def test_strict_not_found_reply(settings) -> None:
    settings.strict_not_found = True
    state = AppState(settings=settings, task_store=TaskStore(settings.tasks_db_path))
    assert run_command(state, "/edit 99", "u1") == "Task #99 not found."


def test_update_without_options_keeps_due_date_and_assignee(state: AppState) -> None:
    task = state.task_store.create_task(
        owner_id="u1", text="old text", due_date=date(2026, 11, 1), assignee="@bob:hs"
    )

    opened = run_command(state, f"/edit {task.id}", "u1")
    assert opened.form.due_date == date(2026, 11, 1)
    out = run_command(state, f"/update {task.id} new text", "u1")

    assert out.notice is not None
    after = state.task_store.find_one(task.id, "u1")
    assert (after.text, after.due_date, after.assignee) == ("new text", date(2026, 11, 1), "@bob:hs")


def test_update_can_clear_due_date_and_take_task_back(state: AppState) -> None:
    task = state.task_store.create_task(
        owner_id="u1", text="x", due_date=date(2026, 11, 1), assignee="@bob:hs"
    )
    run_command(state, f"/update {task.id} x due:none @me", "u1")
    after = state.task_store.find_one(task.id, "u1")
    assert (after.due_date, after.assignee) == (None, "u1")


def test_bad_due_date_reshows_form(state: AppState) -> None:
    created = run_command(state, "/add Water plants due:tomorrow", "u1")
    assert isinstance(created, HomeOutcome)
    assert created.form.kind is FormKind.CREATE
    assert "YYYY-MM-DD" in created.form.error
    assert created.form.text == "Water plants"
    assert state.task_store.find_by_owner("u1") == []

    task = state.task_store.create_task(owner_id="u1", text="keep", due_date=date(2026, 11, 1))
    edited = run_command(state, f"/update {task.id} changed due:soon", "u1")
    assert edited.form.kind is FormKind.EDIT
    assert edited.form.due_date == date(2026, 11, 1)
    assert "YYYY-MM-DD" in edited.form.error
    assert state.task_store.find_one(task.id, "u1").text == "keep"


def test_store_failure_becomes_reply(settings) -> None:
    state = AppState(settings=settings, task_store=BrokenTaskRepo())

    for line in ("/home", "/done 1"):
        reply = run_command(state, line, "u1")
        assert isinstance(reply, str)
        assert "unavailable" in reply
