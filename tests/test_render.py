# tests/test_render.py

from __future__ import annotations

from datetime import timedelta

from todo_home.home.render import render_form_text, render_home_text
from todo_home.home.view import compose_create_form, compose_edit_form, compose_home_view
from todo_home.tasks.task_models import FilterMode

from .conftest import TODAY
from .fakes import make_task


def test_render_home_text() -> None:
    tasks = [
        make_task(1, text="Late thing", due_date=TODAY - timedelta(days=2)),
        make_task(2, text="Done thing", completed=True),
    ]
    text = render_home_text(compose_home_view("u1", tasks, FilterMode.OVERDUE, today=TODAY))

    assert "== Your To-Do List ==" in text
    assert "*You have 1 open ToDo(s)*" in text
    assert "(x) Overdue" in text
    assert "#1 *Late thing*" in text
    assert "*Overdue:" in text
    assert "/done 1  /edit 1  /delete 1" in text
    assert "~Done thing~" in text
    assert "/delete 2" in text
    assert "/done 2" not in text


def test_render_empty_state() -> None:
    text = render_home_text(compose_home_view("u1", [], FilterMode.INBOX, today=TODAY))
    assert "No todos yet" in text
    assert "Recently Completed" not in text


def test_render_assignee_only_when_delegated() -> None:
    tasks = [make_task(1, assignee="u2"), make_task(2)]
    text = render_home_text(compose_home_view("u1", tasks, FilterMode.INBOX, today=TODAY))
    assert text.count("Assigned to:") == 1


def test_render_forms() -> None:
    create = render_form_text(compose_create_form(error="Task text is required."))
    assert "New ToDo" in create and "! Task text is required." in create and "/add" in create

    edit = render_form_text(compose_edit_form(3, text="abc", due_date=None, assignee="u1"))
    assert "Edit ToDo" in edit and "/update 3" in edit and "Text: abc" in edit


def test_edit_form_offers_ready_update_line() -> None:
    edit = render_form_text(compose_edit_form(3, text="Pay rent", due_date=TODAY, assignee="@bob:hs"))
    assert "Update: /update 3 Pay rent" in edit
    assert f"Due date: {TODAY.isoformat()}" in edit
    assert "due:none" in edit and "@me" in edit

    form = compose_edit_form(3, text="", due_date=None, assignee=None, error="Task text is required.")
    blank = render_form_text(form)
    assert "/update 3 <text>" in blank
