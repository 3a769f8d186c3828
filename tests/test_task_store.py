# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from todo_home.tasks.errors import StoreUnavailable, ValidationError
from todo_home.tasks.task_store import TaskStore


def test_create_find_update_delete(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")

    task = store.create_task(owner_id="u1", text=" Pay rent ", due_date=date(2026, 11, 1))
    assert task.id > 0
    assert task.text == "Pay rent"
    assert task.assignee == "u1"
    assert task.due_date == date(2026, 11, 1)
    assert task.completed is False
    assert task.created_at > 0

    assert store.update_one(task.id, "u1", completed=True, completed_at=123.0) is True
    got = store.find_one(task.id, "u1")
    assert got is not None
    assert got.completed is True
    assert got.completed_at == 123.0

    assert store.update_one(task.id, "u1", due_date=None, assignee="u9") is True
    got = store.find_one(task.id, "u1")
    assert got.due_date is None
    assert got.assignee == "u9"

    assert store.delete_one(task.id, "u1") is True
    assert store.find_one(task.id, "u1") is None
    assert store.delete_one(task.id, "u1") is False


def test_owner_scoping(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    mine = store.create_task(owner_id="u1", text="mine")
    store.create_task(owner_id="u2", text="theirs")

    assert store.find_one(mine.id, "u2") is None
    assert store.update_one(mine.id, "u2", text="hacked") is False
    assert store.delete_one(mine.id, "u2") is False
    assert store.find_one(mine.id, "u1").text == "mine"
    assert [t.text for t in store.find_by_owner("u1")] == ["mine"]
    assert store.count_tasks() == 2


def test_find_by_owner_keeps_insertion_order(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    ids = [store.create_task(owner_id="u1", text=f"t{i}").id for i in range(4)]
    assert [t.id for t in store.find_by_owner("u1")] == ids


def test_validation_and_patch_guard(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    with pytest.raises(ValidationError):
        store.create_task(owner_id="u1", text="  ")
    task = store.create_task(owner_id="u1", text="x")
    with pytest.raises(ValueError):
        store.update_one(task.id, "u1", owner_id="u2")


def test_reopen_existing_db(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    TaskStore(db).create_task(owner_id="u1", text="persisted")
    assert [t.text for t in TaskStore(db).find_by_owner("u1")] == ["persisted"]


def test_sqlite_errors_become_store_unavailable(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = TaskStore(db)
    conn = sqlite3.connect(str(db))
    try:
        conn.execute("DROP TABLE tasks")
        conn.commit()
    finally:
        conn.close()

    with pytest.raises(StoreUnavailable):
        store.find_by_owner("u1")
