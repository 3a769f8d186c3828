# tests/fakes.py

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from todo_home.home.view import FormView, HomeView
from todo_home.tasks.errors import StoreUnavailable
from todo_home.tasks.task_models import Task
from todo_home.tasks.task_store import PATCHABLE_FIELDS


class FakeTaskRepo:
    """
    In-memory TaskRepo used for handler unit tests.

    Keeps insertion order (like the SQLite store) and the same owner scoping,
    so tests are purely about handler / view logic.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: dict[int, Task] = {t.id: t for t in (tasks or [])}
        self._next_id = max(self.tasks, default=0) + 1
        self.calls: list[str] = []

    def create_task(
        self,
        *,
        owner_id: str,
        text: str,
        due_date: date | None = None,
        assignee: str | None = None,
    ) -> Task:
        self.calls.append("create_task")
        now = time.time()
        task = Task(
            id=self._next_id,
            owner_id=owner_id,
            text=text,
            due_date=due_date,
            assignee=assignee or owner_id,
            completed=False,
            completed_at=None,
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1
        self.tasks[task.id] = task
        return task

    def find_by_owner(self, owner_id: str) -> list[Task]:
        self.calls.append("find_by_owner")
        return [t for t in self.tasks.values() if t.owner_id == owner_id]

    def find_one(self, task_id: int, owner_id: str) -> Task | None:
        self.calls.append("find_one")
        t = self.tasks.get(task_id)
        return t if t is not None and t.owner_id == owner_id else None

    def update_one(self, task_id: int, owner_id: str, **fields: Any) -> bool:
        self.calls.append("update_one")
        assert set(fields) <= PATCHABLE_FIELDS
        t = self.find_one(task_id, owner_id)
        if t is None:
            return False
        self.tasks[task_id] = replace(t, **fields, updated_at=time.time())
        return True

    def delete_one(self, task_id: int, owner_id: str) -> bool:
        self.calls.append("delete_one")
        if self.find_one(task_id, owner_id) is None:
            return False
        del self.tasks[task_id]
        return True


class BrokenTaskRepo(FakeTaskRepo):
    """Every call fails like an unreachable database."""

    def find_by_owner(self, owner_id: str) -> list[Task]:
        raise StoreUnavailable("database is locked")

    def update_one(self, task_id: int, owner_id: str, **fields: Any) -> bool:
        raise StoreUnavailable("database is locked")


@dataclass(slots=True)
class FakeSurface:
    """Records everything delivered, in order."""

    events: list[tuple[str, str, Any]] = field(default_factory=list)

    async def publish_home(self, user_id: str, view: HomeView) -> None:
        self.events.append(("home", user_id, view))

    async def open_form(self, user_id: str, form: FormView) -> None:
        self.events.append(("form", user_id, form))

    async def notify(self, user_id: str, text: str) -> None:
        self.events.append(("notice", user_id, text))


def make_task(
    task_id: int,
    *,
    owner_id: str = "u1",
    text: str | None = None,
    due_date: date | None = None,
    completed: bool = False,
    assignee: str | None = None,
) -> Task:
    return Task(
        id=task_id,
        owner_id=owner_id,
        text=text or f"task {task_id}",
        due_date=due_date,
        assignee=assignee or owner_id,
        completed=completed,
        completed_at=1000.0 if completed else None,
        created_at=float(task_id),
        updated_at=float(task_id),
    )
