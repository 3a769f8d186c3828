# src/todo_home/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps connectors/storage swappable and makes testing easier.
"""

from datetime import date
from typing import TYPE_CHECKING, Any, Awaitable, Protocol

if TYPE_CHECKING:
    from ..home.view import FormView, HomeView
    from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Durable task storage, always scoped by owner.

    update_one / delete_one are no-ops (return False) when the task is absent
    or belongs to another owner. Failures raise StoreUnavailable.
    """

    def create_task(
            self,
            *,
            owner_id: str,
            text: str,
            due_date: date | None = None,
            assignee: str | None = None,
    ) -> Task: ...

    def find_by_owner(self, owner_id: str) -> list[Task]: ...
    def find_one(self, task_id: int, owner_id: str) -> Task | None: ...
    def update_one(self, task_id: int, owner_id: str, **fields: Any) -> bool: ...
    def delete_one(self, task_id: int, owner_id: str) -> bool: ...


class HomeSurface(Protocol):
    """
    Connector-side port: where rendered views go.

    The connector decides how to present them (Matrix message, console text, ...).
    """

    def publish_home(self, user_id: str, view: HomeView) -> Awaitable[None]: ...
    def open_form(self, user_id: str, form: FormView) -> Awaitable[None]: ...
    def notify(self, user_id: str, text: str) -> Awaitable[None]: ...
