# src/todo_home/tasks/errors.py

"""
Error taxonomy.

Every error is scoped to the single action being handled; none of them is
fatal to the process. Connectors catch TodoError per action.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all task-home errors."""


class ValidationError(TodoError):
    """A required field is empty or malformed (create/edit rejected)."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundOrForeign(TodoError):
    """Referenced task is absent or owned by another user."""

    def __init__(self, task_id: int, owner_id: str) -> None:
        super().__init__(f"task {task_id} not found for owner {owner_id}")
        self.task_id = task_id
        self.owner_id = owner_id


class InvalidFilter(TodoError):
    """Unrecognized filter mode."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"unknown filter mode: {mode!r}")
        self.mode = mode


class StoreUnavailable(TodoError):
    """The task store failed; the current action is abandoned without retry."""


class UnknownAction(TodoError):
    """A transport event could not be mapped to a known action."""
