# src/todo_home/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class FilterMode(StrEnum):
    """Which open tasks the home view lists."""

    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    INBOX = "inbox"

    @property
    def label(self) -> str:
        return self.value.capitalize()


DEFAULT_FILTER = FilterMode.INBOX


class TaskBucket(StrEnum):
    """Temporal status of a task (derived, never stored)."""

    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    INBOX = "inbox"
    COMPLETED = "completed"


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    owner_id: str
    text: str
    due_date: date | None
    assignee: str
    completed: bool
    completed_at: float | None
    created_at: float
    updated_at: float

    @property
    def is_open(self) -> bool:
        return not self.completed
