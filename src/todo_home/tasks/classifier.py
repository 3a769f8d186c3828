# src/todo_home/tasks/classifier.py

"""
Task classifier.

Pure predicates over a Task and "today". Comparison is date-only: a task due
today is upcoming, not overdue.

For any open task exactly one of is_overdue / is_upcoming / is_inbox holds.
Completed tasks satisfy none of them and are bucketed as COMPLETED.
"""

from __future__ import annotations

from datetime import date

from .task_models import FilterMode, Task, TaskBucket


def is_overdue(task: Task, today: date) -> bool:
    if task.due_date is None or task.completed:
        return False
    return task.due_date < today


def is_upcoming(task: Task, today: date) -> bool:
    if task.due_date is None or task.completed:
        return False
    return task.due_date >= today


def is_inbox(task: Task) -> bool:
    return task.due_date is None and not task.completed


def classify(task: Task, today: date) -> TaskBucket:
    if task.completed:
        return TaskBucket.COMPLETED
    if task.due_date is None:
        return TaskBucket.INBOX
    if task.due_date < today:
        return TaskBucket.OVERDUE
    return TaskBucket.UPCOMING


def matches_filter(task: Task, mode: FilterMode, today: date) -> bool:
    """True if the task belongs in the visible list for `mode`."""
    if mode is FilterMode.OVERDUE:
        return is_overdue(task, today)
    if mode is FilterMode.UPCOMING:
        return is_upcoming(task, today)
    return is_inbox(task)
