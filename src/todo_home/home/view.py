# src/todo_home/home/view.py

"""
View composer.

Turns a user's raw tasks plus the active filter into the ordered home view.
Everything here is pure: no store, no transport, no clock (today is passed in).

Section order is fixed:
  Header, OpenCount, CreateButton, FilterSelector, SectionLabel,
  TaskEntry* (or one EmptyState), CompletedFooter (only if it has entries).

Filtering applies to open tasks only; completed tasks never go through the
filter and always land in the footer.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from ..tasks.classifier import is_overdue, matches_filter
from ..tasks.task_models import FilterMode, Task

HEADER_TEXT = "Your To-Do List"
CREATE_LABEL = "New Todo"
EMPTY_TEXT = "No todos yet. Click New Todo to create one."
COMPLETED_TITLE = "Recently Completed"
NO_DUE_PLACEHOLDER = "—"
DEFAULT_COMPLETED_LIMIT = 3


class TaskAction(StrEnum):
    COMPLETE = "complete"
    EDIT = "edit"
    DELETE = "delete"


OPEN_TASK_ACTIONS = (TaskAction.COMPLETE, TaskAction.EDIT, TaskAction.DELETE)


@dataclass(slots=True, frozen=True)
class Header:
    text: str = HEADER_TEXT


@dataclass(slots=True, frozen=True)
class OpenCount:
    count: int


@dataclass(slots=True, frozen=True)
class CreateButton:
    label: str = CREATE_LABEL


@dataclass(slots=True, frozen=True)
class FilterOption:
    mode: FilterMode
    label: str
    selected: bool


@dataclass(slots=True, frozen=True)
class FilterSelector:
    options: tuple[FilterOption, ...]

    @property
    def selected(self) -> FilterMode:
        return next(o.mode for o in self.options if o.selected)


@dataclass(slots=True, frozen=True)
class SectionLabel:
    text: str


@dataclass(slots=True, frozen=True)
class TaskEntry:
    task_id: int
    text: str
    due_date: date | None
    assignee: str
    overdue: bool
    actions: tuple[TaskAction, ...] = OPEN_TASK_ACTIONS

    @property
    def due_label(self) -> str:
        if self.due_date is None:
            return f"Due: {NO_DUE_PLACEHOLDER}"
        if self.overdue:
            return f"Overdue: {self.due_date.isoformat()}"
        return f"Due: {self.due_date.isoformat()}"


@dataclass(slots=True, frozen=True)
class EmptyState:
    text: str = EMPTY_TEXT


@dataclass(slots=True, frozen=True)
class CompletedEntry:
    task_id: int
    text: str
    strikethrough: bool = True
    actions: tuple[TaskAction, ...] = (TaskAction.DELETE,)


@dataclass(slots=True, frozen=True)
class CompletedFooter:
    entries: tuple[CompletedEntry, ...]
    title: str = COMPLETED_TITLE


Section = (
    Header
    | OpenCount
    | CreateButton
    | FilterSelector
    | SectionLabel
    | TaskEntry
    | EmptyState
    | CompletedFooter
)


@dataclass(slots=True, frozen=True)
class HomeView:
    user_id: str
    mode: FilterMode
    sections: tuple[Section, ...]

    def entries(self) -> list[TaskEntry]:
        return [s for s in self.sections if isinstance(s, TaskEntry)]

    def completed(self) -> list[CompletedEntry]:
        for s in self.sections:
            if isinstance(s, CompletedFooter):
                return list(s.entries)
        return []


def sort_key(task: Task) -> tuple[bool, bool, date]:
    """(completed asc, due_date asc); tasks without a due date sort last."""
    return (task.completed, task.due_date is None, task.due_date or date.min)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    # sorted() is stable: equal keys keep store order.
    return sorted(tasks, key=sort_key)


def build_filter_selector(mode: FilterMode) -> FilterSelector:
    return FilterSelector(
        options=tuple(FilterOption(mode=m, label=m.label, selected=m is mode) for m in FilterMode)
    )


def compose_home_view(
    user_id: str,
    tasks: Sequence[Task],
    mode: FilterMode,
    *,
    today: date,
    completed_limit: int = DEFAULT_COMPLETED_LIMIT,
) -> HomeView:
    ordered = sort_tasks(tasks)
    open_tasks = [t for t in ordered if not t.completed]
    done_tasks = [t for t in ordered if t.completed]
    visible = [t for t in open_tasks if matches_filter(t, mode, today)]

    sections: list[Section] = [
        Header(),
        OpenCount(count=len(open_tasks)),
        CreateButton(),
        build_filter_selector(mode),
        SectionLabel(text=mode.label),
    ]

    if visible:
        sections.extend(
            TaskEntry(
                task_id=t.id,
                text=t.text,
                due_date=t.due_date,
                assignee=t.assignee,
                overdue=is_overdue(t, today),
            )
            for t in visible
        )
    else:
        sections.append(EmptyState())

    shown = done_tasks[: max(0, completed_limit)]
    if shown:
        sections.append(
            CompletedFooter(entries=tuple(CompletedEntry(task_id=t.id, text=t.text) for t in shown))
        )

    return HomeView(user_id=user_id, mode=mode, sections=tuple(sections))


# ---- forms ----


class FormKind(StrEnum):
    CREATE = "create"
    EDIT = "edit"


@dataclass(slots=True, frozen=True)
class FormView:
    """A create/edit form, optionally re-shown with a validation error."""

    kind: FormKind
    title: str
    heading: str
    submit_label: str
    task_id: int | None = None
    text: str = ""
    due_date: date | None = None
    assignee: str | None = None
    error: str | None = None


def compose_create_form(
    *,
    text: str = "",
    due_date: date | None = None,
    assignee: str | None = None,
    error: str | None = None,
) -> FormView:
    return FormView(
        kind=FormKind.CREATE,
        title="New ToDo",
        heading="Create a new task",
        submit_label="Save",
        text=text,
        due_date=due_date,
        assignee=assignee,
        error=error,
    )


def compose_edit_form(
    task_id: int,
    *,
    text: str,
    due_date: date | None,
    assignee: str | None,
    error: str | None = None,
) -> FormView:
    return FormView(
        kind=FormKind.EDIT,
        title="Edit ToDo",
        heading="Update your task",
        submit_label="Update",
        task_id=task_id,
        text=text,
        due_date=due_date,
        assignee=assignee,
        error=error,
    )
