# src/todo_home/home/actions.py

"""
Action boundary.

Transports hand us loosely typed events shaped like
    {"kind": "...", "actor_id": "...", "payload": {...}}
parse_action() turns them into one of the frozen dataclasses below, or raises
UnknownAction before anything reaches the handlers. A bad due date on a
submitted form is not raised here: it travels on the action as
due_date_error so the handler can re-show the form with it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum, StrEnum
from typing import Any

from ..tasks.errors import UnknownAction, ValidationError


class ActionKind(StrEnum):
    OPEN_CREATE_FORM = "open_create_form"
    SUBMIT_CREATE = "submit_create"
    OPEN_EDIT_FORM = "open_edit_form"
    SUBMIT_EDIT = "submit_edit"
    COMPLETE = "complete"
    DELETE = "delete"
    CHANGE_FILTER = "change_filter"
    SURFACE_OPENED = "surface_opened"


class Keep(Enum):
    """An edit field the submitter left out; the stored value stays."""

    KEEP = "keep"


KEEP = Keep.KEEP


@dataclass(slots=True, frozen=True)
class OpenCreateForm:
    actor_id: str


@dataclass(slots=True, frozen=True)
class SubmitCreate:
    actor_id: str
    text: str
    due_date: date | None = None
    assignee: str | None = None
    due_date_error: str | None = None


@dataclass(slots=True, frozen=True)
class OpenEditForm:
    actor_id: str
    task_id: int


@dataclass(slots=True, frozen=True)
class SubmitEdit:
    actor_id: str
    task_id: int
    text: str
    due_date: date | None | Keep = None
    assignee: str | None | Keep = None
    due_date_error: str | None = None


@dataclass(slots=True, frozen=True)
class CompleteTask:
    actor_id: str
    task_id: int


@dataclass(slots=True, frozen=True)
class DeleteTask:
    actor_id: str
    task_id: int


@dataclass(slots=True, frozen=True)
class ChangeFilter:
    # Raw value; validated by FilterState so a bad mode keeps the prior one.
    actor_id: str
    mode: str


@dataclass(slots=True, frozen=True)
class SurfaceOpened:
    actor_id: str


Action = (
    OpenCreateForm
    | SubmitCreate
    | OpenEditForm
    | SubmitEdit
    | CompleteTask
    | DeleteTask
    | ChangeFilter
    | SurfaceOpened
)


def _opt_str(payload: Mapping[str, Any], key: str) -> str | None:
    raw = payload.get(key)
    if raw is None:
        return None
    s = str(raw).strip()
    return s or None


def parse_due_date(raw: object) -> date | None:
    """ISO date (YYYY-MM-DD) or empty -> None. Time of day is not accepted."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip())
    except ValueError:
        raise ValidationError(f"Invalid due date: {raw!r} (expected YYYY-MM-DD).", field="due_date") from None


def _form_due_date(
    payload: Mapping[str, Any], *, default: date | None | Keep
) -> tuple[date | None | Keep, str | None]:
    """(due_date, error) for a submitted form; an absent key yields `default`."""
    if "due_date" not in payload:
        return default, None
    try:
        return parse_due_date(payload["due_date"]), None
    except ValidationError as e:
        return default, str(e)


def _task_id(payload: Mapping[str, Any]) -> int:
    raw = payload.get("task_id")
    if isinstance(raw, bool):
        raise UnknownAction(f"malformed task_id: {raw!r}")
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise UnknownAction(f"malformed task_id: {raw!r}") from None


def parse_action(event: Mapping[str, Any]) -> Action:
    raw_kind = event.get("kind")
    try:
        kind = ActionKind(str(raw_kind))
    except ValueError:
        raise UnknownAction(f"unknown action kind: {raw_kind!r}") from None

    actor_id = str(event.get("actor_id") or "").strip()
    if not actor_id:
        raise UnknownAction(f"{kind.value}: missing actor_id")

    payload = event.get("payload") or {}
    if not isinstance(payload, Mapping):
        raise UnknownAction(f"{kind.value}: payload must be a mapping")

    if kind is ActionKind.OPEN_CREATE_FORM:
        return OpenCreateForm(actor_id=actor_id)

    if kind is ActionKind.SURFACE_OPENED:
        return SurfaceOpened(actor_id=actor_id)

    if kind is ActionKind.SUBMIT_CREATE:
        due_date, due_error = _form_due_date(payload, default=None)
        return SubmitCreate(
            actor_id=actor_id,
            text=str(payload.get("text") or ""),
            due_date=due_date,
            assignee=_opt_str(payload, "assignee"),
            due_date_error=due_error,
        )

    if kind is ActionKind.SUBMIT_EDIT:
        # Fields missing from the payload keep their stored values.
        due_date, due_error = _form_due_date(payload, default=KEEP)
        return SubmitEdit(
            actor_id=actor_id,
            task_id=_task_id(payload),
            text=str(payload.get("text") or ""),
            due_date=due_date,
            assignee=_opt_str(payload, "assignee") if "assignee" in payload else KEEP,
            due_date_error=due_error,
        )

    if kind is ActionKind.OPEN_EDIT_FORM:
        return OpenEditForm(actor_id=actor_id, task_id=_task_id(payload))

    if kind is ActionKind.COMPLETE:
        return CompleteTask(actor_id=actor_id, task_id=_task_id(payload))

    if kind is ActionKind.DELETE:
        return DeleteTask(actor_id=actor_id, task_id=_task_id(payload))

    return ChangeFilter(actor_id=actor_id, mode=str(payload.get("mode") or ""))
