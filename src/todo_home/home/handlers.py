# src/todo_home/home/handlers.py

"""
Action handlers.

Each handler maps one action to a store mutation (or none) and returns a
HomeOutcome: what the transport should show the acting user. Every
re-render recomputes the full home view; there are no partial updates.

Task lifecycle: nonexistent -> open -> completed -> deleted, with
open -> deleted also allowed. Nothing leaves deleted.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from ..tasks.errors import NotFoundOrForeign, UnknownAction, ValidationError
from ..tasks.filter_state import FilterState
from ..tasks.task_models import Task
from .actions import (
    KEEP,
    Action,
    ChangeFilter,
    CompleteTask,
    DeleteTask,
    OpenCreateForm,
    OpenEditForm,
    SubmitCreate,
    SubmitEdit,
    SurfaceOpened,
)
from .view import (
    DEFAULT_COMPLETED_LIMIT,
    FormView,
    HomeView,
    compose_create_form,
    compose_edit_form,
    compose_home_view,
)

if TYPE_CHECKING:
    from ..core.ports import TaskRepo

logger = logging.getLogger(__name__)

UPDATED_NOTICE = "Todo updated successfully"


def _check_form(raw_text: str, due_date_error: str | None) -> str:
    """Validated task text; raises ValidationError for blank text or a bad due date."""
    text = raw_text.strip()
    if not text:
        raise ValidationError("Task text is required.", field="text")
    if due_date_error:
        raise ValidationError(due_date_error, field="due_date")
    return text


@dataclass(slots=True, frozen=True)
class HomeOutcome:
    """
    What to deliver after an action.

    An outcome with nothing set means the action was abandoned and the
    surface stays as it is.
    """

    user_id: str
    home: HomeView | None = None
    form: FormView | None = None
    notice: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.home is None and self.form is None and self.notice is None


class TaskHome:
    def __init__(
        self,
        task_store: TaskRepo,
        filters: FilterState,
        *,
        completed_limit: int = DEFAULT_COMPLETED_LIMIT,
        strict_not_found: bool = False,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = task_store
        self._filters = filters
        self._completed_limit = completed_limit
        self._strict_not_found = strict_not_found
        self._today = today
        self._clock = clock

    # ---- rendering ----

    def render_home(self, user_id: str) -> HomeView:
        """Compose the full home view for user_id from the store and filter state."""
        return compose_home_view(
            user_id,
            self._store.find_by_owner(user_id),
            self._filters.get(user_id),
            today=self._today(),
            completed_limit=self._completed_limit,
        )

    def _rerender(self, user_id: str, *, notice: str | None = None) -> HomeOutcome:
        return HomeOutcome(user_id=user_id, home=self.render_home(user_id), notice=notice)

    def _abandon(self, err: NotFoundOrForeign) -> HomeOutcome:
        if self._strict_not_found:
            raise err
        logger.warning("Action abandoned: %s", err)
        return HomeOutcome(user_id=err.owner_id)

    # ---- dispatch ----

    def handle(self, action: Action) -> HomeOutcome:
        if isinstance(action, SurfaceOpened):
            return self._rerender(action.actor_id)
        if isinstance(action, OpenCreateForm):
            return HomeOutcome(user_id=action.actor_id, form=compose_create_form())
        if isinstance(action, SubmitCreate):
            return self.submit_create(action)
        if isinstance(action, OpenEditForm):
            return self.open_edit(action)
        if isinstance(action, SubmitEdit):
            return self.submit_edit(action)
        if isinstance(action, CompleteTask):
            return self.complete(action)
        if isinstance(action, DeleteTask):
            return self.delete(action)
        if isinstance(action, ChangeFilter):
            return self.change_filter(action)
        raise UnknownAction(f"unsupported action: {type(action).__name__}")

    # ---- handlers ----

    def submit_create(self, action: SubmitCreate) -> HomeOutcome:
        try:
            text = _check_form(action.text, action.due_date_error)
        except ValidationError as e:
            logger.info("Create rejected for user=%s: %s", action.actor_id, e)
            form = compose_create_form(
                text=action.text.strip(),
                due_date=action.due_date,
                assignee=action.assignee,
                error=str(e),
            )
            return HomeOutcome(user_id=action.actor_id, form=form)

        task = self._store.create_task(
            owner_id=action.actor_id,
            text=text,
            due_date=action.due_date,
            assignee=action.assignee or action.actor_id,
        )
        logger.info("Task created id=%s owner=%s", task.id, action.actor_id)
        return self._rerender(action.actor_id)

    def _load_owned(self, task_id: int, owner_id: str) -> Task:
        task = self._store.find_one(task_id, owner_id)
        if task is None:
            raise NotFoundOrForeign(task_id, owner_id)
        return task

    def open_edit(self, action: OpenEditForm) -> HomeOutcome:
        try:
            task = self._load_owned(action.task_id, action.actor_id)
        except NotFoundOrForeign as e:
            return self._abandon(e)

        form = compose_edit_form(
            task.id,
            text=task.text,
            due_date=task.due_date,
            assignee=task.assignee,
        )
        return HomeOutcome(user_id=action.actor_id, form=form)

    def submit_edit(self, action: SubmitEdit) -> HomeOutcome:
        try:
            task = self._load_owned(action.task_id, action.actor_id)
        except NotFoundOrForeign as e:
            return self._abandon(e)

        due_date = task.due_date if action.due_date is KEEP else action.due_date
        assignee = task.assignee if action.assignee is KEEP else (action.assignee or action.actor_id)

        try:
            text = _check_form(action.text, action.due_date_error)
        except ValidationError as e:
            logger.info("Edit rejected for task=%s user=%s: %s", action.task_id, action.actor_id, e)
            form = compose_edit_form(
                action.task_id,
                text=action.text.strip(),
                due_date=due_date,
                assignee=assignee,
                error=str(e),
            )
            return HomeOutcome(user_id=action.actor_id, form=form)

        # Only text / due_date / assignee; completion and identity stay untouched.
        updated = self._store.update_one(
            action.task_id,
            action.actor_id,
            text=text,
            due_date=due_date,
            assignee=assignee,
        )
        if not updated:
            # Deleted between the lookup and the write.
            return self._abandon(NotFoundOrForeign(action.task_id, action.actor_id))

        logger.info("Task updated id=%s owner=%s", action.task_id, action.actor_id)
        return self._rerender(action.actor_id, notice=UPDATED_NOTICE)

    def complete(self, action: CompleteTask) -> HomeOutcome:
        # Not idempotent at the data layer: a second complete re-stamps completed_at.
        done = self._store.update_one(
            action.task_id,
            action.actor_id,
            completed=True,
            completed_at=self._clock(),
        )
        if done:
            logger.info("Task completed id=%s owner=%s", action.task_id, action.actor_id)
        else:
            logger.debug("Complete was a no-op: task=%s owner=%s", action.task_id, action.actor_id)
        return self._rerender(action.actor_id)

    def delete(self, action: DeleteTask) -> HomeOutcome:
        if self._store.delete_one(action.task_id, action.actor_id):
            logger.info("Task deleted id=%s owner=%s", action.task_id, action.actor_id)
        else:
            logger.debug("Delete was a no-op: task=%s owner=%s", action.task_id, action.actor_id)
        return self._rerender(action.actor_id)

    def change_filter(self, action: ChangeFilter) -> HomeOutcome:
        mode = self._filters.set(action.actor_id, action.mode)
        logger.info("Filter changed user=%s mode=%s", action.actor_id, mode.value)
        return self._rerender(action.actor_id)
