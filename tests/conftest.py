# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_home.core.state import AppState
from todo_home.home.handlers import TaskHome
from todo_home.tasks.filter_state import FilterState
from todo_home.tasks.task_store import TaskStore

from .fakes import FakeTaskRepo

TODAY = date(2026, 10, 18)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        tasks_db_path=tmp_path / "tasks.sqlite3",
        completed_footer_limit=3,
        strict_not_found=False,
        console_user_id="console",
    )


@pytest.fixture()
def repo() -> FakeTaskRepo:
    return FakeTaskRepo()


@pytest.fixture()
def filters() -> FilterState:
    return FilterState()


@pytest.fixture()
def home(repo: FakeTaskRepo, filters: FilterState) -> TaskHome:
    return TaskHome(repo, filters, today=lambda: TODAY, clock=lambda: 5000.0)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with the real SQLite store.

    NOTE: We keep the real TaskStore here because its owner scoping is part
    of what the end-to-end command tests check.
    """
    return AppState(settings=settings, task_store=TaskStore(settings.tasks_db_path))
