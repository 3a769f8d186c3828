# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from todo_home.logging_setup import (
    ACTIONS_LOG,
    MAIN_LOG,
    ActionFilter,
    ConsoleFilter,
    setup_logging,
)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.makeLogRecord({"name": name, "levelno": level, "levelname": logging.getLevelName(level)})


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_console_filter_hides_routine_action_lines() -> None:
    f = ConsoleFilter()
    assert not f.filter(_record("todo_home.home.handlers", logging.INFO))
    assert f.filter(_record("todo_home.home.handlers", logging.WARNING))
    assert not f.filter(_record("todo_home.connectors.dispatch", logging.INFO))
    assert f.filter(_record("todo_home.tasks.task_store", logging.INFO))
    assert not f.filter(_record("todo_home.connectors.matrix_connector", logging.INFO))
    assert not f.filter(_record("nio.rooms", logging.WARNING))
    assert f.filter(_record("nio.rooms", logging.ERROR))


def test_action_filter_only_takes_action_loggers() -> None:
    f = ActionFilter()
    assert f.filter(_record("todo_home.home.handlers", logging.INFO))
    assert f.filter(_record("todo_home.connectors.dispatch", logging.WARNING))
    assert not f.filter(_record("todo_home.home.handlers", logging.DEBUG))
    assert not f.filter(_record("todo_home.tasks.task_store", logging.INFO))


def test_setup_logging_splits_files(tmp_path: Path, restore_root_logging) -> None:
    log_dir = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("todo_home.home.handlers").info("Task created id=1 owner=u1")
    logging.getLogger("todo_home.tasks.task_store").info("TaskStore ready")
    for h in logging.getLogger().handlers:
        h.flush()

    main_log = (log_dir / MAIN_LOG).read_text(encoding="utf-8")
    actions_log = (log_dir / ACTIONS_LOG).read_text(encoding="utf-8")
    assert "Task created id=1" in main_log and "TaskStore ready" in main_log
    assert "Task created id=1" in actions_log
    assert "TaskStore ready" not in actions_log
