# src/todo_home/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..home.handlers import TaskHome
from ..tasks.filter_state import FilterState
from .ports import TaskRepo


@dataclass
class AppState:
    """
    Shared application state.

    `lock` serializes action handling between the console loop and the Matrix
    thread; the core itself does no locking.
    """

    settings: Any
    task_store: TaskRepo
    filters: FilterState = field(default_factory=FilterState)
    lock: threading.Lock = field(default_factory=threading.Lock)
    home: TaskHome = field(init=False)

    def __post_init__(self) -> None:
        self.home = TaskHome(
            self.task_store,
            self.filters,
            completed_limit=int(getattr(self.settings, "completed_footer_limit", 3)),
            strict_not_found=bool(getattr(self.settings, "strict_not_found", False)),
        )
