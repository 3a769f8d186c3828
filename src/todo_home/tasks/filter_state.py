# src/todo_home/tasks/filter_state.py

from __future__ import annotations

import logging

from .errors import InvalidFilter
from .task_models import DEFAULT_FILTER, FilterMode

logger = logging.getLogger(__name__)


def parse_filter_mode(raw: object) -> FilterMode:
    """Accept a FilterMode or exactly its string value; nothing is normalised here."""
    if isinstance(raw, FilterMode):
        return raw
    if not isinstance(raw, str):
        raise InvalidFilter(raw)
    try:
        return FilterMode(raw)
    except ValueError:
        raise InvalidFilter(raw) from None


class FilterState:
    """
    Per-user filter selection.

    Held in memory for the process lifetime and never persisted: a restart
    resets everybody to the default (inbox). No lock; last write wins.
    """

    def __init__(self, default: FilterMode = DEFAULT_FILTER) -> None:
        self._default = default
        self._modes: dict[str, FilterMode] = {}

    def get(self, user_id: str) -> FilterMode:
        return self._modes.get(user_id, self._default)

    def set(self, user_id: str, mode: FilterMode | str) -> FilterMode:
        # Validate before touching the map so a bad value keeps the prior one.
        parsed = parse_filter_mode(mode)
        self._modes[user_id] = parsed
        logger.debug("Filter set user=%s mode=%s", user_id, parsed.value)
        return parsed

    def __len__(self) -> int:
        return len(self._modes)
