# src/todo_home/connectors/dispatch.py

from __future__ import annotations

import logging

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..home.handlers import HomeOutcome
from ..tasks.errors import (
    InvalidFilter,
    NotFoundOrForeign,
    StoreUnavailable,
    UnknownAction,
    ValidationError,
)

logger = logging.getLogger(__name__)


def run_command(state: AppState, line: str, user_id: str) -> HomeOutcome | str | None:
    """
    Run one slash command for user_id.

    Returns the outcome to deliver, a reply string, or None if `line` is not a
    command. Errors are scoped to this action: they become a reply and the
    surface is not updated.
    """
    try:
        result = command_registry.handle(line, user_id)
        if result is None or isinstance(result, str):
            return result
        with state.lock:
            return state.home.handle(result)
    except InvalidFilter as e:
        logger.info("Rejected filter user=%s: %s", user_id, e)
        return f"Unknown view {e.mode!r}. Use: overdue, upcoming or inbox."
    except ValidationError as e:
        logger.info("Rejected input user=%s: %s", user_id, e)
        return str(e)
    except NotFoundOrForeign as e:
        logger.warning("Not found user=%s: %s", user_id, e)
        return f"Task #{e.task_id} not found."
    except UnknownAction as e:
        logger.info("Rejected action user=%s: %s", user_id, e)
        return f"Cannot handle that: {e}"
    except StoreUnavailable:
        logger.exception("Task store unavailable user=%s line=%r", user_id, line)
        return "Task storage is unavailable right now. Please try again later."
