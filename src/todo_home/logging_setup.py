# src/todo_home/logging_setup.py

"""
Logging for the todo home.

The console REPL re-prints the list after every command, so the per-action
INFO lines from the handlers and the command dispatcher would only repeat
what is already on screen. They are kept off the console and written to
their own actions.log instead, one line per mutation or rejected command.
Warnings from those loggers (an edit of a missing or foreign task, a store
failure) still reach the console.

todo_home.log keeps everything at file_level.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ACTION_LOGGERS = frozenset({"todo_home.home.handlers", "todo_home.connectors.dispatch"})

MAIN_LOG = "todo_home.log"
ACTIONS_LOG = "actions.log"


def is_action_record(record: logging.LogRecord) -> bool:
    return record.name in ACTION_LOGGERS


class ConsoleFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if is_action_record(record):
            return record.levelno >= logging.WARNING

        if name.startswith("todo_home."):
            # The Matrix connector runs in a background thread under the REPL.
            if name.startswith("todo_home.connectors.matrix_"):
                return record.levelno >= logging.WARNING
            return True

        # nio, aiohttp, py.warnings: errors only.
        return record.levelno >= logging.ERROR


class ActionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return is_action_record(record) and record.levelno >= logging.INFO


def _file_handler(path: Path, level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo_home",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the console, main-file and actions-file handlers on the root
    logger, replacing whatever handlers it had. Returns the log directory.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    full_fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(full_fmt)
    console.addFilter(ConsoleFilter())
    root.addHandler(console)

    root.addHandler(_file_handler(log_dir / MAIN_LOG, file_level, full_fmt))

    actions = _file_handler(
        log_dir / ACTIONS_LOG,
        logging.INFO,
        logging.Formatter(fmt="%(asctime)s %(levelname)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S"),
    )
    actions.addFilter(ActionFilter())
    root.addHandler(actions)

    # nio logs every sync round at DEBUG/INFO; keep it out of the main file too.
    logging.getLogger("nio").setLevel(max(console_level, logging.INFO))
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logging.captureWarnings(True)
    return log_dir
