# src/todo_home/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts connectors:
- console REPL in the main thread (optional),
- Matrix connector in a background thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.matrix_connector import MatrixBackgroundRunner, start_matrix_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    log_dir = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (logs in %s)...", settings.app_name, log_dir)

    state = create_initial_state(settings=settings)

    matrix_runner: MatrixBackgroundRunner | None = None
    if settings.matrix_enabled:
        matrix_runner = start_matrix_in_background(state)

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    if not settings.console_enabled:
        # The console loop handles Ctrl+C itself; only install handlers when idling.
        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled. Running background connectors only. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        if matrix_runner is not None:
            matrix_runner.stop()
            matrix_runner.join(timeout=10.0)
        # TaskStore uses short-lived sqlite connections per call; no explicit close required.
        logger.info("Bye.")


if __name__ == "__main__":
    main()
