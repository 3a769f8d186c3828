# src/todo_home/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..core.state import AppState
from ..home.delivery import deliver
from ..home.render import render_form_text, render_home_text
from ..home.view import FormView, HomeView
from .dispatch import run_command

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleSurface:
    """HomeSurface that prints to stdout (single local user)."""

    async def publish_home(self, user_id: str, view: HomeView) -> None:
        print(render_home_text(view) + "\n")

    async def open_form(self, user_id: str, form: FormView) -> None:
        print(render_form_text(form) + "\n")

    async def notify(self, user_id: str, text: str) -> None:
        _print_ts(text)


def handle_console_line(
    state: AppState,
    line: str,
    user_id: str,
    surface: ConsoleSurface,
    loop: asyncio.AbstractEventLoop,
) -> None:
    result = run_command(state, line, user_id)
    if result is None:
        _print_ts("Commands start with '/'. Use /help to list them.")
    elif isinstance(result, str):
        _print_ts(result)
    elif result.is_empty:
        logger.debug("Console action produced no update: %r", line)
    else:
        loop.run_until_complete(deliver(surface, result))


def run_console_loop(state: AppState) -> None:
    user_id = str(getattr(state.settings, "console_user_id", "console"))
    surface = ConsoleSurface()
    loop = asyncio.new_event_loop()

    logger.info("Console connector started (user=%s).", user_id)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    try:
        # Starting the console is "opening the home surface".
        handle_console_line(state, "/home", user_id, surface, loop)

        while True:
            try:
                line = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not line:
                continue

            if line.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            handle_console_line(state, line, user_id, surface, loop)
    finally:
        loop.close()

    logger.info("Console connector finished.")
