# src/todo_home/connectors/matrix_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import time
from dataclasses import dataclass, field

from nio import AsyncClient, MatrixRoom, RoomMessageText

from ..core.state import AppState
from ..home.delivery import deliver
from ..home.render import render_form_text, render_home_text
from ..home.view import FormView, HomeView
from .dispatch import run_command
from .matrix_client import create_matrix_client

logger = logging.getLogger(__name__)


def _ms_now() -> int:
    return int(time.time() * 1000)


def _room_allowlist(settings_rooms: list[str]) -> set[str] | None:
    rooms = [r.strip() for r in (settings_rooms or []) if str(r).strip()]
    return set(rooms) if rooms else None


async def _send_text(client: AsyncClient, *, room_id: str, text: str) -> None:
    await client.room_send(
        room_id=room_id,
        message_type="m.room.message",
        content={"msgtype": "m.notice", "body": text},
    )


@dataclass
class MatrixSurface:
    """
    HomeSurface over Matrix rooms.

    Matrix has no per-user panel, so a user's "surface" is the room they last
    talked to the bot in.
    """

    client: AsyncClient
    rooms_by_user: dict[str, str] = field(default_factory=dict)

    def remember_room(self, user_id: str, room_id: str) -> None:
        self.rooms_by_user[user_id] = room_id

    async def _send(self, user_id: str, text: str) -> None:
        room_id = self.rooms_by_user.get(user_id)
        if not room_id:
            logger.warning("No room known for user %s; dropping update", user_id)
            return
        await _send_text(self.client, room_id=room_id, text=text)

    async def publish_home(self, user_id: str, view: HomeView) -> None:
        await self._send(user_id, render_home_text(view))

    async def open_form(self, user_id: str, form: FormView) -> None:
        await self._send(user_id, render_form_text(form))

    async def notify(self, user_id: str, text: str) -> None:
        await self._send(user_id, text)


async def _run_matrix_bot(state: AppState, stop_event: asyncio.Event) -> None:
    """
    Matrix connector (async): init -> callbacks -> sync loop.

    Shutdown model:
    - main thread sets stop_event via loop.call_soon_threadsafe(stop_event.set)
    - we run a manual sync loop so we can exit promptly.
    """
    settings = state.settings
    startup_ts = _ms_now()

    allowed_rooms = _room_allowlist(getattr(settings, "matrix_rooms", []) or [])
    logger.info("Matrix allowed_rooms=%s", allowed_rooms if allowed_rooms is not None else "ALL")

    client = await create_matrix_client(settings)
    if client is None:
        logger.error("Matrix client creation failed; connector will stop.")
        return

    surface = MatrixSurface(client=client)

    async def message_callback(room: MatrixRoom, event: RoomMessageText) -> None:
        # Ignore history from before startup and our own messages.
        ts = getattr(event, "server_timestamp", None)
        if ts is not None and ts <= startup_ts:
            return
        if event.sender == client.user_id:
            return
        if allowed_rooms is not None and room.room_id not in allowed_rooms:
            return

        body = (event.body or "").strip()
        if not body.startswith("/"):
            return

        logger.info("Matrix <%s> %s: %r", room.display_name, event.sender, body)

        # Acknowledge receipt before handling so the client sees the command was taken.
        try:
            await client.room_read_markers(room.room_id, event.event_id, event.event_id)
        except Exception:
            logger.debug("Failed to send read marker.", exc_info=True)

        surface.remember_room(event.sender, room.room_id)
        result = run_command(state, body, event.sender)

        try:
            if isinstance(result, str):
                await _send_text(client, room_id=room.room_id, text=result)
            elif result is not None and not result.is_empty:
                await deliver(surface, result)
        except Exception:
            logger.exception("Failed to deliver reply in %s.", room.room_id)

    client.add_event_callback(message_callback, RoomMessageText)

    try:
        logger.info("Matrix initial sync...")
        await client.sync(timeout=30000, full_state=True)
        logger.info("Matrix initial sync done. Joined rooms: %d", len(client.rooms))

        while not stop_event.is_set():
            await client.sync(timeout=30000, full_state=False)

    except asyncio.CancelledError:
        logger.info("Matrix connector cancelled.")
    except Exception:
        logger.exception("Matrix connector crashed.")
    finally:
        with contextlib.suppress(Exception):
            await client.close()
        logger.info("Matrix connector stopped.")


@dataclass
class MatrixBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Failed to signal Matrix stop (loop closed).", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_matrix_in_background(state: AppState) -> MatrixBackgroundRunner | None:
    """
    Start the Matrix connector in a background thread with its own event loop,
    so the console REPL can run in the main thread.
    """
    if not getattr(state.settings, "matrix_enabled", False):
        logger.info("Matrix connector disabled, not starting.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_matrix_bot(state, stop_event))
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="matrix-connector", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Matrix thread did not initialize properly.")
        return None

    logger.info("Matrix background thread started.")
    return MatrixBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
