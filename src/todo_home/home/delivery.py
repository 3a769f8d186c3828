# src/todo_home/home/delivery.py

from __future__ import annotations

from typing import TYPE_CHECKING

from .handlers import HomeOutcome

if TYPE_CHECKING:
    from ..core.ports import HomeSurface


async def deliver(surface: HomeSurface, outcome: HomeOutcome) -> None:
    """
    Push an outcome into the surface: form, then notice, then home view.

    An empty outcome (abandoned action) delivers nothing.
    """
    if outcome.form is not None:
        await surface.open_form(outcome.user_id, outcome.form)
    if outcome.notice:
        await surface.notify(outcome.user_id, outcome.notice)
    if outcome.home is not None:
        await surface.publish_home(outcome.user_id, outcome.home)
