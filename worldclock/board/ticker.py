"""Periodic re-rendering of pinned clocks."""
import asyncio
import logging
from typing import Optional

from worldclock.core.registry import ClockRegistry

logger = logging.getLogger(__name__)


async def run_ticker(
    registry: ClockRegistry,
    interval: float = 1.0,
    stop: Optional[asyncio.Event] = None,
) -> int:
    """Call registry.tick once per interval until `stop` is set.

    Returns the number of ticks run. A failing tick is logged and the loop
    keeps going.
    """
    stop = stop or asyncio.Event()
    ticks = 0

    while not stop.is_set():
        try:
            registry.tick()
        except Exception as e:
            logger.error(f"Clock tick failed: {e}")
        ticks += 1

        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass

    return ticks
