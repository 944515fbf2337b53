"""Console world clock board."""
import asyncio
import logging
import signal
from typing import List

from worldclock.board.ticker import run_ticker
from worldclock.core.config import settings
from worldclock.core.errors import InvalidZoneError
from worldclock.core.schemas import ClockView
from worldclock.core.state import get_board_state

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def print_board(views: List[ClockView]) -> None:
    print("\n".join(view.render() for view in views) + "\n", flush=True)


async def main():
    """Restore the pinned clocks and re-render them until interrupted."""
    state = get_board_state()
    registry = state.registry
    registry.on_update = print_board
    catalog = await state.ensure_catalog()

    if not len(registry):
        for zone in settings.default_zones:
            if zone not in catalog:
                logger.warning(f"Default zone {zone} is not in the catalog, skipping")
                continue
            try:
                registry.add(zone)
            except InvalidZoneError as e:
                logger.warning(f"Skipping default zone: {e}")

    logger.info(f"Board starting with {len(registry)} clock(s), theme={state.theme.theme.value}")

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, stop.set)

    await run_ticker(registry, settings.tick_interval, stop)
    logger.info("Shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
