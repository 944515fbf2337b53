"""Board state shared by the HTTP service and the console board."""
import logging
from typing import Optional

from worldclock.catalog.catalog import ZoneCatalog
from worldclock.core.config import settings
from worldclock.core.registry import ClockRegistry
from worldclock.core.storage import JsonFileStore, KeyValueStore
from worldclock.core.theme import ThemeController

logger = logging.getLogger(__name__)


class BoardState:
    """Pinned clocks, theme and zone catalog over one store."""

    def __init__(self, store: KeyValueStore, catalog: Optional[ZoneCatalog] = None):
        self.store = store
        self.registry = ClockRegistry(store).load()
        self.theme = ThemeController(store)
        self.theme.load()
        self.catalog = catalog or ZoneCatalog()

    async def ensure_catalog(self) -> ZoneCatalog:
        """Load the zone catalog on first use."""
        if not self.catalog.zones:
            await self.catalog.load()
        return self.catalog


_board_state: Optional[BoardState] = None


def get_board_state() -> BoardState:
    """Return the process-wide board state, opening the configured store on first use."""
    global _board_state
    if _board_state is None:
        logger.info(f"Opening state file {settings.storage_path}")
        _board_state = BoardState(JsonFileStore(settings.storage_path))
    return _board_state


def set_board_state(state: BoardState) -> None:
    global _board_state
    _board_state = state


def clear_board_state() -> None:
    """Forget the board state. Used in tests."""
    global _board_state
    _board_state = None
