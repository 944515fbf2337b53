"""Pinned clocks: persistence and periodic re-rendering."""
import json
import logging
from datetime import datetime
from typing import Callable, Iterator, List, Optional, Tuple

from worldclock.core.errors import (
    InvalidDateError,
    InvalidZoneError,
    StorageCorruptError,
    StorageError,
)
from worldclock.core.relative_day import relative_day
from worldclock.core.schemas import ClockView
from worldclock.core.storage import CLOCKS_KEY, KeyValueStore
from worldclock.core.time_utils import FieldSet, from_instant, get_current_time, utc_offset_str
from worldclock.core.zones import friendly_name, is_valid_zone_id, validate_zone_id

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[List[ClockView]], None]


def decode_clocks(raw: Optional[str]) -> List[str]:
    """Parse the persisted `clocks` value into a list of zone ids.

    Raises StorageCorruptError if the value is not a JSON array of strings.
    """
    if raw is None:
        return []
    try:
        zones = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise StorageCorruptError(f"clocks is not valid JSON: {e}") from e
    if not isinstance(zones, list) or not all(isinstance(z, str) for z in zones):
        raise StorageCorruptError("clocks must be a JSON array of strings")
    return zones


class ClockRegistry:
    """Ordered, duplicate-free set of pinned zones.

    The registry owns the pinned set. Every mutation is written through to
    the store; `tick` only reads the in-memory state.
    """

    def __init__(
        self,
        store: KeyValueStore,
        on_update: Optional[UpdateCallback] = None,
        clock: Callable[[], datetime] = get_current_time,
    ):
        self.store = store
        self.on_update = on_update
        self.clock = clock
        self.views: List[ClockView] = []
        self._zones: List[str] = []

    def load(self) -> "ClockRegistry":
        """Restore pinned zones from the store. Unreadable state yields an empty board."""
        try:
            zones = decode_clocks(self.store.get(CLOCKS_KEY))
        except StorageCorruptError as e:
            logger.warning(f"Discarding saved clocks: {e}")
            zones = []

        self._zones = []
        for zone in zones:
            if not is_valid_zone_id(zone):
                logger.warning(f"Dropping malformed saved zone {zone!r}")
                continue
            if zone not in self._zones:
                self._zones.append(zone)

        logger.info(f"Restored {len(self._zones)} clock(s)")
        return self

    @property
    def zones(self) -> Tuple[str, ...]:
        return tuple(self._zones)

    def __contains__(self, zone: object) -> bool:
        return zone in self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._zones))

    def _save(self) -> None:
        try:
            self.store.set(CLOCKS_KEY, json.dumps(self._zones))
        except StorageError as e:
            logger.warning(f"Could not persist clocks: {e}")

    def add(self, zone: str) -> bool:
        """Pin a zone. Returns False if it was already pinned.

        Raises InvalidZoneError for a malformed id; nothing changes in that case.
        """
        validate_zone_id(zone)
        if zone in self._zones:
            return False
        self._zones.append(zone)
        self._save()
        logger.info(f"Added clock {zone}")
        return True

    def remove(self, zone: str) -> bool:
        """Unpin a zone. Returns False if it was not pinned."""
        if zone not in self._zones:
            return False
        self._zones.remove(zone)
        self._save()
        logger.info(f"Removed clock {zone}")
        return True

    def tick(self, now: Optional[datetime] = None) -> List[ClockView]:
        """Recompute every pinned clock's time and day label.

        `now` defaults to the registry's clock.
        """
        if now is None:
            now = self.clock()
        views = []
        for zone in self._zones:
            try:
                views.append(ClockView(
                    zone=zone,
                    label=friendly_name(zone),
                    time=from_instant(now, zone, FieldSet.TIME),
                    day=relative_day(now, zone, now=now),
                    offset=utc_offset_str(now, zone),
                ))
            except (InvalidZoneError, InvalidDateError) as e:
                logger.warning(f"Skipping clock {zone}: {e}")

        self.views = views
        if self.on_update is not None:
            self.on_update(views)
        return views
