"""Available IANA zone identifiers.

The platform tz database is the primary source. If it is empty the list is
fetched once from a remote lookup service, and if that fails too a short
built-in list is used. Loading never raises.
"""
import asyncio
import logging
import zoneinfo
from typing import Iterable, List, Optional

import aiohttp

from worldclock.core.config import settings
from worldclock.core.errors import CatalogUnavailableError
from worldclock.core.zones import friendly_name

logger = logging.getLogger(__name__)

FALLBACK_ZONES = [
    "Africa/Nairobi",
    "Europe/London",
    "America/New_York",
    "Asia/Tokyo",
    "Australia/Sydney",
]


def platform_zones() -> List[str]:
    """Return the zones known to the local tz database, sorted."""
    return sorted(zoneinfo.available_timezones())


def filter_zones(zones: Iterable[str], query: Optional[str]) -> List[str]:
    """Case-insensitive substring search over zone ids and their friendly names."""
    zones = list(zones)
    if not query:
        return zones
    q = query.strip().lower()
    return [
        z for z in zones
        if q in z.lower() or q in friendly_name(z).lower()
    ]


class ZoneCatalog:
    """Loads and holds the list of selectable zones."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or settings.catalog_url
        self.timeout = timeout if timeout is not None else settings.catalog_timeout
        self.zones: List[str] = []
        self.source: Optional[str] = None

    def __contains__(self, zone: object) -> bool:
        return zone in self.zones

    async def fetch_remote(self) -> List[str]:
        """Fetch the zone list from the lookup service.

        Raises CatalogUnavailableError on transport failure, non-200 status,
        or a body that is not a non-empty list of strings.
        """
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    self.url,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        raise CatalogUnavailableError(
                            f"{self.url} returned status {response.status}"
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise CatalogUnavailableError(f"Failed to load time zones list: {e}") from e

        if not isinstance(data, list) or not all(isinstance(z, str) for z in data):
            raise CatalogUnavailableError(f"{self.url} did not return a list of zones")
        if not data:
            raise CatalogUnavailableError(f"{self.url} returned an empty zone list")
        return data

    async def load(self) -> List[str]:
        """Populate the catalog from the first source that works."""
        zones = platform_zones()
        if zones:
            self.zones, self.source = zones, "platform"
        else:
            logger.info("Platform tz database is empty, asking lookup service")
            try:
                self.zones, self.source = await self.fetch_remote(), "remote"
            except CatalogUnavailableError as e:
                logger.warning(f"Falling back to a short zones list: {e}")
                self.zones, self.source = list(FALLBACK_ZONES), "fallback"

        logger.info(f"Loaded {len(self.zones)} zones from {self.source}")
        return self.zones

    def search(self, query: Optional[str]) -> List[str]:
        return filter_zones(self.zones, query)
