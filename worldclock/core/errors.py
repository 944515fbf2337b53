"""Error taxonomy for the world clock engine."""


class WorldClockError(Exception):
    """Base class for all world clock errors."""


class InvalidZoneError(WorldClockError, ValueError):
    """Malformed or unresolvable IANA zone identifier."""

    def __init__(self, zone: str, message: str = ""):
        self.zone = zone
        super().__init__(message or f"Unknown time zone: {zone!r}")


class InvalidDateError(WorldClockError, ValueError):
    """Date or time input that cannot be read as a calendar date/time."""


class AmbiguousTimeError(InvalidDateError):
    """Wall time occurs twice in the zone (clocks fell back)."""


class SkippedTimeError(InvalidDateError):
    """Wall time never occurs in the zone (clocks sprang forward)."""


class StorageError(WorldClockError):
    """Persisted state could not be written."""


class StorageCorruptError(StorageError):
    """Persisted state could not be read back."""


class CatalogUnavailableError(WorldClockError):
    """No usable zone list from the configured source."""
