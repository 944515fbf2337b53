"""Zone identifier validation and display labels."""
import re

from worldclock.core.errors import InvalidZoneError

ZONE_ID_PATTERN = re.compile(r"^[A-Za-z_]+/[A-Za-z_+-]+(/[A-Za-z_+-]+)?$")

INVALID_ZONE_MESSAGE = (
    'Please choose a valid IANA time zone like "Africa/Nairobi" or "Europe/London".'
)

REGION_SEPARATOR = " · "


def is_valid_zone_id(zone: str) -> bool:
    """Check that a zone looks like "Region/Location" or "Region/Location/Location"."""
    return bool(zone) and ZONE_ID_PATTERN.match(zone) is not None


def validate_zone_id(zone: str) -> str:
    """Return the zone unchanged, or raise InvalidZoneError with a user-facing message."""
    if not isinstance(zone, str) or not is_valid_zone_id(zone):
        raise InvalidZoneError(str(zone), INVALID_ZONE_MESSAGE)
    return zone


def friendly_name(zone: str) -> str:
    """Turn a zone id into a display label.

    "Africa/Nairobi" -> "Nairobi, Africa"
    "America/Argentina/Buenos_Aires" -> "Buenos Aires, America · Argentina"
    "UTC" -> "UTC"
    """
    parts = zone.split("/")
    if len(parts) == 1:
        return zone
    city = parts.pop().replace("_", " ")
    region = REGION_SEPARATOR.join(parts).replace("_", " ")
    return f"{city}, {region}"
