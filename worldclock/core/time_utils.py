"""Timezone-aware time utilities.

Converts wall-clock readings in a named IANA zone to absolute instants and
renders instants back into zone-local text. Instants are always aware
datetimes in UTC; everything zone-local is a rendering of one.

Month and weekday names come from fixed English tables so that output never
depends on the process locale.
"""
from datetime import date, datetime, time, timezone
from enum import Enum
from functools import lru_cache
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from worldclock.core.errors import (
    AmbiguousTimeError,
    InvalidDateError,
    InvalidZoneError,
    SkippedTimeError,
)
from worldclock.core.zones import validate_zone_id

UTC = timezone.utc

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DateInput = Union[date, str]
TimeInput = Union[time, str, None]


class FieldSet(str, Enum):
    """Which parts of a zone-local reading to render."""
    DATE = "date"              # 2024-03-10
    TIME = "time"              # 01:30:00
    TIME_SHORT = "time_short"  # 01:30
    WEEKDAY = "weekday"        # Sunday
    DATETIME = "datetime"      # 2024-03-10 01:30
    FULL = "full"              # Sun, 10 Mar 2024, 01:30:00


class Disambiguation(str, Enum):
    """How to resolve wall times that occur twice or not at all."""
    EARLIER = "earlier"
    LATER = "later"
    RAISE = "raise"


class WallTimeKind(str, Enum):
    NORMAL = "normal"
    AMBIGUOUS = "ambiguous"
    SKIPPED = "skipped"


def get_current_time() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(UTC)


@lru_cache(maxsize=None)
def resolve_zone(zone: str) -> ZoneInfo:
    """Look up a zone in the platform tz database."""
    if not isinstance(zone, str) or not zone:
        raise InvalidZoneError(str(zone))
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        # OSError covers ids naming a tzdata directory, e.g. America/Argentina
        raise InvalidZoneError(zone) from e


def _as_utc(instant: datetime) -> datetime:
    # Naive datetimes are read as UTC
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def _render_date(local: datetime) -> str:
    return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"


def _render_time(local: datetime) -> str:
    return f"{local.hour:02d}:{local.minute:02d}:{local.second:02d}"


def _render_time_short(local: datetime) -> str:
    return f"{local.hour:02d}:{local.minute:02d}"


def _render_weekday(local: datetime) -> str:
    return WEEKDAY_NAMES[local.weekday()]


def _render_datetime(local: datetime) -> str:
    return f"{_render_date(local)} {_render_time_short(local)}"


def _render_full(local: datetime) -> str:
    return (
        f"{WEEKDAY_ABBR[local.weekday()]}, {local.day:02d} "
        f"{MONTH_ABBR[local.month - 1]} {local.year:04d}, {_render_time(local)}"
    )


_RENDERERS = {
    FieldSet.DATE: _render_date,
    FieldSet.TIME: _render_time,
    FieldSet.TIME_SHORT: _render_time_short,
    FieldSet.WEEKDAY: _render_weekday,
    FieldSet.DATETIME: _render_datetime,
    FieldSet.FULL: _render_full,
}


class ZoneFormatter:
    """Renders instants in one zone with one field set."""

    def __init__(self, zone: str, fields: FieldSet):
        self.zone = zone
        self.fields = fields
        self.tzinfo = resolve_zone(zone)
        self._render = _RENDERERS[fields]

    def format(self, instant: datetime) -> str:
        try:
            local = _as_utc(instant).astimezone(self.tzinfo)
        except OverflowError as e:
            raise InvalidDateError(f"{instant.isoformat()} is out of range in {self.zone}") from e
        return self._render(local)


@lru_cache(maxsize=512)
def get_formatter(zone: str, fields: FieldSet) -> ZoneFormatter:
    """Return a cached formatter for (zone, fields)."""
    return ZoneFormatter(zone, fields)


def from_instant(
    instant: datetime,
    zone: str,
    fields: Union[FieldSet, str] = FieldSet.FULL,
) -> str:
    """Render an instant as wall-clock text in `zone`.

    Raises InvalidZoneError if the platform cannot resolve the zone.
    """
    return get_formatter(zone, FieldSet(fields)).format(instant)


def local_datetime(instant: datetime, zone: str) -> datetime:
    """Return the instant as an aware datetime in `zone`."""
    return _as_utc(instant).astimezone(resolve_zone(zone))


def utc_offset_str(instant: datetime, zone: str) -> str:
    """Return the zone's UTC offset at `instant` formatted as +03:00."""
    offset = local_datetime(instant, zone).strftime("%z")
    return f"{offset[:3]}:{offset[3:]}"


def parse_date(value: DateInput) -> date:
    """Read a calendar date from a date object or a YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise InvalidDateError(f"Invalid date: {value!r}") from e


def parse_time(value: TimeInput) -> time:
    """Read a time of day from a time object or an HH:MM[:SS] string.

    A missing time means midnight.
    """
    if value is None or value == "":
        return time(0, 0)
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    try:
        return time.fromisoformat(str(value).strip()).replace(tzinfo=None)
    except ValueError as e:
        raise InvalidDateError(f"Invalid time: {value!r}") from e


def _classify(wall: datetime, tz: ZoneInfo) -> WallTimeKind:
    """Raises OverflowError for wall times at the edge of the calendar."""
    early = wall.replace(tzinfo=tz, fold=0)
    late = wall.replace(tzinfo=tz, fold=1)
    if early.utcoffset() == late.utcoffset():
        return WallTimeKind.NORMAL
    # A skipped wall time does not survive a trip through UTC
    back = early.astimezone(UTC).astimezone(tz).replace(tzinfo=None)
    if back == wall:
        return WallTimeKind.AMBIGUOUS
    return WallTimeKind.SKIPPED


def wall_time_kind(date_value: DateInput, time_value: TimeInput, zone: str) -> WallTimeKind:
    """Classify a wall-clock reading as normal, ambiguous (fall back) or skipped (spring forward)."""
    validate_zone_id(zone)
    wall = datetime.combine(parse_date(date_value), parse_time(time_value))
    try:
        return _classify(wall, resolve_zone(zone))
    except OverflowError as e:
        raise InvalidDateError(f"{wall.isoformat()} is out of range") from e


def to_instant(
    date_value: DateInput,
    time_value: TimeInput,
    zone: str,
    disambiguation: Union[Disambiguation, str] = Disambiguation.EARLIER,
) -> datetime:
    """Convert a wall-clock reading in `zone` to a UTC instant.

    Offsets come straight from the tz database. Around DST transitions:
    - EARLIER: repeated times pick the first occurrence, skipped times are
      read with the offset in force before the transition.
    - LATER: the second occurrence / the offset after the transition.
    - RAISE: AmbiguousTimeError or SkippedTimeError.
    """
    validate_zone_id(zone)
    tz = resolve_zone(zone)
    policy = Disambiguation(disambiguation)
    wall = datetime.combine(parse_date(date_value), parse_time(time_value))

    try:
        if policy == Disambiguation.RAISE:
            kind = _classify(wall, tz)
            if kind == WallTimeKind.AMBIGUOUS:
                raise AmbiguousTimeError(f"{wall.isoformat()} occurs twice in {zone}")
            if kind == WallTimeKind.SKIPPED:
                raise SkippedTimeError(f"{wall.isoformat()} does not exist in {zone}")

        fold = 1 if policy == Disambiguation.LATER else 0
        return wall.replace(tzinfo=tz, fold=fold).astimezone(UTC)
    except OverflowError as e:
        raise InvalidDateError(f"{wall.isoformat()} in {zone} is out of range") from e
