"""Relative day labels for an instant seen through a zone's calendar."""
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

from worldclock.core.time_utils import FieldSet, from_instant, get_current_time

ONE_DAY = timedelta(days=1)


class RelativeDay(str, Enum):
    TODAY = "Today"
    TOMORROW = "Tomorrow"
    YESTERDAY = "Yesterday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


def date_key(instant: datetime, zone: str) -> int:
    """Return the zone-local calendar date of an instant as YYYYMMDD."""
    return int(from_instant(instant, zone, FieldSet.DATE).replace("-", ""))


def _key_to_date(key: int) -> date:
    return date(key // 10000, key // 100 % 100, key % 100)


def relative_day(instant: datetime, zone: str, now: Optional[datetime] = None) -> RelativeDay:
    """Classify the zone-local date of `instant` against the zone-local date of `now`.

    Today / Tomorrow / Yesterday use real calendar arithmetic, so month and
    year boundaries roll over correctly. Anything further away is labelled
    with the zone-local weekday.
    """
    if now is None:
        now = get_current_time()

    target = _key_to_date(date_key(instant, zone))
    today = _key_to_date(date_key(now, zone))

    if target == today:
        return RelativeDay.TODAY
    if target == today + ONE_DAY:
        return RelativeDay.TOMORROW
    if target == today - ONE_DAY:
        return RelativeDay.YESTERDAY
    return RelativeDay(from_instant(instant, zone, FieldSet.WEEKDAY))
