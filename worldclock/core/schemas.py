"""Data schemas for clocks, conversions and API requests/responses."""
import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from worldclock.core.relative_day import RelativeDay
from worldclock.core.time_utils import WallTimeKind


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class PinnedClock(BaseModel):
    """A zone the user keeps on the board."""
    zone: str


class ClockView(BaseModel):
    """What one pinned clock shows at a given tick."""
    zone: str
    label: str
    time: str = Field(description="Zone-local time as HH:MM:SS")
    day: RelativeDay
    offset: str = Field(description="UTC offset at this tick, e.g. +03:00")

    def render(self) -> str:
        return f"{self.label:<32} {self.time}  {self.day.value:<9} UTC{self.offset}"


class ConversionResult(BaseModel):
    """Outcome of converting a wall time from one zone to another."""
    instant: dt.datetime
    rendered_in_target: str
    source_text: str
    from_zone: str
    to_zone: str
    from_label: str
    to_label: str
    wall_time: WallTimeKind = Field(
        default=WallTimeKind.NORMAL,
        description="Whether the source reading was skipped or repeated by a DST change"
    )

    @computed_field
    @property
    def summary(self) -> str:
        return (
            f"{self.source_text} ({self.from_label}) -> "
            f"{self.rendered_in_target} ({self.to_label})"
        )


class ThemeUpdate(BaseModel):
    """Request body for /api/theme. No theme means toggle."""
    theme: Optional[Theme] = None


class ThemeState(BaseModel):
    theme: Theme


class Location(BaseModel):
    """Static location guess returned by /api/whereami."""
    country: str
    city: str
    timezone: str


class TimezoneMatch(BaseModel):
    """One row of the /api/timezones lookup."""
    city: str
    timezone: str
