"""Tests for wall-clock conversion and zone-local formatting."""
from datetime import date, datetime, time, timedelta, timezone

import pytest

from worldclock.core.errors import (
    AmbiguousTimeError,
    InvalidDateError,
    InvalidZoneError,
    SkippedTimeError,
)
from worldclock.core.time_utils import (
    UTC,
    Disambiguation,
    FieldSet,
    WallTimeKind,
    from_instant,
    get_current_time,
    get_formatter,
    to_instant,
    utc_offset_str,
    wall_time_kind,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestGetCurrentTime:
    def test_returns_aware_utc(self):
        now = get_current_time()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_is_recent(self):
        diff = abs((datetime.now(timezone.utc) - get_current_time()).total_seconds())
        assert diff < 5


class TestToInstant:
    def test_standard_time(self):
        assert to_instant("2024-01-15", "12:00", "America/New_York") == utc(2024, 1, 15, 17, 0)

    def test_daylight_time(self):
        assert to_instant("2024-07-15", "12:00", "America/New_York") == utc(2024, 7, 15, 16, 0)

    def test_returns_utc(self):
        instant = to_instant("2024-01-15", "12:00", "Asia/Tokyo")
        assert instant.tzinfo == UTC

    def test_accepts_date_and_time_objects(self):
        instant = to_instant(date(2024, 1, 15), time(12, 0), "Africa/Nairobi")
        assert instant == utc(2024, 1, 15, 9, 0)

    def test_missing_time_is_midnight(self):
        assert to_instant("2024-01-15", None, "Europe/London") == utc(2024, 1, 15, 0, 0)
        assert to_instant("2024-01-15", "", "Europe/London") == utc(2024, 1, 15, 0, 0)

    def test_day_rolls_back_across_utc(self):
        assert to_instant("2024-03-01", "01:00", "Asia/Tokyo") == utc(2024, 2, 29, 16, 0)

    def test_spring_forward_boundary_does_not_raise(self):
        instant = to_instant("2024-03-10", "01:30", "America/New_York")
        assert abs(instant - utc(2024, 3, 10, 6, 30)) <= timedelta(hours=1)

    def test_skipped_time_earlier(self):
        # 02:30 never happens in New York on 2024-03-10
        assert to_instant("2024-03-10", "02:30", "America/New_York") == utc(2024, 3, 10, 7, 30)

    def test_skipped_time_later(self):
        instant = to_instant("2024-03-10", "02:30", "America/New_York", Disambiguation.LATER)
        assert instant == utc(2024, 3, 10, 6, 30)

    def test_skipped_time_raise(self):
        with pytest.raises(SkippedTimeError):
            to_instant("2024-03-10", "02:30", "America/New_York", "raise")

    def test_repeated_time_earlier(self):
        # 01:30 happens twice in New York on 2024-11-03
        assert to_instant("2024-11-03", "01:30", "America/New_York") == utc(2024, 11, 3, 5, 30)

    def test_repeated_time_later(self):
        instant = to_instant("2024-11-03", "01:30", "America/New_York", "later")
        assert instant == utc(2024, 11, 3, 6, 30)

    def test_repeated_time_raise(self):
        with pytest.raises(AmbiguousTimeError):
            to_instant("2024-11-03", "01:30", "America/New_York", Disambiguation.RAISE)

    def test_raise_policy_allows_normal_times(self):
        instant = to_instant("2024-11-03", "12:00", "America/New_York", Disambiguation.RAISE)
        assert instant == utc(2024, 11, 3, 17, 0)

    @pytest.mark.parametrize("bad_date", ["2024-02-30", "not-a-date", "2024/01/15"])
    def test_invalid_date(self, bad_date):
        with pytest.raises(InvalidDateError):
            to_instant(bad_date, "12:00", "Europe/London")

    @pytest.mark.parametrize("bad_time", ["25:00", "12h30", "noon"])
    def test_invalid_time(self, bad_time):
        with pytest.raises(InvalidDateError):
            to_instant("2024-01-15", bad_time, "Europe/London")

    def test_malformed_zone(self):
        with pytest.raises(InvalidZoneError):
            to_instant("2024-01-15", "12:00", "New York")

    def test_unknown_zone(self):
        with pytest.raises(InvalidZoneError):
            to_instant("2024-01-15", "12:00", "Mars/Olympus_Mons")

    @pytest.mark.parametrize("zone", ["America/Argentina", "America/Indiana"])
    def test_zone_naming_a_tzdata_directory(self, zone):
        with pytest.raises(InvalidZoneError):
            to_instant("2024-01-15", "12:00", zone)

    @pytest.mark.parametrize("date_value, time_value, zone", [
        ("9999-12-31", "23:00", "America/New_York"),
        ("0001-01-01", "00:00", "Asia/Tokyo"),
    ])
    def test_out_of_range_instant(self, date_value, time_value, zone):
        with pytest.raises(InvalidDateError, match="out of range"):
            to_instant(date_value, time_value, zone)

    def test_out_of_range_with_raise_policy(self):
        with pytest.raises(InvalidDateError):
            to_instant("0001-01-01", "00:00", "Asia/Tokyo", Disambiguation.RAISE)


class TestWallTimeKind:
    def test_normal(self):
        assert wall_time_kind("2024-01-15", "12:00", "America/New_York") == WallTimeKind.NORMAL

    def test_skipped(self):
        assert wall_time_kind("2024-03-10", "02:30", "America/New_York") == WallTimeKind.SKIPPED

    def test_ambiguous(self):
        assert wall_time_kind("2024-11-03", "01:30", "America/New_York") == WallTimeKind.AMBIGUOUS


class TestFromInstant:
    instant = utc(2024, 6, 15, 5, 45, 30)

    @pytest.mark.parametrize("fields, expected", [
        (FieldSet.DATE, "2024-06-15"),
        (FieldSet.TIME, "14:45:30"),
        (FieldSet.TIME_SHORT, "14:45"),
        (FieldSet.WEEKDAY, "Saturday"),
        (FieldSet.DATETIME, "2024-06-15 14:45"),
        (FieldSet.FULL, "Sat, 15 Jun 2024, 14:45:30"),
    ])
    def test_field_sets(self, fields, expected):
        assert from_instant(self.instant, "Asia/Tokyo", fields) == expected

    def test_field_set_by_name(self):
        assert from_instant(self.instant, "Asia/Tokyo", "date") == "2024-06-15"

    def test_deterministic(self):
        first = from_instant(self.instant, "Europe/London", FieldSet.FULL)
        second = from_instant(self.instant, "Europe/London", FieldSet.FULL)
        assert first == second

    def test_round_trip(self):
        instant = to_instant("2024-06-15", "14:45", "Asia/Tokyo")
        assert from_instant(instant, "Asia/Tokyo", FieldSet.FULL) == "Sat, 15 Jun 2024, 14:45:00"
        assert from_instant(instant, "Asia/Tokyo", FieldSet.DATETIME) == "2024-06-15 14:45"

    def test_naive_instant_read_as_utc(self):
        naive = datetime(2024, 6, 15, 5, 45, 30)
        assert from_instant(naive, "Asia/Tokyo", FieldSet.TIME) == "14:45:30"

    def test_zone_without_region(self):
        assert from_instant(self.instant, "UTC", FieldSet.TIME) == "05:45:30"

    def test_unknown_zone(self):
        with pytest.raises(InvalidZoneError):
            from_instant(self.instant, "Mars/Olympus_Mons", FieldSet.TIME)

    def test_zone_naming_a_tzdata_directory(self):
        with pytest.raises(InvalidZoneError):
            from_instant(self.instant, "America/Argentina", FieldSet.TIME)

    def test_out_of_range_rendering(self):
        with pytest.raises(InvalidDateError, match="out of range"):
            from_instant(utc(9999, 12, 31, 23, 0), "Asia/Tokyo", FieldSet.FULL)

    def test_formatter_is_cached(self):
        assert get_formatter("Asia/Tokyo", FieldSet.DATE) is get_formatter("Asia/Tokyo", FieldSet.DATE)
        assert get_formatter("Asia/Tokyo", FieldSet.DATE) is not get_formatter("Asia/Tokyo", FieldSet.TIME)


class TestUtcOffsetStr:
    def test_positive_offset(self):
        assert utc_offset_str(utc(2024, 1, 15), "Africa/Nairobi") == "+03:00"

    def test_offset_follows_dst(self):
        assert utc_offset_str(utc(2024, 1, 15), "America/New_York") == "-05:00"
        assert utc_offset_str(utc(2024, 7, 15), "America/New_York") == "-04:00"


