"""Tests for resolving event schedules into time windows.

Run with: pytest tests/test_time_window.py -v
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from factories import event_fields
from foodshare.domain import Event, EventId
from foodshare.domain.time_window import (
    UnparseableScheduleError,
    is_live,
    resolve,
    try_resolve,
)
from foodshare.domain.validation import build_details

DAY = date(2025, 3, 1)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def event_at(time_text: str, day: str = "2025-03-01") -> Event:
    created = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return Event(
        id=EventId.new(),
        owner_id="host-1",
        details=build_details(event_fields(date=day, time=time_text)),
        reserved_count=0,
        created_at=created,
        updated_at=created,
    )


class TestResolve:
    def test_range_with_meridiem(self):
        window = resolve("2025-03-01", "3:00 PM - 5:00 PM")
        assert window.start == at(15)
        assert window.end == at(17)

    def test_single_time_has_no_end(self):
        window = resolve(DAY, "6:30 pm")
        assert window.start == at(18, 30)
        assert window.end is None

    def test_compact_range(self):
        window = resolve(DAY, "11:30AM-1PM")
        assert window.start == at(11, 30)
        assert window.end == at(13)

    def test_to_separator(self):
        window = resolve(DAY, "4 pm to 6 pm")
        assert (window.start, window.end) == (at(16), at(18))

    def test_dotted_meridiem(self):
        assert resolve(DAY, "10 a.m.").start == at(10)

    def test_noon_and_midnight(self):
        assert resolve(DAY, "12 PM").start == at(12)
        assert resolve(DAY, "12:15 AM").start == at(0, 15)

    def test_aware_when_timezone_given(self):
        tz = ZoneInfo("America/New_York")
        window = resolve(DAY, "3 PM", tz)
        assert window.start.tzinfo is tz
        assert window.start.hour == 15


class TestMeridiemHeuristic:
    """Times without AM/PM: hour >= 8 is PM, otherwise AM."""

    def test_nine_without_marker_is_evening(self):
        assert resolve(DAY, "9:00").start == at(21)

    def test_eight_is_the_first_pm_hour(self):
        assert resolve(DAY, "8").start == at(20)

    def test_seven_without_marker_is_morning(self):
        assert resolve(DAY, "7:45").start == at(7, 45)

    def test_twelve_without_marker_is_noon(self):
        assert resolve(DAY, "12:00").start == at(12)

    def test_24_hour_values_are_taken_as_is(self):
        assert resolve(DAY, "18:00").start == at(18)

    def test_range_start_does_not_borrow_end_marker(self):
        window = resolve(DAY, "7 - 9 PM")
        assert (window.start, window.end) == (at(7), at(21))

    def test_unmarked_range_start_at_eight_or_later_is_evening(self):
        window = resolve(DAY, "8 - 10 PM")
        assert (window.start, window.end) == (at(20), at(22))

    def test_unmarked_start_after_marked_end_rolls_end_over(self):
        window = resolve(DAY, "11 - 1 PM")
        assert window.start == at(23)
        assert window.end == at(13, day=DAY + timedelta(days=1))

    def test_range_ending_after_midnight_rolls_over(self):
        window = resolve(DAY, "10 PM - 1 AM")
        assert window.start == at(22)
        assert window.end == at(1, day=DAY + timedelta(days=1))


class TestUnparseable:
    @pytest.mark.parametrize(
        "time_text",
        ["", "noon", "sometime after lunch", "13 PM", "25:00", "3:75 PM", "3 PM -"],
    )
    def test_rejects(self, time_text):
        with pytest.raises(UnparseableScheduleError):
            resolve(DAY, time_text)

    def test_rejects_bad_date(self):
        with pytest.raises(UnparseableScheduleError):
            resolve("March 1st", "3 PM")

    def test_try_resolve_returns_none(self):
        assert try_resolve(DAY, "whenever") is None


class TestIsLive:
    def test_live_until_end(self):
        event = event_at("3:00 PM - 5:00 PM")
        assert is_live(event, at(16, 59))
        assert is_live(event, at(17))

    def test_not_live_after_end(self):
        event = event_at("3:00 PM - 5:00 PM")
        assert not is_live(event, at(17, 1))

    def test_without_end_live_until_start(self):
        event = event_at("3:00 PM")
        assert is_live(event, at(15))
        assert not is_live(event, at(15, 1))

    def test_unparseable_schedule_is_never_live(self):
        event = event_at("whenever")
        assert not is_live(event, at(0))

    def test_uses_timezone_of_now(self):
        event = event_at("3:00 PM - 5:00 PM")
        tz = ZoneInfo("America/New_York")
        # 21:30 UTC is 16:30 in New York on 2025-03-01 (EST, UTC-5).
        now = datetime(2025, 3, 1, 21, 30, tzinfo=timezone.utc)
        assert is_live(event, now, tz)
        assert not is_live(event, now)
