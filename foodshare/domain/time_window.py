"""Resolution of an event's date and time text into concrete instants.

Organizers type times freely, e.g. "3:00 PM", "9", "3:00 PM - 5:00 PM" or
"7 - 9pm". Only the two shapes below are understood:

    H[:MM] [AM|PM]
    H[:MM][AM|PM] - H[:MM][AM|PM]

When a time carries no meridiem marker, hours from 8 up are read as PM and
hours below 8 as AM, so "9:00" becomes 21:00. This guesses wrong for
morning events after 8 AM; it is kept because the organizer's intent is
ambiguous. Hours 13-23 without a marker are already unambiguous and are
taken as 24-hour clock values. In a range each side is read on its own.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

from foodshare.domain.models import Event

_CLOCK = r"(?P<{p}h>\d{{1,2}})(?::(?P<{p}m>\d{{2}}))?\s*(?P<{p}mer>[ap]\.?\s?m\.?)?"

_SCHEDULE_RE = re.compile(
    r"^\s*"
    + _CLOCK.format(p="s")
    + r"(?:\s*(?:-|–|—|to)\s*"
    + _CLOCK.format(p="e")
    + r")?\s*$",
    re.IGNORECASE,
)

# Hours at or above this are PM when no marker is given.
PM_HEURISTIC_THRESHOLD = 8


class UnparseableScheduleError(ValueError):
    """Raised when a date/time pair cannot be resolved."""


@dataclass(frozen=True)
class TimeWindow:
    """Start and optional end of an event. Derived, never stored."""

    start: datetime
    end: datetime | None = None

    def is_live(self, now: datetime) -> bool:
        if self.end is not None:
            return self.end >= now
        return self.start >= now


def resolve(date_field: date | str, time_field: str, tz: tzinfo | None = None) -> TimeWindow:
    """Resolve a calendar date and a free-form time into a TimeWindow.

    Datetimes are aware when tz is given, naive otherwise.

    Raises:
        UnparseableScheduleError: If either field cannot be understood.
    """
    day = _parse_date(date_field)
    match = _SCHEDULE_RE.match(time_field or "")
    if match is None:
        raise UnparseableScheduleError(f"Unrecognised time: {time_field!r}")

    start_mer = _meridiem(match.group("smer"))
    end_mer = _meridiem(match.group("emer"))
    start_hour, start_min = _clock(match.group("sh"), match.group("sm"), start_mer)
    start = _combine(day, _to_24h(start_hour, start_mer), start_min, tz)
    if match.group("eh") is None:
        return TimeWindow(start=start)

    # The start never borrows the end's marker; "7 - 9 PM" starts at 07:00.
    end_hour, end_min = _clock(match.group("eh"), match.group("em"), end_mer)
    end = _combine(day, _to_24h(end_hour, end_mer), end_min, tz)
    if end < start:
        end += timedelta(days=1)
    return TimeWindow(start=start, end=end)


def try_resolve(date_field: date | str, time_field: str, tz: tzinfo | None = None) -> TimeWindow | None:
    """Like resolve, but returns None for unparseable schedules."""
    try:
        return resolve(date_field, time_field, tz)
    except UnparseableScheduleError:
        return None


def window_for(event: Event, tz: tzinfo | None = None) -> TimeWindow | None:
    return try_resolve(event.details.date, event.details.time, tz)


def is_live(event: Event, now: datetime, tz: tzinfo | None = None) -> bool:
    """Whether the event has not yet ended at `now`.

    Schedules are resolved in tz, falling back to now's own tzinfo.
    Events whose schedule cannot be resolved are never live.
    """
    window = window_for(event, tz or now.tzinfo)
    if window is None:
        return False
    return window.is_live(now)


def _parse_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise UnparseableScheduleError(f"Unrecognised date: {value!r}") from None


def _meridiem(raw: str | None) -> str | None:
    if raw is None:
        return None
    return "am" if raw.lower().startswith("a") else "pm"


def _clock(hour_text: str, minute_text: str | None, meridiem: str | None) -> tuple[int, int]:
    hour = int(hour_text)
    minute = int(minute_text) if minute_text else 0
    if minute > 59:
        raise UnparseableScheduleError(f"Invalid minute: {minute}")
    if meridiem is not None and not 1 <= hour <= 12:
        raise UnparseableScheduleError(f"Invalid 12-hour clock hour: {hour}")
    if hour > 23:
        raise UnparseableScheduleError(f"Invalid hour: {hour}")
    return hour, minute


def _to_24h(hour: int, meridiem: str | None) -> int:
    if meridiem == "am":
        return 0 if hour == 12 else hour
    if meridiem == "pm":
        return 12 if hour == 12 else hour + 12
    if hour > 12:
        return hour
    if hour >= PM_HEURISTIC_THRESHOLD:
        return _to_24h(hour, "pm")
    return hour


def _combine(day: date, hour: int, minute: int, tz: tzinfo | None) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=tz)
