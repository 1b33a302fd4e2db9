"""Search and filtering over a snapshot of the catalog.

Pure functions: nothing here touches a store, so a search can run while
writers are changing the catalog.
"""

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass

from foodshare.domain.models import Event
from foodshare.domain.time_window import window_for


@dataclass(frozen=True)
class EventQuery:
    """Criteria for listing events. Empty criteria match everything."""

    search: str = ""
    date: dt.date | None = None
    dietary: str = ""
    location: str = ""
    include_past: bool = False


def matches_text(event: Event, text: str) -> bool:
    """Case-insensitive substring match on title, location and food items."""
    if not text:
        return True
    needle = text.casefold()
    details = event.details
    if needle in details.title.casefold() or needle in details.location.casefold():
        return True
    return any(needle in food.item.casefold() for food in details.food_items)


def matches_dietary(event: Event, tag: str) -> bool:
    if not tag:
        return True
    wanted = tag.casefold()
    return any(option.casefold() == wanted for option in event.details.dietary_options)


def matches_location(event: Event, location: str) -> bool:
    if not location:
        return True
    return location.casefold() in event.details.location.casefold()


def search_events(
    events: Iterable[Event],
    query: EventQuery,
    now: dt.datetime,
    tz: dt.tzinfo | None = None,
) -> list[Event]:
    """Filter and sort events for a listing.

    Filters apply in order: liveness, free text, exact date, dietary tag,
    location. Results are sorted by start time; events whose schedule
    cannot be resolved (only present with include_past) sort last.
    """
    tz = tz or now.tzinfo
    windows = {}
    selected = []
    for event in events:
        window = window_for(event, tz)
        if not query.include_past and (window is None or not window.is_live(now)):
            continue
        if not matches_text(event, query.search.strip()):
            continue
        if query.date is not None and event.details.date != query.date:
            continue
        if not matches_dietary(event, query.dietary.strip()):
            continue
        if not matches_location(event, query.location.strip()):
            continue
        windows[event.id] = window
        selected.append(event)

    def sort_key(event: Event) -> tuple:
        window = windows[event.id]
        if window is None:
            return (1, event.details.date, event.details.title)
        return (0, window.start, event.details.title)

    return sorted(selected, key=sort_key)
