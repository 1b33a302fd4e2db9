"""Cache keys for read-side catalog views.

Cached values only serve listings and detail reads. Capacity decisions
always read the store.
"""

from collections.abc import Callable

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

EVENT_LIST_KEY = "events:list"


def event_detail_key(event_id: str) -> str:
    return f"events:{event_id}"


def ttl() -> int:
    return getattr(settings, "FOODSHARE_CATALOG_CACHE_TTL", 30)


def invalidate_event(event_id: str) -> None:
    """Drop the listing and the event's detail entry once the write commits.

    Outside a transaction the entries are dropped immediately.
    """
    keys = [EVENT_LIST_KEY, event_detail_key(event_id)]
    transaction.on_commit(lambda: cache.delete_many(keys))


def cached_snapshot(load: Callable[[], list]) -> Callable[[], list]:
    """Wrap a catalog loader so listings share one cached snapshot."""

    def snapshot() -> list:
        return cache.get_or_set(EVENT_LIST_KEY, load, ttl())

    return snapshot
