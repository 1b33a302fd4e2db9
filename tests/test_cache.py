"""Tests for cache behavior.

Invalidation waits for the surrounding transaction to commit. Tests run
inside a transaction that never commits, so commit callbacks are captured
and run explicitly.
Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache
from django.db import transaction

from factories import event_fields
from foodshare import models as orm
from foodshare.cache import EVENT_LIST_KEY, cached_snapshot, event_detail_key
from foodshare.domain.validation import build_details
from foodshare.stores.django_store import DjangoEventStore


@pytest.fixture
def store() -> DjangoEventStore:
    return DjangoEventStore()


@pytest.fixture
def event(store):
    return store.add_event("host-1", build_details(event_fields(capacity=3)))


def prime(event_id: str) -> None:
    cache.set(EVENT_LIST_KEY, ["stale"])
    cache.set(event_detail_key(event_id), {"title": "stale"})


def assert_invalidated(event_id: str) -> None:
    assert cache.get(EVENT_LIST_KEY) is None
    assert cache.get(event_detail_key(event_id)) is None


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_event_save_invalidates_list_and_detail(
        self, event, django_capture_on_commit_callbacks
    ):
        """Saving an event invalidates events:list and events:{id}."""
        prime(str(event.id))
        row = orm.Event.objects.get(pk=event.id.value)
        row.title = "Updated"
        with django_capture_on_commit_callbacks(execute=True):
            row.save()
        assert_invalidated(str(event.id))

    def test_event_delete_invalidates(self, store, event, django_capture_on_commit_callbacks):
        prime(str(event.id))
        with django_capture_on_commit_callbacks(execute=True):
            store.delete_event(event.id)
        assert_invalidated(str(event.id))

    def test_reservation_save_invalidates_event(
        self, event, django_capture_on_commit_callbacks
    ):
        """Creating a reservation invalidates its event's cache entries."""
        prime(str(event.id))
        with django_capture_on_commit_callbacks(execute=True):
            orm.Reservation.objects.create(event_id=event.id.value, user_id="guest-1")
        assert_invalidated(str(event.id))

    def test_counter_update_invalidates(self, store, event, django_capture_on_commit_callbacks):
        """Conditional updates bypass signals, so the store invalidates itself."""
        prime(str(event.id))
        with django_capture_on_commit_callbacks(execute=True):
            store.increment_reserved(event.id)
        assert_invalidated(str(event.id))

    def test_entries_survive_until_commit(self, store, event, django_capture_on_commit_callbacks):
        """A read before commit must not see the cache already cleared."""
        prime(str(event.id))
        with django_capture_on_commit_callbacks() as callbacks:
            with transaction.atomic():
                store.increment_reserved(event.id)
            assert cache.get(event_detail_key(str(event.id))) == {"title": "stale"}
        assert callbacks

        for callback in callbacks:
            callback()
        assert_invalidated(str(event.id))

    def test_rejected_update_keeps_cache(self, store, event, django_capture_on_commit_callbacks):
        prime(str(event.id))
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            store.decrement_reserved(event.id)
        assert callbacks == []
        assert cache.get(EVENT_LIST_KEY) == ["stale"]

    def test_unrelated_event_entry_survives(
        self, store, event, django_capture_on_commit_callbacks
    ):
        other = store.add_event("host-2", build_details(event_fields()))
        cache.set(event_detail_key(str(other.id)), {"title": "kept"})
        with django_capture_on_commit_callbacks(execute=True):
            store.increment_reserved(event.id)
        assert cache.get(event_detail_key(str(other.id))) == {"title": "kept"}


class TestCachedSnapshot:
    def test_loads_once_until_invalidated(self):
        calls = []

        def load():
            calls.append(1)
            return ["event"]

        snapshot = cached_snapshot(load)
        assert snapshot() == ["event"]
        assert snapshot() == ["event"]
        assert len(calls) == 1

        cache.delete(EVENT_LIST_KEY)
        snapshot()
        assert len(calls) == 2
