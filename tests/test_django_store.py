"""Tests for the Django ORM stores.

Run with: pytest tests/test_django_store.py -v
"""

import pytest
from django.db import IntegrityError, transaction

from factories import event_fields
from foodshare import models as orm
from foodshare.domain import EventId
from foodshare.domain.errors import AlreadyReservedError, EventFullError
from foodshare.domain.validation import build_details
from foodshare.services import EventService, ReservationService
from foodshare.stores.django_store import DjangoEventStore, DjangoReservationStore
from foodshare.stores.interfaces import ReservationConflict


@pytest.fixture
def events() -> DjangoEventStore:
    return DjangoEventStore()


@pytest.fixture
def reservations() -> DjangoReservationStore:
    return DjangoReservationStore()


@pytest.fixture
def event(events):
    return events.add_event("host-1", build_details(event_fields(capacity=2)))


@pytest.mark.django_db
class TestDjangoEventStore:
    def test_round_trips_details(self, events, event):
        loaded = events.get_event(event.id)
        assert loaded == event
        assert loaded.details.food_items[0].item == "Pizza"
        assert loaded.details.dietary_options == ("vegetarian",)

    def test_missing_event(self, events):
        assert events.get_event(EventId.new()) is None
        assert not events.event_exists(EventId.new())

    def test_increment_stops_at_capacity(self, events, event):
        assert events.increment_reserved(event.id)
        assert events.increment_reserved(event.id)
        assert not events.increment_reserved(event.id)
        assert events.get_event(event.id).reserved_count == 2

    def test_decrement_stops_at_zero(self, events, event):
        assert not events.decrement_reserved(event.id)
        assert events.get_event(event.id).reserved_count == 0

    def test_increment_unknown_event(self, events):
        assert not events.increment_reserved(EventId.new())

    def test_database_rejects_overfull_row(self, event):
        with pytest.raises(IntegrityError), transaction.atomic():
            orm.Event.objects.filter(pk=event.id.value).update(reserved_count=3)

    def test_save_details_keeps_reserved_count(self, events, event):
        events.increment_reserved(event.id)
        details = build_details(event_fields(title="Renamed", capacity=5))
        saved = events.save_details(event.id, details)
        assert saved.details.title == "Renamed"
        assert saved.reserved_count == 1

    def test_list_by_owner(self, events, event):
        events.add_event("host-2", build_details(event_fields()))
        assert [e.id for e in events.list_events_by_owner("host-1")] == [event.id]

    def test_delete_cascades(self, events, reservations, event):
        reservations.add_reservation(event.id, "guest-1")
        reservations.add_reservation(event.id, "guest-2")

        assert events.delete_event(event.id) == ["guest-1", "guest-2"]
        assert not orm.Reservation.objects.exists()
        assert not events.event_exists(event.id)


@pytest.mark.django_db
class TestDjangoReservationStore:
    def test_add_and_get(self, reservations, event):
        created = reservations.add_reservation(event.id, "guest-1")
        assert reservations.get_reservation(event.id, "guest-1") == created
        assert created.status == "reserved"

    def test_duplicate_is_a_conflict(self, reservations, event):
        reservations.add_reservation(event.id, "guest-1")
        with pytest.raises(ReservationConflict):
            reservations.add_reservation(event.id, "guest-1")
        assert len(reservations.list_for_event(event.id)) == 1

    def test_remove(self, reservations, event):
        reservations.add_reservation(event.id, "guest-1")
        assert reservations.remove_reservation(event.id, "guest-1")
        assert not reservations.remove_reservation(event.id, "guest-1")

    def test_list_for_user(self, events, reservations, event):
        other = events.add_event("host-2", build_details(event_fields()))
        reservations.add_reservation(event.id, "guest-1")
        reservations.add_reservation(other.id, "guest-1")
        assert {r.event_id for r in reservations.list_for_user("guest-1")} == {
            event.id,
            other.id,
        }


@pytest.mark.django_db
class TestServicesOnDjangoStores:
    @pytest.fixture
    def reservation_service(self, events, reservations):
        return ReservationService(events, reservations)

    def test_reserve_until_full(self, reservation_service, event):
        assert reservation_service.reserve(event.id, "guest-1").spots_left == 1
        assert reservation_service.reserve(event.id, "guest-2").spots_left == 0
        with pytest.raises(EventFullError):
            reservation_service.reserve(event.id, "guest-3")
        assert orm.Event.objects.get(pk=event.id.value).reserved_count == 2

    def test_duplicate_reserve(self, reservation_service, event):
        reservation_service.reserve(event.id, "guest-1")
        with pytest.raises(AlreadyReservedError):
            reservation_service.reserve(event.id, "guest-1")
        assert orm.Reservation.objects.count() == 1

    def test_cancel_returns_spot(self, reservation_service, event):
        reservation_service.reserve(event.id, "guest-1")
        assert reservation_service.cancel(event.id, "guest-1").spots_left == 2
        assert orm.Reservation.objects.count() == 0

    def test_delete_reports_affected_users(self, events, reservations, reservation_service, event):
        reservation_service.reserve(event.id, "guest-1")
        service = EventService(events, reservations)
        outcome = service.delete_event(event.id, "host-1")
        assert outcome.affected_user_ids == ("guest-1",)
        assert not orm.Event.objects.exists()
