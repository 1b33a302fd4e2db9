"""In-process implementation of the stores.

Used by unit tests and local tooling. One object backs both interfaces so
that deleting an event can cascade to its reservations. Every mutation
happens under a single data lock; the per-event transaction scope adds an
RLock per event so writers of different events never wait on each other.
"""

import threading
import weakref
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone
from uuid import UUID

from foodshare.domain import Event, EventDetails, EventId, Reservation, ReservationId
from foodshare.stores.interfaces import EventStore, ReservationConflict, ReservationStore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore(EventStore, ReservationStore):
    """Thread-safe dict-backed store."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._events: dict[UUID, Event] = {}
        self._reservations: dict[tuple[UUID, str], Reservation] = {}
        self._lock = threading.Lock()
        # Entries vanish once no thread holds or waits on the lock.
        self._event_locks: weakref.WeakValueDictionary = weakref.WeakValueDictionary()
        self._registry_lock = threading.Lock()

    # -- events --------------------------------------------------------

    def list_events(self) -> list[Event]:
        with self._lock:
            events = list(self._events.values())
        return sorted(events, key=lambda event: event.created_at, reverse=True)

    def get_event(self, event_id: EventId) -> Event | None:
        with self._lock:
            return self._events.get(event_id.value)

    def event_exists(self, event_id: EventId) -> bool:
        with self._lock:
            return event_id.value in self._events

    def list_events_by_owner(self, owner_id: str) -> list[Event]:
        with self._lock:
            events = [e for e in self._events.values() if e.owner_id == owner_id]
        return sorted(events, key=_by_date)

    def list_events_by_ids(self, event_ids: Iterable[EventId]) -> list[Event]:
        wanted = {event_id.value for event_id in event_ids}
        with self._lock:
            events = [e for key, e in self._events.items() if key in wanted]
        return sorted(events, key=_by_date)

    def add_event(self, owner_id: str, details: EventDetails) -> Event:
        now = self._clock()
        event = Event(
            id=EventId.new(),
            owner_id=owner_id,
            details=details,
            reserved_count=0,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._events[event.id.value] = event
        return event

    def save_details(self, event_id: EventId, details: EventDetails) -> Event:
        with self._lock:
            current = self._events[event_id.value]
            updated = replace(current, details=details, updated_at=self._clock())
            self._events[event_id.value] = updated
        return updated

    def delete_event(self, event_id: EventId) -> list[str]:
        with self._lock:
            self._events.pop(event_id.value, None)
            removed = [
                key for key in self._reservations if key[0] == event_id.value
            ]
            reservations = [self._reservations.pop(key) for key in removed]
        reservations.sort(key=lambda reservation: reservation.created_at)
        return [reservation.user_id for reservation in reservations]

    def increment_reserved(self, event_id: EventId) -> bool:
        with self._lock:
            event = self._events.get(event_id.value)
            if event is None or event.reserved_count >= event.capacity:
                return False
            self._events[event_id.value] = replace(
                event, reserved_count=event.reserved_count + 1
            )
            return True

    def decrement_reserved(self, event_id: EventId) -> bool:
        with self._lock:
            event = self._events.get(event_id.value)
            if event is None or event.reserved_count <= 0:
                return False
            self._events[event_id.value] = replace(
                event, reserved_count=event.reserved_count - 1
            )
            return True

    @contextmanager
    def transaction(self, event_id: EventId) -> Iterator[None]:
        with self._registry_lock:
            lock = self._event_locks.setdefault(event_id.value, threading.RLock())
        with lock:
            yield

    # -- reservations --------------------------------------------------

    def get_reservation(self, event_id: EventId, user_id: str) -> Reservation | None:
        with self._lock:
            return self._reservations.get((event_id.value, user_id))

    def add_reservation(self, event_id: EventId, user_id: str) -> Reservation:
        key = (event_id.value, user_id)
        with self._lock:
            if key in self._reservations:
                raise ReservationConflict(f"{event_id}/{user_id}")
            reservation = Reservation(
                id=ReservationId.new(),
                event_id=event_id,
                user_id=user_id,
                created_at=self._clock(),
            )
            self._reservations[key] = reservation
        return reservation

    def remove_reservation(self, event_id: EventId, user_id: str) -> bool:
        with self._lock:
            return self._reservations.pop((event_id.value, user_id), None) is not None

    def list_for_event(self, event_id: EventId) -> list[Reservation]:
        with self._lock:
            found = [r for r in self._reservations.values() if r.event_id == event_id]
        return sorted(found, key=lambda reservation: reservation.created_at)

    def list_for_user(self, user_id: str) -> list[Reservation]:
        with self._lock:
            found = [r for r in self._reservations.values() if r.user_id == user_id]
        return sorted(found, key=lambda reservation: reservation.created_at)


def _by_date(event: Event) -> tuple:
    return (event.details.date, event.details.title)
