"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. The services rely on
three storage guarantees, whichever backend provides them:

- a conditional increment of reserved_count that only succeeds while
  reserved_count < capacity,
- a reservation insert backed by uniqueness of (event_id, user_id),
- a per-event transaction scope that serializes writers of one event.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager

from foodshare.domain import Event, EventDetails, EventId, Reservation


class ReservationConflict(Exception):
    """Raised by a store when (event_id, user_id) already has a reservation."""


class EventStore(ABC):
    """Interface for event persistence and capacity bookkeeping."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def list_events_by_owner(self, owner_id: str) -> list[Event]:
        """Return events posted by owner_id, ordered by date ascending."""
        ...

    @abstractmethod
    def list_events_by_ids(self, event_ids: Iterable[EventId]) -> list[Event]:
        """Return the existing events among event_ids, ordered by date ascending."""
        ...

    @abstractmethod
    def add_event(self, owner_id: str, details: EventDetails) -> Event:
        """Persist a new event with reserved_count = 0."""
        ...

    @abstractmethod
    def save_details(self, event_id: EventId, details: EventDetails) -> Event:
        """Overwrite an event's organizer fields. Never touches reserved_count."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> list[str]:
        """Delete an event and its reservations.

        Returns the user IDs whose reservations were removed.
        """
        ...

    @abstractmethod
    def increment_reserved(self, event_id: EventId) -> bool:
        """Atomically add one to reserved_count if reserved_count < capacity.

        Returns whether the row was updated.
        """
        ...

    @abstractmethod
    def decrement_reserved(self, event_id: EventId) -> bool:
        """Atomically subtract one from reserved_count if it is positive.

        Returns whether the row was updated.
        """
        ...

    @abstractmethod
    def transaction(self, event_id: EventId) -> AbstractContextManager[None]:
        """Scope in which writes to one event are serialized."""
        ...


class ReservationStore(ABC):
    """Interface for reservation persistence."""

    @abstractmethod
    def get_reservation(self, event_id: EventId, user_id: str) -> Reservation | None:
        """Return the reservation for (event_id, user_id), or None."""
        ...

    @abstractmethod
    def add_reservation(self, event_id: EventId, user_id: str) -> Reservation:
        """Insert a reservation.

        Raises:
            ReservationConflict: If (event_id, user_id) already exists.
        """
        ...

    @abstractmethod
    def remove_reservation(self, event_id: EventId, user_id: str) -> bool:
        """Delete the reservation for (event_id, user_id). Returns whether one existed."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[Reservation]:
        """Return an event's reservations ordered by created_at ascending."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Reservation]:
        """Return a user's reservations ordered by created_at ascending."""
        ...
