"""Event service - catalog business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone, tzinfo
from typing import Any

from foodshare.domain import (
    DeletionOutcome,
    Event,
    EventId,
    EventListing,
    EventQuery,
    Reservation,
    UserEvents,
)
from foodshare.domain.errors import EventNotFoundError, ForbiddenError, InvalidInputError
from foodshare.domain.search import search_events
from foodshare.domain.validation import apply_changes, build_details
from foodshare.services.identifiers import parse_event_id, require_user_id
from foodshare.stores.interfaces import EventStore, ReservationStore

logger = logging.getLogger("foodshare.catalog")


class EventService:
    """Service for event catalog and lifecycle operations."""

    def __init__(
        self,
        store: EventStore,
        reservations: ReservationStore,
        tz: tzinfo = timezone.utc,
        snapshot: Callable[[], list[Event]] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._reservations = reservations
        self._tz = tz
        self._snapshot = snapshot or store.list_events
        self._clock = clock or (lambda: datetime.now(tz))

    def list_events(
        self,
        query: EventQuery | None = None,
        viewer_id: str | None = None,
        now: datetime | None = None,
    ) -> list[EventListing]:
        """Return live events matching query, soonest first.

        The snapshot may lag behind the latest writes.
        """
        events = search_events(
            self._snapshot(),
            query or EventQuery(),
            now or self._clock(),
            self._tz,
        )
        reserved = self._reserved_ids(viewer_id)
        return [EventListing(event=e, is_reserved=e.id in reserved) for e in events]

    def get_event(self, event_id: str | EventId) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        eid = parse_event_id(event_id)
        event = self._store.get_event(eid)
        if event is None:
            raise EventNotFoundError(str(eid))
        return event

    def get_listing(self, event_id: str | EventId, viewer_id: str | None = None) -> EventListing:
        event = self.get_event(event_id)
        return EventListing(event=event, is_reserved=event.id in self._reserved_ids(viewer_id))

    def create_event(self, owner_id: str, fields: Mapping[str, Any]) -> Event:
        """Create an event with no reservations.

        Raises:
            InvalidInputError: If fields are missing or malformed.
        """
        owner_id = require_user_id(owner_id)
        details = build_details(fields)
        event = self._store.add_event(owner_id, details)
        logger.info("created event=%s owner=%s capacity=%d", event.id, owner_id, event.capacity)
        return event

    def update_event(self, event_id: str | EventId, owner_id: str, fields: Mapping[str, Any]) -> Event:
        """Apply a partial update from the event's owner.

        reserved_count is never writable here.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ForbiddenError: If owner_id does not own the event.
            InvalidInputError: If fields are malformed, or capacity would
                drop below the spots already reserved.
        """
        eid = parse_event_id(event_id)
        owner_id = require_user_id(owner_id)
        with self._store.transaction(eid):
            event = self._owned_event(eid, owner_id)
            details = apply_changes(event.details, fields)
            if details.capacity.value < event.reserved_count:
                raise InvalidInputError(
                    f"capacity cannot be lower than the {event.reserved_count} "
                    "spots already reserved",
                    field="capacity",
                )
            updated = self._store.save_details(eid, details)
        logger.info("updated event=%s fields=%s", eid, ",".join(sorted(fields)))
        return updated

    def delete_event(self, event_id: str | EventId, owner_id: str) -> DeletionOutcome:
        """Delete an event and every reservation on it.

        The outcome lists the users whose reservations were dropped so the
        caller can notify them.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ForbiddenError: If owner_id does not own the event.
        """
        eid = parse_event_id(event_id)
        owner_id = require_user_id(owner_id)
        with self._store.transaction(eid):
            self._owned_event(eid, owner_id)
            affected = self._store.delete_event(eid)
        if affected:
            logger.warning(
                "deleted event=%s with %d reservations", eid, len(affected)
            )
        else:
            logger.info("deleted event=%s", eid)
        return DeletionOutcome(event_id=eid, affected_user_ids=tuple(affected))

    def list_attendees(self, event_id: str | EventId, owner_id: str) -> list[Reservation]:
        """Return an event's reservations. Only the owner may see them."""
        eid = parse_event_id(event_id)
        self._owned_event(eid, require_user_id(owner_id))
        return self._reservations.list_for_event(eid)

    def list_user_events(self, user_id: str, requester_id: str) -> UserEvents:
        """Return the events a user posted and the events they reserved.

        Raises:
            ForbiddenError: If requester_id is not user_id.
        """
        user_id = require_user_id(user_id)
        if require_user_id(requester_id) != user_id:
            raise ForbiddenError("Not your account")
        posted = self._store.list_events_by_owner(user_id)
        reserved_ids = [r.event_id for r in self._reservations.list_for_user(user_id)]
        reserved = self._store.list_events_by_ids(reserved_ids) if reserved_ids else []
        return UserEvents(posted=tuple(posted), reserved=tuple(reserved))

    def _owned_event(self, event_id: EventId, owner_id: str) -> Event:
        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        if not event.is_owned_by(owner_id):
            raise ForbiddenError()
        return event

    def _reserved_ids(self, viewer_id: str | None) -> set[EventId]:
        if not viewer_id:
            return set()
        return {r.event_id for r in self._reservations.list_for_user(viewer_id)}
