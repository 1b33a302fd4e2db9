"""Reservation coordinator.

Per (event, user) pair a reservation is either absent or held:

    NONE --reserve--> RESERVED --cancel--> NONE

Both transitions run inside the store's per-event transaction scope, so
the duplicate check, the capacity admission and the record write are
decided together. The unique (event_id, user_id) constraint backs the
duplicate check for stores that cannot lock.
"""

import logging

from foodshare.domain import EventId, Reservation, ReservationOutcome
from foodshare.domain.errors import (
    AlreadyReservedError,
    EventNotFoundError,
    NotReservedError,
)
from foodshare.services.identifiers import parse_event_id, require_user_id
from foodshare.services.ledger import CapacityLedger
from foodshare.stores.interfaces import EventStore, ReservationConflict, ReservationStore

logger = logging.getLogger("foodshare.reservations")


class ReservationService:
    """Admits, rejects and reverses reservations."""

    def __init__(
        self,
        events: EventStore,
        reservations: ReservationStore,
        ledger: CapacityLedger | None = None,
    ) -> None:
        self._events = events
        self._reservations = reservations
        self._ledger = ledger or CapacityLedger(events)

    def reserve(self, event_id: str | EventId, user_id: str) -> ReservationOutcome:
        """Reserve one spot on an event for a user.

        Reserving twice is an error, not a no-op.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            AlreadyReservedError: If the user already holds a reservation.
            EventFullError: If no spots are left.
        """
        eid = parse_event_id(event_id)
        user_id = require_user_id(user_id)

        with self._events.transaction(eid):
            if not self._events.event_exists(eid):
                raise EventNotFoundError(str(eid))
            if self._reservations.get_reservation(eid, user_id) is not None:
                logger.info("rejected event=%s user=%s reason=duplicate", eid, user_id)
                raise AlreadyReservedError(str(eid), user_id)

            self._ledger.admit(eid)
            try:
                reservation = self._reservations.add_reservation(eid, user_id)
            except ReservationConflict:
                self._ledger.release(eid)
                logger.info("rejected event=%s user=%s reason=conflict", eid, user_id)
                raise AlreadyReservedError(str(eid), user_id) from None
            except Exception:
                self._ledger.release(eid)
                logger.exception("reservation write failed event=%s user=%s", eid, user_id)
                raise
            spots_left = self._ledger.spots_left(eid)

        logger.info("reserved event=%s user=%s spots_left=%d", eid, user_id, spots_left)
        return ReservationOutcome(
            event_id=eid,
            user_id=user_id,
            spots_left=spots_left,
            reservation=reservation,
        )

    def cancel(self, event_id: str | EventId, user_id: str) -> ReservationOutcome:
        """Cancel a user's reservation and return the spot.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            NotReservedError: If the user holds no reservation.
        """
        eid = parse_event_id(event_id)
        user_id = require_user_id(user_id)

        with self._events.transaction(eid):
            if not self._events.event_exists(eid):
                raise EventNotFoundError(str(eid))
            if not self._reservations.remove_reservation(eid, user_id):
                raise NotReservedError(str(eid), user_id)
            self._ledger.release(eid)
            spots_left = self._ledger.spots_left(eid)

        logger.info("cancelled event=%s user=%s spots_left=%d", eid, user_id, spots_left)
        return ReservationOutcome(event_id=eid, user_id=user_id, spots_left=spots_left)

    def reservation_for(self, event_id: str | EventId, user_id: str) -> Reservation | None:
        """Return the user's current reservation on the event, if any."""
        eid = parse_event_id(event_id)
        return self._reservations.get_reservation(eid, require_user_id(user_id))

    def spots_left(self, event_id: str | EventId) -> int:
        return self._ledger.spots_left(parse_event_id(event_id))
