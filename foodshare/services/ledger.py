"""Capacity ledger: the single authority on whether an event has room.

The ledger owns reserved_count. Nothing else writes it, and every write is
a conditional update evaluated by the store against the latest committed
value.
"""

import logging

from foodshare.domain import EventId
from foodshare.domain.errors import (
    ConsistencyViolationError,
    EventFullError,
    EventNotFoundError,
)
from foodshare.stores.interfaces import EventStore

logger = logging.getLogger("foodshare.ledger")
alerts = logging.getLogger("foodshare.alerts")


class CapacityLedger:
    """Admits and releases units of event capacity."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def admit(self, event_id: EventId) -> None:
        """Claim one spot.

        Raises:
            EventNotFoundError: If the event does not exist.
            EventFullError: If reserved_count already equals capacity.
        """
        if self._store.increment_reserved(event_id):
            logger.debug("admitted event=%s", event_id)
            return
        if not self._store.event_exists(event_id):
            raise EventNotFoundError(str(event_id))
        logger.info("rejected event=%s reason=full", event_id)
        raise EventFullError(str(event_id))

    def release(self, event_id: EventId) -> None:
        """Return one spot, never taking reserved_count below zero.

        A release with nothing reserved means a reservation was removed
        without its admission. The count stays at zero and an alert is
        raised instead of an error, so the caller's cancel still completes.
        """
        if self._store.decrement_reserved(event_id):
            logger.debug("released event=%s", event_id)
            return
        if not self._store.event_exists(event_id):
            raise EventNotFoundError(str(event_id))
        report_violation(
            ConsistencyViolationError(
                f"release on event {event_id} with reserved_count already 0"
            )
        )

    def spots_left(self, event_id: EventId) -> int:
        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event.spots_left

    def is_full(self, event_id: EventId) -> bool:
        return self.spots_left(event_id) == 0


def report_violation(error: ConsistencyViolationError) -> None:
    """Log a broken bookkeeping guarantee where operators will see it."""
    alerts.critical(
        "%s: %s",
        error.code.value,
        error.detail,
        extra={"error_code": error.code.value},
    )
