from foodshare.domain.models import (
    DeletionOutcome,
    Event,
    EventDetails,
    EventListing,
    Reservation,
    ReservationOutcome,
    UserEvents,
)
from foodshare.domain.search import EventQuery
from foodshare.domain.time_window import TimeWindow
from foodshare.domain.value_objects import Capacity, EventId, FoodItem, ReservationId

__all__ = [
    "Event",
    "EventDetails",
    "EventListing",
    "Reservation",
    "ReservationOutcome",
    "DeletionOutcome",
    "UserEvents",
    "EventQuery",
    "TimeWindow",
    "EventId",
    "ReservationId",
    "Capacity",
    "FoodItem",
]
