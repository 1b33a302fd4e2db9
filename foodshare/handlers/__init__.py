from foodshare.handlers.views import (
    EventAttendeesView,
    EventDetailView,
    EventListView,
    ReservationView,
    UserEventsView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "EventAttendeesView",
    "ReservationView",
    "UserEventsView",
]
