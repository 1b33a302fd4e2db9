from django.urls import path

from foodshare.handlers import (
    EventAttendeesView,
    EventDetailView,
    EventListView,
    ReservationView,
    UserEventsView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/user/<str:user_id>", UserEventsView.as_view(), name="user-events"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/attendees",
        EventAttendeesView.as_view(),
        name="event-attendees",
    ),
    path(
        "events/<str:event_id>/reserve",
        ReservationView.as_view(),
        name="event-reserve",
    ),
]
