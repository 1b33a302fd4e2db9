"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to the exception handler
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from foodshare import cache as catalog_cache
from foodshare.domain.errors import InvalidInputError
from foodshare.handlers.authentication import caller_id
from foodshare.handlers.serializers import (
    EventListingSerializer,
    EventQuerySerializer,
    EventSerializer,
    ReservationSerializer,
)
from foodshare.services.identifiers import parse_event_id
from foodshare.wiring import get_services


def _payload(request: Request) -> dict:
    if not isinstance(request.data, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return request.data


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get(self, request: Request) -> Response:
        params = {k: v for k, v in request.query_params.items() if v.strip()}
        query = EventQuerySerializer(data=params)
        query.is_valid(raise_exception=True)
        listings = get_services().events.list_events(
            query.to_query(), viewer_id=caller_id(request)
        )
        return Response({"events": EventListingSerializer(listings, many=True).data})

    def post(self, request: Request) -> Response:
        event = get_services().events.create_event(caller_id(request), _payload(request))
        return Response(
            {"event": EventSerializer(event).data}, status=status.HTTP_201_CREATED
        )


class EventDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get(self, request: Request, event_id: str) -> Response:
        services = get_services()
        key = catalog_cache.event_detail_key(str(parse_event_id(event_id)))
        data = cache.get(key)
        if data is None:
            data = dict(EventSerializer(services.events.get_event(event_id)).data)
            cache.set(key, data, catalog_cache.ttl())

        viewer = caller_id(request)
        is_reserved = bool(viewer) and (
            services.reservations.reservation_for(event_id, viewer) is not None
        )
        return Response({"event": {**data, "is_reserved": is_reserved}})

    def put(self, request: Request, event_id: str) -> Response:
        event = get_services().events.update_event(
            event_id, caller_id(request), _payload(request)
        )
        return Response({"event": EventSerializer(event).data})

    def delete(self, request: Request, event_id: str) -> Response:
        outcome = get_services().events.delete_event(event_id, caller_id(request))
        return Response(
            {
                "deleted": str(outcome.event_id),
                "had_reservations": outcome.had_reservations,
                "affected_user_ids": list(outcome.affected_user_ids),
            }
        )


class EventAttendeesView(APIView):
    """Handler for GET /api/events/{event_id}/attendees"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        attendees = get_services().events.list_attendees(event_id, caller_id(request))
        return Response({"attendees": ReservationSerializer(attendees, many=True).data})


class ReservationView(APIView):
    """Handler for POST/DELETE /api/events/{event_id}/reserve"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, event_id: str) -> Response:
        outcome = get_services().reservations.reserve(event_id, caller_id(request))
        return Response(
            {
                "reservation": ReservationSerializer(outcome.reservation).data,
                "spots_left": outcome.spots_left,
            }
        )

    def delete(self, request: Request, event_id: str) -> Response:
        outcome = get_services().reservations.cancel(event_id, caller_id(request))
        return Response({"spots_left": outcome.spots_left})


class UserEventsView(APIView):
    """Handler for GET /api/events/user/{user_id}"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, user_id: str) -> Response:
        mine = get_services().events.list_user_events(user_id, caller_id(request))
        return Response(
            {
                "posted": EventSerializer(mine.posted, many=True).data,
                "reserved": EventSerializer(mine.reserved, many=True).data,
            }
        )
