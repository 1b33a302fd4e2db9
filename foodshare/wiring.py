"""Construction of services backed by the Django stores."""

import threading
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from django.conf import settings

from foodshare import cache as catalog_cache
from foodshare.services import CapacityLedger, EventService, ReservationService
from foodshare.stores.django_store import DjangoEventStore, DjangoReservationStore


@dataclass(frozen=True)
class Services:
    events: EventService
    reservations: ReservationService


_SERVICES_LOCK = threading.Lock()
_SERVICES: Services | None = None


def build_services() -> Services:
    event_store = DjangoEventStore()
    reservation_store = DjangoReservationStore()
    tz = ZoneInfo(settings.FOODSHARE_TIME_ZONE)
    return Services(
        events=EventService(
            event_store,
            reservation_store,
            tz=tz,
            snapshot=catalog_cache.cached_snapshot(event_store.list_events),
        ),
        reservations=ReservationService(
            event_store,
            reservation_store,
            ledger=CapacityLedger(event_store),
        ),
    )


def get_services() -> Services:
    global _SERVICES
    with _SERVICES_LOCK:
        if _SERVICES is None:
            _SERVICES = build_services()
        return _SERVICES
