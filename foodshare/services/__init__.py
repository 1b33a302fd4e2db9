from foodshare.services.event_service import EventService
from foodshare.services.ledger import CapacityLedger
from foodshare.services.reservation_service import ReservationService

__all__ = ["EventService", "ReservationService", "CapacityLedger"]
