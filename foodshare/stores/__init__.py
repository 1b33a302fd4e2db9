from foodshare.stores.interfaces import EventStore, ReservationConflict, ReservationStore
from foodshare.stores.memory_store import InMemoryStore

__all__ = ["EventStore", "ReservationStore", "ReservationConflict", "InMemoryStore"]
