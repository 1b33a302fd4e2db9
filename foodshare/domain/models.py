"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in foodshare/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from foodshare.domain.errors import ConsistencyViolationError
from foodshare.domain.value_objects import Capacity, EventId, FoodItem, ReservationId

RESERVED = "reserved"


@dataclass(frozen=True)
class EventDetails:
    """Descriptive and scheduling fields supplied by an organizer."""

    title: str
    location: str
    date: date
    time: str
    capacity: Capacity
    food_items: tuple[FoodItem, ...]
    dietary_options: tuple[str, ...]
    image_urls: tuple[str, ...]
    pickup_instructions: str = ""
    description: str = ""


@dataclass(frozen=True)
class Event:
    """Domain representation of a food-sharing Event."""

    id: EventId
    owner_id: str
    details: EventDetails
    reserved_count: int
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not 0 <= self.reserved_count <= self.capacity:
            raise ConsistencyViolationError(
                f"event {self.id} has reserved_count={self.reserved_count} "
                f"outside [0, {self.capacity}]"
            )

    @property
    def capacity(self) -> int:
        return self.details.capacity.value

    @property
    def spots_left(self) -> int:
        return max(self.capacity - self.reserved_count, 0)

    @property
    def is_full(self) -> bool:
        return self.spots_left == 0

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and user_id == self.owner_id


@dataclass(frozen=True)
class Reservation:
    """Domain representation of one user's claim on one event."""

    id: ReservationId
    event_id: EventId
    user_id: str
    created_at: datetime
    status: str = RESERVED


@dataclass(frozen=True)
class EventListing:
    """An event as seen by a particular viewer."""

    event: Event
    is_reserved: bool = False

    @property
    def spots_left(self) -> int:
        return self.event.spots_left


@dataclass(frozen=True)
class ReservationOutcome:
    """Result of a successful reserve or cancel."""

    event_id: EventId
    user_id: str
    spots_left: int
    reservation: Reservation | None = None


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of deleting an event.

    affected_user_ids lets the caller notify users whose reservations
    were removed by the cascade.
    """

    event_id: EventId
    affected_user_ids: tuple[str, ...] = ()

    @property
    def had_reservations(self) -> bool:
        return bool(self.affected_user_ids)


@dataclass(frozen=True)
class UserEvents:
    """Events a user has posted and events they have reserved."""

    posted: tuple[Event, ...] = field(default_factory=tuple)
    reserved: tuple[Event, ...] = field(default_factory=tuple)
