"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID, uuid4

# Largest value the capacity column can hold.
MAX_CAPACITY = 2_147_483_647


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ReservationId:
    """Unique identifier for a Reservation."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Positive integer representing the servings an event offers."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Capacity must be an integer")
        if self.value < 1:
            raise ValueError("Capacity must be positive")
        if self.value > MAX_CAPACITY:
            raise ValueError(f"Capacity cannot exceed {MAX_CAPACITY}")


@dataclass(frozen=True)
class FoodItem:
    """One food item offered at an event."""

    item: str
    qty: int | None = None

    def __post_init__(self) -> None:
        if not self.item.strip():
            raise ValueError("Food item name cannot be blank")
        if self.qty is not None and self.qty < 0:
            raise ValueError("Food item quantity cannot be negative")

    def to_dict(self) -> dict:
        return {"item": self.item, "qty": self.qty}
