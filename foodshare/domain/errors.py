"""Domain error codes for the foodshare module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    EVENT_FULL = "EVENT_FULL"
    ALREADY_RESERVED = "ALREADY_RESERVED"
    NOT_RESERVED = "NOT_RESERVED"
    CONSISTENCY_VIOLATION = "CONSISTENCY_VIOLATION"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    """Raised when a create/update payload is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(code=ErrorCode.INVALID_INPUT, message=message)
        self.field = field


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class ForbiddenError(DomainError):
    """Raised when the caller does not own the resource."""

    def __init__(self, message: str = "Not your event") -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)


class EventFullError(DomainError):
    """Raised when an event has no spots left."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_FULL, message="Event is full")
        self.event_id = event_id


class AlreadyReservedError(DomainError):
    """Raised when the user already holds a reservation for the event."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_RESERVED,
            message="Already reserved this event",
        )
        self.event_id = event_id
        self.user_id = user_id


class NotReservedError(DomainError):
    """Raised when cancelling a reservation that does not exist."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_RESERVED,
            message="No reservation for this event",
        )
        self.event_id = event_id
        self.user_id = user_id


class ConsistencyViolationError(DomainError):
    """Raised when reserved_count would leave [0, capacity].

    This is never a user mistake: it means an atomicity guarantee broke.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.CONSISTENCY_VIOLATION,
            message="Reservation bookkeeping is inconsistent",
        )
        self.detail = detail
