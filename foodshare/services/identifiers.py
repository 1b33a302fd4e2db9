from foodshare.domain import EventId
from foodshare.domain.errors import InvalidEventIdError, InvalidInputError

# Width of the owner_id and user_id columns.
MAX_USER_ID_LENGTH = 255


def parse_event_id(event_id: str | EventId) -> EventId:
    """Raises InvalidEventIdError if event_id is not a UUID."""
    if isinstance(event_id, EventId):
        return event_id
    try:
        return EventId.from_string(str(event_id))
    except ValueError:
        raise InvalidEventIdError() from None


def require_user_id(user_id: str | None) -> str:
    """Raises InvalidInputError for a missing or blank user identity."""
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidInputError("A user identity is required", field="user_id")
    user_id = user_id.strip()
    if len(user_id) > MAX_USER_ID_LENGTH:
        raise InvalidInputError("User identity is too long", field="user_id")
    return user_id
