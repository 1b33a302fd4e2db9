"""Validation of organizer payloads at the catalog boundary.

Payloads arrive as loosely-typed mappings (decoded JSON). They are turned
into EventDetails here, or rejected with InvalidInputError.
"""

from collections.abc import Mapping
from dataclasses import replace
from datetime import date
from typing import Any

from foodshare.domain.errors import InvalidInputError
from foodshare.domain.models import EventDetails
from foodshare.domain.value_objects import Capacity, FoodItem

REQUIRED_FIELDS = (
    "title",
    "location",
    "date",
    "time",
    "capacity",
    "food_items",
    "dietary_options",
    "image_urls",
)
OPTIONAL_FIELDS = ("pickup_instructions", "description")

# Column widths in the events table.
MAX_LENGTHS = {"title": 255, "location": 255, "time": 100}

# Owned by the ledger or fixed at creation.
PROTECTED_FIELDS = frozenset(
    {"id", "owner_id", "user_id", "reserved_count", "attendees_count", "created_at"}
)


def build_details(fields: Mapping[str, Any]) -> EventDetails:
    """Validate a create payload.

    Raises:
        InvalidInputError: On missing, malformed or protected fields.
    """
    _reject_unknown(fields)
    missing = [name for name in REQUIRED_FIELDS if _is_blank(fields.get(name))]
    if missing:
        raise InvalidInputError(
            f"Missing required fields: {', '.join(missing)}", field=missing[0]
        )
    return EventDetails(
        title=_text(fields, "title"),
        location=_text(fields, "location"),
        date=_date(fields["date"]),
        time=_text(fields, "time"),
        capacity=_capacity(fields["capacity"]),
        food_items=_food_items(fields["food_items"]),
        dietary_options=_string_list(fields, "dietary_options"),
        image_urls=_string_list(fields, "image_urls"),
        pickup_instructions=_optional_text(fields, "pickup_instructions"),
        description=_optional_text(fields, "description"),
    )


def apply_changes(details: EventDetails, fields: Mapping[str, Any]) -> EventDetails:
    """Validate a partial update payload and merge it into details.

    Raises:
        InvalidInputError: On malformed or protected fields.
    """
    _reject_unknown(fields)
    if not fields:
        raise InvalidInputError("No fields to update")

    parsers = {
        "title": lambda: _text(fields, "title"),
        "location": lambda: _text(fields, "location"),
        "date": lambda: _date(fields["date"]),
        "time": lambda: _text(fields, "time"),
        "capacity": lambda: _capacity(fields["capacity"]),
        "food_items": lambda: _food_items(fields["food_items"]),
        "dietary_options": lambda: _string_list(fields, "dietary_options"),
        "image_urls": lambda: _string_list(fields, "image_urls"),
        "pickup_instructions": lambda: _optional_text(fields, "pickup_instructions"),
        "description": lambda: _optional_text(fields, "description"),
    }
    changes = {name: parsers[name]() for name in fields}
    return replace(details, **changes)


def _reject_unknown(fields: Mapping[str, Any]) -> None:
    protected = sorted(PROTECTED_FIELDS.intersection(fields))
    if protected:
        raise InvalidInputError(
            f"Field cannot be set directly: {protected[0]}", field=protected[0]
        )
    unknown = sorted(set(fields) - set(REQUIRED_FIELDS) - set(OPTIONAL_FIELDS))
    if unknown:
        raise InvalidInputError(f"Unknown field: {unknown[0]}", field=unknown[0])


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _text(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{name} must be a non-empty string", field=name)
    value = value.strip()
    limit = MAX_LENGTHS.get(name)
    if limit is not None and len(value) > limit:
        raise InvalidInputError(
            f"{name} must be at most {limit} characters", field=name
        )
    return value


def _optional_text(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInputError(f"{name} must be a string", field=name)
    return value.strip()


def _date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidInputError("date must be formatted YYYY-MM-DD", field="date")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise InvalidInputError(
            "date must be formatted YYYY-MM-DD", field="date"
        ) from None


def _capacity(value: Any) -> Capacity:
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    try:
        return Capacity(value)
    except ValueError as exc:
        raise InvalidInputError(str(exc), field="capacity") from None


def _food_items(value: Any) -> tuple[FoodItem, ...]:
    if not isinstance(value, (list, tuple)) or not value:
        raise InvalidInputError(
            "food_items must be a non-empty list", field="food_items"
        )
    items = []
    for raw in value:
        if isinstance(raw, str):
            raw = {"item": raw}
        if not isinstance(raw, Mapping) or not isinstance(raw.get("item"), str):
            raise InvalidInputError(
                "Each food item needs an item name", field="food_items"
            )
        qty = raw.get("qty")
        if qty is not None and (isinstance(qty, bool) or not isinstance(qty, int)):
            raise InvalidInputError(
                "Food item qty must be an integer", field="food_items"
            )
        try:
            items.append(FoodItem(item=raw["item"].strip(), qty=qty))
        except ValueError as exc:
            raise InvalidInputError(str(exc), field="food_items") from None
    return tuple(items)


def _string_list(fields: Mapping[str, Any], name: str) -> tuple[str, ...]:
    value = fields.get(name)
    if not isinstance(value, (list, tuple)) or not value:
        raise InvalidInputError(f"{name} must be a non-empty list", field=name)
    if not all(isinstance(entry, str) and entry.strip() for entry in value):
        raise InvalidInputError(f"{name} must contain non-empty strings", field=name)
    return tuple(entry.strip() for entry in value)
