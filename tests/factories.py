"""Payload and client helpers shared by the tests."""

from datetime import date, datetime, timedelta, timezone

from rest_framework.test import APIClient

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def client_for(user_id: str) -> APIClient:
    """An API client whose requests carry the gateway identity header."""
    client = APIClient()
    client.credentials(HTTP_X_USER_ID=user_id)
    return client


def event_fields(**overrides) -> dict:
    """A valid create payload; the event happens 30 days from today."""
    fields = {
        "title": "Free Pizza",
        "location": "Student Center",
        "date": (date.today() + timedelta(days=30)).isoformat(),
        "time": "3:00 PM - 5:00 PM",
        "capacity": 20,
        "food_items": [{"item": "Pizza", "qty": 10}],
        "dietary_options": ["vegetarian"],
        "pickup_instructions": "Pick up at the lobby",
        "description": "Pizza for everyone!",
        "image_urls": ["https://example.com/pizza.jpg"],
    }
    fields.update(overrides)
    return fields
