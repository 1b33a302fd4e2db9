"""Pytest configuration and shared fixtures."""

from datetime import timezone

import pytest
from rest_framework.test import APIClient

from factories import FIXED_NOW
from foodshare.services import EventService, ReservationService
from foodshare.stores import InMemoryStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def event_service(store: InMemoryStore) -> EventService:
    return EventService(store, store, tz=timezone.utc, clock=lambda: FIXED_NOW)


@pytest.fixture
def reservation_service(store: InMemoryStore) -> ReservationService:
    return ReservationService(store, store)
