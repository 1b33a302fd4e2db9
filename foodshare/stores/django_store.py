"""Django ORM implementation of the stores.

Capacity changes are single conditional UPDATE statements, so the database
decides admission against the latest committed row. The per-event
transaction scope locks the event row with SELECT ... FOR UPDATE on
backends that support it.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from django.db import IntegrityError
from django.db import transaction as db_transaction
from django.db.models import F

from foodshare import cache as catalog_cache
from foodshare import models as orm
from foodshare.domain import (
    Capacity,
    Event,
    EventDetails,
    EventId,
    FoodItem,
    Reservation,
    ReservationId,
)
from foodshare.domain.errors import ConsistencyViolationError
from foodshare.stores.interfaces import EventStore, ReservationConflict, ReservationStore


def to_domain_event(row: orm.Event) -> Event:
    return Event(
        id=EventId(row.id),
        owner_id=row.owner_id,
        details=EventDetails(
            title=row.title,
            location=row.location,
            date=row.date,
            time=row.time,
            capacity=Capacity(row.capacity),
            food_items=tuple(
                FoodItem(item=food["item"], qty=food.get("qty"))
                for food in row.food_items
            ),
            dietary_options=tuple(row.dietary_options),
            image_urls=tuple(row.image_urls),
            pickup_instructions=row.pickup_instructions,
            description=row.description,
        ),
        reserved_count=row.reserved_count,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_domain_reservation(row: orm.Reservation) -> Reservation:
    return Reservation(
        id=ReservationId(row.id),
        event_id=EventId(row.event_id),
        user_id=row.user_id,
        status=row.status,
        created_at=row.created_at,
    )


def _detail_columns(details: EventDetails) -> dict:
    return {
        "title": details.title,
        "location": details.location,
        "date": details.date,
        "time": details.time,
        "capacity": details.capacity.value,
        "food_items": [food.to_dict() for food in details.food_items],
        "dietary_options": list(details.dietary_options),
        "image_urls": list(details.image_urls),
        "pickup_instructions": details.pickup_instructions,
        "description": details.description,
    }


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def list_events(self) -> list[Event]:
        return [to_domain_event(row) for row in orm.Event.objects.all()]

    def get_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=event_id.value).first()
        return to_domain_event(row) if row is not None else None

    def event_exists(self, event_id: EventId) -> bool:
        return orm.Event.objects.filter(pk=event_id.value).exists()

    def list_events_by_owner(self, owner_id: str) -> list[Event]:
        rows = orm.Event.objects.filter(owner_id=owner_id).order_by("date", "title")
        return [to_domain_event(row) for row in rows]

    def list_events_by_ids(self, event_ids: Iterable[EventId]) -> list[Event]:
        ids = [event_id.value for event_id in event_ids]
        rows = orm.Event.objects.filter(pk__in=ids).order_by("date", "title")
        return [to_domain_event(row) for row in rows]

    def add_event(self, owner_id: str, details: EventDetails) -> Event:
        row = orm.Event.objects.create(
            owner_id=owner_id, reserved_count=0, **_detail_columns(details)
        )
        return to_domain_event(row)

    def save_details(self, event_id: EventId, details: EventDetails) -> Event:
        row = orm.Event.objects.get(pk=event_id.value)
        columns = _detail_columns(details)
        for name, value in columns.items():
            setattr(row, name, value)
        try:
            with db_transaction.atomic():
                row.save(update_fields=[*columns, "updated_at"])
        except IntegrityError as exc:
            raise ConsistencyViolationError(
                f"saving event {event_id} violated a capacity constraint: {exc}"
            ) from exc
        row.refresh_from_db()
        return to_domain_event(row)

    def delete_event(self, event_id: EventId) -> list[str]:
        with db_transaction.atomic():
            user_ids = list(
                orm.Reservation.objects.filter(event_id=event_id.value)
                .order_by("created_at")
                .values_list("user_id", flat=True)
            )
            orm.Event.objects.filter(pk=event_id.value).delete()
        return user_ids

    def increment_reserved(self, event_id: EventId) -> bool:
        updated = orm.Event.objects.filter(
            pk=event_id.value, reserved_count__lt=F("capacity")
        ).update(reserved_count=F("reserved_count") + 1)
        if updated:
            catalog_cache.invalidate_event(str(event_id))
        return updated == 1

    def decrement_reserved(self, event_id: EventId) -> bool:
        updated = orm.Event.objects.filter(
            pk=event_id.value, reserved_count__gt=0
        ).update(reserved_count=F("reserved_count") - 1)
        if updated:
            catalog_cache.invalidate_event(str(event_id))
        return updated == 1

    @contextmanager
    def transaction(self, event_id: EventId) -> Iterator[None]:
        with db_transaction.atomic():
            # Row lock; a no-op on SQLite, which serializes writers anyway.
            list(
                orm.Event.objects.select_for_update()
                .filter(pk=event_id.value)
                .values_list("pk", flat=True)
            )
            yield


class DjangoReservationStore(ReservationStore):
    """Relational reservation store using Django ORM."""

    def get_reservation(self, event_id: EventId, user_id: str) -> Reservation | None:
        row = orm.Reservation.objects.filter(
            event_id=event_id.value, user_id=user_id
        ).first()
        return to_domain_reservation(row) if row is not None else None

    def add_reservation(self, event_id: EventId, user_id: str) -> Reservation:
        try:
            # Savepoint, so a conflict leaves the outer transaction usable.
            with db_transaction.atomic():
                row = orm.Reservation.objects.create(
                    event_id=event_id.value, user_id=user_id
                )
        except IntegrityError as exc:
            raise ReservationConflict(f"{event_id}/{user_id}") from exc
        return to_domain_reservation(row)

    def remove_reservation(self, event_id: EventId, user_id: str) -> bool:
        deleted, _ = orm.Reservation.objects.filter(
            event_id=event_id.value, user_id=user_id
        ).delete()
        return deleted > 0

    def list_for_event(self, event_id: EventId) -> list[Reservation]:
        rows = orm.Reservation.objects.filter(event_id=event_id.value)
        return [to_domain_reservation(row) for row in rows]

    def list_for_user(self, user_id: str) -> list[Reservation]:
        rows = orm.Reservation.objects.filter(user_id=user_id)
        return [to_domain_reservation(row) for row in rows]
