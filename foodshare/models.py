"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for food-sharing events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_id = models.CharField(max_length=255, db_index=True)
    title = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    date = models.DateField()
    time = models.CharField(max_length=100)
    capacity = models.PositiveIntegerField()
    reserved_count = models.PositiveIntegerField(default=0)
    food_items = models.JSONField(default=list)
    dietary_options = models.JSONField(default=list)
    image_urls = models.JSONField(default=list)
    pickup_instructions = models.TextField(blank=True, default="")
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="foodshare_e_created_5d3f0a_idx"),
            models.Index(fields=["date"], name="foodshare_e_date_7b1c2e_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1),
                name="event_capacity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(reserved_count__lte=models.F("capacity")),
                name="event_reserved_within_capacity",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Reservation(models.Model):
    """Persistence model for a user's reservation on an event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        Event, on_delete=models.CASCADE, related_name="reservations"
    )
    user_id = models.CharField(max_length=255)
    status = models.CharField(max_length=20, default="reserved")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["user_id"], name="foodshare_r_user_id_4e8a91_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "user_id"],
                name="unique_reservation_per_user",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} - {self.event.title}"
