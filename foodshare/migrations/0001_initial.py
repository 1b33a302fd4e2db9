import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("owner_id", models.CharField(db_index=True, max_length=255)),
                ("title", models.CharField(max_length=255)),
                ("location", models.CharField(max_length=255)),
                ("date", models.DateField()),
                ("time", models.CharField(max_length=100)),
                ("capacity", models.PositiveIntegerField()),
                ("reserved_count", models.PositiveIntegerField(default=0)),
                ("food_items", models.JSONField(default=list)),
                ("dietary_options", models.JSONField(default=list)),
                ("image_urls", models.JSONField(default=list)),
                ("pickup_instructions", models.TextField(blank=True, default="")),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["-created_at"], name="foodshare_e_created_5d3f0a_idx"
                    ),
                    models.Index(fields=["date"], name="foodshare_e_date_7b1c2e_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("capacity__gte", 1)),
                        name="event_capacity_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("reserved_count__lte", models.F("capacity"))
                        ),
                        name="event_reserved_within_capacity",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Reservation",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("user_id", models.CharField(max_length=255)),
                ("status", models.CharField(default="reserved", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservations",
                        to="foodshare.event",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(
                        fields=["user_id"], name="foodshare_r_user_id_4e8a91_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "user_id"),
                        name="unique_reservation_per_user",
                    ),
                ],
            },
        ),
    ]
