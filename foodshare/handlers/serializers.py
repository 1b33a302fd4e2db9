"""Serializers for transforming domain models to API responses and
parsing listing query parameters."""

from rest_framework import serializers

from foodshare.domain import EventQuery


class FoodItemSerializer(serializers.Serializer):
    """Serializer for FoodItem value objects."""

    item = serializers.CharField()
    qty = serializers.IntegerField(allow_null=True)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    owner_id = serializers.CharField()
    title = serializers.CharField(source="details.title")
    location = serializers.CharField(source="details.location")
    date = serializers.DateField(source="details.date")
    time = serializers.CharField(source="details.time")
    capacity = serializers.IntegerField()
    reserved_count = serializers.IntegerField()
    spots_left = serializers.IntegerField()
    food_items = FoodItemSerializer(source="details.food_items", many=True)
    dietary_options = serializers.ListField(
        source="details.dietary_options", child=serializers.CharField()
    )
    image_urls = serializers.ListField(
        source="details.image_urls", child=serializers.CharField()
    )
    pickup_instructions = serializers.CharField(source="details.pickup_instructions")
    description = serializers.CharField(source="details.description")
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class EventListingSerializer(serializers.Serializer):
    """Serializer for EventListing: the event plus the viewer's status."""

    def to_representation(self, instance):
        data = EventSerializer(instance.event).data
        data["is_reserved"] = instance.is_reserved
        return data


class ReservationSerializer(serializers.Serializer):
    """Serializer for Reservation domain model."""

    id = serializers.UUIDField(source="id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    user_id = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()


class EventQuerySerializer(serializers.Serializer):
    """Query parameters accepted by GET /api/events."""

    search = serializers.CharField(required=False, allow_blank=True, default="")
    date = serializers.DateField(required=False, allow_null=True, default=None)
    dietary = serializers.CharField(required=False, allow_blank=True, default="")
    location = serializers.CharField(required=False, allow_blank=True, default="")
    include_past = serializers.BooleanField(required=False, default=False)

    def to_query(self) -> EventQuery:
        return EventQuery(**self.validated_data)
