"""Serializers for parsing requests and transforming domain models to API responses."""

from rest_framework import serializers


class StrictCharField(serializers.CharField):
    """CharField that rejects numbers instead of coercing them to text."""

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class RegisterRequestSerializer(serializers.Serializer):
    """Body of POST /api/events/register."""

    eventId = StrictCharField(max_length=64)
    userId = StrictCharField(max_length=255)
    userName = StrictCharField(max_length=255)
    userEmail = StrictCharField(max_length=320)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField(source="id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()
    venue = serializers.CharField()
    location = serializers.CharField()
    category = serializers.CharField()
    price = serializers.CharField()
    discountPrice = serializers.CharField(source="discount_price", allow_null=True)
    capacity = serializers.SerializerMethodField()
    registeredCount = serializers.IntegerField(source="registered_count")
    isFull = serializers.BooleanField(source="is_full")
    organizerName = serializers.CharField(source="organizer_name")
    imageUrl = serializers.CharField(source="image_url", allow_null=True)

    def get_capacity(self, event) -> int | None:
        return event.capacity.value if event.capacity is not None else None


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    ticketId = serializers.CharField(source="id.value")
    eventId = serializers.CharField(source="event_id.value")
    userId = serializers.CharField(source="user_id")
    userName = serializers.CharField(source="user_name")
    userEmail = serializers.CharField(source="user_email")
    registeredAt = serializers.DateTimeField(source="registered_at")
