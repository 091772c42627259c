"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.api.pagination import PaginationQuerySerializer

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Input for a new booking. Availability is checked by the service afterwards."""

    listing_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    total_price = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError({"end_date": ["End date must be after start date."]})
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[Booking.Status.CONFIRMED, Booking.Status.CANCELED])
    cancellation_reason = serializers.CharField(max_length=500, required=False, allow_blank=True)


class BookingListQuerySerializer(PaginationQuerySerializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    role = serializers.ChoiceField(choices=["tutor", "host"], required=False)


class BookingPartySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(source="user.name", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    avatar_url = serializers.CharField(source="user.avatar_url", read_only=True)


class BookingSerializer(serializers.ModelSerializer):
    """Booking with denormalized listing, host and tutor display fields."""

    listing_id = serializers.ReadOnlyField(source="listing.id")
    listing_title = serializers.ReadOnlyField(source="listing.title")
    host = BookingPartySerializer(source="listing.host", read_only=True)
    tutor = BookingPartySerializer(read_only=True)
    nights = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "listing_id",
            "listing_title",
            "host",
            "tutor",
            "start_date",
            "end_date",
            "nights",
            "total_price",
            "status",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_nights(self, obj: Booking) -> int:
        return obj.period.nights
