"""Serializers for listings and host-blocked dates."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import HostAvailability, Listing


class ListingHostSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(source="user.name", read_only=True)
    avatar_url = serializers.CharField(source="user.avatar_url", read_only=True)
    city = serializers.CharField(read_only=True)
    state = serializers.CharField(read_only=True)
    latitude = serializers.FloatField(read_only=True)
    longitude = serializers.FloatField(read_only=True)


class ListingSerializer(serializers.ModelSerializer):
    """Read representation; rating and distance come from search annotations."""

    host = ListingHostSerializer(read_only=True)
    average_rating = serializers.SerializerMethodField()
    review_count = serializers.SerializerMethodField()
    distance_km = serializers.SerializerMethodField()

    class Meta:
        model = Listing
        fields = [
            "id",
            "host",
            "title",
            "description",
            "price_per_day",
            "currency",
            "max_pets",
            "accepts_dogs",
            "accepts_cats",
            "accepts_small_pets",
            "accepts_medium_pets",
            "accepts_large_pets",
            "has_yard",
            "allows_walks",
            "provides_medication",
            "photos",
            "policies",
            "cancellation_policy",
            "is_active",
            "average_rating",
            "review_count",
            "distance_km",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_average_rating(self, obj: Listing) -> float:
        return round(float(getattr(obj, "average_rating", None) or 0), 2)

    def get_review_count(self, obj: Listing) -> int:
        return int(getattr(obj, "review_count", None) or 0)

    def get_distance_km(self, obj: Listing) -> float | None:
        distance = getattr(obj, "distance_km", None)
        return round(distance, 2) if distance is not None else None


class ListingWriteSerializer(serializers.ModelSerializer):
    title = serializers.CharField(min_length=10, max_length=200)
    description = serializers.CharField(min_length=50, max_length=2000)
    price_per_day = serializers.IntegerField(min_value=1)
    max_pets = serializers.IntegerField(min_value=1, default=1)
    photos = serializers.ListField(
        child=serializers.URLField(),
        max_length=10,
        required=False,
    )

    class Meta:
        model = Listing
        fields = [
            "title",
            "description",
            "price_per_day",
            "currency",
            "max_pets",
            "accepts_dogs",
            "accepts_cats",
            "accepts_small_pets",
            "accepts_medium_pets",
            "accepts_large_pets",
            "has_yard",
            "allows_walks",
            "provides_medication",
            "photos",
            "policies",
            "cancellation_policy",
        ]
        extra_kwargs = {
            "policies": {"required": False, "allow_blank": True},
            "cancellation_policy": {"required": False, "allow_blank": True},
        }


class ToggleActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()


class HostAvailabilitySerializer(serializers.ModelSerializer):
    class Meta:
        model = HostAvailability
        fields = ["id", "date", "is_blocked", "reason", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate(self, attrs):  # type: ignore
        host = self.context["host"]
        day = attrs.get("date")
        qs = HostAvailability.objects.filter(host=host, date=day)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if day is not None and qs.exists():
            raise serializers.ValidationError({"date": ["This date is already registered."]})
        return attrs
