"""Query serializers for listing search."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.listings.models import Listing
from shared.api.pagination import PaginationQuerySerializer


def _optional_flag() -> serializers.BooleanField:
    # default=None keeps an absent flag from being read as False.
    return serializers.BooleanField(required=False, allow_null=True, default=None)


class SearchCriteriaSerializer(PaginationQuerySerializer):
    SORT_FIELDS = ("price", "distance", "rating", "created_at")

    city = serializers.CharField(required=False, max_length=100)
    state = serializers.CharField(required=False, max_length=100)
    latitude = serializers.FloatField(required=False, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, min_value=-180, max_value=180)
    radius = serializers.FloatField(required=False, min_value=0)

    min_price = serializers.IntegerField(required=False, min_value=1)
    max_price = serializers.IntegerField(required=False, min_value=1)

    accepts_dogs = _optional_flag()
    accepts_cats = _optional_flag()
    pet_size = serializers.ChoiceField(choices=Listing.PetSize.choices, required=False)
    has_yard = _optional_flag()
    allows_walks = _optional_flag()
    provides_medication = _optional_flag()

    start_date = serializers.DateTimeField(required=False)
    end_date = serializers.DateTimeField(required=False)

    min_rating = serializers.FloatField(required=False, min_value=1, max_value=5)

    sort_by = serializers.ChoiceField(choices=SORT_FIELDS, default="created_at")
    sort_order = serializers.ChoiceField(choices=["asc", "desc"], default="desc")

    def validate(self, attrs):  # type: ignore
        attrs = super().validate(attrs)

        if ("latitude" in attrs) != ("longitude" in attrs):
            raise serializers.ValidationError("latitude and longitude must be provided together.")
        attrs.setdefault("radius", settings.PAWSTAY_SEARCH_DEFAULT_RADIUS_KM)

        if ("start_date" in attrs) != ("end_date" in attrs):
            raise serializers.ValidationError("start_date and end_date must be provided together.")
        if "start_date" in attrs and attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError({"end_date": ["End date must be after start date."]})

        min_price, max_price = attrs.get("min_price"), attrs.get("max_price")
        if min_price is not None and max_price is not None and min_price > max_price:
            raise serializers.ValidationError({"min_price": ["min_price cannot exceed max_price."]})
        return attrs


class ShortlistQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=50, default=10)
