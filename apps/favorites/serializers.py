"""Serializers for favorites."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.listings.serializers import ListingSerializer

from .models import Favorite


class FavoriteSerializer(serializers.ModelSerializer):
    """Favorite with the full listing representation."""

    listing = ListingSerializer(read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'listing', 'created_at']
        read_only_fields = fields
