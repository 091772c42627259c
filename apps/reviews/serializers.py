"""Serializers for reviews.

Provide both read and write serializers for the ``Review`` model. The
author is inferred from the request in the view; the receiver and the
listing are derived from the reviewed booking.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.api.pagination import PaginationQuerySerializer

from .models import Review


class ReviewPartySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    avatar_url = serializers.CharField(read_only=True)


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer with author, receiver and listing summaries."""

    author = ReviewPartySerializer(read_only=True)
    receiver = ReviewPartySerializer(read_only=True)
    listing_id = serializers.ReadOnlyField(source='listing.id')
    listing_title = serializers.ReadOnlyField(source='listing.title')
    booking_id = serializers.ReadOnlyField(source='booking.id')

    class Meta:
        model = Review
        fields = [
            'id',
            'booking_id',
            'listing_id',
            'listing_title',
            'author',
            'receiver',
            'rating',
            'comment',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(min_length=10, max_length=1000, required=False)


class ReviewUpdateSerializer(serializers.ModelSerializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(min_length=10, max_length=1000, required=False)

    class Meta:
        model = Review
        fields = ['rating', 'comment']


class ReviewListQuerySerializer(PaginationQuerySerializer):
    user_id = serializers.IntegerField(min_value=1, required=False)
    listing_id = serializers.IntegerField(min_value=1, required=False)
    min_rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
