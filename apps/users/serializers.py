"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Host, Subscription, Tutor

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Full user representation."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "role",
            "bio",
            "avatar_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "created_at",
            "updated_at",
        ]


class UserShortSerializer(serializers.ModelSerializer):
    """Display fields embedded in booking and listing payloads."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "avatar_url"]


class TutorSerializer(serializers.ModelSerializer):
    user = UserShortSerializer(read_only=True)

    class Meta:
        model = Tutor
        fields = [
            "id",
            "user",
            "address",
            "city",
            "state",
            "zip_code",
            "emergency_contact",
            "emergency_phone",
        ]
        read_only_fields = ["id", "user"]


class SubscriptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subscription
        fields = ["plan_name", "status", "current_period_end"]
        read_only_fields = fields


class HostSerializer(serializers.ModelSerializer):
    user = UserShortSerializer(read_only=True)
    subscription = SubscriptionSerializer(read_only=True)

    class Meta:
        model = Host
        fields = [
            "id",
            "user",
            "address",
            "city",
            "state",
            "zip_code",
            "latitude",
            "longitude",
            "property_type",
            "has_yard",
            "subscription",
        ]
        read_only_fields = ["id", "user", "subscription"]

    def validate(self, attrs):  # type: ignore
        latitude = attrs.get("latitude", getattr(self.instance, "latitude", None))
        longitude = attrs.get("longitude", getattr(self.instance, "longitude", None))
        if (latitude is None) != (longitude is None):
            raise serializers.ValidationError("Latitude and longitude must be provided together.")
        return attrs
