"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR, Host, Tutor


User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(min_length=2, max_length=100)
    password = serializers.CharField(min_length=8, write_only=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])
    role = serializers.ChoiceField(
        choices=[User.RoleChoices.TUTOR, User.RoleChoices.HOST],
        default=User.RoleChoices.TUTOR,
    )

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered.")
        return value

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        if not validated_data.get("phone"):
            validated_data.pop("phone", None)
        user = User.objects.create_user(password=password, **validated_data)

        # Role-specific profile is created together with the account
        if user.role == User.RoleChoices.TUTOR:
            Tutor.objects.create(user=user)
        elif user.role == User.RoleChoices.HOST:
            Host.objects.create(user=user)
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise serializers.ValidationError({"non_field_errors": ["Invalid credentials."]})

        if not user.is_active or not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"non_field_errors": ["Invalid credentials."]})

        attrs["user"] = user
        return attrs
