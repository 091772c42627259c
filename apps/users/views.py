"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import generics, permissions  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore

from .models import Host, Tutor
from .serializers import HostSerializer, TutorSerializer, UserSerializer

User = get_user_model()


class MeView(generics.RetrieveUpdateAPIView):
    """Profile of the authenticated user."""

    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):  # type: ignore
        return self.request.user


class TutorProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = TutorSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):  # type: ignore
        try:
            return Tutor.objects.select_related("user").get(user=self.request.user)
        except Tutor.DoesNotExist:
            raise NotFound("User is not a tutor.")


class HostProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = HostSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):  # type: ignore
        try:
            return Host.objects.select_related("user", "subscription").get(user=self.request.user)
        except Host.DoesNotExist:
            raise NotFound("User is not a host.")
