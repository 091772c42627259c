"""URL declarations for the users app."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import HostProfileView, MeView, TutorProfileView

urlpatterns = [
    path("me/", MeView.as_view(), name="user-me"),
    path("me/tutor/", TutorProfileView.as_view(), name="user-tutor-profile"),
    path("me/host/", HostProfileView.as_view(), name="user-host-profile"),
]
