"""URL routing for listings and host calendar."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import HostAvailabilityViewSet, ListingViewSet

router = DefaultRouter()
router.register(r"blocked-dates", HostAvailabilityViewSet, basename="blocked-date")
router.register(r"", ListingViewSet, basename="listing")

urlpatterns = [
    path("", include(router.urls)),
]
