"""Admin registrations for listings."""

from __future__ import annotations

from django.contrib import admin

from .models import HostAvailability, Listing


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ("title", "host", "price_per_day", "currency", "is_active", "created_at")
    list_filter = ("is_active", "accepts_dogs", "accepts_cats", "has_yard")
    search_fields = ("title", "host__user__email", "host__city")
    readonly_fields = ("created_at", "updated_at")


@admin.register(HostAvailability)
class HostAvailabilityAdmin(admin.ModelAdmin):
    list_display = ("host", "date", "is_blocked", "reason")
    list_filter = ("is_blocked",)
    search_fields = ("host__user__email",)
