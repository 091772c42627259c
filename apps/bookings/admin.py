"""Admin registrations for the booking domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("id", "listing", "tutor", "start_date", "end_date", "status", "total_price", "created_at")
    list_filter = ("status",)
    search_fields = ("listing__title", "tutor__user__email")
    date_hierarchy = "start_date"
    readonly_fields = ("created_at", "updated_at")
