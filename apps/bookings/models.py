"""Booking domain models for PawStay."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange


class Booking(models.Model):
    """Reservation of one listing by one tutor for a date range."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        ONGOING = "ongoing", _("Ongoing")
        COMPLETED = "completed", _("Completed")
        CANCELED = "canceled", _("Canceled")

    # Statuses that occupy the listing's calendar.
    BLOCKING_STATUSES = (Status.CONFIRMED, Status.ONGOING)
    NON_TERMINAL_STATUSES = (Status.PENDING, Status.CONFIRMED, Status.ONGOING)

    tutor = models.ForeignKey(
        "users.Tutor",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    total_price = models.PositiveIntegerField(help_text=_("Smallest currency unit."))
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    notes = models.TextField(blank=True, max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(total_price__gt=0),
                name="booking_positive_price",
            ),
        ]
        indexes = [
            models.Index(fields=["listing", "status", "start_date", "end_date"], name="booking_listing_window_idx"),
            models.Index(fields=["tutor", "status"], name="booking_tutor_status_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for listing {self.listing_id} ({self.status})"

    @property
    def period(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)
