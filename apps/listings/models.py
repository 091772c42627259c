"""Listing domain models for PawStay.

A listing is a bookable pet-stay offering owned by exactly one host. Only
active listings appear in search and accept bookings. Prices are stored as
integers in the smallest currency unit.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Listing(models.Model):
    """Pet-stay offering published by a host."""

    class PetSize(models.TextChoices):
        SMALL = "small", _("Small")
        MEDIUM = "medium", _("Medium")
        LARGE = "large", _("Large")

    host = models.ForeignKey(
        "users.Host",
        on_delete=models.CASCADE,
        related_name="listings",
    )
    title = models.CharField(max_length=200)
    description = models.TextField(max_length=2000)
    price_per_day = models.PositiveIntegerField(help_text=_("Smallest currency unit."))
    currency = models.CharField(max_length=3, default="BRL")
    max_pets = models.PositiveSmallIntegerField(default=1)
    accepts_dogs = models.BooleanField(default=True)
    accepts_cats = models.BooleanField(default=True)
    accepts_small_pets = models.BooleanField(default=True)
    accepts_medium_pets = models.BooleanField(default=True)
    accepts_large_pets = models.BooleanField(default=False)
    has_yard = models.BooleanField(default=False)
    allows_walks = models.BooleanField(default=True)
    provides_medication = models.BooleanField(default=False)
    photos = models.JSONField(default=list, blank=True)
    policies = models.TextField(blank=True, max_length=1000)
    cancellation_policy = models.TextField(blank=True, max_length=500)
    is_active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Listing")
        verbose_name_plural = _("Listings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_day__gt=0),
                name="listing_positive_price",
            ),
        ]
        indexes = [
            models.Index(fields=["is_active"], name="listing_active_idx"),
            models.Index(fields=["host", "is_active"], name="listing_host_active_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    @classmethod
    def size_field(cls, size: str) -> str:
        """Name of the boolean field telling whether pets of ``size`` are accepted."""
        return f"accepts_{cls.PetSize(size).value}_pets"


class HostAvailability(models.Model):
    """Calendar day a host has explicitly blocked for all of their listings."""

    host = models.ForeignKey(
        "users.Host",
        on_delete=models.CASCADE,
        related_name="availability",
    )
    date = models.DateField()
    is_blocked = models.BooleanField(default=True)
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Host availability")
        verbose_name_plural = _("Host availability")
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(fields=["host", "date"], name="host_availability_unique_day"),
        ]

    def __str__(self) -> str:
        state = "blocked" if self.is_blocked else "open"
        return f"Host {self.host_id}: {self.date} ({state})"
