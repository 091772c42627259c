"""Listing lifecycle operations with ownership and subscription checks."""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction  # type: ignore

from apps.bookings.exceptions import Forbidden, InvalidState, NotFound
from apps.bookings.models import Booking
from apps.users.models import Host

from .models import Listing

logger = logging.getLogger(__name__)


def get_host_profile(user) -> Host:  # type: ignore
    try:
        return Host.objects.select_related("subscription").get(user=user)
    except Host.DoesNotExist:
        raise Forbidden("Only hosts can manage listings.")


def get_listing(listing_id: int) -> Listing:
    try:
        return Listing.objects.select_related("host__user").get(pk=listing_id)
    except Listing.DoesNotExist:
        raise NotFound("Listing not found.")


def _ensure_owner(listing: Listing, user) -> None:  # type: ignore
    if listing.host.user_id != user.id:
        raise Forbidden("You can only manage your own listings.")


def create_listing(user, data: dict[str, Any]) -> Listing:  # type: ignore
    """Create a listing for the user's host profile. New listings start inactive."""

    host = get_host_profile(user)
    if not host.has_active_subscription:
        raise Forbidden("Active subscription required to create listings.")
    listing = Listing.objects.create(host=host, is_active=False, **data)
    logger.info(f"Listing {listing.id} created by host {host.id}")
    return listing


def update_listing(listing: Listing, user, data: dict[str, Any]) -> Listing:  # type: ignore
    _ensure_owner(listing, user)
    for field, value in data.items():
        setattr(listing, field, value)
    listing.save(update_fields=[*data.keys(), "updated_at"])
    return listing


def set_listing_active(listing: Listing, user, is_active: bool) -> Listing:  # type: ignore
    _ensure_owner(listing, user)
    if is_active and not listing.host.has_active_subscription:
        raise Forbidden("Active subscription required to activate listings.")
    listing.is_active = is_active
    listing.save(update_fields=["is_active", "updated_at"])
    logger.info(f"Listing {listing.id} {'activated' if is_active else 'deactivated'}")
    return listing


def delete_listing(listing: Listing, user) -> None:  # type: ignore
    """Delete a listing that has no pending, confirmed or ongoing bookings."""

    _ensure_owner(listing, user)
    with transaction.atomic():
        locked = Listing.objects.select_for_update().get(pk=listing.pk)
        active = Booking.objects.filter(
            listing=locked,
            status__in=Booking.NON_TERMINAL_STATUSES,
        ).count()
        if active:
            logger.warning(f"Refused to delete listing {listing.id}: {active} active bookings")
            raise InvalidState("Cannot delete listing with active bookings.")
        locked.delete()
    logger.info(f"Listing {listing.id} deleted")
