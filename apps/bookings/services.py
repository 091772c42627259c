"""Booking services: availability queries and booking lifecycle.

Availability questions load the blocking bookings of the listings involved
and hand them to the interval rules in ``domain.availability``.

Writers that can change what occupies a listing's calendar (creating a
booking, confirming one) run inside ``transaction.atomic()`` and first lock
the listing row, so the conflict check and the write cannot interleave with
another writer on the same listing.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from django.db import transaction  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.listings.models import Listing
from apps.users.models import Host, Tutor
from shared.domain.value_objects import DateRange

from .domain import availability
from .domain.availability import Occupancy
from .domain.lifecycle import (
    TransitionDenied,
    TransitionInvalid,
    authorize_delete,
    authorize_transition,
)
from .domain.roles import ActorRole
from .exceptions import Conflict, Forbidden, InvalidState, InvalidTransition, NotFound
from .models import Booking

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


# ---------------------------------------------------------------------------
# Availability engine
# ---------------------------------------------------------------------------


def _occupancies(
    listing_ids: Iterable[int],
    since: datetime,
    excluding_booking_id: int | None = None,
) -> list[Occupancy]:
    """Blocking bookings of the given listings still running at ``since``."""

    qs = Booking.objects.filter(
        listing_id__in=listing_ids,
        status__in=Booking.BLOCKING_STATUSES,
        end_date__gte=since,
    )
    if excluding_booking_id is not None:
        qs = qs.exclude(pk=excluding_booking_id)
    return [
        Occupancy(
            listing_id=row["listing_id"],
            dates=DateRange(row["start_date"], row["end_date"]),
            status=row["status"],
            booking_id=row["id"],
        )
        for row in qs.values("id", "listing_id", "start_date", "end_date", "status")
    ]


def has_conflict(
    listing_id: int,
    start: datetime,
    end: datetime,
    excluding_booking_id: int | None = None,
) -> bool:
    """True if a confirmed or ongoing booking of the listing overlaps ``[start, end]``."""

    occupancies = _occupancies([listing_id], start, excluding_booking_id)
    return availability.has_conflict(occupancies, listing_id, DateRange(start, end))


def filter_available(listing_ids: Iterable[int], start: datetime, end: datetime) -> set[int]:
    """Subset of ``listing_ids`` with no conflicting booking, computed in one query."""

    candidates = set(listing_ids)
    if not candidates:
        return set()
    return availability.filter_available(_occupancies(candidates, start), candidates, DateRange(start, end))


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def _booking_queryset() -> QuerySet:
    return Booking.objects.select_related("listing__host__user", "tutor__user")


def _resolve_role(booking: Booking, user) -> ActorRole:  # type: ignore
    return ActorRole.resolve(
        getattr(user, "id", None),
        booking.tutor.user_id,
        booking.listing.host.user_id,
    )


def _lock_listing(listing_id: int) -> Listing:
    return _lock_queryset_if_possible(Listing.objects.filter(pk=listing_id)).get()


def get_booking(booking_id: int, user) -> Booking:  # type: ignore
    try:
        booking = _booking_queryset().get(pk=booking_id)
    except Booking.DoesNotExist:
        raise NotFound("Booking not found.")
    if not _resolve_role(booking, user).is_party:
        raise Forbidden("You do not have permission to view this booking.")
    return booking


def create_booking(
    user,  # type: ignore
    listing_id: int,
    start: datetime,
    end: datetime,
    total_price: int,
    notes: str = "",
) -> Booking:
    """Create a pending booking once the listing is confirmed free for the range."""

    try:
        tutor = Tutor.objects.get(user=user)
    except Tutor.DoesNotExist:
        raise NotFound("You need to complete your tutor profile first.")

    with transaction.atomic():
        try:
            listing = _lock_listing(listing_id)
        except Listing.DoesNotExist:
            raise NotFound("Listing not found.")
        if not listing.is_active:
            raise InvalidState("This listing is not available for bookings.")
        if has_conflict(listing.id, start, end):
            logger.warning(
                f"Booking rejected for listing {listing.id}: {start.isoformat()} - {end.isoformat()} is taken"
            )
            raise Conflict()

        booking = Booking.objects.create(
            tutor=tutor,
            listing=listing,
            start_date=start,
            end_date=end,
            total_price=total_price,
            notes=notes or "",
            status=Booking.Status.PENDING,
        )

    logger.info(f"Booking {booking.id} created by tutor {tutor.id} for listing {listing.id}")
    return _booking_queryset().get(pk=booking.pk)


def update_status(
    booking_id: int,
    user,  # type: ignore
    target: str,
    cancellation_reason: str | None = None,
) -> Booking:
    """Confirm (host only, from pending) or cancel (either party, from pending/confirmed)."""

    with transaction.atomic():
        try:
            booking = _lock_queryset_if_possible(_booking_queryset().filter(pk=booking_id)).get()
        except Booking.DoesNotExist:
            raise NotFound("Booking not found.")

        role = _resolve_role(booking, user)
        try:
            authorize_transition(booking.status, target, role)
        except TransitionDenied as exc:
            raise Forbidden(str(exc))
        except TransitionInvalid as exc:
            raise InvalidTransition(str(exc))

        if target == Booking.Status.CONFIRMED:
            _lock_listing(booking.listing_id)
            if has_conflict(booking.listing_id, booking.start_date, booking.end_date, excluding_booking_id=booking.id):
                logger.warning(f"Confirmation of booking {booking.id} rejected: dates already taken")
                raise Conflict()

        previous = booking.status
        booking.status = target
        update_fields = ["status", "updated_at"]
        if cancellation_reason:
            booking.notes = cancellation_reason
            update_fields.append("notes")
        booking.save(update_fields=update_fields)

    logger.info(f"Booking {booking.id} moved {previous} -> {target} by user {user.id}")
    return booking


def delete_booking(booking_id: int, user) -> None:  # type: ignore
    try:
        booking = _booking_queryset().get(pk=booking_id)
    except Booking.DoesNotExist:
        raise NotFound("Booking not found.")

    try:
        authorize_delete(booking.status, _resolve_role(booking, user))
    except TransitionDenied as exc:
        raise Forbidden(str(exc))
    except TransitionInvalid as exc:
        raise InvalidState(str(exc))

    booking.delete()
    logger.info(f"Booking {booking_id} deleted by user {user.id}")


def list_bookings(user, status: str | None = None, role: str | None = None) -> QuerySet:  # type: ignore
    """Bookings where the user is the tutor or the listing's host, newest first.

    ``role`` restricts to one side. A user without the requested profile
    gets an empty queryset.
    """

    tutor_id = Tutor.objects.filter(user=user).values_list("id", flat=True).first()
    host_id = Host.objects.filter(user=user).values_list("id", flat=True).first()

    scope = Q()
    if role in (None, "tutor") and tutor_id is not None:
        scope |= Q(tutor_id=tutor_id)
    if role in (None, "host") and host_id is not None:
        scope |= Q(listing__host_id=host_id)
    if not scope:
        return Booking.objects.none()

    qs = _booking_queryset().filter(scope)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at", "-id")
