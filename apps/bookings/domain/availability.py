"""
Availability Engine (pure form)

Decides conflicts over plain intervals. ``apps.bookings.services`` loads
the blocking bookings of the listings involved and asks these functions,
so booking creation, confirmation and search share one rule.

Rules:
- Only bookings in a blocking status (confirmed, ongoing) occupy a listing.
- Overlap is inclusive on both ends, see ``DateRange.overlaps_with``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable

from shared.domain.value_objects import DateRange

BLOCKING_STATUSES = frozenset({"confirmed", "ongoing"})


@dataclass(frozen=True)
class Occupancy:
    """A booking interval as seen by the engine."""

    listing_id: Hashable
    dates: DateRange
    status: str
    booking_id: Hashable | None = None

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_STATUSES


def has_conflict(
    occupancies: Iterable[Occupancy],
    listing_id: Hashable,
    dates: DateRange,
    excluding_booking_id: Hashable | None = None,
) -> bool:
    """Return True if any blocking occupancy of ``listing_id`` overlaps ``dates``."""

    for occupancy in occupancies:
        if occupancy.listing_id != listing_id or not occupancy.is_blocking:
            continue
        if excluding_booking_id is not None and occupancy.booking_id == excluding_booking_id:
            continue
        if occupancy.dates.overlaps_with(dates):
            return True
    return False


def conflicting_listing_ids(occupancies: Iterable[Occupancy], dates: DateRange) -> set:
    """Single pass over occupancies collecting every listing busy during ``dates``."""

    return {
        occupancy.listing_id
        for occupancy in occupancies
        if occupancy.is_blocking and occupancy.dates.overlaps_with(dates)
    }


def filter_available(
    occupancies: Iterable[Occupancy],
    listing_ids: Iterable[Hashable],
    dates: DateRange,
) -> set:
    """Complement of :func:`conflicting_listing_ids` within ``listing_ids``."""

    return set(listing_ids) - conflicting_listing_ids(occupancies, dates)
