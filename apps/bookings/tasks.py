"""Celery tasks for the booking domain.

Bookings move ``confirmed -> ongoing`` once their start date is reached and
``ongoing -> completed`` once their end date has passed.
"""

from __future__ import annotations

import logging
from datetime import datetime

from celery import shared_task  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from .domain.lifecycle import SCHEDULED_TRANSITIONS
from .models import Booking

logger = logging.getLogger(__name__)


def _advance(source: str, due_filter: dict, now: datetime) -> int:
    target = SCHEDULED_TRANSITIONS[source]
    with transaction.atomic():
        updated = Booking.objects.filter(status=source, **due_filter).update(status=target, updated_at=now)
    if updated:
        logger.info(f"Advanced {updated} bookings {source} -> {target}")
    return updated


@shared_task(name="bookings.start_due_bookings")
def start_due_bookings(now: datetime | None = None) -> dict[str, int]:
    """Confirmed bookings whose start date has been reached become ongoing."""

    now = now or timezone.now()
    return {"started": _advance(Booking.Status.CONFIRMED, {"start_date__lte": now}, now)}


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings(now: datetime | None = None) -> dict[str, int]:
    """Ongoing bookings whose end date has passed become completed."""

    now = now or timezone.now()
    return {"completed": _advance(Booking.Status.ONGOING, {"end_date__lt": now}, now)}
