"""Object builders used by the test suites of the marketplace apps."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from django.utils import timezone  # type: ignore

from apps.listings.models import Listing
from apps.users.models import Host, Subscription, Tutor, User


def aware(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return timezone.make_aware(datetime(year, month, day, hour))


def make_tutor(email: str = "tutor@example.com", name: str = "Tina Tutor") -> Tutor:
    user = User.objects.create_user(
        email=email,
        password="TutorPass123",
        name=name,
        role=User.RoleChoices.TUTOR,
    )
    return Tutor.objects.create(user=user, city="Campinas", state="SP")


def make_host(
    email: str = "host@example.com",
    name: str = "Hugo Host",
    *,
    subscribed: bool = True,
    city: str = "São Paulo",
    state: str = "SP",
    latitude: float | None = None,
    longitude: float | None = None,
    has_yard: bool = False,
) -> Host:
    user = User.objects.create_user(
        email=email,
        password="HostPass123",
        name=name,
        role=User.RoleChoices.HOST,
    )
    host = Host.objects.create(
        user=user,
        city=city,
        state=state,
        latitude=latitude,
        longitude=longitude,
        has_yard=has_yard,
    )
    Subscription.objects.create(
        host=host,
        plan_name="basic",
        status=Subscription.Status.ACTIVE if subscribed else Subscription.Status.CANCELED,
    )
    return host


def make_listing(host: Host, **overrides: Any) -> Listing:
    fields: dict[str, Any] = {
        "title": "Cozy home with a big garden",
        "description": "Calm house with a fenced garden, daily walks and plenty of room for pets.",
        "price_per_day": 5000,
        "is_active": True,
    }
    fields.update(overrides)
    return Listing.objects.create(host=host, **fields)
