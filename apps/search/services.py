"""Search Filter over listings.

Attribute filters run in the database. When a date range is given,
listings with a confirmed or ongoing booking overlapping it, and listings
whose host blocked any day in it, are removed before ratings, distance,
sorting and pagination are applied. ``total`` in the page info is the
size of the fully filtered set.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, time, timedelta
from datetime import timezone as dt_timezone
from typing import Any

from django.conf import settings  # type: ignore
from django.db.models import Avg, Count, FloatField, Q, QuerySet, Value  # type: ignore
from django.db.models.functions import Coalesce  # type: ignore

from apps.bookings.services import filter_available
from apps.favorites.models import Favorite
from apps.listings.models import HostAvailability, Listing
from shared.api.pagination import PageInfo, paginate

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

_FLAG_FIELDS = ("accepts_dogs", "accepts_cats", "has_yard", "allows_walks", "provides_medication")


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates in kilometres."""

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def with_ratings(qs: QuerySet) -> QuerySet:
    visible = Q(reviews__is_visible=True)
    return qs.annotate(
        average_rating=Coalesce(Avg("reviews__rating", filter=visible), Value(0.0), output_field=FloatField()),
        review_count=Count("reviews", filter=visible),
    )


def active_listings() -> QuerySet:
    return Listing.objects.filter(is_active=True).select_related("host__user")


def _apply_attribute_filters(qs: QuerySet, criteria: dict[str, Any]) -> QuerySet:
    if criteria.get("city"):
        qs = qs.filter(host__city__icontains=criteria["city"])
    if criteria.get("state"):
        qs = qs.filter(host__state__icontains=criteria["state"])
    if criteria.get("min_price") is not None:
        qs = qs.filter(price_per_day__gte=criteria["min_price"])
    if criteria.get("max_price") is not None:
        qs = qs.filter(price_per_day__lte=criteria["max_price"])
    for flag in _FLAG_FIELDS:
        if criteria.get(flag) is not None:
            qs = qs.filter(**{flag: criteria[flag]})
    if criteria.get("pet_size"):
        qs = qs.filter(**{Listing.size_field(criteria["pet_size"]): True})
    return qs


def _blocked_day_bounds(start: datetime, end: datetime) -> tuple[date, date]:
    """First and last blocked day whose UTC midnight falls within ``[start, end]``."""

    start_utc = start.astimezone(dt_timezone.utc)
    first = start_utc.date()
    if start_utc.time() != time.min:
        first += timedelta(days=1)
    return first, end.astimezone(dt_timezone.utc).date()


def _exclude_unavailable(qs: QuerySet, start: datetime, end: datetime) -> QuerySet:
    first, last = _blocked_day_bounds(start, end)
    blocked_hosts = HostAvailability.objects.filter(
        is_blocked=True,
        date__gte=first,
        date__lte=last,
    ).values("host_id")
    available = filter_available(qs.values_list("id", flat=True), start, end)
    return qs.filter(id__in=available).exclude(host_id__in=blocked_hosts)



def _sort_key(sort_by: str):  # type: ignore
    if sort_by == "price":
        return lambda listing: listing.price_per_day
    if sort_by == "rating":
        return lambda listing: listing.average_rating
    if sort_by == "distance":
        return lambda listing: listing.distance_km if listing.distance_km is not None else math.inf
    return lambda listing: (listing.created_at, listing.id)


def search_listings(criteria: dict[str, Any]) -> tuple[list[Listing], PageInfo]:
    """Filter, rank and paginate active listings according to ``criteria``."""

    qs = _apply_attribute_filters(active_listings(), criteria)

    start, end = criteria.get("start_date"), criteria.get("end_date")
    if start and end:
        qs = _exclude_unavailable(qs, start, end)

    qs = with_ratings(qs)
    if criteria.get("min_rating") is not None:
        qs = qs.filter(average_rating__gte=criteria["min_rating"])

    listings = list(qs.order_by("-created_at", "-id"))

    latitude, longitude = criteria.get("latitude"), criteria.get("longitude")
    for listing in listings:
        listing.distance_km = None
        host = listing.host
        if latitude is not None and host.latitude is not None and host.longitude is not None:
            listing.distance_km = haversine_km(latitude, longitude, host.latitude, host.longitude)
    if latitude is not None:
        # Listings without coordinates cannot satisfy a radius query.
        radius = criteria.get("radius", settings.PAWSTAY_SEARCH_DEFAULT_RADIUS_KM)
        listings = [item for item in listings if item.distance_km is not None and item.distance_km <= radius]

    sort_by = criteria.get("sort_by", "created_at")
    descending = criteria.get("sort_order", "desc") == "desc"
    if sort_by == "distance":
        # Missing distances stay last in either direction.
        known = [item for item in listings if item.distance_km is not None]
        unknown = [item for item in listings if item.distance_km is None]
        listings = sorted(known, key=_sort_key(sort_by), reverse=descending) + unknown
    else:
        listings = sorted(listings, key=_sort_key(sort_by), reverse=descending)

    page = criteria.get("page", 1)
    limit = criteria.get("limit", settings.PAWSTAY_PAGE_SIZE)
    items, info = paginate(listings, page, limit)
    logger.debug(f"Search matched {info.total} listings, returning page {page}")
    return items, info


def popular_listings(limit: int = 10) -> list[Listing]:
    """Active listings ranked by ``average_rating * ln(review_count + 1)``."""

    candidates = with_ratings(active_listings()).order_by("-review_count", "-average_rating", "-created_at")
    candidates = list(candidates[: settings.PAWSTAY_POPULAR_CANDIDATES])
    candidates.sort(key=lambda item: item.average_rating * math.log(item.review_count + 1), reverse=True)
    return candidates[:limit]


def suggested_listings(user, limit: int = 10) -> list[Listing]:  # type: ignore
    """Listings similar to the user's favorites, or popular ones when there are none."""

    favorites = list(
        Favorite.objects.filter(user=user).select_related("listing").order_by("-created_at")[:10]
    )
    if not favorites:
        return popular_listings(limit)

    saved = [favorite.listing for favorite in favorites]
    average_price = sum(item.price_per_day for item in saved) / len(saved)

    qs = active_listings().exclude(id__in=[item.id for item in saved]).filter(
        price_per_day__gte=math.floor(average_price * 0.7),
        price_per_day__lte=math.ceil(average_price * 1.3),
    )
    if sum(item.has_yard for item in saved) > len(saved) / 2:
        qs = qs.filter(has_yard=True)
    if any(item.accepts_dogs for item in saved):
        qs = qs.filter(accepts_dogs=True)
    if any(item.accepts_cats for item in saved):
        qs = qs.filter(accepts_cats=True)

    return list(with_ratings(qs).order_by("-created_at")[:limit])
