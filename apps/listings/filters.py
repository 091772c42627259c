"""FilterSet definitions for host calendar management."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import HostAvailability


class HostAvailabilityFilterSet(django_filters.FilterSet):
    start = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    end = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = HostAvailability
        fields = ["is_blocked"]
