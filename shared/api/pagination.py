"""Offset pagination envelope shared by list and search endpoints.

Responses carry ``{"page", "limit", "total", "totalPages"}`` next to the
result list. Pages past the end yield an empty slice rather than a 404.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

from django.conf import settings  # type: ignore
from django.db.models import QuerySet  # type: ignore
from rest_framework import serializers  # type: ignore


class PaginationQuerySerializer(serializers.Serializer):
    """Validates ``page`` and ``limit`` query parameters."""

    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)

    def validate_limit(self, value: int) -> int:
        max_limit = settings.PAWSTAY_MAX_PAGE_SIZE
        if value > max_limit:
            raise serializers.ValidationError(f"limit must not exceed {max_limit}.")
        return value

    def validate(self, attrs):  # type: ignore
        attrs.setdefault("limit", settings.PAWSTAY_PAGE_SIZE)
        return attrs


@dataclass(frozen=True)
class PageInfo:
    page: int
    limit: int
    total: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def as_dict(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }


def paginate(items: Sequence[Any], page: int, limit: int) -> tuple[list[Any], PageInfo]:
    """Slice an already filtered and sorted sequence (list or queryset)."""

    total = items.count() if isinstance(items, QuerySet) else len(items)
    info = PageInfo(page=page, limit=limit, total=total)
    return list(items[info.offset:info.offset + limit]), info
