"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: a booking period (start to end) with the marketplace's
  inclusive overlap rule
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DateRange:
    """
    Date range value object

    Represents a stay from ``start`` to ``end``. Construction requires
    ``start < end``.

    Overlap uses inclusive bounds on both ends: a stay ending on day D and
    another starting on day D are considered overlapping, so no same-day
    turnover is possible on a listing.
    """

    start: date | datetime
    end: date | datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start ({self.start}) must be before end ({self.end})")

    def overlaps_with(self, other: DateRange) -> bool:
        """
        Check if this range overlaps with another

        Examples:
            - DateRange(1, 5) overlaps with DateRange(3, 7) -> True
            - DateRange(1, 5) overlaps with DateRange(5, 10) -> True (shared boundary)
            - DateRange(1, 5) overlaps with DateRange(6, 10) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return self.start <= other.end and self.end >= other.start

    @property
    def nights(self) -> int:
        """Number of calendar days between start and end."""
        start = self.start.date() if isinstance(self.start, datetime) else self.start
        end = self.end.date() if isinstance(self.end, datetime) else self.end
        return (end - start).days

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"
