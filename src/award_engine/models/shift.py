"""Shift and break models.

Timestamps are naive local wall-clock datetimes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any

MICROSECONDS_PER_HOUR = Decimal(3_600_000_000)


def microseconds_between(start: datetime, end: datetime) -> int:
    """Exact microseconds from ``start`` to ``end`` (negative if reversed)."""
    return (end - start) // timedelta(microseconds=1)


@dataclass(frozen=True)
class Break:
    """A break within a shift. Unpaid breaks are excluded from worked time."""

    start: datetime
    end: datetime
    paid: bool = False

    @property
    def duration_microseconds(self) -> int:
        return microseconds_between(self.start, self.end)

    def overlap_microseconds(self, start: datetime, end: datetime) -> int:
        """Microseconds of this break falling inside ``[start, end)``."""
        lo = max(self.start, start)
        hi = min(self.end, end)
        if hi <= lo:
            return 0
        return microseconds_between(lo, hi)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "paid": self.paid,
        }


@dataclass(frozen=True)
class Shift:
    """A worked shift. ``end`` may fall on a later calendar date."""

    id: str
    date: date
    start: datetime
    end: datetime
    breaks: tuple[Break, ...] = field(default_factory=tuple)

    @property
    def raw_microseconds(self) -> int:
        return microseconds_between(self.start, self.end)

    @property
    def unpaid_break_microseconds(self) -> int:
        return sum(b.duration_microseconds for b in self.breaks if not b.paid)

    @property
    def worked_microseconds(self) -> int:
        return self.raw_microseconds - self.unpaid_break_microseconds

    def worked_hours(self) -> Decimal:
        """Break-adjusted duration in hours."""
        return Decimal(self.worked_microseconds) / MICROSECONDS_PER_HOUR

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "breaks": [b.to_dict() for b in self.breaks],
        }
