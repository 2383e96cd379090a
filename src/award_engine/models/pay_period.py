"""Pay period model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class DayType(str, Enum):
    """Calendar day classification for penalty and overtime rules."""

    WEEKDAY = "weekday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def for_date(cls, day: date) -> DayType:
        weekday = day.weekday()
        if weekday == 5:
            return cls.SATURDAY
        if weekday == 6:
            return cls.SUNDAY
        return cls.WEEKDAY

    @property
    def is_weekend(self) -> bool:
        return self is not DayType.WEEKDAY

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class PublicHoliday:
    """A declared public holiday within a pay period."""

    date: date
    name: str
    region: str = "national"

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "name": self.name, "region": self.region}


@dataclass(frozen=True)
class PayPeriod:
    """Inclusive date range being paid."""

    start_date: date
    end_date: date
    public_holidays: tuple[PublicHoliday, ...] = field(default_factory=tuple)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def holiday_on(self, day: date) -> PublicHoliday | None:
        for holiday in self.public_holidays:
            if holiday.date == day:
                return holiday
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "public_holidays": [h.to_dict() for h in self.public_holidays],
        }
