"""Immutable award configuration tables.

Rules:
    1. Built once by the loader (or directly in tests) and never mutated.
    2. Shared read-only between any number of concurrent calculations.
    3. Rate schedules are sorted oldest first; lookups take the most recent
       schedule effective on or before the requested date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from award_engine.errors import CalculationError, ClassificationNotFound, RateNotFound
from award_engine.models.employee import EmploymentType
from award_engine.models.pay_period import DayType


@dataclass(frozen=True)
class AwardMetadata:
    """Identifying information about the award."""

    code: str
    name: str
    version: str
    source_url: str


@dataclass(frozen=True)
class Classification:
    """An employee classification under the award."""

    code: str
    name: str
    description: str
    clause: str


@dataclass(frozen=True)
class ClassificationRate:
    """Minimum rates for a classification."""

    weekly: Decimal
    hourly: Decimal


@dataclass(frozen=True)
class AllowanceRate:
    """Per-shift allowance rate with a weekly cap."""

    per_shift: Decimal
    weekly_cap: Decimal


@dataclass(frozen=True)
class RateSchedule:
    """Rates effective from a given date."""

    effective_date: date
    rates: Mapping[str, ClassificationRate]
    allowances: Mapping[str, AllowanceRate] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))
        object.__setattr__(self, "allowances", MappingProxyType(dict(self.allowances)))


@dataclass(frozen=True)
class EmploymentRates:
    """A multiplier per employment type."""

    full_time: Decimal
    part_time: Decimal
    casual: Decimal

    def for_employment(self, employment_type: EmploymentType) -> Decimal:
        if employment_type is EmploymentType.FULL_TIME:
            return self.full_time
        if employment_type is EmploymentType.PART_TIME:
            return self.part_time
        if employment_type is EmploymentType.CASUAL:
            return self.casual
        raise CalculationError(f"Unhandled employment type: {employment_type!r}")


@dataclass(frozen=True)
class PenaltyRates(EmploymentRates):
    """Weekend ordinary-time multipliers for one day type."""

    clause: str = ""


@dataclass(frozen=True)
class OvertimeConfig:
    """Daily overtime rules.

    Weekday overtime is tiered at ``weekday_tier_hours``; weekend overtime is
    paid at a flat rate from the first overtime hour.
    """

    first_two_hours: EmploymentRates
    after_two_hours: EmploymentRates
    weekend: EmploymentRates
    daily_threshold_hours: Decimal = Decimal("8")
    weekday_tier_hours: Decimal = Decimal("2")
    weekday_clause: str = "25.1(a)(i)(A)"
    weekend_clause: str = "25.1(a)(i)(B)"


@dataclass(frozen=True)
class AwardConfig:
    """The complete award configuration consumed by the engine."""

    metadata: AwardMetadata
    classifications: Mapping[str, Classification]
    rate_schedules: tuple[RateSchedule, ...]
    saturday: PenaltyRates
    sunday: PenaltyRates
    overtime: OvertimeConfig

    def __post_init__(self) -> None:
        object.__setattr__(self, "classifications", MappingProxyType(dict(self.classifications)))
        object.__setattr__(
            self,
            "rate_schedules",
            tuple(sorted(self.rate_schedules, key=lambda s: s.effective_date)),
        )

    def classification(self, code: str) -> Classification:
        """Get a classification by its code."""
        try:
            return self.classifications[code]
        except KeyError:
            raise ClassificationNotFound(code) from None

    def rate_schedule(self, as_of_date: date) -> RateSchedule | None:
        """Most recent schedule effective on or before ``as_of_date``."""
        for schedule in reversed(self.rate_schedules):
            if schedule.effective_date <= as_of_date:
                return schedule
        return None

    def rate(self, classification_code: str, as_of_date: date) -> Decimal:
        """Hourly rate for a classification on a date.

        Raises:
            ClassificationNotFound: the code is not in the classification table
            RateNotFound: no schedule effective on or before the date has a
                rate for the classification
        """
        self.classification(classification_code)
        schedule = self.rate_schedule(as_of_date)
        if schedule is None or classification_code not in schedule.rates:
            raise RateNotFound(classification_code, as_of_date)
        return schedule.rates[classification_code].hourly

    def penalty_rates(self, day_type: DayType) -> PenaltyRates:
        """Weekend penalty table for a day type."""
        if day_type is DayType.SATURDAY:
            return self.saturday
        if day_type is DayType.SUNDAY:
            return self.sunday
        raise CalculationError(f"No penalty table for day type: {day_type.value}")

    def penalty(self, day_type: DayType, employment_type: EmploymentType) -> Decimal:
        """Weekend ordinary-time multiplier for a day type and employment type."""
        return self.penalty_rates(day_type).for_employment(employment_type)

    def allowance_rate(self, key: str, as_of_date: date) -> AllowanceRate:
        """Allowance rate effective on a date."""
        schedule = self.rate_schedule(as_of_date)
        if schedule is None or key not in schedule.allowances:
            raise RateNotFound(key, as_of_date)
        return schedule.allowances[key]
