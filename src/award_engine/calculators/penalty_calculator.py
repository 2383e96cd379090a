"""Ordinary-hours pricing by day type."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from award_engine.calculators.audit import AuditTrailBuilder
from award_engine.calculators.rate_resolver import CASUAL_LOADING
from award_engine.calculators.types import DayType, PayCategory, PayLine, ShiftSegment, format_decimal
from award_engine.errors import CalculationError
from award_engine.models.employee import Employee

if TYPE_CHECKING:
    from award_engine.award.tables import AwardConfig

WEEKDAY_MULTIPLIER = Decimal("1")
WEEKDAY_CLAUSE = "22.1"
CASUAL_WEEKDAY_CLAUSE = "10.4(b), 22.1"
CASUAL_SATURDAY_CLAUSE = "23.2(a)"
CASUAL_SUNDAY_CLAUSE = "23.2(b)"

# (rule_id, rule_name, category, casual category) per day type
_DAY_RULES: dict[DayType, tuple[str, str, PayCategory, PayCategory]] = {
    DayType.WEEKDAY: (
        "weekday_ordinary",
        "Weekday Ordinary Time",
        PayCategory.ORDINARY,
        PayCategory.ORDINARY_CASUAL,
    ),
    DayType.SATURDAY: (
        "saturday_penalty",
        "Saturday Penalty Rate",
        PayCategory.SATURDAY,
        PayCategory.SATURDAY_CASUAL,
    ),
    DayType.SUNDAY: (
        "sunday_penalty",
        "Sunday Penalty Rate",
        PayCategory.SUNDAY,
        PayCategory.SUNDAY_CASUAL,
    ),
}


class PenaltyCalculator:
    """Prices ordinary (non-overtime) hours of a segment.

    Multiplier selection:
    - Weekday: 1.0, or 1.25 for casuals (the casual loading itself)
    - Saturday/Sunday: the award's penalty table, whose casual column is a
      flat multiplier on the base rate. Casual loading is never compounded
      with a weekend penalty.
    """

    def __init__(self, config: AwardConfig):
        self.config = config

    def multiplier(self, day_type: DayType, employee: Employee) -> tuple[Decimal, str]:
        """Return (multiplier, clause_ref) for ordinary hours on a day type."""
        if day_type is DayType.WEEKDAY:
            if employee.is_casual:
                return CASUAL_LOADING, CASUAL_WEEKDAY_CLAUSE
            return WEEKDAY_MULTIPLIER, WEEKDAY_CLAUSE
        if day_type is DayType.SATURDAY:
            clause = CASUAL_SATURDAY_CLAUSE if employee.is_casual else None
        elif day_type is DayType.SUNDAY:
            clause = CASUAL_SUNDAY_CLAUSE if employee.is_casual else None
        else:
            raise CalculationError(f"Unhandled day type: {day_type!r}")
        table = self.config.penalty_rates(day_type)
        return table.for_employment(employee.employment_type), clause or table.clause

    def penalty(
        self,
        segment: ShiftSegment,
        employee: Employee,
        base_rate: Decimal,
        audit: AuditTrailBuilder,
        hours: Decimal | None = None,
    ) -> PayLine:
        """Price ordinary hours of a segment.

        Args:
            segment: The segment being priced
            employee: The employee being paid
            base_rate: Unloaded base hourly rate
            audit: Trail receiving one step for the line
            hours: Ordinary hours to price; defaults to all of the segment's
                worked hours. Overtime hours are never priced here.
        """
        if hours is None:
            hours = segment.hours
        if hours < 0 or hours > segment.hours:
            raise CalculationError(
                f"ordinary hours {hours} outside segment of shift '{segment.shift_id}'"
            )

        rule_id, rule_name, category, casual_category = _DAY_RULES[segment.day_type]
        if employee.is_casual:
            category = casual_category
        multiplier, clause_ref = self.multiplier(segment.day_type, employee)

        rate = base_rate * multiplier
        amount = hours * rate
        line = PayLine(
            date=segment.date,
            shift_id=segment.shift_id,
            category=category,
            hours=hours,
            base_rate=base_rate,
            multiplier=multiplier,
            amount=amount,
            clause_ref=clause_ref,
        )

        if segment.day_type is DayType.WEEKDAY:
            reasoning = (
                f"Weekday ordinary time: {format_decimal(hours)} hours × "
                f"${format_decimal(base_rate)} × {format_decimal(multiplier)} = "
                f"${format_decimal(amount)}"
            )
        else:
            reasoning = (
                f"{segment.day_type.label} penalty: {format_decimal(hours)} hours × "
                f"${format_decimal(base_rate)} × {format_decimal(multiplier)} = "
                f"${format_decimal(amount)}"
            )

        audit.record(
            rule_id=rule_id,
            rule_name=rule_name,
            clause_ref=clause_ref,
            input={
                "shift_id": segment.shift_id,
                "date": segment.date,
                "hours": hours,
                "base_rate": base_rate,
                "employment_type": employee.employment_type,
                "day_type": segment.day_type,
            },
            output={
                "multiplier": multiplier,
                "effective_rate": rate,
                "amount": amount,
                "category": category,
            },
            reasoning=reasoning,
        )
        return line
