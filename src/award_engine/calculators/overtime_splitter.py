"""Daily overtime detection and tiering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from award_engine.calculators.audit import AuditTrailBuilder
from award_engine.calculators.types import (
    ZERO,
    DayType,
    PayCategory,
    PayLine,
    ShiftSegment,
    format_decimal,
)
from award_engine.errors import CalculationError
from award_engine.models.employee import Employee

if TYPE_CHECKING:
    from award_engine.award.tables import AwardConfig

DETECTION_CLAUSE = "22.1(c), 25.1"
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class DayAllocation:
    """Ordinary hours assigned to each segment of one calendar day.

    ``overtime_shift_id`` names the shift in which the day's overtime begins;
    it is None when the day has no overtime.
    """

    day: date
    day_type: DayType
    total_hours: Decimal
    ordinary_hours: Decimal
    overtime_hours: Decimal
    segments: tuple[tuple[ShiftSegment, Decimal], ...]
    overtime_shift_id: str | None


class OvertimeSplitter:
    """Splits a calendar day's worked hours into ordinary time and overtime.

    Day type is resolved before tiering: weekday overtime is tiered
    (first ``weekday_tier_hours`` at the first-tier rate, the rest at the
    second), while Saturday and Sunday overtime is paid at the flat weekend
    rate from the first overtime hour. The weekend branch is explicit and
    never consults the weekday tier table.
    """

    def __init__(self, config: AwardConfig, threshold: Decimal | None = None):
        self.config = config
        self.threshold = (
            threshold if threshold is not None else config.overtime.daily_threshold_hours
        )

    def allocate(self, day: date, segments: Sequence[ShiftSegment]) -> DayAllocation:
        """Assign the first ``threshold`` hours of the day, in chronological
        order, to ordinary time.
        """
        ordered = sorted(segments, key=lambda s: (s.start, s.shift_id))
        if any(s.date != day for s in ordered):
            raise CalculationError(f"segment outside calendar day {day}")

        total = sum((s.hours for s in ordered), ZERO)
        remaining = min(total, self.threshold)
        allocations: list[tuple[ShiftSegment, Decimal]] = []
        overtime_shift_id: str | None = None
        for segment in ordered:
            ordinary = min(segment.hours, remaining)
            remaining -= ordinary
            allocations.append((segment, ordinary))
            if overtime_shift_id is None and ordinary < segment.hours:
                overtime_shift_id = segment.shift_id

        ordinary_hours = min(total, self.threshold)
        return DayAllocation(
            day=day,
            day_type=DayType.for_date(day),
            total_hours=total,
            ordinary_hours=ordinary_hours,
            overtime_hours=total - ordinary_hours,
            segments=tuple(allocations),
            overtime_shift_id=overtime_shift_id,
        )

    def detect(
        self,
        day: date,
        day_total_hours: Decimal,
        audit: AuditTrailBuilder,
    ) -> tuple[Decimal, Decimal]:
        """Return (ordinary_hours, overtime_hours) for a day and record a
        daily_overtime_detection step.
        """
        threshold = self.threshold
        ordinary_hours = min(day_total_hours, threshold)
        overtime_hours = max(ZERO, day_total_hours - threshold)

        worked = format_decimal(day_total_hours)
        limit = format_decimal(threshold)
        if overtime_hours > 0:
            reasoning = (
                f"{worked} hours worked exceeds {limit} hour threshold by "
                f"{format_decimal(overtime_hours)} hours, triggering overtime"
            )
        elif day_total_hours == threshold:
            reasoning = f"{worked} hours worked equals {limit} hour threshold, no overtime triggered"
        else:
            reasoning = f"{worked} hours worked is under {limit} hour threshold, no overtime triggered"

        audit.record(
            rule_id="daily_overtime_detection",
            rule_name="Daily Overtime Detection",
            clause_ref=DETECTION_CLAUSE,
            input={
                "date": day,
                "day_type": DayType.for_date(day),
                "worked_hours": day_total_hours,
                "threshold": threshold,
            },
            output={"ordinary_hours": ordinary_hours, "overtime_hours": overtime_hours},
            reasoning=reasoning,
        )
        return ordinary_hours, overtime_hours

    def tier_lines(
        self,
        day: date,
        shift_id: str,
        overtime_hours: Decimal,
        day_type: DayType,
        employee: Employee,
        base_rate: Decimal,
        audit: AuditTrailBuilder,
    ) -> list[PayLine]:
        """Price a day's overtime hours."""
        if overtime_hours <= 0:
            return []
        if day_type.is_weekend:
            return [
                self._weekend_line(
                    day, shift_id, overtime_hours, day_type, employee, base_rate, audit
                )
            ]
        if day_type is DayType.WEEKDAY:
            return self._weekday_lines(day, shift_id, overtime_hours, employee, base_rate, audit)
        raise CalculationError(f"Unhandled day type: {day_type!r}")

    def split(
        self,
        day_total_hours: Decimal,
        day_type: DayType,
        employee: Employee,
        base_rate: Decimal,
        audit: AuditTrailBuilder,
        day: date,
        shift_id: str,
    ) -> tuple[Decimal, list[PayLine]]:
        """Detect and price one day's overtime.

        Returns the day's ordinary hours (for pricing by the penalty
        calculator) and its overtime lines.
        """
        ordinary_hours, overtime_hours = self.detect(day, day_total_hours, audit)
        lines = self.tier_lines(
            day, shift_id, overtime_hours, day_type, employee, base_rate, audit
        )
        return ordinary_hours, lines

    def _weekday_lines(
        self,
        day: date,
        shift_id: str,
        overtime_hours: Decimal,
        employee: Employee,
        base_rate: Decimal,
        audit: AuditTrailBuilder,
    ) -> list[PayLine]:
        overtime = self.config.overtime
        tier_boundary = overtime.weekday_tier_hours
        tiers = (
            (
                "overtime_tier_1",
                "Weekday Overtime Tier 1",
                PayCategory.OVERTIME_150,
                min(overtime_hours, tier_boundary),
                overtime.first_two_hours.for_employment(employee.employment_type),
                overtime.first_two_hours.full_time,
                f"First {format_decimal(min(overtime_hours, tier_boundary))} hours of weekday overtime",
            ),
            (
                "overtime_tier_2",
                "Weekday Overtime Tier 2",
                PayCategory.OVERTIME_200,
                max(ZERO, overtime_hours - tier_boundary),
                overtime.after_two_hours.for_employment(employee.employment_type),
                overtime.after_two_hours.full_time,
                f"Overtime after first {format_decimal(tier_boundary)} hours",
            ),
        )

        lines: list[PayLine] = []
        for rule_id, rule_name, category, hours, multiplier, standard, label in tiers:
            if hours <= 0:
                continue
            lines.append(
                self._line(
                    rule_id,
                    rule_name,
                    overtime.weekday_clause,
                    category,
                    day,
                    shift_id,
                    hours,
                    multiplier,
                    standard,
                    employee,
                    base_rate,
                    audit,
                    label,
                    DayType.WEEKDAY,
                )
            )
        return lines

    def _weekend_line(
        self,
        day: date,
        shift_id: str,
        overtime_hours: Decimal,
        day_type: DayType,
        employee: Employee,
        base_rate: Decimal,
        audit: AuditTrailBuilder,
    ) -> PayLine:
        overtime = self.config.overtime
        return self._line(
            "weekend_overtime",
            f"{day_type.label} Overtime",
            overtime.weekend_clause,
            PayCategory.OVERTIME_200,
            day,
            shift_id,
            overtime_hours,
            overtime.weekend.for_employment(employee.employment_type),
            overtime.weekend.full_time,
            employee,
            base_rate,
            audit,
            f"{day_type.label} overtime: {format_decimal(overtime_hours)} hours",
            day_type,
        )

    @staticmethod
    def _line(
        rule_id: str,
        rule_name: str,
        clause_ref: str,
        category: PayCategory,
        day: date,
        shift_id: str,
        hours: Decimal,
        multiplier: Decimal,
        standard: Decimal,
        employee: Employee,
        base_rate: Decimal,
        audit: AuditTrailBuilder,
        label: str,
        day_type: DayType,
    ) -> PayLine:
        rate = base_rate * multiplier
        amount = hours * rate
        percent = format_decimal(multiplier * HUNDRED)
        if employee.is_casual:
            basis = f"{percent}% ({format_decimal(standard * HUNDRED)}% × 1.25 casual loading)"
        else:
            basis = f"{percent}%"
        reasoning = (
            f"{label} at {basis}: {format_decimal(hours)} hours × "
            f"${format_decimal(rate)} = ${format_decimal(amount)}"
        )

        audit.record(
            rule_id=rule_id,
            rule_name=rule_name,
            clause_ref=clause_ref,
            input={
                "date": day,
                "shift_id": shift_id,
                "hours": hours,
                "base_rate": base_rate,
                "employment_type": employee.employment_type,
                "day_type": day_type,
            },
            output={"multiplier": multiplier, "rate": rate, "amount": amount, "category": category},
            reasoning=reasoning,
        )
        return PayLine(
            date=day,
            shift_id=shift_id,
            category=category,
            hours=hours,
            base_rate=base_rate,
            multiplier=multiplier,
            amount=amount,
            clause_ref=clause_ref,
        )
