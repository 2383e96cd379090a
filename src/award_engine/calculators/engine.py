"""Award calculation engine - main orchestrator."""

from __future__ import annotations

import hashlib
import json
import logging
from collections import defaultdict
from datetime import date, time, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Sequence
from uuid import UUID

from award_engine import __version__
from award_engine.calculators.aggregator import PayAggregator
from award_engine.calculators.allowances import AllowanceEngine
from award_engine.calculators.audit import AuditTrailBuilder, Severity
from award_engine.calculators.day_segmenter import DaySegmenter
from award_engine.calculators.overtime_splitter import DayAllocation, OvertimeSplitter
from award_engine.calculators.penalty_calculator import PenaltyCalculator
from award_engine.calculators.rate_resolver import RateResolver
from award_engine.calculators.types import ZERO, PayLine, ShiftSegment, format_decimal
from award_engine.calculators.validation import validate_inputs
from award_engine.clock import Clock, SystemClock
from award_engine.errors import CalculationError
from award_engine.models.employee import Employee
from award_engine.models.pay_period import PayPeriod
from award_engine.models.result import CalculationResult
from award_engine.models.shift import Shift

if TYPE_CHECKING:
    from award_engine.award.tables import AwardConfig

logger = logging.getLogger(__name__)

LONG_SHIFT_HOURS = Decimal("12")


class AwardEngine:
    """Main award interpretation engine.

    Calculation pipeline (stable order per employee and pay period):
    1) Validate inputs
    2) Resolve base rate (and casual loading)
    3) Segment every shift at midnight
    4) Detect daily overtime per calendar day
    5) Price ordinary hours by day type
    6) Price overtime tiers per day
    7) Compute allowances
    8) Aggregate totals

    The engine holds only immutable configuration, so one instance may be
    shared by concurrent calculations.
    """

    def __init__(
        self,
        config: AwardConfig,
        clock: Clock | None = None,
        engine_version: str = __version__,
        threshold: Decimal | None = None,
    ):
        self.config = config
        self.clock = clock or SystemClock()
        self.engine_version = engine_version
        self.rate_resolver = RateResolver(config)
        self.segmenter = DaySegmenter()
        self.penalty_calculator = PenaltyCalculator(config)
        self.overtime_splitter = OvertimeSplitter(config, threshold)
        self.allowance_engine = AllowanceEngine()
        self.aggregator = PayAggregator()

    @property
    def threshold(self) -> Decimal:
        return self.overtime_splitter.threshold

    def calculate(
        self,
        employee: Employee,
        pay_period: PayPeriod,
        shifts: Sequence[Shift],
    ) -> CalculationResult:
        """Calculate pay for one employee over one pay period.

        Raises:
            ValidationError: structurally invalid input
            ConfigurationError: the base rate cannot be resolved
            CalculationError: an internal invariant does not hold
        """
        started = self.clock.now()
        validate_inputs(employee, pay_period, shifts)

        audit = AuditTrailBuilder()
        ordered = sorted(shifts, key=lambda s: (s.start, s.id))
        self._check_warnings(pay_period, ordered, audit)

        effective_date = self._effective_date(pay_period, ordered)
        base_rate, _ = self.rate_resolver.resolve(employee, effective_date, audit)
        logger.debug("Employee %s base rate %s as of %s", employee.id, base_rate, effective_date)

        by_day: dict[date, list[ShiftSegment]] = defaultdict(list)
        for shift in ordered:
            for segment in self.segmenter.segment_with_audit(shift, audit):
                by_day[segment.date].append(segment)

        days: list[DayAllocation] = []
        for day in sorted(by_day):
            allocation = self.overtime_splitter.allocate(day, by_day[day])
            self.overtime_splitter.detect(day, allocation.total_hours, audit)
            days.append(allocation)

        pay_lines: list[PayLine] = []
        for allocation in days:
            for segment, ordinary_hours in allocation.segments:
                if ordinary_hours <= 0:
                    continue
                pay_lines.append(
                    self.penalty_calculator.penalty(
                        segment, employee, base_rate, audit, hours=ordinary_hours
                    )
                )

        for allocation in days:
            if allocation.overtime_shift_id is None:
                continue
            pay_lines.extend(
                self.overtime_splitter.tier_lines(
                    allocation.day,
                    allocation.overtime_shift_id,
                    allocation.overtime_hours,
                    allocation.day_type,
                    employee,
                    base_rate,
                    audit,
                )
            )

        self._check_days(days, pay_lines)

        in_period = [s for s in ordered if pay_period.contains(s.date)]
        allowances = self.allowance_engine.compute(
            employee, in_period, self.config, effective_date, audit
        )
        totals = self.aggregator.aggregate(pay_lines, allowances)

        inputs_fingerprint = self._compute_inputs_fingerprint(
            employee, pay_period, ordered, effective_date
        )
        finished = self.clock.now()
        duration_us = (finished - started) // timedelta(microseconds=1)

        logger.info(
            "Calculated employee %s: %d shift(s), gross %s in %dus",
            employee.id,
            len(ordered),
            format_decimal(totals.gross_pay),
            duration_us,
        )

        return CalculationResult(
            calculation_id=self._generate_calculation_id(inputs_fingerprint),
            timestamp=started,
            engine_version=self.engine_version,
            employee_id=employee.id,
            pay_period=pay_period,
            pay_lines=tuple(pay_lines),
            allowances=tuple(allowances),
            totals=totals,
            audit_trace=audit.build(duration_us),
            inputs_fingerprint=inputs_fingerprint,
        )

    @staticmethod
    def _effective_date(pay_period: PayPeriod, shifts: Sequence[Shift]) -> date:
        if not shifts:
            return pay_period.start_date
        return min(s.date for s in shifts)

    def _check_warnings(
        self,
        pay_period: PayPeriod,
        shifts: Sequence[Shift],
        audit: AuditTrailBuilder,
    ) -> None:
        if not shifts:
            audit.warn("NO_SHIFTS", "No shifts supplied for the pay period", Severity.LOW)
            return

        for shift in shifts:
            if not pay_period.contains(shift.date):
                audit.warn(
                    "SHIFT_OUTSIDE_PAY_PERIOD",
                    f"Shift {shift.id} on {shift.date} is outside the pay period "
                    f"{pay_period.start_date} to {pay_period.end_date}; its hours are paid but "
                    "it is not counted towards per-shift allowances",
                    Severity.MEDIUM,
                )

            day = shift.start.date()
            while day <= shift.end.date():
                holiday = pay_period.holiday_on(day)
                # A shift ending exactly at midnight does not touch the next day.
                touches = day < shift.end.date() or shift.end.time() != time.min
                if holiday is not None and touches:
                    audit.warn(
                        "PUBLIC_HOLIDAY_NOT_APPLIED",
                        f"Shift {shift.id} touches public holiday {holiday.name} on "
                        f"{holiday.date}; public holiday rates are not applied",
                        Severity.HIGH,
                    )
                day += timedelta(days=1)

            worked = shift.worked_hours()
            if worked > LONG_SHIFT_HOURS:
                audit.warn(
                    "LONG_SHIFT",
                    f"Shift {shift.id} has {format_decimal(worked)} worked hours, "
                    f"more than {format_decimal(LONG_SHIFT_HOURS)}",
                    Severity.LOW,
                )

    def _check_days(self, days: Sequence[DayAllocation], pay_lines: Sequence[PayLine]) -> None:
        """Each day's priced hours must equal its worked hours."""
        priced: dict[date, Decimal] = defaultdict(lambda: ZERO)
        for line in pay_lines:
            priced[line.date] += line.hours
        for allocation in days:
            if allocation.ordinary_hours > self.threshold:
                raise CalculationError(
                    f"ordinary hours on {allocation.day} exceed the daily threshold"
                )
            if priced[allocation.day] != allocation.total_hours:
                raise CalculationError(
                    f"priced {priced[allocation.day]}h on {allocation.day}, "
                    f"worked {allocation.total_hours}h"
                )

    def _compute_inputs_fingerprint(
        self,
        employee: Employee,
        pay_period: PayPeriod,
        shifts: Sequence[Shift],
        effective_date: date,
    ) -> str:
        """Compute fingerprint of all inputs used in the calculation."""
        schedule = self.config.rate_schedule(effective_date)
        data: dict[str, Any] = {
            "employee": employee.to_dict(),
            "pay_period": pay_period.to_dict(),
            "shifts": [s.to_dict() for s in shifts],
            "threshold": str(self.threshold),
            "award": {
                "code": self.config.metadata.code,
                "version": self.config.metadata.version,
                "rate_schedule": (
                    schedule.effective_date.isoformat() if schedule is not None else None
                ),
            },
        }
        json_str = json.dumps(data, sort_keys=True)
        return hashlib.sha256(json_str.encode()).hexdigest()[:32]

    def _generate_calculation_id(self, inputs_fingerprint: str) -> UUID:
        """Generate deterministic calculation ID."""
        data = {
            "engine_version": self.engine_version,
            "inputs_fingerprint": inputs_fingerprint,
        }
        json_str = json.dumps(data, sort_keys=True)
        hash_bytes = hashlib.sha256(json_str.encode()).digest()
        return UUID(bytes=hash_bytes[:16])
