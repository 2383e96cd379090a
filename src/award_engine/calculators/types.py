"""Type definitions for calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from award_engine.models.pay_period import DayType
from award_engine.models.shift import MICROSECONDS_PER_HOUR, microseconds_between

ZERO = Decimal("0")


def format_decimal(value: Decimal) -> str:
    """Render a decimal without exponent or trailing zeros (``200``, ``42.81``)."""
    normalized = value.normalize()
    if normalized == 0:
        return "0"
    return f"{normalized:f}"


class PayCategory(str, Enum):
    """Pay line categories."""

    ORDINARY = "ordinary"
    ORDINARY_CASUAL = "ordinary_casual"
    SATURDAY = "saturday"
    SATURDAY_CASUAL = "saturday_casual"
    SUNDAY = "sunday"
    SUNDAY_CASUAL = "sunday_casual"
    OVERTIME_150 = "overtime150"
    OVERTIME_200 = "overtime200"

    @property
    def is_overtime(self) -> bool:
        return self in (PayCategory.OVERTIME_150, PayCategory.OVERTIME_200)

    @property
    def is_penalty(self) -> bool:
        """Weekend ordinary-time categories."""
        return self in (
            PayCategory.SATURDAY,
            PayCategory.SATURDAY_CASUAL,
            PayCategory.SUNDAY,
            PayCategory.SUNDAY_CASUAL,
        )


@dataclass(frozen=True)
class ShiftSegment:
    """Part of a shift falling within a single calendar day.

    ``start``/``end`` is the wall-clock span; ``hours`` is the worked time in
    that span once unpaid breaks are removed.
    """

    shift_id: str
    start: datetime
    end: datetime
    day_type: DayType
    hours: Decimal

    @property
    def date(self) -> date:
        return self.start.date()

    @property
    def span_hours(self) -> Decimal:
        return Decimal(microseconds_between(self.start, self.end)) / MICROSECONDS_PER_HOUR

    def to_dict(self) -> dict[str, Any]:
        return {
            "shift_id": self.shift_id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "day_type": self.day_type.value,
            "hours": format_decimal(self.hours),
        }


@dataclass(frozen=True)
class PayLine:
    """A priced block of hours.

    amount = hours x base_rate x multiplier, kept at full precision.
    """

    date: date
    shift_id: str
    category: PayCategory
    hours: Decimal
    base_rate: Decimal
    multiplier: Decimal
    amount: Decimal
    clause_ref: str

    @property
    def rate(self) -> Decimal:
        """Effective hourly rate."""
        return self.base_rate * self.multiplier

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "shift_id": self.shift_id,
            "category": self.category.value,
            "hours": format_decimal(self.hours),
            "base_rate": format_decimal(self.base_rate),
            "multiplier": format_decimal(self.multiplier),
            "rate": format_decimal(self.rate),
            "amount": format_decimal(self.amount),
            "clause_ref": self.clause_ref,
        }


@dataclass(frozen=True)
class AllowancePayment:
    """An allowance paid for the period (already capped)."""

    allowance_type: str
    description: str
    units: Decimal
    rate: Decimal
    amount: Decimal
    clause_ref: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.allowance_type,
            "description": self.description,
            "units": format_decimal(self.units),
            "rate": format_decimal(self.rate),
            "amount": format_decimal(self.amount),
            "clause_ref": self.clause_ref,
        }


@dataclass(frozen=True)
class PayTotals:
    """Totals for one calculation."""

    gross_pay: Decimal = ZERO
    ordinary_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    penalty_hours: Decimal = ZERO
    allowances_total: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "gross_pay": format_decimal(self.gross_pay),
            "ordinary_hours": format_decimal(self.ordinary_hours),
            "overtime_hours": format_decimal(self.overtime_hours),
            "penalty_hours": format_decimal(self.penalty_hours),
            "allowances_total": format_decimal(self.allowances_total),
        }
