"""Reduce pay lines and allowances to totals."""

from __future__ import annotations

from typing import Sequence

from award_engine.calculators.types import ZERO, AllowancePayment, PayLine, PayTotals


class PayAggregator:
    """Sums lines at full precision; nothing is rounded here.

    - ordinary_hours: weekday ordinary lines only
    - penalty_hours: non-overtime Saturday/Sunday lines
    - overtime_hours: overtime lines
    """

    def aggregate(
        self,
        pay_lines: Sequence[PayLine],
        allowances: Sequence[AllowancePayment],
    ) -> PayTotals:
        ordinary_hours = ZERO
        overtime_hours = ZERO
        penalty_hours = ZERO
        lines_total = ZERO

        for line in pay_lines:
            lines_total += line.amount
            if line.category.is_overtime:
                overtime_hours += line.hours
            elif line.category.is_penalty:
                penalty_hours += line.hours
            else:
                ordinary_hours += line.hours

        allowances_total = sum((a.amount for a in allowances), ZERO)

        return PayTotals(
            gross_pay=lines_total + allowances_total,
            ordinary_hours=ordinary_hours,
            overtime_hours=overtime_hours,
            penalty_hours=penalty_hours,
            allowances_total=allowances_total,
        )
