"""Tag-gated, per-shift allowances with a weekly cap."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from award_engine.calculators.audit import AuditTrailBuilder
from award_engine.calculators.types import AllowancePayment, format_decimal
from award_engine.models.employee import Employee
from award_engine.models.shift import Shift

if TYPE_CHECKING:
    from award_engine.award.tables import AwardConfig

logger = logging.getLogger(__name__)


class AllowanceKind(str, Enum):
    """Allowances the engine knows how to pay.

    The value is the employee tag (and rate table key) that gates it.
    """

    LAUNDRY = "laundry_allowance"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def allowance_type(self) -> str:
        return _DETAILS[self][0]

    @property
    def description(self) -> str:
        return _DETAILS[self][1]

    @property
    def clause_ref(self) -> str:
        return _DETAILS[self][2]

    def eligible(self, employee: Employee) -> bool:
        return employee.has_tag(self.tag)

    def compute(
        self,
        employee: Employee,
        shifts: Sequence[Shift],
        config: AwardConfig,
        as_of_date: date,
        audit: AuditTrailBuilder,
    ) -> AllowancePayment | None:
        """Pay ``shifts x per_shift`` capped at the weekly maximum.

        Returns None (and records why) when the employee lacks the tag.
        """
        if not self.eligible(employee):
            audit.record(
                rule_id=self.tag,
                rule_name=self.description,
                clause_ref=self.clause_ref,
                input={
                    "employee_id": employee.id,
                    "has_tag": False,
                    "num_shifts": len(shifts),
                },
                output={"eligible": False},
                reasoning=(
                    f"Employee does not have '{self.tag}' tag - not eligible "
                    f"for {self.description.lower()}"
                ),
            )
            return None

        allowance_rate = config.allowance_rate(self.tag, as_of_date)
        units = Decimal(len(shifts))
        raw_amount = units * allowance_rate.per_shift
        amount = min(raw_amount, allowance_rate.weekly_cap)
        cap_applied = raw_amount > allowance_rate.weekly_cap
        reduction = raw_amount - amount

        reasoning = (
            f"{len(shifts)} shifts × ${format_decimal(allowance_rate.per_shift)} = "
            f"${format_decimal(raw_amount)}"
        )
        if cap_applied:
            reasoning += (
                f" (capped at weekly maximum ${format_decimal(allowance_rate.weekly_cap)}, "
                f"reduced by ${format_decimal(reduction)})"
            )

        audit.record(
            rule_id=self.tag,
            rule_name=self.description,
            clause_ref=self.clause_ref,
            input={
                "employee_id": employee.id,
                "has_tag": True,
                "num_shifts": len(shifts),
                "per_shift_rate": allowance_rate.per_shift,
                "weekly_cap": allowance_rate.weekly_cap,
            },
            output={
                "eligible": True,
                "units": units,
                "raw_amount": raw_amount,
                "amount": amount,
                "cap_applied": cap_applied,
                "cap_reduction": reduction,
            },
            reasoning=reasoning,
        )
        return AllowancePayment(
            allowance_type=self.allowance_type,
            description=self.description,
            units=units,
            rate=allowance_rate.per_shift,
            amount=amount,
            clause_ref=self.clause_ref,
        )


# kind -> (type, description, clause)
_DETAILS: dict[AllowanceKind, tuple[str, str, str]] = {
    AllowanceKind.LAUNDRY: ("laundry", "Laundry Allowance", "15.2(b)"),
}


class AllowanceEngine:
    """Runs every allowance kind over the full shift list."""

    def __init__(self, kinds: Sequence[AllowanceKind] = tuple(AllowanceKind)):
        self.kinds = tuple(kinds)

    def compute(
        self,
        employee: Employee,
        shifts: Sequence[Shift],
        config: AwardConfig,
        as_of_date: date,
        audit: AuditTrailBuilder,
    ) -> list[AllowancePayment]:
        payments: list[AllowancePayment] = []
        for kind in self.kinds:
            payment = kind.compute(employee, shifts, config, as_of_date, audit)
            if payment is not None:
                logger.debug(
                    "Allowance %s for employee %s: %s",
                    kind.tag,
                    employee.id,
                    payment.amount,
                )
                payments.append(payment)
        return payments
