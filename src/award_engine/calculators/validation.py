"""Structural input validation, run before any computation."""

from __future__ import annotations

from typing import Sequence

from award_engine.errors import InvalidEmployee, InvalidShift, ValidationError
from award_engine.models.employee import Employee
from award_engine.models.pay_period import PayPeriod
from award_engine.models.shift import Shift


def validate_employee(employee: Employee) -> None:
    if not employee.id.strip():
        raise InvalidEmployee("id", "must not be empty")
    if not employee.classification_code.strip():
        raise InvalidEmployee("classification_code", "must not be empty")
    if employee.base_hourly_rate is not None and employee.base_hourly_rate <= 0:
        raise InvalidEmployee("base_hourly_rate", "must be greater than zero")
    if employee.date_of_birth >= employee.employment_start_date:
        raise InvalidEmployee("date_of_birth", "must be before employment_start_date")


def validate_pay_period(pay_period: PayPeriod) -> None:
    if pay_period.end_date < pay_period.start_date:
        raise ValidationError(
            f"Pay period end_date {pay_period.end_date} is before "
            f"start_date {pay_period.start_date}"
        )


def validate_shift(shift: Shift) -> None:
    """Check a shift and its breaks.

    Raises:
        InvalidShift: empty id, end not after start, a break outside the
            shift or not positive, or overlapping breaks
    """
    if not shift.id.strip():
        raise InvalidShift(shift.id, "shift id must not be empty")
    if shift.end <= shift.start:
        raise InvalidShift(shift.id, "end must be after start")

    ordered = sorted(shift.breaks, key=lambda b: b.start)
    for index, brk in enumerate(ordered):
        if brk.end <= brk.start:
            raise InvalidShift(shift.id, f"break {brk.start} end must be after start")
        if brk.start < shift.start or brk.end > shift.end:
            raise InvalidShift(shift.id, f"break {brk.start} lies outside the shift")
        if index and brk.start < ordered[index - 1].end:
            raise InvalidShift(shift.id, f"break {brk.start} overlaps the previous break")


def validate_inputs(
    employee: Employee,
    pay_period: PayPeriod,
    shifts: Sequence[Shift],
) -> None:
    """Validate a whole calculation request."""
    validate_employee(employee)
    validate_pay_period(pay_period)
    seen: set[str] = set()
    for shift in shifts:
        validate_shift(shift)
        if shift.id in seen:
            raise InvalidShift(shift.id, "duplicate shift id")
        seen.add(shift.id)
