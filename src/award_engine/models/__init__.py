"""Input and result models."""

from award_engine.models.employee import Employee, EmploymentType
from award_engine.models.pay_period import DayType, PayPeriod, PublicHoliday
from award_engine.models.shift import Break, Shift
from award_engine.models.result import CalculationResult

__all__ = [
    "Break",
    "CalculationResult",
    "DayType",
    "Employee",
    "EmploymentType",
    "PayPeriod",
    "PublicHoliday",
    "Shift",
]
