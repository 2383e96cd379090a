"""Base and casual-loaded rate resolution."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from award_engine.calculators.audit import AuditTrailBuilder
from award_engine.calculators.types import format_decimal
from award_engine.models.employee import Employee

if TYPE_CHECKING:
    from award_engine.award.tables import AwardConfig

CASUAL_LOADING = Decimal("1.25")
BASE_RATE_CLAUSE = "14.2"
CASUAL_LOADING_CLAUSE = "10.4(b)"


class RateResolver:
    """Resolves an employee's base hourly rate.

    Rate selection priority:
    1. If the employee carries a base_hourly_rate override, use it
    2. Otherwise look up the classification rate from the most recent
       schedule effective on or before the effective date

    Casual employees get a second, loaded rate of base x 1.25. The loading
    is recorded but never applied on top of weekend or overtime multipliers;
    those tables already contain the casual figure.
    """

    def __init__(self, config: AwardConfig):
        self.config = config

    def resolve(
        self,
        employee: Employee,
        effective_date: date,
        audit: AuditTrailBuilder,
    ) -> tuple[Decimal, Decimal]:
        """Resolve (base_rate, casual_rate) for an employee.

        Args:
            employee: The employee being paid
            effective_date: Date used for the rate schedule lookup
            audit: Trail receiving the base_rate_lookup and, for casuals,
                casual_loading steps

        Returns:
            base_rate and the casual-loaded rate (equal to base_rate for
            non-casual employees)

        Raises:
            ClassificationNotFound: classification code is not in the award
            RateNotFound: no rate is effective on or before effective_date
        """
        base_rate = self._base_rate(employee, effective_date, audit)

        if not employee.is_casual:
            return base_rate, base_rate

        casual_rate = base_rate * CASUAL_LOADING
        audit.record(
            rule_id="casual_loading",
            rule_name="Casual Loading",
            clause_ref=CASUAL_LOADING_CLAUSE,
            input={
                "base_rate": base_rate,
                "employment_type": employee.employment_type,
            },
            output={
                "loaded_rate": casual_rate,
                "loading_applied": True,
                "multiplier": CASUAL_LOADING,
            },
            reasoning=(
                f"${format_decimal(base_rate)} × {format_decimal(CASUAL_LOADING)}"
                f" = ${format_decimal(casual_rate)}"
            ),
        )
        return base_rate, casual_rate

    def _base_rate(
        self,
        employee: Employee,
        effective_date: date,
        audit: AuditTrailBuilder,
    ) -> Decimal:
        if employee.base_hourly_rate is not None:
            rate = employee.base_hourly_rate
            audit.record(
                rule_id="base_rate_lookup",
                rule_name="Base Rate Lookup",
                clause_ref=BASE_RATE_CLAUSE,
                input={
                    "classification_code": employee.classification_code,
                    "employee_override_rate": rate,
                    "effective_date": effective_date,
                },
                output={"rate": rate, "source": "employee_override"},
                reasoning=(
                    f"Using employee override rate ${format_decimal(rate)} "
                    "instead of classification lookup"
                ),
            )
            return rate

        rate = self.config.rate(employee.classification_code, effective_date)
        schedule = self.config.rate_schedule(effective_date)
        audit.record(
            rule_id="base_rate_lookup",
            rule_name="Base Rate Lookup",
            clause_ref=BASE_RATE_CLAUSE,
            input={
                "classification_code": employee.classification_code,
                "effective_date": effective_date,
            },
            output={
                "rate": rate,
                "source": "config",
                "rate_effective_date": schedule.effective_date,
            },
            reasoning=(
                f"Looked up rate for classification '{employee.classification_code}' "
                f"effective {schedule.effective_date}: ${format_decimal(rate)}"
            ),
        )
        return rate
