"""Tests for ordinary-hours pricing by day type."""

from decimal import Decimal

import pytest

from award_engine.calculators.penalty_calculator import PenaltyCalculator
from award_engine.calculators.types import DayType, PayCategory, ShiftSegment
from award_engine.errors import CalculationError
from award_engine.models.employee import EmploymentType

from tests.conftest import BASE_RATE, MONDAY, SATURDAY, SUNDAY, dt


def segment(day, hours, start_hour=8):
    return ShiftSegment(
        shift_id="s1",
        start=dt(day, start_hour),
        end=dt(day, start_hour + int(hours)),
        day_type=DayType.for_date(day),
        hours=Decimal(hours),
    )


class TestPenaltyCalculator:
    """Test multipliers, categories and clauses per day type."""

    def test_weekday_full_time(self, award_config, full_time, audit):
        """8h Monday full-time is one Ordinary line of 228.32."""
        line = PenaltyCalculator(award_config).penalty(
            segment(MONDAY, 8), full_time, BASE_RATE, audit
        )

        assert line.category is PayCategory.ORDINARY
        assert line.multiplier == Decimal("1")
        assert line.amount == Decimal("228.32")
        assert line.clause_ref == "22.1"
        assert audit.steps[0].rule_id == "weekday_ordinary"

    def test_weekday_casual(self, award_config, casual, audit):
        line = PenaltyCalculator(award_config).penalty(
            segment(MONDAY, 8), casual, BASE_RATE, audit
        )

        assert line.category is PayCategory.ORDINARY_CASUAL
        assert line.multiplier == Decimal("1.25")
        assert line.amount == Decimal("285.40")
        assert line.clause_ref == "10.4(b), 22.1"

    def test_saturday_full_time(self, award_config, full_time, audit):
        line = PenaltyCalculator(award_config).penalty(
            segment(SATURDAY, 8), full_time, BASE_RATE, audit
        )

        assert line.category is PayCategory.SATURDAY
        assert line.multiplier == Decimal("1.50")
        assert line.amount == Decimal("342.48")
        assert line.clause_ref == "23.1"
        assert audit.steps[0].rule_id == "saturday_penalty"

    def test_saturday_casual_is_not_compounded(self, award_config, casual, audit):
        """Casual Saturday is base x 1.75, not base x 1.25 x 1.5."""
        line = PenaltyCalculator(award_config).penalty(
            segment(SATURDAY, 8), casual, BASE_RATE, audit
        )

        assert line.category is PayCategory.SATURDAY_CASUAL
        assert line.rate == BASE_RATE * Decimal("1.75")
        assert line.rate != BASE_RATE * Decimal("1.25") * Decimal("1.5")
        assert line.amount == Decimal("399.56")
        assert line.clause_ref == "23.2(a)"

    def test_sunday_full_time(self, award_config, full_time, audit):
        line = PenaltyCalculator(award_config).penalty(
            segment(SUNDAY, 6, start_hour=0), full_time, BASE_RATE, audit
        )

        assert line.category is PayCategory.SUNDAY
        assert line.amount == Decimal("299.67")
        assert line.clause_ref == "23.1"
        assert audit.steps[0].rule_id == "sunday_penalty"

    def test_sunday_casual(self, award_config, casual, audit):
        line = PenaltyCalculator(award_config).penalty(
            segment(SUNDAY, 4), casual, BASE_RATE, audit
        )

        assert line.category is PayCategory.SUNDAY_CASUAL
        assert line.multiplier == Decimal("2.00")
        assert line.amount == Decimal("228.32")
        assert line.clause_ref == "23.2(b)"

    def test_part_time_matches_full_time(self, award_config, make_employee, audit):
        part_time = make_employee(EmploymentType.PART_TIME)
        line = PenaltyCalculator(award_config).penalty(
            segment(SATURDAY, 8), part_time, BASE_RATE, audit
        )
        assert line.amount == Decimal("342.48")

    def test_partial_hours(self, award_config, full_time, audit):
        """Only the requested ordinary hours are priced."""
        line = PenaltyCalculator(award_config).penalty(
            segment(MONDAY, 10), full_time, BASE_RATE, audit, hours=Decimal("8")
        )
        assert line.hours == Decimal("8")
        assert line.amount == Decimal("228.32")

    def test_hours_beyond_segment_rejected(self, award_config, full_time, audit):
        with pytest.raises(CalculationError):
            PenaltyCalculator(award_config).penalty(
                segment(MONDAY, 4), full_time, BASE_RATE, audit, hours=Decimal("5")
            )

    def test_audit_output(self, award_config, full_time, audit):
        PenaltyCalculator(award_config).penalty(
            segment(SATURDAY, 8), full_time, BASE_RATE, audit
        )

        step = audit.steps[0]
        assert step.input["day_type"] == "saturday"
        assert step.input["hours"] == "8"
        assert step.output["multiplier"] == "1.5"
        assert step.output["amount"] == "342.48"
        assert step.reasoning == "Saturday penalty: 8 hours × $28.54 × 1.5 = $342.48"
