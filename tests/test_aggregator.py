"""Tests for pay aggregation."""

from decimal import Decimal

from award_engine.calculators.aggregator import PayAggregator
from award_engine.calculators.types import AllowancePayment, PayCategory, PayLine

from tests.conftest import SATURDAY


def line(category, hours, multiplier):
    hours = Decimal(hours)
    multiplier = Decimal(multiplier)
    base = Decimal("28.54")
    return PayLine(
        date=SATURDAY,
        shift_id="s1",
        category=category,
        hours=hours,
        base_rate=base,
        multiplier=multiplier,
        amount=hours * base * multiplier,
        clause_ref="x",
    )


class TestPayAggregator:
    """Test totals and hour groupings."""

    def test_weekend_ordinary_time_counts_as_penalty_only(self):
        totals = PayAggregator().aggregate(
            [
                line(PayCategory.SATURDAY, "8", "1.5"),
                line(PayCategory.OVERTIME_200, "2", "2"),
            ],
            [],
        )

        assert totals.gross_pay == Decimal("456.64")
        assert totals.ordinary_hours == Decimal("0")
        assert totals.penalty_hours == Decimal("8")
        assert totals.overtime_hours == Decimal("2")

    def test_gross_includes_allowances(self):
        allowance = AllowancePayment(
            allowance_type="laundry",
            description="Laundry Allowance",
            units=Decimal("6"),
            rate=Decimal("0.32"),
            amount=Decimal("1.49"),
            clause_ref="15.2(b)",
        )
        lines = [line(PayCategory.ORDINARY, "8", "1")]

        totals = PayAggregator().aggregate(lines, [allowance])

        assert totals.allowances_total == Decimal("1.49")
        assert totals.gross_pay == sum(l.amount for l in lines) + Decimal("1.49")
        assert totals.penalty_hours == Decimal("0")
        assert totals.ordinary_hours == Decimal("8")

    def test_no_rounding(self):
        """Thirds of an hour are carried at full precision."""
        third = Decimal(1200) / Decimal(3600)
        totals = PayAggregator().aggregate([line(PayCategory.ORDINARY, third, "1")], [])
        assert totals.gross_pay == third * Decimal("28.54")

    def test_empty(self):
        totals = PayAggregator().aggregate([], [])
        assert totals.gross_pay == Decimal("0")
        assert totals.to_dict()["gross_pay"] == "0"

    def test_hour_groups_are_disjoint(self):
        """Each line's hours land in exactly one of the three groups."""
        lines = [
            line(PayCategory.ORDINARY_CASUAL, "4", "1.25"),
            line(PayCategory.SUNDAY_CASUAL, "6", "2"),
            line(PayCategory.OVERTIME_200, "1", "2.5"),
        ]

        totals = PayAggregator().aggregate(lines, [])

        assert totals.ordinary_hours == Decimal("4")
        assert totals.penalty_hours == Decimal("6")
        assert totals.overtime_hours == Decimal("1")
        assert totals.ordinary_hours + totals.penalty_hours + totals.overtime_hours == sum(
            l.hours for l in lines
        )
