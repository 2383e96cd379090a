"""Pytest fixtures for award engine tests."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable

import pytest

from award_engine.award.tables import (
    AllowanceRate,
    AwardConfig,
    AwardMetadata,
    Classification,
    ClassificationRate,
    EmploymentRates,
    OvertimeConfig,
    PenaltyRates,
    RateSchedule,
)
from award_engine.calculators.audit import AuditTrailBuilder
from award_engine.calculators.engine import AwardEngine
from award_engine.clock import DeterministicClock
from award_engine.models.employee import Employee, EmploymentType
from award_engine.models.pay_period import PayPeriod
from award_engine.models.shift import Break, Shift

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "ma000018"

BASE_RATE = Decimal("28.54")

# 2025-07-14 is a Monday
MONDAY = date(2025, 7, 14)
SATURDAY = date(2025, 7, 19)
SUNDAY = date(2025, 7, 20)


def dec(value: str) -> Decimal:
    return Decimal(value)


def dt(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def make_shift(
    shift_id: str,
    start: datetime,
    end: datetime,
    breaks: tuple[Break, ...] = (),
    shift_date: date | None = None,
) -> Shift:
    return Shift(
        id=shift_id,
        date=shift_date or start.date(),
        start=start,
        end=end,
        breaks=breaks,
    )


@pytest.fixture
def award_config() -> AwardConfig:
    """In-memory MA000018 tables with the 2025-07-01 rates."""
    return AwardConfig(
        metadata=AwardMetadata(
            code="MA000018",
            name="Aged Care Award 2010",
            version="2025-07-01",
            source_url="https://library.fairwork.gov.au/award/?krn=MA000018",
        ),
        classifications={
            "dce_level_3": Classification(
                code="dce_level_3",
                name="Direct Care Employee Level 3 - Qualified",
                description="Direct care employee holding a relevant Certificate III",
                clause="14.2",
            ),
        },
        rate_schedules=(
            RateSchedule(
                effective_date=date(2025, 7, 1),
                rates={"dce_level_3": ClassificationRate(weekly=dec("1084.52"), hourly=BASE_RATE)},
                allowances={
                    "laundry_allowance": AllowanceRate(
                        per_shift=dec("0.32"), weekly_cap=dec("1.49")
                    )
                },
            ),
        ),
        saturday=PenaltyRates(
            full_time=dec("1.50"), part_time=dec("1.50"), casual=dec("1.75"), clause="23.1"
        ),
        sunday=PenaltyRates(
            full_time=dec("1.75"), part_time=dec("1.75"), casual=dec("2.00"), clause="23.1"
        ),
        overtime=OvertimeConfig(
            first_two_hours=EmploymentRates(
                full_time=dec("1.50"), part_time=dec("1.50"), casual=dec("1.875")
            ),
            after_two_hours=EmploymentRates(
                full_time=dec("2.00"), part_time=dec("2.00"), casual=dec("2.50")
            ),
            weekend=EmploymentRates(
                full_time=dec("2.00"), part_time=dec("2.00"), casual=dec("2.50")
            ),
        ),
    )


@pytest.fixture
def make_employee() -> Callable[..., Employee]:
    """Factory for employees; defaults to a full-time DCE level 3."""

    def _make(
        employment_type: EmploymentType = EmploymentType.FULL_TIME,
        tags: tuple[str, ...] = (),
        base_hourly_rate: Decimal | None = None,
        employee_id: str = "emp_001",
        classification_code: str = "dce_level_3",
    ) -> Employee:
        return Employee(
            id=employee_id,
            employment_type=employment_type,
            classification_code=classification_code,
            date_of_birth=date(1990, 1, 15),
            employment_start_date=date(2023, 6, 1),
            base_hourly_rate=base_hourly_rate,
            tags=frozenset(tags),
        )

    return _make


@pytest.fixture
def full_time(make_employee) -> Employee:
    return make_employee(EmploymentType.FULL_TIME)


@pytest.fixture
def casual(make_employee) -> Employee:
    return make_employee(EmploymentType.CASUAL)


@pytest.fixture
def pay_period() -> PayPeriod:
    return PayPeriod(start_date=MONDAY, end_date=date(2025, 7, 27))


@pytest.fixture
def audit() -> AuditTrailBuilder:
    return AuditTrailBuilder()


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def engine(award_config, clock) -> AwardEngine:
    return AwardEngine(award_config, clock=clock, engine_version="1.0.0")
