"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from award_engine.models.employee import Employee, EmploymentType
from award_engine.models.pay_period import PayPeriod, PublicHoliday
from award_engine.models.shift import Break, Shift


# ============================================================================
# Request schemas
# ============================================================================


class EmployeeRequest(BaseModel):
    """Employee being paid."""

    model_config = ConfigDict(extra="forbid")

    id: str
    employment_type: EmploymentType
    classification_code: str
    date_of_birth: date
    employment_start_date: date
    base_hourly_rate: Decimal | None = None
    tags: list[str] = Field(default_factory=list)

    def to_domain(self) -> Employee:
        return Employee(
            id=self.id,
            employment_type=self.employment_type,
            classification_code=self.classification_code,
            date_of_birth=self.date_of_birth,
            employment_start_date=self.employment_start_date,
            base_hourly_rate=self.base_hourly_rate,
            tags=frozenset(self.tags),
        )


class PublicHolidayRequest(BaseModel):
    """A declared public holiday."""

    date: date
    name: str
    region: str = "national"


class PayPeriodRequest(BaseModel):
    """Pay period being calculated."""

    start_date: date
    end_date: date
    public_holidays: list[PublicHolidayRequest] = Field(default_factory=list)

    def to_domain(self) -> PayPeriod:
        return PayPeriod(
            start_date=self.start_date,
            end_date=self.end_date,
            public_holidays=tuple(
                PublicHoliday(date=h.date, name=h.name, region=h.region)
                for h in self.public_holidays
            ),
        )


class BreakRequest(BaseModel):
    """A break within a shift."""

    start_time: datetime
    end_time: datetime
    is_paid: bool = False


class ShiftRequest(BaseModel):
    """A worked shift. Times are local wall-clock without offset."""

    id: str
    date: date
    start_time: datetime
    end_time: datetime
    breaks: list[BreakRequest] = Field(default_factory=list)

    def to_domain(self) -> Shift:
        return Shift(
            id=self.id,
            date=self.date,
            start=self.start_time,
            end=self.end_time,
            breaks=tuple(
                Break(start=b.start_time, end=b.end_time, paid=b.is_paid)
                for b in self.breaks
            ),
        )


class CalculationRequest(BaseModel):
    """Schema for POST /calculate."""

    employee: EmployeeRequest
    pay_period: PayPeriodRequest
    shifts: list[ShiftRequest] = Field(default_factory=list)


# ============================================================================
# Response schemas
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime


class AwardInfo(BaseModel):
    """Loaded award metadata."""

    code: str
    name: str
    version: str
    source_url: str


class ClassificationInfo(BaseModel):
    """A supported classification."""

    code: str
    name: str
    clause: str


class InfoResponse(BaseModel):
    """Engine and award information."""

    engine_version: str
    award: AwardInfo
    classifications: list[ClassificationInfo]


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    code: str
    message: str
    details: Any | None = None
