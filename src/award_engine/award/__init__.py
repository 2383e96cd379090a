"""Award configuration tables and loader."""

from award_engine.award.loader import ConfigLoader
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

__all__ = [
    "AllowanceRate",
    "AwardConfig",
    "AwardMetadata",
    "Classification",
    "ClassificationRate",
    "ConfigLoader",
    "EmploymentRates",
    "OvertimeConfig",
    "PenaltyRates",
    "RateSchedule",
]
