"""Award calculation pipeline.

The orchestrator is ``award_engine.calculators.engine.AwardEngine``.
"""

from award_engine.calculators.aggregator import PayAggregator
from award_engine.calculators.allowances import AllowanceEngine, AllowanceKind
from award_engine.calculators.audit import AuditStep, AuditTrace, AuditTrailBuilder, AuditWarning, Severity
from award_engine.calculators.day_segmenter import DaySegmenter
from award_engine.calculators.overtime_splitter import OvertimeSplitter
from award_engine.calculators.penalty_calculator import PenaltyCalculator
from award_engine.calculators.rate_resolver import RateResolver

__all__ = [
    "AllowanceEngine",
    "AllowanceKind",
    "AuditStep",
    "AuditTrace",
    "AuditTrailBuilder",
    "AuditWarning",
    "DaySegmenter",
    "OvertimeSplitter",
    "PayAggregator",
    "PenaltyCalculator",
    "RateResolver",
    "Severity",
]
