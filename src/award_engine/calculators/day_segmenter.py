"""Split shifts at calendar-day boundaries."""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from decimal import Decimal

from award_engine.calculators.audit import AuditTrailBuilder
from award_engine.calculators.types import ZERO, DayType, ShiftSegment, format_decimal
from award_engine.errors import CalculationError
from award_engine.models.shift import MICROSECONDS_PER_HOUR, Shift, microseconds_between

logger = logging.getLogger(__name__)

SEGMENTATION_CLAUSE = "23"


def _next_midnight(moment: datetime) -> datetime:
    return datetime.combine(moment.date() + timedelta(days=1), time.min)


class DaySegmenter:
    """Cuts a shift into one segment per calendar day it touches.

    Day type comes from each segment's own date, not the shift's nominal
    date. Unpaid breaks are removed from whichever segment(s) they overlap;
    a break spanning midnight is apportioned by wall-clock overlap. Paid
    breaks are never removed.
    """

    def segment(self, shift: Shift) -> list[ShiftSegment]:
        """Return the shift's segments in chronological order.

        Raises:
            CalculationError: the segments do not reproduce the shift's raw
                span or its break-adjusted worked time
        """
        unpaid = [b for b in shift.breaks if not b.paid]
        segments: list[ShiftSegment] = []
        allocated = ZERO

        cursor = shift.start
        while cursor < shift.end:
            boundary = min(_next_midnight(cursor), shift.end)
            if boundary == shift.end:
                # The last segment takes the remainder so the hours sum exactly.
                hours = shift.worked_hours() - allocated
            else:
                span = microseconds_between(cursor, boundary)
                removed = sum(b.overlap_microseconds(cursor, boundary) for b in unpaid)
                hours = Decimal(span - removed) / MICROSECONDS_PER_HOUR
            allocated += hours
            segments.append(
                ShiftSegment(
                    shift_id=shift.id,
                    start=cursor,
                    end=boundary,
                    day_type=DayType.for_date(cursor.date()),
                    hours=hours,
                )
            )
            cursor = boundary

        self._check(shift, segments)
        return segments

    def segment_with_audit(
        self, shift: Shift, audit: AuditTrailBuilder
    ) -> list[ShiftSegment]:
        """Segment a shift and record a shift_segmentation step."""
        segments = self.segment(shift)
        if len(segments) == 1:
            reasoning = (
                f"Shift is entirely within {segments[0].day_type.label} "
                "- no midnight crossing"
            )
        else:
            parts = ", ".join(
                f"{s.day_type.label}: {format_decimal(s.hours)}h" for s in segments
            )
            reasoning = f"Shift crosses midnight: split into {len(segments)} segments ({parts})"

        audit.record(
            rule_id="shift_segmentation",
            rule_name="Shift Day Segmentation",
            clause_ref=SEGMENTATION_CLAUSE,
            input={
                "shift_id": shift.id,
                "start_time": shift.start,
                "end_time": shift.end,
                "total_hours": shift.worked_hours(),
            },
            output={
                "segment_count": len(segments),
                "segments": [
                    {
                        "date": s.date,
                        "day_type": s.day_type,
                        "span_hours": s.span_hours,
                        "hours": s.hours,
                        "start_time": s.start,
                        "end_time": s.end,
                    }
                    for s in segments
                ],
            },
            reasoning=reasoning,
        )
        logger.debug("Shift %s split into %d segment(s)", shift.id, len(segments))
        return segments

    @staticmethod
    def _check(shift: Shift, segments: list[ShiftSegment]) -> None:
        span = sum(microseconds_between(s.start, s.end) for s in segments)
        if span != shift.raw_microseconds:
            raise CalculationError(
                f"segments of shift '{shift.id}' span {span}us, "
                f"shift spans {shift.raw_microseconds}us"
            )
        worked = sum((s.hours for s in segments), ZERO)
        if worked != shift.worked_hours():
            raise CalculationError(
                f"segments of shift '{shift.id}' hold {worked}h worked, "
                f"shift has {shift.worked_hours()}h"
            )
        if any(s.hours < 0 for s in segments):
            raise CalculationError(f"negative segment hours in shift '{shift.id}'")
        for s in segments:
            if s.end.date() != s.start.date() and s.end.time() != time.min:
                raise CalculationError(f"segment of shift '{shift.id}' crosses midnight")
