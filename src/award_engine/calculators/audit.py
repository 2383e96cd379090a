"""Audit trail for a single calculation.

One ``AuditTrailBuilder`` is threaded through every stage of a calculation.
Steps are numbered in the order they are recorded, which is the causal order
of the pipeline:

    base rate lookup -> casual loading -> day segmentation ->
    overtime detection -> ordinary/penalty lines -> overtime tier lines ->
    allowances

Inputs and outputs are snapshotted into plain JSON-safe values when a step is
recorded, so the finished trace never refers back into calculation state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from award_engine.calculators.types import format_decimal


class Severity(str, Enum):
    """Warning severities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def snapshot(value: Any) -> Any:
    """Deep-copy a value into JSON-safe primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return format_decimal(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): snapshot(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [snapshot(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(snapshot(v) for v in value)
    return value


@dataclass(frozen=True)
class AuditStep:
    """One applied rule."""

    step_number: int
    rule_id: str
    rule_name: str
    clause_ref: str
    input: dict[str, Any]
    output: dict[str, Any]
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_number": self.step_number,
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "clause_ref": self.clause_ref,
            "input": snapshot(self.input),
            "output": snapshot(self.output),
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class AuditWarning:
    """A condition worth flagging that does not stop the calculation."""

    code: str
    message: str
    severity: Severity

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "severity": self.severity.value}


@dataclass(frozen=True)
class AuditTrace:
    """Ordered, replayable record of every rule applied."""

    steps: tuple[AuditStep, ...]
    warnings: tuple[AuditWarning, ...]
    duration_us: int

    def steps_for(self, rule_id: str) -> list[AuditStep]:
        return [s for s in self.steps if s.rule_id == rule_id]

    def to_dict(self) -> dict[str, Any]:
        return {
            "steps": [s.to_dict() for s in self.steps],
            "warnings": [w.to_dict() for w in self.warnings],
            "duration_us": self.duration_us,
        }


class AuditTrailBuilder:
    """Append-only step log shared by all stages of one calculation."""

    def __init__(self) -> None:
        self._steps: list[AuditStep] = []
        self._warnings: list[AuditWarning] = []

    @property
    def steps(self) -> tuple[AuditStep, ...]:
        return tuple(self._steps)

    @property
    def warnings(self) -> tuple[AuditWarning, ...]:
        return tuple(self._warnings)

    def record(
        self,
        rule_id: str,
        rule_name: str,
        clause_ref: str,
        input: Mapping[str, Any],
        output: Mapping[str, Any],
        reasoning: str,
    ) -> AuditStep:
        """Append a step and return it."""
        step = AuditStep(
            step_number=len(self._steps) + 1,
            rule_id=rule_id,
            rule_name=rule_name,
            clause_ref=clause_ref,
            input=snapshot(input),
            output=snapshot(output),
            reasoning=reasoning,
        )
        self._steps.append(step)
        return step

    def warn(self, code: str, message: str, severity: Severity = Severity.MEDIUM) -> AuditWarning:
        warning = AuditWarning(code=code, message=message, severity=severity)
        self._warnings.append(warning)
        return warning

    def build(self, duration_us: int) -> AuditTrace:
        """Freeze the log into an immutable trace."""
        return AuditTrace(
            steps=tuple(self._steps),
            warnings=tuple(self._warnings),
            duration_us=duration_us,
        )
