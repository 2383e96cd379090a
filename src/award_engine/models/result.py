"""Calculation result model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from award_engine.models.pay_period import PayPeriod

if TYPE_CHECKING:
    from award_engine.calculators.audit import AuditTrace
    from award_engine.calculators.types import AllowancePayment, PayLine, PayTotals


@dataclass(frozen=True)
class CalculationResult:
    """Result of calculating pay for one employee over one pay period.

    Fully determined by the inputs, the award configuration, the engine
    version and the clock.
    """

    calculation_id: UUID
    timestamp: datetime
    engine_version: str
    employee_id: str
    pay_period: PayPeriod
    pay_lines: tuple[PayLine, ...]
    allowances: tuple[AllowancePayment, ...]
    totals: PayTotals
    audit_trace: AuditTrace
    inputs_fingerprint: str

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "calculation_id": str(self.calculation_id),
            "timestamp": self.timestamp.isoformat(),
            "engine_version": self.engine_version,
            "employee_id": self.employee_id,
            "pay_period": self.pay_period.to_dict(),
            "pay_lines": [line.to_dict() for line in self.pay_lines],
            "allowances": [a.to_dict() for a in self.allowances],
            "totals": self.totals.to_dict(),
            "audit_trace": self.audit_trace.to_dict(),
            "inputs_fingerprint": self.inputs_fingerprint,
        }
