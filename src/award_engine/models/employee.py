"""Employee model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


class EmploymentType(str, Enum):
    """Employment type values."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CASUAL = "casual"


@dataclass(frozen=True)
class Employee:
    """Employee being paid.

    ``base_hourly_rate``, when set, overrides the classification rate lookup.
    ``tags`` gate tag-based entitlements such as allowances.
    """

    id: str
    employment_type: EmploymentType
    classification_code: str
    date_of_birth: date
    employment_start_date: date
    base_hourly_rate: Decimal | None = None
    tags: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_casual(self) -> bool:
        return self.employment_type is EmploymentType.CASUAL

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "employment_type": self.employment_type.value,
            "classification_code": self.classification_code,
            "date_of_birth": self.date_of_birth.isoformat(),
            "employment_start_date": self.employment_start_date.isoformat(),
            "base_hourly_rate": (
                str(self.base_hourly_rate) if self.base_hourly_rate is not None else None
            ),
            "tags": sorted(self.tags),
        }
