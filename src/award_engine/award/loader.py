"""YAML award configuration loader.

Reads an award directory laid out as::

    award.yaml            metadata
    classifications.yaml  classification table
    penalties.yaml        weekend penalties and overtime rules
    rates/*.yaml          one rate schedule per effective date

and builds an immutable ``AwardConfig``. This is the only place in the
package that touches the filesystem for award data; the engine receives the
finished config.

Failure modes:
    * Missing file, directory, or empty ``rates/`` -> ``ConfigNotFound``
    * Malformed YAML, missing key, bad value      -> ``ConfigParseError``
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

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
from award_engine.errors import ConfigNotFound, ConfigParseError

logger = logging.getLogger(__name__)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping.

    Raises:
        ConfigNotFound: the file does not exist
        ConfigParseError: the file is not valid YAML or not a mapping
    """
    if not path.is_file():
        raise ConfigNotFound(str(path))
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigParseError(str(path), "top-level value must be a mapping")
    return data


def parse_decimal(value: Any) -> Decimal:
    """Parse a decimal from its string form so YAML floats keep their digits."""
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse decimal from {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Cannot parse decimal from {value!r}") from None


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_metadata(data: dict[str, Any]) -> AwardMetadata:
    return AwardMetadata(
        code=str(data["code"]),
        name=str(data["name"]),
        version=str(data["version"]),
        source_url=str(data["source_url"]),
    )


def parse_classifications(data: dict[str, Any]) -> dict[str, Classification]:
    return {
        code: Classification(
            code=code,
            name=str(entry["name"]),
            description=str(entry.get("description", "")),
            clause=str(entry["clause"]),
        )
        for code, entry in data["classifications"].items()
    }


def parse_employment_rates(data: dict[str, Any]) -> EmploymentRates:
    return EmploymentRates(
        full_time=parse_decimal(data["full_time"]),
        part_time=parse_decimal(data["part_time"]),
        casual=parse_decimal(data["casual"]),
    )


def parse_penalty_rates(data: dict[str, Any]) -> PenaltyRates:
    return PenaltyRates(
        full_time=parse_decimal(data["full_time"]),
        part_time=parse_decimal(data["part_time"]),
        casual=parse_decimal(data["casual"]),
        clause=str(data["clause"]),
    )


def parse_overtime(data: dict[str, Any]) -> OvertimeConfig:
    """Parse the ``overtime`` section of penalties.yaml."""
    weekday = data["weekday"]
    weekend = data["weekend"]
    return OvertimeConfig(
        daily_threshold_hours=parse_decimal(data["daily_threshold_hours"]),
        weekday_tier_hours=parse_decimal(weekday.get("tier_hours", 2)),
        weekday_clause=str(weekday["clause"]),
        first_two_hours=parse_employment_rates(weekday["first_two_hours"]),
        after_two_hours=parse_employment_rates(weekday["after_two_hours"]),
        weekend_clause=str(weekend["clause"]),
        weekend=parse_employment_rates(weekend["rates"]),
    )


def parse_rate_schedule(data: dict[str, Any]) -> RateSchedule:
    rates = {
        code: ClassificationRate(
            weekly=parse_decimal(entry["weekly"]),
            hourly=parse_decimal(entry["hourly"]),
        )
        for code, entry in data["rates"].items()
    }
    allowances = {
        key: AllowanceRate(
            per_shift=parse_decimal(entry["per_shift"]),
            weekly_cap=parse_decimal(entry["weekly_cap"]),
        )
        for key, entry in (data.get("allowances") or {}).items()
    }
    return RateSchedule(
        effective_date=parse_date(data["effective_date"]),
        rates=rates,
        allowances=allowances,
    )


class ConfigLoader:
    """Builds an ``AwardConfig`` from an award directory."""

    @classmethod
    def load(cls, path: str | Path) -> AwardConfig:
        root = Path(path)
        metadata = cls._parse(root / "award.yaml", parse_metadata)
        classifications = cls._parse(root / "classifications.yaml", parse_classifications)

        penalties_path = root / "penalties.yaml"
        penalties = load_yaml_file(penalties_path)
        try:
            saturday = parse_penalty_rates(penalties["penalties"]["saturday"])
            sunday = parse_penalty_rates(penalties["penalties"]["sunday"])
            overtime = parse_overtime(penalties["overtime"])
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigParseError(str(penalties_path), _describe(e)) from e

        schedules = cls._load_rates(root / "rates")

        config = AwardConfig(
            metadata=metadata,
            classifications=classifications,
            rate_schedules=tuple(schedules),
            saturday=saturday,
            sunday=sunday,
            overtime=overtime,
        )
        logger.info(
            "Loaded award %s version %s (%d classifications, %d rate schedules)",
            metadata.code,
            metadata.version,
            len(classifications),
            len(schedules),
        )
        return config

    @classmethod
    def _load_rates(cls, rates_dir: Path) -> list[RateSchedule]:
        if not rates_dir.is_dir():
            raise ConfigNotFound(str(rates_dir))
        schedules = [
            cls._parse(rate_file, parse_rate_schedule)
            for rate_file in sorted(rates_dir.glob("*.yaml"))
        ]
        if not schedules:
            raise ConfigNotFound(f"{rates_dir} (no rate files found)")
        return schedules

    @staticmethod
    def _parse(path: Path, parser):
        data = load_yaml_file(path)
        try:
            return parser(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigParseError(str(path), _describe(e)) from e


def _describe(error: Exception) -> str:
    if isinstance(error, KeyError):
        return f"missing key {error.args[0]!r}"
    return str(error)
