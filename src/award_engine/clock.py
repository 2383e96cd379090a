"""Injectable clock.

The engine never calls ``datetime.now()`` directly. Timestamps and elapsed
durations come from a ``Clock`` so that a ``DeterministicClock`` makes a
calculation reproducible byte for byte.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Abstract clock interface."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware UTC time."""
        ...


class SystemClock(Clock):
    """Production clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """Clock returning a fixed time until advanced.

    Used in tests and replay verification.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        self._advance_microseconds = 0

    def now(self) -> datetime:
        return self._fixed_time + timedelta(microseconds=self._advance_microseconds)

    def advance(self, microseconds: int = 1) -> None:
        """Advance the clock by the given number of microseconds."""
        self._advance_microseconds += microseconds
