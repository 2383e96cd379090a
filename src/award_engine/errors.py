"""Engine error taxonomy.

Any error aborts the whole calculation for that employee and period; the
engine never returns a partial result.

- ConfigurationError: rate resolution or award configuration cannot complete
- ValidationError: structurally invalid input
- CalculationError: internal invariant violation (a defect)
"""

from __future__ import annotations

from datetime import date


class EngineError(Exception):
    """Base class for all engine errors."""

    code = "ENGINE_ERROR"


class ConfigurationError(EngineError):
    """Raised when the award configuration cannot satisfy a lookup."""

    code = "CONFIG_ERROR"


class ConfigNotFound(ConfigurationError):
    """Raised when a configuration file or directory is missing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Configuration file not found: {path}")


class ConfigParseError(ConfigurationError):
    """Raised when a configuration file cannot be parsed."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Failed to parse configuration file '{path}': {message}")


class ClassificationNotFound(ConfigurationError):
    """Raised when a classification code is absent from the award."""

    code = "CLASSIFICATION_NOT_FOUND"

    def __init__(self, classification_code: str):
        self.classification_code = classification_code
        super().__init__(f"Classification not found: {classification_code}")


class RateNotFound(ConfigurationError):
    """Raised when no rate is effective on or before the requested date."""

    code = "RATE_NOT_FOUND"

    def __init__(self, classification: str, as_of_date: date):
        self.classification = classification
        self.as_of_date = as_of_date
        super().__init__(
            f"Rate not found for classification '{classification}' on date {as_of_date}"
        )


class ValidationError(EngineError):
    """Raised on structurally invalid input."""

    code = "VALIDATION_ERROR"


class InvalidShift(ValidationError):
    """Raised when a shift or one of its breaks is malformed."""

    code = "INVALID_SHIFT"

    def __init__(self, shift_id: str, reason: str):
        self.shift_id = shift_id
        self.reason = reason
        super().__init__(f"Invalid shift '{shift_id}': {reason}")


class InvalidEmployee(ValidationError):
    """Raised when an employee field is malformed."""

    code = "INVALID_EMPLOYEE"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid employee field '{field}': {reason}")


class CalculationError(EngineError):
    """Raised on an internal invariant violation."""

    code = "CALCULATION_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Calculation error: {message}")
