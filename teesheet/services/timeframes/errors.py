# teesheet/services/timeframes/errors.py
"""
Error taxonomy for timeframe editing and resolution.

All of these are recoverable, user-facing validation outcomes.
ConfigurationWarning is attached to results and logged, never raised.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .intervals import TimeInterval


class TimeframeError(Exception):
    """Base class for timeframe validation errors."""


class ParseError(TimeframeError):
    """Malformed "HH:MM" string."""

    def __init__(self, value: str, reason: str = "expected HH:MM"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid time {value!r}: {reason}")


class InvalidIntervalError(TimeframeError):
    """Interval whose start is not before its end."""

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"End {end} must be after start {start}")


class OverlapError(TimeframeError):
    """Candidate band overlaps an existing one."""

    def __init__(self, conflict: "TimeInterval", index: int | None = None):
        self.conflict = conflict
        self.index = index
        super().__init__(f"Overlaps {conflict.label}")


class ValidationError(TimeframeError):
    """Editor commit rejected; carries the rendered error messages."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Validation failed")


class ConfigurationWarning(UserWarning):
    """Ambiguous stored configuration (e.g. two seasons covering one date)."""

    def __init__(self, message: str, code: str = "ambiguous_season"):
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        return self.message
