# teesheet/services/timeframes/intervals.py
"""
Time interval model.

A band is a half-open interval [start, end) in minutes of day:
  0 <= start < end <= 1440

"24:00" is accepted only as an end bound.
"""

import re
from dataclasses import dataclass

from .errors import InvalidIntervalError, ParseError

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str, allow_end_of_day: bool = False) -> int:
    """
    Parse "HH:MM" into minutes of day.

    Raises:
        ParseError: non-numeric parts, wrong shape, hour > 23, minute > 59.
    """
    if not isinstance(value, str):
        raise ParseError(str(value), "expected a string")

    match = _TIME_RE.match(value.strip())
    if not match:
        raise ParseError(value)

    hour, minute = int(match.group(1)), int(match.group(2))

    if allow_end_of_day and hour == 24 and minute == 0:
        return MINUTES_PER_DAY
    if hour > 23:
        raise ParseError(value, "hour must be 00-23")
    if minute > 59:
        raise ParseError(value, "minute must be 00-59")

    return hour * 60 + minute


def format_time(minutes: int) -> str:
    """Convert minutes of day to zero-padded "HH:MM"."""
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True, order=True)
class TimeInterval:
    start: int
    end: int

    def __post_init__(self):
        if not (0 <= self.start < MINUTES_PER_DAY and 0 < self.end <= MINUTES_PER_DAY):
            raise ValueError(f"interval bounds out of range: {self.start}-{self.end}")
        if self.start >= self.end:
            raise InvalidIntervalError(format_time(self.start), format_time(self.end))

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def start_str(self) -> str:
        return format_time(self.start)

    @property
    def end_str(self) -> str:
        return format_time(self.end)

    @property
    def label(self) -> str:
        """Display form, e.g. "07:00–08:00"."""
        return f"{self.start_str}–{self.end_str}"

    def to_pair(self) -> tuple[str, str]:
        return self.start_str, self.end_str


def make_interval(start: str, end: str) -> TimeInterval:
    """
    Build a validated interval from two "HH:MM" strings.

    Raises:
        ParseError: either bound is malformed.
        InvalidIntervalError: start >= end.
    """
    start_min = parse_time(start)
    end_min = parse_time(end, allow_end_of_day=True)
    if start_min >= end_min:
        raise InvalidIntervalError(start, end)
    return TimeInterval(start_min, end_min)


def parse_pairs(pairs) -> list[TimeInterval]:
    """[["07:00", "08:00"], ...] → list of intervals, order preserved."""
    return [make_interval(start, end) for start, end in pairs]
