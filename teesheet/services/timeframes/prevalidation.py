# teesheet/services/timeframes/prevalidation.py
"""
Season prevalidation.

Walks every date of [start_date, end_date_exclusive) and checks the
windows that date would use: the weekday's own windows, else the
season's base set. A date with no windows at all is skipped (it falls
through to the default template).

Violation codes:
  invalid_timeframe   a stored row does not parse or has start >= end
  overlap             two windows of the date's set intersect
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Mapping, Optional, Sequence

from .errors import TimeframeError
from .intervals import TimeInterval, make_interval
from .overlap import validate_timeframe_set
from .resolver import weekday_of

Window = tuple[str, str]


@dataclass(frozen=True)
class SeasonViolation:
    date: date
    weekday: Optional[int]
    code: str
    message: str


def season_dates(start_date: date, end_date_exclusive: date) -> Iterator[date]:
    day = start_date
    while day < end_date_exclusive:
        yield day
        day += timedelta(days=1)


def prevalidate_season(
    start_date: date,
    end_date_exclusive: date,
    windows: Mapping[Optional[int], Sequence[Window]],
) -> list[SeasonViolation]:
    """
    Check a season's windows on every date it covers.

    Args:
        windows: raw ("HH:MM", "HH:MM") pairs keyed by weekday,
            None for the base set.
    """
    # Each set is checked once; dates only decide which set applies
    problems = {key: _set_problems(pairs) for key, pairs in windows.items() if pairs}

    violations: list[SeasonViolation] = []
    for day in season_dates(start_date, end_date_exclusive):
        weekday = weekday_of(day)
        key = weekday if weekday in problems else None
        for code, message in problems.get(key, ()):
            violations.append(SeasonViolation(day, key, code, message))
    return violations


def _set_problems(pairs: Sequence[Window]) -> list[tuple[str, str]]:
    problems: list[tuple[str, str]] = []
    bands: list[TimeInterval] = []
    for index, (start, end) in enumerate(pairs):
        try:
            bands.append(make_interval(start, end))
        except TimeframeError as e:
            problems.append(("invalid_timeframe", f"Timeframe {index + 1}: {e}"))
    problems.extend(("overlap", str(e)) for e in validate_timeframe_set(bands))
    return problems
