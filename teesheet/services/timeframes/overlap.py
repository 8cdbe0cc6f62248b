# teesheet/services/timeframes/overlap.py
"""
Overlap validation for timeframe sets.

Intervals are half-open: touching endpoints (a.end == b.start) do not overlap.
Conflicts are reported in insertion order of the existing set.
"""

from typing import Optional, Sequence

from .errors import OverlapError
from .intervals import TimeInterval


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    return a.start < b.end and b.start < a.end


def find_conflict(
    candidate: TimeInterval,
    existing: Sequence[TimeInterval],
    exclude_index: Optional[int] = None,
) -> Optional[tuple[int, TimeInterval]]:
    """
    First member of `existing` that overlaps `candidate`.

    Args:
        candidate: Proposed interval
        existing: Current set, in insertion order
        exclude_index: Index being replaced (editing in place), skipped

    Returns:
        (index, interval) of the first conflict, or None.
    """
    for index, other in enumerate(existing):
        if index == exclude_index:
            continue
        if overlaps(candidate, other):
            return index, other
    return None


def validate_set(
    candidate: TimeInterval,
    existing: Sequence[TimeInterval],
    exclude_index: Optional[int] = None,
) -> None:
    """Raise OverlapError for the first conflict; return None when clean."""
    conflict = find_conflict(candidate, existing, exclude_index)
    if conflict is not None:
        index, other = conflict
        raise OverlapError(other, index)


def validate_timeframe_set(intervals: Sequence[TimeInterval]) -> list[OverlapError]:
    """
    Check a whole set pairwise.

    Each later member is checked against the ones before it, so the
    reported conflict is always the earlier-inserted band.
    """
    errors: list[OverlapError] = []
    for index, interval in enumerate(intervals):
        conflict = find_conflict(interval, intervals[:index])
        if conflict is not None:
            errors.append(OverlapError(conflict[1], conflict[0]))
    return errors
