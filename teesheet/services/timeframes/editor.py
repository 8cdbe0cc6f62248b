# teesheet/services/timeframes/editor.py
"""
Timeframe editor state.

An immutable snapshot of a band set plus one pending candidate
(start/end strings as typed). Every transition returns a new state with
`errors` recomputed, so validation runs on each keystroke with no debounce.

    state = TimeframeEditorState.create(bands)
    state, errors = apply_edit(state, "start", "07:30")
    new_set = state.commit()    # raises ValidationError when errors exist

A UI or API handler renders `errors` (empty tuple = valid).
"""

from dataclasses import dataclass, replace
from typing import Iterable, Literal, Optional

from .errors import OverlapError, TimeframeError, ValidationError
from .intervals import TimeInterval, make_interval
from .overlap import validate_set

Field = Literal["start", "end"]

REQUIRED_MESSAGE = "Start and end times are required"


@dataclass(frozen=True)
class TimeframeEditorState:
    intervals: tuple[TimeInterval, ...] = ()
    pending_start: str = ""
    pending_end: str = ""
    edit_index: Optional[int] = None
    errors: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        intervals: Iterable[TimeInterval] = (),
        pending_start: str = "",
        pending_end: str = "",
        edit_index: Optional[int] = None,
    ) -> "TimeframeEditorState":
        state = cls(
            intervals=tuple(intervals),
            pending_start=pending_start,
            pending_end=pending_end,
            edit_index=None,
        )
        if edit_index is not None:
            state = replace(state, edit_index=state._position(edit_index))
        return state._revalidated()

    # ── Derived ──────────────────────────────────────────────────────────

    @property
    def is_complete(self) -> bool:
        return bool(self.pending_start.strip()) and bool(self.pending_end.strip())

    @property
    def candidate(self) -> Optional[TimeInterval]:
        """Parsed pending interval, or None if incomplete/malformed."""
        if not self.is_complete:
            return None
        try:
            return make_interval(self.pending_start, self.pending_end)
        except TimeframeError:
            return None

    @property
    def is_valid(self) -> bool:
        return self.is_complete and not self.errors

    # ── Transitions ──────────────────────────────────────────────────────

    def set_field(self, which: Field, value: str) -> "TimeframeEditorState":
        if which == "start":
            return replace(self, pending_start=value)._revalidated()
        if which == "end":
            return replace(self, pending_end=value)._revalidated()
        raise ValueError(f"field must be 'start' or 'end', got {which!r}")

    def begin_edit(self, index: int) -> "TimeframeEditorState":
        """Load the band at `index` as the pending candidate."""
        index = self._position(index)
        interval = self.intervals[index]
        return replace(
            self,
            pending_start=interval.start_str,
            pending_end=interval.end_str,
            edit_index=index,
        )._revalidated()

    def cancel_edit(self) -> "TimeframeEditorState":
        return replace(self, pending_start="", pending_end="", edit_index=None, errors=())

    def commit(self) -> tuple[TimeInterval, ...]:
        """
        Apply the pending candidate.

        Replaces the band at `edit_index`, or appends when not editing.

        Raises:
            ValidationError: candidate is incomplete, malformed or overlapping.
        """
        if not self.is_complete:
            raise ValidationError([REQUIRED_MESSAGE])
        if self.errors:
            raise ValidationError(list(self.errors))

        candidate = make_interval(self.pending_start, self.pending_end)
        bands = list(self.intervals)
        if self.edit_index is None:
            bands.append(candidate)
        else:
            bands[self.edit_index] = candidate
        return tuple(bands)

    def add_interval(self, interval: TimeInterval) -> "TimeframeEditorState":
        try:
            validate_set(interval, self.intervals)
        except OverlapError as e:
            raise ValidationError([str(e)]) from e
        return replace(self, intervals=self.intervals + (interval,))._revalidated()

    def remove_interval(self, index: int) -> "TimeframeEditorState":
        index = self._position(index)

        bands = self.intervals[:index] + self.intervals[index + 1:]
        edit_index = self.edit_index
        if edit_index == index:
            edit_index = None
        elif edit_index is not None and edit_index > index:
            edit_index -= 1
        return replace(self, intervals=bands, edit_index=edit_index)._revalidated()

    # ── Internal ─────────────────────────────────────────────────────────

    def _position(self, index: int) -> int:
        # Negative indexes count from the end; stored edit_index is always >= 0
        if not -len(self.intervals) <= index < len(self.intervals):
            raise IndexError(f"no timeframe at index {index}")
        return index % len(self.intervals)

    def _revalidated(self) -> "TimeframeEditorState":
        return replace(self, errors=tuple(self._collect_errors()))

    def _collect_errors(self) -> list[str]:
        # Nothing to report until both fields have been filled in
        if not self.is_complete:
            return []
        try:
            candidate = make_interval(self.pending_start, self.pending_end)
            validate_set(candidate, self.intervals, exclude_index=self.edit_index)
        except TimeframeError as e:
            return [str(e)]
        return []


def apply_edit(
    state: TimeframeEditorState,
    which: Field,
    value: str,
) -> tuple[TimeframeEditorState, list[str]]:
    """Pure transition: (state, edit) → (new_state, errors)."""
    new_state = state.set_field(which, value)
    return new_state, list(new_state.errors)


def committed_state(state: TimeframeEditorState) -> TimeframeEditorState:
    """Commit and return a fresh editor over the new set."""
    return TimeframeEditorState.create(state.commit())
