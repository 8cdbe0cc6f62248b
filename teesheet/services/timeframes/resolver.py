# teesheet/services/timeframes/resolver.py
"""
Season / override resolution.

Priority for a calendar date:
  1. Override on exactly that date carrying its own bands
  2. Season whose [start_date, end_date_exclusive) contains the date
  3. Default template
  4. Nothing (empty set, source None)

Color: override → season → template → None.
Spacing (interval_mins): the source that supplied the bands, else the
default template.

A season may carry per-weekday windows (0 = Sunday .. 6 = Saturday); a
weekday without its own windows uses the season's base set.

Seasons are not assumed disjoint: when several cover the date, the most
recently created wins and a ConfigurationWarning is attached.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Optional, Sequence

from .errors import ConfigurationWarning
from .intervals import TimeInterval

logger = logging.getLogger(__name__)

Source = Literal["override", "season", "template"]


@dataclass(frozen=True)
class Template:
    id: int
    name: str = "Untitled Template"
    color: Optional[str] = None
    timeframe_set: tuple[TimeInterval, ...] = ()
    interval_mins: int = 10


@dataclass(frozen=True)
class Season:
    id: int
    start_date: date
    end_date_exclusive: date
    name: str = "Untitled Season"
    color: Optional[str] = None
    timeframe_set: tuple[TimeInterval, ...] = ()
    created_at: Optional[datetime] = None
    interval_mins: Optional[int] = None
    weekday_sets: dict[int, tuple[TimeInterval, ...]] = field(default_factory=dict, hash=False)

    def covers(self, target_date: date) -> bool:
        return self.start_date <= target_date < self.end_date_exclusive

    def bands_for(self, target_date: date) -> tuple[TimeInterval, ...]:
        return self.weekday_sets.get(weekday_of(target_date), self.timeframe_set)


@dataclass(frozen=True)
class Override:
    id: int
    date: date
    name: str = "Untitled Override"
    color: Optional[str] = None
    # None = defer to the active season's bands
    timeframe_set: Optional[tuple[TimeInterval, ...]] = None
    interval_mins: Optional[int] = None


@dataclass(frozen=True)
class EffectiveTimeframe:
    timeframe_set: tuple[TimeInterval, ...]
    color: Optional[str]
    source: Optional[Source]
    source_id: Optional[int] = None
    interval_mins: Optional[int] = None
    warnings: tuple[ConfigurationWarning, ...] = field(default=())


def resolve(
    target_date: date,
    seasons: Sequence[Season],
    overrides: Sequence[Override],
    template_default: Optional[Template] = None,
) -> EffectiveTimeframe:
    """Resolve the effective bands and color for `target_date`."""
    override = _find_override(target_date, overrides)
    season, warnings = _select_season(target_date, seasons)

    fallback_color = _first_color(
        season.color if season else None,
        template_default.color if template_default else None,
    )
    template_interval = template_default.interval_mins if template_default else None

    if override is not None and override.timeframe_set is not None:
        return EffectiveTimeframe(
            timeframe_set=tuple(override.timeframe_set),
            color=_first_color(override.color, fallback_color),
            source="override",
            source_id=override.id,
            interval_mins=override.interval_mins or template_interval,
            warnings=warnings,
        )

    override_color = override.color if override else None

    if season is not None:
        return EffectiveTimeframe(
            timeframe_set=tuple(season.bands_for(target_date)),
            color=_first_color(override_color, fallback_color),
            source="season",
            source_id=season.id,
            interval_mins=season.interval_mins or template_interval,
            warnings=warnings,
        )

    if template_default is not None:
        return EffectiveTimeframe(
            timeframe_set=tuple(template_default.timeframe_set),
            color=_first_color(override_color, template_default.color),
            source="template",
            source_id=template_default.id,
            interval_mins=template_interval,
            warnings=warnings,
        )

    return EffectiveTimeframe(
        timeframe_set=(),
        color=override_color,
        source=None,
        warnings=warnings,
    )


# ── Helpers ──────────────────────────────────────────────────────────────


def weekday_of(target_date: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return (target_date.weekday() + 1) % 7


def _find_override(target_date: date, overrides: Sequence[Override]) -> Optional[Override]:
    for ovr in overrides:
        if ovr.date == target_date:
            return ovr
    return None


def _select_season(
    target_date: date,
    seasons: Sequence[Season],
) -> tuple[Optional[Season], tuple[ConfigurationWarning, ...]]:
    matching = [s for s in seasons if s.covers(target_date)]
    if not matching:
        return None, ()
    if len(matching) == 1:
        return matching[0], ()

    # Newest wins; id breaks ties between rows created in the same second
    chosen = max(matching, key=lambda s: (s.created_at or datetime.min, s.id))
    ids = ", ".join(str(s.id) for s in matching)
    warning = ConfigurationWarning(
        f"Seasons {ids} all cover {target_date.isoformat()}; using season {chosen.id}"
    )
    logger.warning(str(warning))
    return chosen, (warning,)


def _first_color(*colors: Optional[str]) -> Optional[str]:
    for color in colors:
        if color:
            return color
    return None
