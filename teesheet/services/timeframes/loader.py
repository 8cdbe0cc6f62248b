# teesheet/services/timeframes/loader.py
"""
Load stored tee-sheet configuration as resolver values.

ORM rows → Template / Season / Override with validated bands.
Rows with malformed times are skipped and logged; stored sets are
re-checked for overlaps so bad legacy data shows up in the logs.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ...models import TeeSheetOverrides, TeeSheetSeasons, TeeSheetTemplates, Timeframes
from .errors import TimeframeError
from .intervals import TimeInterval, make_interval
from .overlap import validate_timeframe_set
from .resolver import EffectiveTimeframe, Override, Season, Template, resolve

logger = logging.getLogger(__name__)


def load_effective_timeframes(
    db: Session,
    tee_sheet_id: int,
    target_date: date,
) -> EffectiveTimeframe:
    """Resolve the effective bands for a tee sheet on a date."""
    date_str = target_date.isoformat()

    season_rows = (
        db.query(TeeSheetSeasons)
        .filter(
            TeeSheetSeasons.tee_sheet_id == tee_sheet_id,
            TeeSheetSeasons.start_date <= date_str,
            TeeSheetSeasons.end_date_exclusive > date_str,
        )
        .order_by(TeeSheetSeasons.created_at, TeeSheetSeasons.id)
        .all()
    )
    override_rows = (
        db.query(TeeSheetOverrides)
        .filter(
            TeeSheetOverrides.tee_sheet_id == tee_sheet_id,
            TeeSheetOverrides.date == date_str,
        )
        .all()
    )

    return resolve(
        target_date,
        seasons=[season_from_row(row) for row in season_rows],
        overrides=[override_from_row(row) for row in override_rows],
        template_default=default_template(db, tee_sheet_id),
    )


def default_template(db: Session, tee_sheet_id: int) -> Optional[Template]:
    row = (
        db.query(TeeSheetTemplates)
        .filter(
            TeeSheetTemplates.tee_sheet_id == tee_sheet_id,
            TeeSheetTemplates.is_default == 1,
        )
        .order_by(TeeSheetTemplates.id.desc())
        .first()
    )
    return template_from_row(row) if row else None


# ── Row conversion ───────────────────────────────────────────────────────


def template_from_row(row: TeeSheetTemplates) -> Template:
    return Template(
        id=row.id,
        name=row.name,
        color=row.color,
        timeframe_set=intervals_from_rows(row.timeframes, f"template {row.id}"),
        interval_mins=row.interval_mins or 10,
    )


def season_from_row(row: TeeSheetSeasons) -> Season:
    by_weekday = _rows_by_weekday(row.timeframes)
    base_rows = by_weekday.pop(None, [])
    return Season(
        id=row.id,
        name=row.name,
        color=row.color,
        start_date=date.fromisoformat(row.start_date),
        end_date_exclusive=date.fromisoformat(row.end_date_exclusive),
        timeframe_set=intervals_from_rows(base_rows, f"season {row.id}"),
        created_at=_parse_timestamp(row.created_at),
        interval_mins=row.interval_mins,
        weekday_sets={
            weekday: intervals_from_rows(rows, f"season {row.id} weekday {weekday}")
            for weekday, rows in by_weekday.items()
        },
    )


def season_windows(row: TeeSheetSeasons) -> dict[Optional[int], list[tuple[str, str]]]:
    """Raw stored windows keyed by weekday (None = base set), unparsed."""
    return {
        weekday: [(tf.start_time_local, tf.end_time_local) for tf in rows]
        for weekday, rows in _rows_by_weekday(row.timeframes).items()
    }


def override_from_row(row: TeeSheetOverrides) -> Override:
    bands = intervals_from_rows(row.timeframes, f"override {row.id}")
    return Override(
        id=row.id,
        name=row.name,
        color=row.color,
        date=date.fromisoformat(row.date),
        timeframe_set=bands if row.timeframes else None,
        interval_mins=row.interval_mins,
    )


def intervals_from_rows(rows: Iterable[Timeframes], owner: str) -> tuple[TimeInterval, ...]:
    """Stored timeframe rows → intervals in position order."""
    intervals: list[TimeInterval] = []
    for tf in sorted(rows, key=lambda r: (r.position, r.id or 0)):
        try:
            intervals.append(make_interval(tf.start_time_local, tf.end_time_local))
        except TimeframeError as e:
            logger.warning(f"Skipping timeframe {tf.id} of {owner}: {e}")

    for error in validate_timeframe_set(intervals):
        logger.warning(f"Stored timeframes of {owner} conflict: {error}")

    return tuple(intervals)


def _rows_by_weekday(rows: Iterable[Timeframes]) -> dict[Optional[int], list[Timeframes]]:
    grouped: dict[Optional[int], list[Timeframes]] = {}
    for tf in sorted(rows, key=lambda r: (r.position, r.id or 0)):
        grouped.setdefault(tf.weekday, []).append(tf)
    return grouped


def _parse_timestamp(value) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", ""))
    except ValueError:
        return None
