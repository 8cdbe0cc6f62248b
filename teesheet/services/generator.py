# teesheet/services/generator.py
"""
Tee-time generation for a single date.

Resolves the effective bands (override → season → template), then
creates one TeeTimes row per start time, spaced by the interval of the
source that supplied the bands (falling back to the default template):

  start, start + interval, ... strictly before band end

Existing rows are left untouched, so regenerating a date is idempotent.
"""

import logging
from datetime import date
from typing import Iterator, Sequence

from sqlalchemy.orm import Session

from ..models import TeeTimes
from .timeframes.config import TimeframeConfig, get_timeframe_config
from .timeframes.intervals import TimeInterval, format_time
from .timeframes.loader import load_effective_timeframes

logger = logging.getLogger(__name__)


def iter_start_times(bands: Sequence[TimeInterval], interval_mins: int) -> Iterator[int]:
    """Start minutes for every band, in band order."""
    if interval_mins <= 0:
        raise ValueError(f"interval_mins must be positive, got {interval_mins}")
    for band in bands:
        t = band.start
        while t < band.end:
            yield t
            t += interval_mins


def generate_for_date(
    db: Session,
    tee_sheet_id: int,
    target_date: date,
    config: TimeframeConfig | None = None,
) -> dict:
    """
    Create missing tee times for a date.

    Returns:
        {"generated": int, "source": str | None, "date": "YYYY-MM-DD"}
    """
    config = config or get_timeframe_config()
    effective = load_effective_timeframes(db, tee_sheet_id, target_date)
    interval = effective.interval_mins or config.default_interval_mins

    date_str = target_date.isoformat()
    existing = {
        row.start_time
        for row in db.query(TeeTimes.start_time).filter(
            TeeTimes.tee_sheet_id == tee_sheet_id,
            TeeTimes.start_time.like(f"{date_str} %"),
        )
    }

    generated = 0
    for minute in iter_start_times(effective.timeframe_set, interval):
        start_time = f"{date_str} {format_time(minute)}"
        if start_time in existing:
            continue
        db.add(TeeTimes(
            tee_sheet_id=tee_sheet_id,
            start_time=start_time,
            capacity=config.tee_time_capacity,
            assigned_count=0,
            is_blocked=0,
        ))
        existing.add(start_time)
        generated += 1

    db.commit()

    logger.info(
        f"Generated {generated} tee time(s) for sheet={tee_sheet_id} "
        f"date={date_str} source={effective.source}"
    )

    return {"generated": generated, "source": effective.source, "date": date_str}


def is_date_clean(db: Session, tee_sheet_id: int, target_date: date) -> bool:
    """True when no tee time on the date has players assigned."""
    booked = (
        db.query(TeeTimes.id)
        .filter(
            TeeTimes.tee_sheet_id == tee_sheet_id,
            TeeTimes.start_time.like(f"{target_date.isoformat()} %"),
            TeeTimes.assigned_count > 0,
        )
        .first()
    )
    return booked is None

