# teesheet/routers/timeframes.py
"""
Timeframe (band) endpoints for templates, seasons and overrides.

GET  /tee-sheets/{sheet_id}/{owner}/{owner_id}/timeframes            - stored bands
PUT  /tee-sheets/{sheet_id}/{owner}/{owner_id}/timeframes            - replace the set
POST /tee-sheets/{sheet_id}/{owner}/{owner_id}/timeframes/validate   - one editor step

owner: templates | seasons | overrides
Seasons also take ?weekday=0..6 (0 = Sunday) on GET/PUT to address one
day's windows; without it the base set is meant.
Rejected saves answer 400 with detail {"errors": [...]}.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import (
    TeeSheetOverrides as DBOverrides,
    TeeSheetSeasons as DBSeasons,
    TeeSheetTemplates as DBTemplates,
    Timeframes as DBTimeframes,
)
from ..schemas.timeframes import (
    TimeframeRead,
    TimeframeSetUpdate,
    TimeframeValidateRequest,
    TimeframeValidateResponse,
)
from ..services.events import emit_event
from ..services.timeframes import (
    TimeframeEditorState,
    TimeframeError,
    TimeInterval,
    ValidationError,
    apply_edit,
    make_interval,
    validate_timeframe_set,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tee-sheets/{sheet_id}", tags=["timeframes"])

Owner = Literal["templates", "seasons", "overrides"]

_OWNERS = {
    "templates": DBTemplates,
    "seasons": DBSeasons,
    "overrides": DBOverrides,
}


def _get_owner(db: Session, sheet_id: int, owner: str, owner_id: int):
    obj = db.get(_OWNERS[owner], owner_id)
    if not obj or obj.tee_sheet_id != sheet_id:
        raise HTTPException(status_code=404, detail=f"{owner[:-1].capitalize()} not found")
    return obj


def _parse_bands(pairs) -> tuple[list[TimeInterval], list[str]]:
    """Parse every band, collecting one message per bad row."""
    bands: list[TimeInterval] = []
    errors: list[str] = []
    for index, pair in enumerate(pairs):
        try:
            bands.append(make_interval(pair.start_time_local, pair.end_time_local))
        except TimeframeError as e:
            errors.append(f"Timeframe {index + 1}: {e}")
    return bands, errors


def _weekday_rows(obj, owner: str, weekday: Optional[int]) -> list[DBTimeframes]:
    """Rows of the addressed set: a season weekday, or the base set."""
    if weekday is not None and owner != "seasons":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Weekday windows are only supported on seasons",
        )
    return [tf for tf in obj.timeframes if tf.weekday == weekday]


def _reject(errors: list[str]):
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"errors": errors},
    )


@router.get("/{owner}/{owner_id}/timeframes", response_model=list[TimeframeRead])
def list_timeframes(
    sheet_id: int,
    owner: Owner,
    owner_id: int,
    weekday: Optional[int] = Query(None, ge=0, le=6),
    db: Session = Depends(get_db),
):
    obj = _get_owner(db, sheet_id, owner, owner_id)
    return _weekday_rows(obj, owner, weekday)


@router.put("/{owner}/{owner_id}/timeframes", response_model=list[TimeframeRead])
def replace_timeframes(
    sheet_id: int,
    owner: Owner,
    owner_id: int,
    data: TimeframeSetUpdate,
    weekday: Optional[int] = Query(None, ge=0, le=6),
    db: Session = Depends(get_db),
):
    """
    Validate the whole set, then replace stored bands in one transaction.

    `weekday` (seasons only, 0 = Sunday) addresses that day's windows;
    without it the base set is replaced. Other sets are left alone.
    """
    obj = _get_owner(db, sheet_id, owner, owner_id)
    _weekday_rows(obj, owner, weekday)

    bands, errors = _parse_bands(data.timeframes)
    if errors:
        _reject(errors)

    state = TimeframeEditorState.create()
    try:
        for band in bands:
            state = state.add_interval(band)
    except ValidationError:
        _reject([str(e) for e in validate_timeframe_set(bands)])

    obj.timeframes[:] = [tf for tf in obj.timeframes if tf.weekday != weekday]
    db.flush()
    for position, band in enumerate(state.intervals):
        obj.timeframes.append(DBTimeframes(
            weekday=weekday,
            position=position,
            start_time_local=band.start_str,
            end_time_local=band.end_str,
        ))
    db.commit()
    db.refresh(obj)

    logger.info(
        f"Timeframes saved: sheet={sheet_id} {owner}={owner_id} weekday={weekday} "
        f"bands={[band.label for band in state.intervals]}"
    )
    emit_event("timeframes_updated", {
        "tee_sheet_id": sheet_id,
        "owner": owner,
        "owner_id": owner_id,
        "weekday": weekday,
    })
    return _weekday_rows(obj, owner, weekday)


@router.post(
    "/{owner}/{owner_id}/timeframes/validate",
    response_model=TimeframeValidateResponse,
)
def validate_timeframe(
    sheet_id: int,
    owner: Owner,
    owner_id: int,
    data: TimeframeValidateRequest,
    db: Session = Depends(get_db),
):
    """Run one editor step and return its errors without saving."""
    _get_owner(db, sheet_id, owner, owner_id)

    bands, errors = _parse_bands(data.timeframes)
    if errors:
        _reject(errors)

    state = TimeframeEditorState.create(bands)
    if data.edit_index is not None:
        try:
            state = state.begin_edit(data.edit_index)
        except IndexError:
            _reject([f"No timeframe at index {data.edit_index}"])

    state, _ = apply_edit(state, "start", data.start)
    state, errors = apply_edit(state, "end", data.end)

    return TimeframeValidateResponse(valid=state.is_valid, errors=errors)
