# teesheet/routers/tee_sheets.py
"""
Tee-sheet level views.

GET /tee-sheets/check-clean          - date has no booked tee times
GET /tee-sheets/{sheet_id}/effective - resolved bands for a date
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TeeSheets as DBTeeSheets
from ..schemas.tee_sheets import CheckCleanResponse, EffectiveTimeframeResponse, TimeWindow
from ..services.generator import is_date_clean
from ..services.timeframes.loader import load_effective_timeframes

router = APIRouter(prefix="/tee-sheets", tags=["tee_sheets"])


@router.get("/check-clean", response_model=CheckCleanResponse)
def check_clean(
    tee_sheet_id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    """Whether regenerating `date` would leave existing bookings untouched."""
    if not db.get(DBTeeSheets, tee_sheet_id):
        raise HTTPException(status_code=404, detail="Tee sheet not found")
    return CheckCleanResponse(
        clean=is_date_clean(db, tee_sheet_id, target_date),
        date=target_date,
    )


@router.get("/{sheet_id}/effective", response_model=EffectiveTimeframeResponse)
def get_effective_timeframes(
    sheet_id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    if not db.get(DBTeeSheets, sheet_id):
        raise HTTPException(status_code=404, detail="Tee sheet not found")

    effective = load_effective_timeframes(db, sheet_id, target_date)

    return EffectiveTimeframeResponse(
        tee_sheet_id=sheet_id,
        date=target_date,
        source=effective.source,
        source_id=effective.source_id,
        color=effective.color,
        interval_mins=effective.interval_mins,
        timeframes=[
            TimeWindow(start=band.start_str, end=band.end_str)
            for band in effective.timeframe_set
        ],
        warnings=[str(w) for w in effective.warnings],
    )
