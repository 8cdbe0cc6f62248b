# teesheet/routers/seasons.py

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TeeSheets as DBTeeSheets, TeeSheetSeasons as DBSeasons
from ..schemas.seasons import (
    SeasonCreate,
    SeasonPrevalidationResponse,
    SeasonRead,
    SeasonUpdate,
    SeasonViolationRead,
)
from ..services.timeframes.loader import season_windows
from ..services.timeframes.prevalidation import prevalidate_season

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tee-sheets/{sheet_id}/seasons", tags=["seasons"])


def _get_season(db: Session, sheet_id: int, season_id: int) -> DBSeasons:
    obj = db.get(DBSeasons, season_id)
    if not obj or obj.tee_sheet_id != sheet_id:
        raise HTTPException(status_code=404, detail="Season not found")
    return obj


def _overlapping_seasons(db: Session, sheet_id: int, season: DBSeasons) -> list[int]:
    """Ids of other seasons whose date range intersects this one."""
    rows = (
        db.query(DBSeasons.id)
        .filter(
            DBSeasons.tee_sheet_id == sheet_id,
            DBSeasons.id != season.id,
            DBSeasons.start_date < season.end_date_exclusive,
            DBSeasons.end_date_exclusive > season.start_date,
        )
        .all()
    )
    return [row.id for row in rows]


def _warn_on_overlap(db: Session, sheet_id: int, season: DBSeasons) -> None:
    # Allowed, but resolution falls back to the newest season; flag it for review
    others = _overlapping_seasons(db, sheet_id, season)
    if others:
        logger.warning(
            f"Season {season.id} on sheet {sheet_id} overlaps season(s) {others}; "
            f"the most recently created one wins on shared dates"
        )


@router.get("/", response_model=list[SeasonRead])
def list_seasons(sheet_id: int, db: Session = Depends(get_db)):
    if not db.get(DBTeeSheets, sheet_id):
        raise HTTPException(status_code=404, detail="Tee sheet not found")
    return (
        db.query(DBSeasons)
        .filter(DBSeasons.tee_sheet_id == sheet_id)
        .order_by(DBSeasons.start_date, DBSeasons.id)
        .all()
    )


@router.get("/{season_id}", response_model=SeasonRead)
def get_season(sheet_id: int, season_id: int, db: Session = Depends(get_db)):
    return _get_season(db, sheet_id, season_id)


@router.post("/", response_model=SeasonRead, status_code=status.HTTP_201_CREATED)
def create_season(
    sheet_id: int,
    data: SeasonCreate,
    db: Session = Depends(get_db),
):
    if not db.get(DBTeeSheets, sheet_id):
        raise HTTPException(status_code=404, detail="Tee sheet not found")

    obj = DBSeasons(
        tee_sheet_id=sheet_id,
        name=data.name,
        color=data.color,
        start_date=data.start_date.isoformat(),
        end_date_exclusive=data.end_date_exclusive.isoformat(),
        interval_mins=data.interval_mins,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    _warn_on_overlap(db, sheet_id, obj)
    return obj


@router.put("/{season_id}", response_model=SeasonRead)
def update_season(
    sheet_id: int,
    season_id: int,
    data: SeasonUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_season(db, sheet_id, season_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in ("color", "interval_mins"):
            continue
        if field in ("start_date", "end_date_exclusive"):
            value = value.isoformat()
        setattr(obj, field, value)

    if obj.end_date_exclusive <= obj.start_date:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date_exclusive must be after start_date",
        )

    db.commit()
    db.refresh(obj)
    _warn_on_overlap(db, sheet_id, obj)
    return obj


@router.delete("/{season_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_season(sheet_id: int, season_id: int, db: Session = Depends(get_db)):
    obj = _get_season(db, sheet_id, season_id)
    db.delete(obj)
    db.commit()


@router.get("/{season_id}/prevalidate", response_model=SeasonPrevalidationResponse)
def prevalidate(sheet_id: int, season_id: int, db: Session = Depends(get_db)):
    """Check the windows of every date the season covers."""
    obj = _get_season(db, sheet_id, season_id)
    violations = prevalidate_season(
        date.fromisoformat(obj.start_date),
        date.fromisoformat(obj.end_date_exclusive),
        season_windows(obj),
    )
    if violations:
        logger.warning(
            f"Season {season_id} on sheet {sheet_id} has {len(violations)} "
            f"violation(s), first on {violations[0].date}"
        )
    return SeasonPrevalidationResponse(
        ok=not violations,
        violations=[SeasonViolationRead.model_validate(v) for v in violations],
    )
