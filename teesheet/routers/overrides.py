# teesheet/routers/overrides.py
# One override per (tee sheet, date); deleting it reverts the date to its season.

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TeeSheets as DBTeeSheets, TeeSheetOverrides as DBOverrides
from ..schemas.overrides import OverrideCreate, OverrideRead, OverrideUpdate

router = APIRouter(prefix="/tee-sheets/{sheet_id}/overrides", tags=["overrides"])


def _get_override(db: Session, sheet_id: int, override_id: int) -> DBOverrides:
    obj = db.get(DBOverrides, override_id)
    if not obj or obj.tee_sheet_id != sheet_id:
        raise HTTPException(status_code=404, detail="Override not found")
    return obj


@router.get("/", response_model=list[OverrideRead])
def list_overrides(sheet_id: int, db: Session = Depends(get_db)):
    if not db.get(DBTeeSheets, sheet_id):
        raise HTTPException(status_code=404, detail="Tee sheet not found")
    return (
        db.query(DBOverrides)
        .filter(DBOverrides.tee_sheet_id == sheet_id)
        .order_by(DBOverrides.date)
        .all()
    )


@router.get("/{override_id}", response_model=OverrideRead)
def get_override(sheet_id: int, override_id: int, db: Session = Depends(get_db)):
    return _get_override(db, sheet_id, override_id)


@router.post("/", response_model=OverrideRead, status_code=status.HTTP_201_CREATED)
def create_override(
    sheet_id: int,
    data: OverrideCreate,
    db: Session = Depends(get_db),
):
    if not db.get(DBTeeSheets, sheet_id):
        raise HTTPException(status_code=404, detail="Tee sheet not found")

    date_str = data.date.isoformat()
    exists = (
        db.query(DBOverrides.id)
        .filter(DBOverrides.tee_sheet_id == sheet_id, DBOverrides.date == date_str)
        .first()
    )
    if exists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Override already exists for {date_str}",
        )

    obj = DBOverrides(
        tee_sheet_id=sheet_id,
        date=date_str,
        name=data.name,
        color=data.color,
        interval_mins=data.interval_mins,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put("/{override_id}", response_model=OverrideRead)
def update_override(
    sheet_id: int,
    override_id: int,
    data: OverrideUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_override(db, sheet_id, override_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{override_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_override(sheet_id: int, override_id: int, db: Session = Depends(get_db)):
    obj = _get_override(db, sheet_id, override_id)
    db.delete(obj)
    db.commit()
