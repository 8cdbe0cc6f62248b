# teesheet/routers/templates.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TeeSheets as DBTeeSheets, TeeSheetTemplates as DBTemplates
from ..schemas.templates import TemplateCreate, TemplateRead, TemplateUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tee-sheets/{sheet_id}/templates", tags=["templates"])


def _get_sheet(db: Session, sheet_id: int) -> DBTeeSheets:
    sheet = db.get(DBTeeSheets, sheet_id)
    if not sheet:
        raise HTTPException(status_code=404, detail="Tee sheet not found")
    return sheet


def _get_template(db: Session, sheet_id: int, template_id: int) -> DBTemplates:
    obj = db.get(DBTemplates, template_id)
    if not obj or obj.tee_sheet_id != sheet_id:
        raise HTTPException(status_code=404, detail="Template not found")
    return obj


def _clear_default(db: Session, sheet_id: int, keep_id: int | None = None) -> None:
    """Only one default template per tee sheet."""
    query = db.query(DBTemplates).filter(
        DBTemplates.tee_sheet_id == sheet_id,
        DBTemplates.is_default == 1,
    )
    if keep_id is not None:
        query = query.filter(DBTemplates.id != keep_id)
    query.update({DBTemplates.is_default: 0}, synchronize_session="fetch")


@router.get("/", response_model=list[TemplateRead])
def list_templates(sheet_id: int, db: Session = Depends(get_db)):
    _get_sheet(db, sheet_id)
    return (
        db.query(DBTemplates)
        .filter(DBTemplates.tee_sheet_id == sheet_id)
        .order_by(DBTemplates.created_at, DBTemplates.id)
        .all()
    )


@router.get("/{template_id}", response_model=TemplateRead)
def get_template(sheet_id: int, template_id: int, db: Session = Depends(get_db)):
    return _get_template(db, sheet_id, template_id)


@router.post("/", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(
    sheet_id: int,
    data: TemplateCreate,
    db: Session = Depends(get_db),
):
    _get_sheet(db, sheet_id)
    if data.is_default:
        _clear_default(db, sheet_id)

    obj = DBTemplates(
        tee_sheet_id=sheet_id,
        name=data.name,
        color=data.color,
        interval_mins=data.interval_mins,
        is_default=int(data.is_default),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    logger.info(f"Template created: id={obj.id} sheet={sheet_id} name={obj.name!r}")
    return obj


@router.put("/{template_id}", response_model=TemplateRead)
def update_template(
    sheet_id: int,
    template_id: int,
    data: TemplateUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_template(db, sheet_id, template_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        if field == "is_default":
            if value:
                _clear_default(db, sheet_id, keep_id=obj.id)
            value = int(bool(value))
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(sheet_id: int, template_id: int, db: Session = Depends(get_db)):
    obj = _get_template(db, sheet_id, template_id)
    db.delete(obj)
    db.commit()
