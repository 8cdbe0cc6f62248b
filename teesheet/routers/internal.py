# teesheet/routers/internal.py
"""
Internal API endpoints for trusted consumers.

Disabled unless ENABLE_INTERNAL_ENDPOINTS is set; localhost only.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..models import TeeSheets as DBTeeSheets
from ..schemas.tee_sheets import GenerateResponse
from ..services.events import emit_event
from ..services.generator import generate_for_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal", tags=["internal"])

LOCAL_HOSTS = ("127.0.0.1", "localhost", "::1", None)


@router.post("/generate", response_model=GenerateResponse)
def generate_tee_times(
    request: Request,
    tee_sheet_id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    """Generate tee times for one date from its resolved bands."""
    if not settings.enable_internal_endpoints:
        raise HTTPException(status_code=404, detail="Not found")

    client_host = request.client.host if request.client else None
    if client_host not in LOCAL_HOSTS:
        logger.warning(f"Internal endpoint called from non-localhost: {client_host}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Internal endpoints are only accessible from localhost"
        )

    if not db.get(DBTeeSheets, tee_sheet_id):
        raise HTTPException(status_code=404, detail="Tee sheet not found")

    result = generate_for_date(db, tee_sheet_id, target_date)

    emit_event("tee_sheet_generated", {"tee_sheet_id": tee_sheet_id, **result})

    return GenerateResponse(**result)
