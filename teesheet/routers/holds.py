# teesheet/routers/holds.py
"""
Cart holds.

POST   /holds/cart            - hold tee times for checkout (TTL 300s)
GET    /holds/cart/{user_id}  - active hold with remaining seconds
DELETE /holds/cart/{user_id}  - release
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TeeTimes as DBTeeTimes
from ..redis_client import redis_client
from ..schemas.holds import HoldCreate, HoldCreateResponse, HoldRead
from ..services.events import emit_event
from ..services.holds import CartHold, HoldConflictError, HoldRedisStore, now_ms
from ..services.timeframes.config import get_timeframe_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/holds", tags=["holds"])


def get_hold_store() -> HoldRedisStore:
    return HoldRedisStore(redis_client)


def _hold_read(hold: CartHold, now: int) -> HoldRead:
    return HoldRead(
        user_id=hold.user_id,
        source=hold.source,
        items=list(hold.items),
        created_at=hold.created_at,
        ttl_seconds=hold.ttl_seconds,
        remaining_seconds=hold.remaining(now),
    )


@router.post("/cart", response_model=HoldCreateResponse)
def create_cart_hold(
    data: HoldCreate,
    db: Session = Depends(get_db),
    store: HoldRedisStore = Depends(get_hold_store),
):
    max_party = get_timeframe_config().max_party_size
    if any(item.party_size > max_party for item in data.items):
        raise HTTPException(
            status_code=422,
            detail=f"party_size must be at most {max_party}",
        )

    # Capacity check for every requested tee time
    ids = [item.tee_time_id for item in data.items]
    rows = db.query(DBTeeTimes).filter(DBTeeTimes.id.in_(ids)).all()
    row_by_id = {row.id: row for row in rows}

    for item in data.items:
        row = row_by_id.get(item.tee_time_id)
        if not row:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"TeeTime not found: {item.tee_time_id}",
            )
        if row.is_blocked or row.capacity - row.assigned_count < item.party_size:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Insufficient capacity for one or more items",
            )

    now = now_ms()
    try:
        hold = store.create_hold(
            data.user_id,
            [item.model_dump() for item in data.items],
            source=data.source,
            now=now,
        )
    except HoldConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    logger.info(f"Hold created: user={data.user_id} source={data.source} items={ids}")
    emit_event("hold_created", {"hold": hold.to_payload()})

    return HoldCreateResponse(
        expires_in_seconds=hold.ttl_seconds,
        hold=_hold_read(hold, now),
    )


@router.get("/cart/{user_id}", response_model=HoldRead)
def get_cart_hold(
    user_id: int,
    store: HoldRedisStore = Depends(get_hold_store),
):
    now = now_ms()
    hold = store.get_hold(user_id)
    if hold is None or hold.expired(now):
        raise HTTPException(status_code=404, detail="No active hold")
    return _hold_read(hold, now)


@router.delete("/cart/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def release_cart_hold(
    user_id: int,
    store: HoldRedisStore = Depends(get_hold_store),
):
    if store.release(user_id):
        emit_event("hold_released", {"user_id": user_id})
