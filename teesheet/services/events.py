"""
teesheet/services/events.py

Tee-sheet events, pushed to the Redis list `events:p2p` for downstream
consumers (notifications, live tee-sheet views).

  timeframes_updated    tee_sheet_id, owner, owner_id, weekday
  tee_sheet_generated   tee_sheet_id, generated, source, date
  hold_created          hold
  hold_released         user_id
  hold_expired          user_id

Emission is fire-and-forget: a Redis failure is logged and the caller
carries on.
"""

import json
import time
import logging

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

EVENTS_QUEUE = "events:p2p"

EVENT_TYPES = frozenset({
    "timeframes_updated",
    "tee_sheet_generated",
    "hold_created",
    "hold_released",
    "hold_expired",
})


def build_event(event_type: str, payload: dict, now: float | None = None) -> dict:
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown event type: {event_type}")
    ts = now if now is not None else time.time()
    return {"type": event_type, **payload, "ts": int(ts)}


def emit_event(event_type: str, payload: dict) -> bool:
    """Queue an event. Returns False when Redis rejected it."""
    event = build_event(event_type, payload)
    try:
        redis_client.rpush(EVENTS_QUEUE, json.dumps(event, default=str))
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
        return False
    logger.info(f"Event emitted: {event_type} → {EVENTS_QUEUE}")
    return True
