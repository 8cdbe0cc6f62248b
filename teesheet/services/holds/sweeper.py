"""
Cart hold sweeper.

Periodically releases holds whose timer has run out and emits a
hold_expired event for each one. Several sweepers may run at once
(one per worker); HoldRedisStore.release lets only one of them win.

Runs as an asyncio task in the app lifespan.
Uses synchronous Redis (via asyncio.to_thread).
"""

import asyncio
import logging

from ...config import settings
from ...redis_client import redis_client
from ..events import emit_event
from .redis_store import HoldRedisStore
from .timer import now_ms

logger = logging.getLogger(__name__)


async def hold_sweeper_loop() -> None:
    """Periodic loop releasing expired cart holds."""
    logger.info("hold_sweeper_loop started")

    try:
        while True:
            try:
                await asyncio.to_thread(sweep_expired_holds)
            except asyncio.CancelledError:
                logger.info("hold_sweeper_loop cancelled")
                raise
            except Exception:
                logger.exception("hold_sweeper_loop error")

            await asyncio.sleep(settings.hold_sweep_interval_seconds)
    except asyncio.CancelledError:
        pass


def sweep_expired_holds(store: HoldRedisStore | None = None, now: int | None = None) -> list[int]:
    """
    Release every expired hold (synchronous).

    Returns:
        User ids whose holds this call actually released.
    """
    store = store or HoldRedisStore(redis_client)
    now = now if now is not None else now_ms()

    cutoff = store.expiry_cutoff(now)

    released = []
    for user_id in store.expired_user_ids(now):
        try:
            if store.release(user_id, created_before=cutoff):
                released.append(user_id)
                emit_event("hold_expired", {"user_id": user_id})
        except Exception:
            logger.exception(f"Error releasing hold for user {user_id}")

    if released:
        logger.info(f"Released {len(released)} expired hold(s): {released}")
    return released
