# teesheet/services/holds/redis_store.py
"""
Redis storage for cart holds.

Key format: hold:user:{user_id}
Value: JSON payload, SETEX with the hold TTL (one active hold per user).

Index: holds:index, a Sorted Set, member = user_id, score = created_at (ms).
The sweeper reads the index to find holds due for release. Release re-checks
the indexed created_at under WATCH and ZREM decides which caller wins, so a
hold is released at most once and a renewed hold is never released.
"""

import json
import logging
from redis import Redis
from redis.exceptions import WatchError

from ..timeframes.config import TimeframeConfig, get_timeframe_config
from .timer import CartHold, now_ms

logger = logging.getLogger(__name__)


class HoldConflictError(Exception):
    """An active hold prevents creating a new one."""


class HoldRedisStore:
    """Redis wrapper for cart holds."""

    KEY_PREFIX = "hold:user"
    INDEX_KEY = "holds:index"

    def __init__(self, redis: Redis, config: TimeframeConfig | None = None):
        self.redis = redis
        self.config = config or get_timeframe_config()

    def _key(self, user_id: int) -> str:
        return f"{self.KEY_PREFIX}:{user_id}"

    # ── Write ────────────────────────────────────────────────────────────

    def create_hold(
        self,
        user_id: int,
        items: list[dict],
        source: str = "checkout",
        now: int | None = None,
    ) -> CartHold:
        """
        Store a hold for the user, replacing any previous checkout hold.

        Raises:
            HoldConflictError: an active waitlist hold preempts a checkout hold.
        """
        now = now if now is not None else now_ms()

        existing = self.get_hold(user_id)
        if existing and not existing.expired(now):
            if existing.source == "waitlist" and source != "waitlist":
                raise HoldConflictError("Waitlist hold in progress")

        hold = CartHold(
            user_id=user_id,
            created_at=now,
            ttl_seconds=self.config.hold_ttl_seconds,
            source=source,
            items=tuple(items),
        )

        pipe = self.redis.pipeline()
        pipe.setex(self._key(user_id), hold.ttl_seconds, json.dumps(hold.to_payload()))
        pipe.zadd(self.INDEX_KEY, {str(user_id): hold.created_at})
        pipe.execute()

        return hold

    def release(self, user_id: int, created_before: int | None = None) -> bool:
        """
        Release the user's hold.

        With `created_before`, only a hold created at or before that
        timestamp (ms) is released; a hold renewed in the meantime is kept.
        Index entry and payload are checked and removed under WATCH, so a
        concurrent write aborts the release instead of deleting the new hold.

        Returns:
            True only for the caller whose ZREM removed the index entry.
        """
        member = str(user_id)
        key = self._key(user_id)

        if created_before is None:
            removed = self.redis.zrem(self.INDEX_KEY, member)
            self.redis.delete(key)
            return bool(removed)

        with self.redis.pipeline() as pipe:
            try:
                pipe.watch(self.INDEX_KEY, key)
                score = pipe.zscore(self.INDEX_KEY, member)
                if score is None or score > created_before:
                    pipe.unwatch()
                    return False
                pipe.multi()
                pipe.zrem(self.INDEX_KEY, member)
                pipe.delete(key)
                removed, _ = pipe.execute()
            except WatchError:
                logger.info(f"Hold for user {user_id} changed during release; kept")
                return False
        return bool(removed)

    def expiry_cutoff(self, now: int | None = None) -> int:
        """Holds created at or before this timestamp (ms) have run out."""
        now = now if now is not None else now_ms()
        return now - self.config.hold_ttl_seconds * 1000

    # ── Read ─────────────────────────────────────────────────────────────

    def get_hold(self, user_id: int) -> CartHold | None:
        raw = self.redis.get(self._key(user_id))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        try:
            return CartHold.from_payload(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning(f"Corrupt hold payload for user {user_id}")
            return None

    def expired_user_ids(self, now: int | None = None) -> list[int]:
        """Users whose holds were created at least one TTL ago."""
        cutoff = self.expiry_cutoff(now)
        members = self.redis.zrangebyscore(self.INDEX_KEY, "-inf", cutoff)
        return [int(m.decode() if isinstance(m, bytes) else m) for m in members]
