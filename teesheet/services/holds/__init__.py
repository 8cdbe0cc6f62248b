# teesheet/services/holds/__init__.py
"""
Cart holds: pure timer plus Redis-backed store and sweeper.
"""

from .timer import CartHold, is_expired, now_ms, remaining_seconds
from .redis_store import HoldConflictError, HoldRedisStore

__all__ = [
    "CartHold",
    "is_expired",
    "now_ms",
    "remaining_seconds",
    "HoldConflictError",
    "HoldRedisStore",
]
