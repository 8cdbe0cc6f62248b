# teesheet/services/holds/timer.py
"""
Cart hold timer.

Pure function of two millisecond timestamps; no callbacks, no timers.
Callers re-evaluate on every UI tick or sweep pass and release the hold
themselves once nothing is left.
"""

import time
from dataclasses import dataclass, field

DEFAULT_TTL_SECONDS = 300


def remaining_seconds(created_at: int, now: int, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> int:
    """max(0, ttl - whole seconds elapsed since created_at)."""
    elapsed = (now - created_at) // 1000
    return max(0, ttl_seconds - elapsed)


def is_expired(created_at: int, now: int, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> bool:
    return remaining_seconds(created_at, now, ttl_seconds) == 0


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CartHold:
    user_id: int
    created_at: int
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    source: str = "checkout"
    items: tuple[dict, ...] = field(default=())

    def remaining(self, now: int | None = None) -> int:
        return remaining_seconds(self.created_at, now if now is not None else now_ms(), self.ttl_seconds)

    def expired(self, now: int | None = None) -> bool:
        return self.remaining(now) == 0

    def to_payload(self) -> dict:
        return {
            "user_id": self.user_id,
            "source": self.source,
            "items": [dict(item) for item in self.items],
            "created_at": self.created_at,
            "ttl_seconds": self.ttl_seconds,
        }

    @classmethod
    def from_payload(cls, payload: dict) -> "CartHold":
        return cls(
            user_id=int(payload["user_id"]),
            created_at=int(payload["created_at"]),
            ttl_seconds=int(payload.get("ttl_seconds", DEFAULT_TTL_SECONDS)),
            source=payload.get("source", "checkout"),
            items=tuple(payload.get("items", [])),
        )
