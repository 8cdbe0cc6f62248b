# teesheet/services/timeframes/config.py
"""
Engine constants for tee-sheet generation and cart holds.
"""

from dataclasses import dataclass
from functools import lru_cache

from ...config import settings


@dataclass(frozen=True)
class TimeframeConfig:
    """
    Configuration for the tee-sheet engine.

    Attributes:
        default_interval_mins: Tee-time spacing when a template has none
        hold_ttl_seconds: Cart hold lifetime
        max_party_size: Players per cart item
        tee_time_capacity: Players per generated tee time
    """
    default_interval_mins: int = 10
    hold_ttl_seconds: int = 300
    max_party_size: int = 4
    tee_time_capacity: int = 4

    def __post_init__(self):
        """Validate configuration."""
        if not 1 <= self.default_interval_mins <= 60:
            raise ValueError(
                f"default_interval_mins must be 1..60, got {self.default_interval_mins}"
            )
        if self.hold_ttl_seconds <= 0:
            raise ValueError(f"hold_ttl_seconds must be positive, got {self.hold_ttl_seconds}")


@lru_cache
def get_timeframe_config() -> TimeframeConfig:
    """Engine configuration (singleton), hold TTL taken from settings."""
    return TimeframeConfig(hold_ttl_seconds=settings.cart_hold_ttl_seconds)
