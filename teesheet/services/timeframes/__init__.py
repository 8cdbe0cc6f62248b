# teesheet/services/timeframes/__init__.py
"""
Tee-sheet timeframe engine.

Pure core: intervals, overlap validation, editor state, season/override
resolution. `loader` bridges stored rows into the core.
"""

from .config import TimeframeConfig, get_timeframe_config
from .errors import (
    ConfigurationWarning,
    InvalidIntervalError,
    OverlapError,
    ParseError,
    TimeframeError,
    ValidationError,
)
from .intervals import TimeInterval, format_time, make_interval, parse_time
from .overlap import find_conflict, overlaps, validate_set, validate_timeframe_set
from .editor import TimeframeEditorState, apply_edit
from .resolver import EffectiveTimeframe, Override, Season, Template, resolve

__all__ = [
    "TimeframeConfig",
    "get_timeframe_config",
    "ConfigurationWarning",
    "InvalidIntervalError",
    "OverlapError",
    "ParseError",
    "TimeframeError",
    "ValidationError",
    "TimeInterval",
    "format_time",
    "make_interval",
    "parse_time",
    "find_conflict",
    "overlaps",
    "validate_set",
    "validate_timeframe_set",
    "TimeframeEditorState",
    "apply_edit",
    "EffectiveTimeframe",
    "Override",
    "Season",
    "Template",
    "resolve",
]
