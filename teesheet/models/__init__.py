from .tee_sheets import (
    Base,
    GolfCourseInstances,
    TeeSheets,
    TeeSheetTemplates,
    TeeSheetSeasons,
    TeeSheetOverrides,
    Timeframes,
    TeeTimes,
)

__all__ = [
    "Base",
    "GolfCourseInstances",
    "TeeSheets",
    "TeeSheetTemplates",
    "TeeSheetSeasons",
    "TeeSheetOverrides",
    "Timeframes",
    "TeeTimes",
]
