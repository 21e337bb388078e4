"""Core data model and widgets for floater depth profiles."""

from floater_profile.core.levels import (
    DataShapeError,
    DisplayLevel,
    LevelMeasurement,
    ProfileResponse,
    ProfileSummary,
    normalize_levels,
)
from floater_profile.core.summary import SummaryStats, ValueRange, summarize_levels

__all__ = [
    "LevelMeasurement",
    "DisplayLevel",
    "ProfileSummary",
    "ProfileResponse",
    "DataShapeError",
    "normalize_levels",
    "SummaryStats",
    "ValueRange",
    "summarize_levels",
]
