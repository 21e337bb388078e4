"""Descriptive statistics over a normalized depth profile."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from floater_profile.core.levels import DisplayLevel


@dataclass(frozen=True)
class ValueRange:
    """Closed [min, max] range of a measured quantity."""

    min: float
    max: float

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class SummaryStats:
    """Summary of a depth profile.

    Attributes
    ----------
    total_levels : int
        Number of displayed levels.
    max_depth : float
        Deepest ``depth_m`` across all levels.
    temp_range : ValueRange, optional
        Temperature range, or None when no level has a temperature.
    sal_range : ValueRange, optional
        Salinity (psal) range, or None when no level has a salinity.
    """

    total_levels: int
    max_depth: float
    temp_range: Optional[ValueRange] = None
    sal_range: Optional[ValueRange] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalLevels": self.total_levels,
            "maxDepth": self.max_depth,
            "tempRange": self.temp_range.to_dict() if self.temp_range else None,
            "salRange": self.sal_range.to_dict() if self.sal_range else None,
        }


def _value_range(values: Sequence[float]) -> Optional[ValueRange]:
    if not values:
        return None
    return ValueRange(min=min(values), max=max(values))


def summarize_levels(levels: Sequence[DisplayLevel]) -> Optional[SummaryStats]:
    """Compute summary statistics, or None for an empty profile."""
    if not levels:
        return None

    temps = [lv.temp_c for lv in levels if lv.temp_c is not None]
    sals = [lv.psal for lv in levels if lv.psal is not None]
    return SummaryStats(
        total_levels=len(levels),
        max_depth=max(lv.depth_m for lv in levels),
        temp_range=_value_range(temps),
        sal_range=_value_range(sals),
    )
