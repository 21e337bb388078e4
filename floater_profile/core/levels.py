"""
Depth-level data structures for floater profile visualization.

These dataclasses define the raw measurement records returned by the
floater API and the normalized levels the list widget displays.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "profile-response.json"


class DataShapeError(ValueError):
    """A raw record is malformed and cannot be read as a level measurement."""


def _read_number(data: Dict[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataShapeError(f"'{key}' is not a number: {value!r}")
    try:
        if math.isnan(value):
            return None
    except OverflowError:
        raise DataShapeError(f"'{key}' is too large for a float") from None
    return value


def _read_index(data: Dict[str, Any]) -> Optional[int]:
    value = data.get("level_index")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataShapeError(f"'level_index' is not an integer: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise DataShapeError(f"'level_index' is not an integer: {value!r}")
        return int(value)
    return value


@dataclass(frozen=True)
class LevelMeasurement:
    """A single raw depth-level record, as received from the API."""

    level_index: Optional[int] = None
    pres: Optional[float] = None
    temp: Optional[float] = None
    psal: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level_index": self.level_index,
            "pres": self.pres,
            "temp": self.temp,
            "psal": self.psal,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "LevelMeasurement":
        """Parse a raw record.

        Raises
        ------
        DataShapeError
            If the record is not a mapping or a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise DataShapeError(f"level record is not an object: {data!r}")
        return cls(
            level_index=_read_index(data),
            pres=_read_number(data, "pres"),
            temp=_read_number(data, "temp"),
            psal=_read_number(data, "psal"),
        )

    @property
    def sort_key(self) -> int:
        return self.level_index or 0

    def is_displayable(self, limit: int) -> bool:
        """Whether this record survives filtering against ``limit``."""
        within_count = self.level_index is None or self.level_index < limit
        has_depth = self.pres is not None and self.pres >= 0
        has_data = self.temp is not None or self.psal is not None
        return within_count and has_depth and has_data


@dataclass(frozen=True)
class DisplayLevel:
    """A normalized level, ready for formatting in the level list."""

    depth_m: int
    temp_c: Optional[float]
    pres: Optional[float]
    psal: Optional[float]
    level_index: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "depth_m": self.depth_m,
            "temp_c": self.temp_c,
            "pres": self.pres,
            "psal": self.psal,
            "level_index": self.level_index,
        }

    @classmethod
    def from_measurement(cls, measurement: LevelMeasurement) -> "DisplayLevel":
        return cls(
            depth_m=measurement.level_index or 0,
            temp_c=measurement.temp,
            pres=measurement.pres,
            psal=measurement.psal,
            level_index=measurement.level_index,
        )


def _resolve_limit(max_count: Any, raw_count: int) -> int:
    if isinstance(max_count, bool) or not isinstance(max_count, (int, float)):
        return raw_count
    # NaN test that never converts, so oversized ints stay valid limits
    if max_count != max_count or max_count <= 0:
        return raw_count
    return max_count


def normalize_levels(
    raw_levels: Optional[Iterable[Any]],
    max_count: Optional[int] = None,
) -> Tuple[DisplayLevel, ...]:
    """Turn raw level records into an ordered sequence of display levels.

    Parameters
    ----------
    raw_levels : iterable
        Raw level records (dicts or LevelMeasurement). Order is not assumed.
    max_count : int, optional
        Cap on the level index, usually ``summary.level_count``. Falls back
        to the number of raw records when absent or not positive.

    Returns
    -------
    Tuple[DisplayLevel, ...]
        Levels sorted by index (missing index sorts as 0, ties keep their
        input order). An empty tuple means the profile has no measurements.
    """
    records = list(raw_levels or [])
    limit = _resolve_limit(max_count, len(records))

    survivors: List[LevelMeasurement] = []
    for position, record in enumerate(records):
        if isinstance(record, LevelMeasurement):
            measurement = record
        else:
            try:
                measurement = LevelMeasurement.from_dict(record)
            except DataShapeError as e:
                logger.debug(f"Skipping level record {position}: {e}")
                continue
        if measurement.is_displayable(limit):
            survivors.append(measurement)

    # list.sort is stable, so equal indices keep their original order
    survivors.sort(key=lambda m: m.sort_key)
    return tuple(DisplayLevel.from_measurement(m) for m in survivors)


@dataclass(frozen=True)
class ProfileSummary:
    """Summary block of a profile response."""

    level_count: Optional[int] = None
    cycle_number: Optional[Any] = None
    juld_datetime: Optional[str] = None
    avg_temp: Optional[float] = None
    avg_psal: Optional[float] = None
    avg_pres: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level_count": self.level_count,
            "cycle_number": self.cycle_number,
            "juld_datetime": self.juld_datetime,
            "avg_temp": self.avg_temp,
            "avg_psal": self.avg_psal,
            "avg_pres": self.avg_pres,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProfileSummary":
        if not isinstance(data, dict):
            return cls()
        return cls(
            level_count=data.get("level_count"),
            cycle_number=data.get("cycle_number"),
            juld_datetime=data.get("juld_datetime"),
            avg_temp=data.get("avg_temp"),
            avg_psal=data.get("avg_psal"),
            avg_pres=data.get("avg_pres"),
        )


@dataclass(frozen=True)
class ProfileResponse:
    """A profile payload returned by the floater API.

    Attributes
    ----------
    summary : ProfileSummary
        Profile-level fields; ``level_count`` caps the level indices.
    levels : List[Any]
        Raw level records, kept as received so that malformed records can
        be dropped by the normalizer rather than at parse time.
    """

    summary: ProfileSummary = field(default_factory=ProfileSummary)
    levels: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "levels": [
                lv.to_dict() if isinstance(lv, LevelMeasurement) else lv for lv in self.levels
            ],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProfileResponse":
        if not isinstance(data, dict):
            return cls()
        levels = data.get("levels")
        return cls(
            summary=ProfileSummary.from_dict(data.get("summary")),
            levels=list(levels) if isinstance(levels, list) else [],
        )

    def display_levels(self) -> Tuple[DisplayLevel, ...]:
        """Normalize the raw levels, capped by ``summary.level_count``."""
        return normalize_levels(self.levels, self.summary.level_count)

    @staticmethod
    def validate(payload: Dict[str, Any], strict: bool = False) -> bool:
        """Validate a raw payload against the bundled JSON schema.

        Parameters
        ----------
        payload : dict
            The decoded API response.
        strict : bool
            If True, raise ValidationError on failure.
            If False, return bool.
        """
        import jsonschema

        with open(SCHEMA_PATH) as f:
            schema = json.load(f)
        try:
            jsonschema.validate(payload, schema)
            return True
        except jsonschema.ValidationError:
            if strict:
                raise
            return False
