"""Display formatting for profile values."""

import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from floater_profile.styles.theme import PLACEHOLDER


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def format_number(value: Any, decimals: int = 1) -> str:
    """Format with exactly ``decimals`` places, no thousands grouping.

    Missing or non-numeric values render as the placeholder glyph.
    """
    if not _is_number(value):
        return PLACEHOLDER
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)
    return f"{rounded:f}"


def format_lat_lon(lat: Optional[float], lon: Optional[float]) -> str:
    """Format coordinates as ``12.346°N, 45.679°W``."""
    if not _is_number(lat) or not _is_number(lon):
        return f"{PLACEHOLDER}, {PLACEHOLDER}"
    lat_dir = "N" if lat >= 0 else "S"
    lon_dir = "E" if lon >= 0 else "W"
    return f"{format_number(abs(lat), 3)}°{lat_dir}, {format_number(abs(lon), 3)}°{lon_dir}"


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: Optional[str]) -> str:
    """``DD.MM.YYYY`` in UTC."""
    parsed = _parse_iso(value)
    if parsed is None:
        return PLACEHOLDER
    return parsed.strftime("%d.%m.%Y")


def format_time(value: Optional[str]) -> str:
    """``HH:MM`` in UTC."""
    parsed = _parse_iso(value)
    if parsed is None:
        return PLACEHOLDER
    return parsed.strftime("%H:%M")
