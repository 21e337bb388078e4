"""In-memory floater client for demos and notebooks without a backend."""

import math
import random
from typing import Any, Dict, List, Optional

from floater_profile.clients.base_client import BaseFloaterClient, DateOption, FetchError


def generate_synthetic_levels(count: int = 100, seed: Optional[int] = None) -> List[Dict[str, Any]]:
    """Generate raw level records shaped like the API's.

    Temperature decays with depth from about 25 °C, salinity oscillates
    around 34.5, pressure grows roughly 1 dbar per metre.
    """
    rng = random.Random(seed)
    levels = []
    for i in range(count):
        base_temp = 25 - i * 0.02 + math.sin(i * 0.1) * 2
        temp = max(2.0, base_temp + (rng.random() - 0.5) * 0.5)
        sal = 34.5 + math.sin(i * 0.05) * 0.5 + (rng.random() - 0.5) * 0.2
        levels.append(
            {
                "level_index": i,
                "pres": round(i * 1.02, 2),
                "temp": round(temp, 1),
                "psal": round(sal, 2),
            }
        )
    return levels


def synthetic_profile(count: int = 100, seed: Optional[int] = None, cycle_number: int = 1) -> Dict[str, Any]:
    """A full ``{summary, levels}`` payload built from synthetic levels."""
    levels = generate_synthetic_levels(count, seed)
    temps = [lv["temp"] for lv in levels]
    sals = [lv["psal"] for lv in levels]
    pres = [lv["pres"] for lv in levels]
    return {
        "summary": {
            "level_count": count,
            "cycle_number": cycle_number,
            "juld_datetime": None,
            "avg_temp": sum(temps) / count if count else None,
            "avg_psal": sum(sals) / count if count else None,
            "avg_pres": sum(pres) / count if count else None,
        },
        "levels": levels,
    }


class StaticFloaterClient(BaseFloaterClient):
    """Serve canned payloads keyed by platform number (and date key).

    Parameters
    ----------
    latest : dict
        platform_number -> latest profile payload.
    by_date : dict, optional
        platform_number -> {date_key -> payload}.
    dates : dict, optional
        platform_number -> list of DateOption.
    floaters : list, optional
        Payload for ``get_latest_floaters``.
    """

    def __init__(
        self,
        latest: Dict[int, Dict[str, Any]],
        by_date: Optional[Dict[int, Dict[str, Dict[str, Any]]]] = None,
        dates: Optional[Dict[int, List[DateOption]]] = None,
        floaters: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self._latest = latest
        self._by_date = by_date or {}
        self._dates = dates or {}
        self._floaters = floaters or []

    def get_latest_floaters(self) -> List[Dict[str, Any]]:
        return list(self._floaters)

    def get_dates(self, platform_number: int) -> List[DateOption]:
        return list(self._dates.get(platform_number, []))

    def get_latest(self, platform_number: int) -> Dict[str, Any]:
        try:
            return self._latest[platform_number]
        except KeyError:
            raise FetchError(f"No data for floater {platform_number}", 404) from None

    def get_by_date(self, platform_number: int, date_key: str) -> Dict[str, Any]:
        try:
            return self._by_date[platform_number][str(date_key)]
        except KeyError:
            raise FetchError(
                f"No data for floater {platform_number} on date {date_key}", 404
            ) from None
