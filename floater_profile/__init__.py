"""
Floater Profile Viewer — Virtualized depth profiles of ARGO floaters in Jupyter notebooks.
"""

__version__ = "0.1.0"

from floater_profile.core.level_list import LevelList
from floater_profile.core.levels import (
    DataShapeError,
    DisplayLevel,
    LevelMeasurement,
    ProfileResponse,
    ProfileSummary,
    normalize_levels,
)
from floater_profile.core.profile import FloaterProfile, ProfileStatus
from floater_profile.core.summary import SummaryStats, ValueRange, summarize_levels


def from_api(platform_number, **kwargs):  # type: ignore[no-untyped-def]
    """Convenience function to open a floater profile backed by the HTTP API."""
    from floater_profile.clients.http_client import HttpFloaterClient

    profile = FloaterProfile(HttpFloaterClient(), platform_number, **kwargs)
    profile.open()
    return profile


def from_payload(payload, **kwargs):  # type: ignore[no-untyped-def]
    """Convenience function to build a LevelList from a raw profile payload."""
    return LevelList(ProfileResponse.from_dict(payload).display_levels(), **kwargs)


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
    "LevelList",
    "FloaterProfile",
    "ProfileStatus",
    "from_api",
    "from_payload",
    "__version__",
]
