"""Base client abstract class for floater data sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class FetchError(Exception):
    """A floater API request failed (transport, HTTP status or payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class DateOption:
    """A date for which a profile is available."""

    key: str
    iso_date: str

    def to_dict(self) -> Dict[str, Any]:
        return {"date_key": self.key, "date_iso": self.iso_date}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DateOption":
        return cls(key=str(data["date_key"]), iso_date=str(data.get("date_iso", "")))


class BaseFloaterClient(ABC):
    """Abstract base class for floater data sources.

    Implementations raise FetchError for every failure so callers only
    need to handle one exception type.
    """

    @abstractmethod
    def get_latest_floaters(self) -> List[Dict[str, Any]]:
        """Latest position and status of every floater."""

    @abstractmethod
    def get_dates(self, platform_number: int) -> List[DateOption]:
        """Dates with a profile for ``platform_number``, in display order."""

    @abstractmethod
    def get_latest(self, platform_number: int) -> Dict[str, Any]:
        """Most recent profile payload (``{summary, levels}``)."""

    @abstractmethod
    def get_by_date(self, platform_number: int, date_key: str) -> Dict[str, Any]:
        """Profile payload for one date key."""
