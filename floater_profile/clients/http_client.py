"""HTTP client for the floater REST API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from floater_profile.clients.base_client import BaseFloaterClient, DateOption, FetchError
from floater_profile.config import ClientConfig

logger = logging.getLogger(__name__)


class HttpFloaterClient(BaseFloaterClient):
    """Fetch floater data over HTTP with ``requests``.

    Parameters
    ----------
    config : ClientConfig, optional
        Base URL and timeout. Read from the environment when omitted.
    session : requests.Session, optional
        Session to reuse (connection pooling, custom adapters).
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ClientConfig.from_env()
        self._session = session or requests.Session()

    def _get(self, path: str, what: str) -> Any:
        url = f"{self.config.base_url}{path}"
        try:
            response = self._session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Error fetching {what}: HTTP {status}")
            raise FetchError(f"HTTP error fetching {what}: status {status}", status) from e
        except requests.RequestException as e:
            logger.error(f"Error fetching {what}: {e}")
            raise FetchError(f"Request failed fetching {what}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON fetching {what}: {e}")
            raise FetchError(f"Invalid JSON fetching {what}", response.status_code) from e

    def get_latest_floaters(self) -> List[Dict[str, Any]]:
        data = self._get("/latest_floaters", "latest floaters")
        if not isinstance(data, list):
            raise FetchError("Expected a list of floaters")
        return data

    def get_dates(self, platform_number: int) -> List[DateOption]:
        data = self._get(
            f"/floaters/{platform_number}/dates", f"dates for floater {platform_number}"
        )
        if not isinstance(data, list):
            raise FetchError(f"Expected a list of dates for floater {platform_number}")
        try:
            return [DateOption.from_dict(item) for item in data]
        except (KeyError, TypeError) as e:
            raise FetchError(f"Malformed date entry for floater {platform_number}: {e}") from e

    def get_latest(self, platform_number: int) -> Dict[str, Any]:
        return self._get(
            f"/floaters/{platform_number}/latest",
            f"latest data for floater {platform_number}",
        )

    def get_by_date(self, platform_number: int, date_key: str) -> Dict[str, Any]:
        return self._get(
            f"/floaters/{platform_number}/by-date/{date_key}",
            f"data for floater {platform_number} on date {date_key}",
        )
