"""FloaterProfile — profile popup state for one floater.

Coordinates fetches through a BaseFloaterClient, discards late responses
from superseded requests, and hands each new profile to a LevelList in a
single swap.
"""

import html
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from floater_profile.clients.base_client import BaseFloaterClient, DateOption, FetchError
from floater_profile.core.formatters import format_date, format_lat_lon, format_number, format_time
from floater_profile.core.level_list import LevelList
from floater_profile.core.levels import DisplayLevel, ProfileResponse
from floater_profile.core.render_result import RenderResult, render_with_fallback
from floater_profile.core.summary import SummaryStats, summarize_levels
from floater_profile.styles.theme import (
    ACTIVE_COLOR,
    ERROR_COLOR,
    INACTIVE_COLOR,
    METRIC_TILES,
    MUTED_TEXT_COLOR,
    PLACEHOLDER,
)

logger = logging.getLogger(__name__)

OPEN_ERROR = "Failed to load floater data"
LATEST_ERROR = "Failed to load latest data"
DATE_ERROR = "Failed to load data for selected date"


class ProfileStatus(Enum):
    """What the host should show for the profile."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


@dataclass(frozen=True)
class ProfileRequest:
    """Ticket for one fetch; only the newest generation may be applied."""

    generation: int
    date_key: Optional[str] = None
    error_message: str = OPEN_ERROR


@dataclass(frozen=True)
class ProfileSnapshot:
    """A fully built profile: response, normalized levels and summary."""

    response: ProfileResponse
    levels: Tuple[DisplayLevel, ...]
    summary: Optional[SummaryStats]

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "ProfileSnapshot":
        response = ProfileResponse.from_dict(payload)
        levels = response.display_levels()
        return cls(response=response, levels=levels, summary=summarize_levels(levels))


class FloaterProfile:
    """Profile view of a single floater.

    Parameters
    ----------
    client : BaseFloaterClient
        Data source for dates and profiles.
    platform_number : int
        The floater's platform number.
    floater : dict, optional
        Marker data for the header (``latitude``, ``longitude``, ``status``,
        ``cycle_number``, ``captured_at``).
    viewport_width, viewport_height : float
        Initial viewport size, passed to the LevelList.

    Examples
    --------
    >>> profile = FloaterProfile(HttpFloaterClient(), 2902746)
    >>> profile.open()
    >>> profile.status
    <ProfileStatus.READY: 'ready'>
    >>> profile.select_date("20240115")
    """

    def __init__(
        self,
        client: BaseFloaterClient,
        platform_number: int,
        floater: Optional[Dict[str, Any]] = None,
        viewport_width: float = 1024,
        viewport_height: float = 768,
    ) -> None:
        self.client = client
        self.platform_number = int(platform_number)
        self.floater = floater or {}
        self.level_list = LevelList(viewport_width=viewport_width, viewport_height=viewport_height)
        self._generation = 0
        self._status = ProfileStatus.IDLE
        self._error: Optional[str] = None
        self._snapshot: Optional[ProfileSnapshot] = None
        self._dates: List[DateOption] = []
        self._selected_date: Optional[str] = None

    # ------------------------------------------------------------ State
    @property
    def status(self) -> ProfileStatus:
        return self._status

    @property
    def error(self) -> Optional[str]:
        """User-facing error message when status is ERROR."""
        return self._error

    @property
    def snapshot(self) -> Optional[ProfileSnapshot]:
        return self._snapshot

    @property
    def levels(self) -> Tuple[DisplayLevel, ...]:
        return self._snapshot.levels if self._snapshot else ()

    @property
    def summary(self) -> Optional[SummaryStats]:
        return self._snapshot.summary if self._snapshot else None

    @property
    def dates(self) -> List[DateOption]:
        return list(self._dates)

    @property
    def selected_date(self) -> Optional[str]:
        return self._selected_date

    @property
    def generation(self) -> int:
        return self._generation

    # ---------------------------------------------------- Request tickets
    def begin_request(
        self, date_key: Optional[str] = None, error_message: str = OPEN_ERROR
    ) -> ProfileRequest:
        """Start a fetch; every earlier ticket becomes stale."""
        self._generation += 1
        self._status = ProfileStatus.LOADING
        self._error = None
        return ProfileRequest(self._generation, date_key, error_message)

    def is_current(self, request: ProfileRequest) -> bool:
        return request.generation == self._generation

    def resolve(self, request: ProfileRequest, payload: Optional[Dict[str, Any]]) -> bool:
        """Apply a fetched payload. Returns False if the ticket was stale."""
        if not self.is_current(request):
            logger.debug(
                f"Discarding stale response for floater {self.platform_number} "
                f"(generation {request.generation}, current {self._generation})"
            )
            return False

        snapshot = ProfileSnapshot.from_payload(payload)
        self._snapshot = snapshot
        self.level_list.set_levels(snapshot.levels)
        self._status = ProfileStatus.READY if snapshot.levels else ProfileStatus.EMPTY
        logger.info(
            f"Floater {self.platform_number}: {len(snapshot.levels)} of "
            f"{len(snapshot.response.levels)} levels displayed"
        )
        return True

    def fail(self, request: ProfileRequest, error: Exception) -> bool:
        """Record a failed fetch. Returns False if the ticket was stale."""
        if not self.is_current(request):
            logger.debug(f"Discarding stale failure for floater {self.platform_number}: {error}")
            return False
        logger.error(f"Error loading floater {self.platform_number}: {error}")
        self._status = ProfileStatus.ERROR
        self._error = request.error_message
        return True

    # ------------------------------------------------------------- Loads
    def open(self) -> None:
        """Load the available dates and the latest profile."""
        self._snapshot = None
        self._selected_date = None
        self.level_list.set_levels(())
        request = self.begin_request(error_message=OPEN_ERROR)
        try:
            dates = self.client.get_dates(self.platform_number)
            payload = self.client.get_latest(self.platform_number)
        except FetchError as e:
            self.fail(request, e)
            return
        if self.is_current(request):
            self._dates = dates
        self.resolve(request, payload)

    def select_date(self, date_key: Optional[str]) -> None:
        """Load the profile for ``date_key``, or the latest one if empty."""
        key = str(date_key) if date_key else None
        self._selected_date = key
        if key is None:
            request = self.begin_request(error_message=LATEST_ERROR)
        else:
            request = self.begin_request(key, error_message=DATE_ERROR)
        try:
            if key is None:
                payload = self.client.get_latest(self.platform_number)
            else:
                payload = self.client.get_by_date(self.platform_number, key)
        except FetchError as e:
            self.fail(request, e)
            return
        self.resolve(request, payload)

    # ----------------------------------------------------------- Metrics
    def metrics(self) -> Dict[str, Optional[float]]:
        """Header tile values from the profile summary."""
        summary = self._snapshot.response.summary if self._snapshot else None
        fallback = self.floater.get("metrics") or {}
        if summary is None:
            return {key: None for key, _, _, _ in METRIC_TILES}
        return {
            "temperature_c": _first(summary.avg_temp, fallback.get("temperature_c")),
            "depth_m": _first(summary.level_count, fallback.get("depth_m")),
            "salinity_psu": _first(summary.avg_psal, fallback.get("salinity_psu")),
            "pressure_dbar": _first(summary.avg_pres, fallback.get("pressure_dbar")),
        }

    @property
    def cycle_number(self) -> Any:
        summary = self._snapshot.response.summary if self._snapshot else None
        value = _first(summary.cycle_number if summary else None, self.floater.get("cycle_number"))
        return "N/A" if value is None else value

    @property
    def captured_at(self) -> Optional[str]:
        summary = self._snapshot.response.summary if self._snapshot else None
        return _first(summary.juld_datetime if summary else None, self.floater.get("captured_at"))

    @property
    def is_active(self) -> bool:
        return self.floater.get("status", "active") == "active"

    # --------------------------------------------------------- Rendering
    def _repr_html_(self) -> str:
        """Jupyter auto-display."""
        return self.to_html()

    def display(self) -> None:
        """Display in IPython/Jupyter."""
        from IPython.display import HTML
        from IPython.display import display as ipy_display

        ipy_display(HTML(self.to_html()))

    def render(self) -> RenderResult:
        return render_with_fallback("floater profile", self._build_html)

    def to_html(self) -> str:
        return self.render().html

    def _build_html(self) -> str:
        parts = [
            '<div class="fpv-profile">',
            self._header_html(),
            self._date_picker_html(),
            f'<div class="fpv-cycle">Cycle No. {html.escape(str(self.cycle_number))}</div>',
            self._metrics_html(),
            self._body_html(),
            "</div>",
        ]
        return "\n".join(parts)

    def _header_html(self) -> str:
        color = ACTIVE_COLOR if self.is_active else INACTIVE_COLOR
        label = "ACTIVE" if self.is_active else "INACTIVE"
        location = format_lat_lon(self.floater.get("latitude"), self.floater.get("longitude"))
        return (
            f'<div class="fpv-profile-header">'
            f'<h1 class="fpv-title">ARGO FLOAT {self.platform_number}</h1>'
            f'<span class="fpv-status" style="color:{color};">{label}</span>'
            f'<span class="fpv-location">{location}</span>'
            f'<span class="fpv-date">{format_date(self.captured_at)}</span>'
            f'<span class="fpv-time">{format_time(self.captured_at)}</span>'
            f"</div>"
        )

    def _date_picker_html(self) -> str:
        if not self._dates:
            return '<div class="fpv-date-picker fpv-empty">No dates available</div>'
        disabled = " disabled" if self._status is ProfileStatus.LOADING else ""
        options = ['<option value="">Latest Data</option>']
        for option in self._dates:
            selected = " selected" if option.key == self._selected_date else ""
            options.append(
                f'<option value="{html.escape(option.key)}"{selected}>'
                f"{html.escape(option.iso_date)}</option>"
            )
        return f'<select class="fpv-date-picker"{disabled}>{"".join(options)}</select>'

    def _metrics_html(self) -> str:
        values = self.metrics()
        tiles = []
        for key, label, unit, decimals in METRIC_TILES:
            tiles.append(
                f'<div class="fpv-metric">'
                f'<span class="fpv-metric-number">{format_number(values[key], decimals)}'
                f'<span class="fpv-unit">{unit}</span></span>'
                f'<span class="fpv-metric-label">{label}</span>'
                f"</div>"
            )
        return f'<div class="fpv-metrics">{"".join(tiles)}</div>'

    def _body_html(self) -> str:
        if self._status is ProfileStatus.LOADING:
            return '<div class="fpv-loading">Loading profile…</div>'
        if self._status is ProfileStatus.ERROR:
            return (
                f'<div class="fpv-error" style="color:{ERROR_COLOR};">'
                f"{html.escape(self._error or PLACEHOLDER)}</div>"
            )
        if self._status is ProfileStatus.EMPTY:
            return (
                f'<div class="fpv-empty" style="color:{MUTED_TEXT_COLOR};">'
                f"No measurements for this profile</div>"
            )
        if self._status is ProfileStatus.IDLE:
            return ""
        return self.level_list.to_html()


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None
