"""Responsive layout policy for the level list viewport."""

from dataclasses import dataclass
from typing import Optional, Tuple

HEADER_OFFSET = 90  # px reserved for the summary strip and table header


@dataclass(frozen=True)
class Breakpoint:
    """Layout rule for viewports narrower than ``max_width``."""

    max_width: Optional[float]  # None = no upper bound
    row_height: float
    height_ratio: float
    height_cap: float


BREAKPOINTS: Tuple[Breakpoint, ...] = (
    Breakpoint(max_width=480, row_height=36, height_ratio=0.30, height_cap=240),
    Breakpoint(max_width=768, row_height=36, height_ratio=0.35, height_cap=320),
    Breakpoint(max_width=1024, row_height=40, height_ratio=0.40, height_cap=400),
    Breakpoint(max_width=None, row_height=40, height_ratio=0.45, height_cap=480),
)


@dataclass(frozen=True)
class ResponsiveLayout:
    row_height: float
    container_height: float


def select_breakpoint(viewport_width: float) -> Breakpoint:
    """Return the first breakpoint whose width bound exceeds the viewport width."""
    for bp in BREAKPOINTS:
        if bp.max_width is None or viewport_width < bp.max_width:
            return bp
    return BREAKPOINTS[-1]


def compute_responsive_layout(viewport_width: float, viewport_height: float) -> ResponsiveLayout:
    """Map viewport dimensions to a row height and a scroll container height.

    The container height is the breakpoint's share of the viewport height,
    capped, minus HEADER_OFFSET. Very short viewports can yield a
    non-positive height; the list widget clamps that before windowing.
    """
    bp = select_breakpoint(viewport_width)
    max_height = min(viewport_height * bp.height_ratio, bp.height_cap)
    return ResponsiveLayout(
        row_height=bp.row_height,
        container_height=max_height - HEADER_OFFSET,
    )
