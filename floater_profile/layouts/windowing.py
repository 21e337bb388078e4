"""Windowing arithmetic for the virtualized level list.

Only the rows that intersect the scroll viewport (plus an overscan margin)
are materialized; every row is absolutely positioned at
``index * row_height`` inside a spacer of height ``length * row_height``.
"""

import math
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar

OVERSCAN = 5  # rows rendered beyond each edge of the viewport

T = TypeVar("T")


@dataclass(frozen=True)
class ViewportState:
    """Scroll position and geometry of the scroll container."""

    scroll_offset: float = 0.0
    container_height: float = 210.0
    row_height: float = 40.0

    def __post_init__(self) -> None:
        if self.scroll_offset < 0:
            raise ValueError(f"scroll_offset must be >= 0, got {self.scroll_offset}")
        if self.container_height <= 0:
            raise ValueError(f"container_height must be > 0, got {self.container_height}")
        if self.row_height <= 0:
            raise ValueError(f"row_height must be > 0, got {self.row_height}")


@dataclass(frozen=True)
class VisibleWindow:
    """Inclusive index range ``[start_index, end_index]`` to materialize."""

    start_index: int
    end_index: int

    @property
    def is_empty(self) -> bool:
        return self.end_index < self.start_index

    def __len__(self) -> int:
        return 0 if self.is_empty else self.end_index - self.start_index + 1

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start_index <= index <= self.end_index

    def indices(self) -> range:
        return range(self.start_index, self.end_index + 1)


EMPTY_WINDOW = VisibleWindow(start_index=0, end_index=-1)


@dataclass(frozen=True)
class RowDescriptor(Generic[T]):
    """A materialized row.

    ``index`` is the row identity; it stays stable when values repeat.
    ``is_even`` and ``is_hovered`` only affect presentation.
    """

    index: int
    top: float
    height: float
    level: T
    is_even: bool
    is_hovered: bool = False


def compute_visible_window(
    scroll_offset: float,
    container_height: float,
    row_height: float,
    length: int,
    overscan: int = OVERSCAN,
) -> VisibleWindow:
    """Compute the inclusive index range that must be rendered.

    Parameters
    ----------
    scroll_offset : float
        Current scroll position in px (>= 0).
    container_height : float
        Height of the scroll viewport in px (> 0).
    row_height : float
        Height of one row in px (> 0).
    length : int
        Number of rows in the sequence.
    overscan : int
        Extra rows on each side of the viewport.

    Returns
    -------
    VisibleWindow
        Empty when ``length`` is 0; otherwise clamped to ``[0, length - 1]``.
    """
    if length <= 0:
        return EMPTY_WINDOW
    start = max(0, math.floor(scroll_offset / row_height) - overscan)
    end = min(length - 1, math.ceil((scroll_offset + container_height) / row_height) + overscan)
    if end < start:
        # Scrolled past the end of a sequence that just shrank
        start = max(0, end - overscan)
    return VisibleWindow(start_index=start, end_index=end)


def window_for(viewport: ViewportState, length: int, overscan: int = OVERSCAN) -> VisibleWindow:
    return compute_visible_window(
        viewport.scroll_offset,
        viewport.container_height,
        viewport.row_height,
        length,
        overscan,
    )


def total_scroll_height(length: int, row_height: float) -> float:
    """Height of the scroll spacer, independent of how many rows exist."""
    return length * row_height


def max_scroll_offset(length: int, row_height: float, container_height: float) -> float:
    return max(0.0, total_scroll_height(length, row_height) - container_height)


def materialize_rows(
    levels: Sequence[T],
    window: VisibleWindow,
    row_height: float,
    hovered_index: Optional[int] = None,
    previous: Optional[Sequence[RowDescriptor[T]]] = None,
) -> List[RowDescriptor[T]]:
    """Build row descriptors for the indices in ``window``.

    Descriptors in ``previous`` that are still valid (same level object,
    row height and hover flag) are reused as-is, so shifting the window
    by a few rows only builds the rows that scrolled into view.

    Raises
    ------
    IndexError
        If the window references indices beyond the end of ``levels``.
    """
    if not window.is_empty and window.end_index >= len(levels):
        raise IndexError(
            f"window [{window.start_index}, {window.end_index}] is stale for {len(levels)} levels"
        )
    reusable = {row.index: row for row in previous or ()}
    rows: List[RowDescriptor[T]] = []
    for i in window.indices():
        is_hovered = hovered_index == i
        old = reusable.get(i)
        if (
            old is not None
            and old.level is levels[i]
            and old.height == row_height
            and old.is_hovered == is_hovered
        ):
            rows.append(old)
            continue
        rows.append(
            RowDescriptor(
                index=i,
                top=i * row_height,
                height=row_height,
                level=levels[i],
                is_even=i % 2 == 0,
                is_hovered=is_hovered,
            )
        )
    return rows


@dataclass(frozen=True)
class ScrollIndicators:
    more_above: bool
    more_below: bool


def compute_scroll_indicators(viewport: ViewportState, length: int) -> ScrollIndicators:
    """Whether to show the "more data above/below" hints."""
    rows_in_view = math.ceil(viewport.container_height / viewport.row_height)
    if length <= rows_in_view:
        return ScrollIndicators(more_above=False, more_below=False)
    total = total_scroll_height(length, viewport.row_height)
    return ScrollIndicators(
        more_above=viewport.scroll_offset > 0,
        more_below=viewport.scroll_offset < total - viewport.container_height,
    )
