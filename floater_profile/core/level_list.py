"""LevelList — virtualized depth-profile table for Jupyter notebooks."""

import html
import json
import uuid
from typing import Iterable, List, Optional, Tuple

from floater_profile.core.formatters import format_number
from floater_profile.core.levels import DisplayLevel
from floater_profile.core.render_result import RenderResult, render_with_fallback
from floater_profile.core.scheduler import FrameScheduler
from floater_profile.core.summary import SummaryStats, summarize_levels
from floater_profile.layouts.responsive import BREAKPOINTS, HEADER_OFFSET, compute_responsive_layout
from floater_profile.layouts.windowing import (
    OVERSCAN,
    RowDescriptor,
    ScrollIndicators,
    ViewportState,
    VisibleWindow,
    compute_scroll_indicators,
    materialize_rows,
    max_scroll_offset,
    total_scroll_height,
    window_for,
)
from floater_profile.styles.theme import (
    ACCENT_COLOR,
    BORDER_COLOR,
    CSS_CLASSES,
    LEVEL_COLUMNS,
    MUTED_TEXT_COLOR,
    PANEL_COLOR,
    PLACEHOLDER,
    ROW_EVEN_COLOR,
    ROW_HOVER_COLOR,
    ROW_ODD_COLOR,
    TEXT_COLOR,
)

SCROLL_TASK = "scroll"
RESIZE_TASK = "resize"


class LevelList:
    """Virtualized list of depth levels.

    LevelList provides:
    - A fixed-height scroll viewport sized by the responsive layout policy
    - Materialization of only the rows inside the visible window
    - Scroll notifications coalesced to one recomputation per frame
    - A summary strip (levels, max depth, temperature range)

    Parameters
    ----------
    levels : sequence of DisplayLevel
        Normalized levels, already sorted.
    viewport_width : float
        Width of the host viewport in px.
    viewport_height : float
        Height of the host viewport in px.
    overscan : int
        Rows rendered beyond each edge of the scroll viewport.
    scheduler : FrameScheduler, optional
        Shared frame scheduler; a private one is created when omitted.

    Examples
    --------
    >>> ll = LevelList(response.display_levels(), viewport_width=1280, viewport_height=900)
    >>> ll.on_scroll(400)
    >>> ll.flush()
    >>> [row.index for row in ll.rows][:3]
    [5, 6, 7]
    """

    def __init__(
        self,
        levels: Iterable[DisplayLevel] = (),
        viewport_width: float = 1024,
        viewport_height: float = 768,
        overscan: int = OVERSCAN,
        scheduler: Optional[FrameScheduler] = None,
    ) -> None:
        self._levels: Tuple[DisplayLevel, ...] = tuple(levels)
        self._summary = summarize_levels(self._levels)
        self._overscan = overscan
        self._scheduler = scheduler or FrameScheduler()
        self._uid = uuid.uuid4().hex[:12]
        self._requested_offset = 0.0
        self._row_height = 40.0
        self._container_height = 300.0
        self._hovered: Optional[int] = None
        self._rows: List[RowDescriptor[DisplayLevel]] = []
        self._rows_key: Optional[tuple] = None
        self._rows_built = 0
        self.resize(viewport_width, viewport_height)

    # ------------------------------------------------------------ Data
    @property
    def levels(self) -> Tuple[DisplayLevel, ...]:
        return self._levels

    @property
    def summary(self) -> Optional[SummaryStats]:
        """Summary statistics, or None when there are no levels."""
        return self._summary

    def set_levels(self, levels: Iterable[DisplayLevel]) -> None:
        """Replace the whole sequence.

        The old sequence, its summary and its rows are dropped together, so
        the next render never sees a window computed for the old length.
        """
        new_levels = tuple(levels)
        new_summary = summarize_levels(new_levels)
        self._levels, self._summary = new_levels, new_summary
        if self._hovered is not None and self._hovered >= len(new_levels):
            self._hovered = None
        self._rows = []
        self._rows_key = None

    # -------------------------------------------------------- Viewport
    @property
    def viewport(self) -> ViewportState:
        """Current viewport, with the scroll offset clamped to the content."""
        limit = max_scroll_offset(len(self._levels), self._row_height, self._container_height)
        return ViewportState(
            scroll_offset=min(self._requested_offset, limit),
            container_height=self._container_height,
            row_height=self._row_height,
        )

    def on_scroll(self, offset: float) -> None:
        """Queue a scroll notification; only the latest one per frame is applied."""
        self._scheduler.schedule((self._uid, SCROLL_TASK), lambda: self.scroll_to(offset))

    def on_resize(self, viewport_width: float, viewport_height: float) -> None:
        """Queue a resize notification; only the latest one per frame is applied."""
        self._scheduler.schedule(
            (self._uid, RESIZE_TASK),
            lambda: self.resize(viewport_width, viewport_height),
        )

    def flush(self) -> int:
        """Apply pending notifications (one display refresh)."""
        return self._scheduler.run_frame()

    def scroll_to(self, offset: float) -> None:
        self._requested_offset = max(0.0, float(offset))

    def resize(self, viewport_width: float, viewport_height: float) -> None:
        layout = compute_responsive_layout(viewport_width, viewport_height)
        self._row_height = layout.row_height
        # Short viewports still get one row of scroll area
        self._container_height = max(layout.container_height, layout.row_height)

    def hover(self, index: Optional[int]) -> None:
        if index is not None and not 0 <= index < len(self._levels):
            index = None
        self._hovered = index

    def leave(self) -> None:
        self._hovered = None

    @property
    def hovered_index(self) -> Optional[int]:
        return self._hovered

    # ------------------------------------------------------- Windowing
    @property
    def visible_window(self) -> VisibleWindow:
        return window_for(self.viewport, len(self._levels), self._overscan)

    @property
    def rows(self) -> List[RowDescriptor[DisplayLevel]]:
        """Row descriptors for the visible window.

        Recomputed only when the window, row height, hover state or data
        changed since the last call; rows still in view are reused.
        """
        viewport = self.viewport
        window = window_for(viewport, len(self._levels), self._overscan)
        key = (window, viewport.row_height, self._hovered, len(self._levels))
        if key != self._rows_key:
            before = {id(row) for row in self._rows}
            self._rows = materialize_rows(
                self._levels,
                window,
                viewport.row_height,
                hovered_index=self._hovered,
                previous=self._rows,
            )
            self._rows_built += sum(1 for row in self._rows if id(row) not in before)
            self._rows_key = key
        return self._rows

    @property
    def rows_built(self) -> int:
        """How many row descriptors have been created, reused ones excluded."""
        return self._rows_built

    @property
    def total_height(self) -> float:
        return total_scroll_height(len(self._levels), self._row_height)

    @property
    def scroll_indicators(self) -> ScrollIndicators:
        return compute_scroll_indicators(self.viewport, len(self._levels))

    # -------------------------------------------------------- Rendering
    def _repr_html_(self) -> str:
        """Jupyter auto-display."""
        return self.to_html()

    def display(self) -> None:
        """Display in IPython/Jupyter."""
        from IPython.display import HTML
        from IPython.display import display as ipy_display

        ipy_display(HTML(self.to_html()))

    def render(self) -> RenderResult:
        """Render to HTML, reporting failures as a RenderResult."""
        return render_with_fallback("level list", self._build_html)

    def to_html(self) -> str:
        """Generate the full HTML string (fallback markup on failure)."""
        return self.render().html

    def _build_html(self) -> str:
        uid = self._uid
        parts = [
            f'<div id="fpv-{uid}" class="{CSS_CLASSES["container"]}">',
            f"<style>{self._css(uid)}</style>",
        ]
        if self._summary is not None:
            parts.append(self._summary_html())
        parts.append(self._header_html())
        parts.append(self._body_html(uid))
        parts.append(self._level_data_script(uid))
        parts.append(f"<script>{self._js(uid)}</script>")
        parts.append("</div>")
        return "\n".join(parts)

    # ------------------------------------------------------------- CSS
    def _css(self, uid: str) -> str:
        s = f"#fpv-{uid}"
        return f"""
{s} * {{ box-sizing: border-box; margin: 0; padding: 0; }}
{s} {{
  font-family: 'JetBrains Mono', 'IBM Plex Mono', 'Consolas', monospace;
  color: {TEXT_COLOR}; background: {PANEL_COLOR};
  border: 1px solid {BORDER_COLOR}; border-radius: 8px;
}}
{s} .fpv-summary {{
  display: flex; gap: 16px; padding: 12px 16px;
  border-bottom: 1px solid {BORDER_COLOR};
}}
{s} .fpv-summary-item {{ display: flex; flex-direction: column; }}
{s} .fpv-summary-value {{ font-size: 14px; font-weight: 700; color: {ACCENT_COLOR}; }}
{s} .fpv-summary-label {{
  font-size: 10px; text-transform: uppercase; color: {MUTED_TEXT_COLOR};
}}
{s} .fpv-level-header, {s} .fpv-row {{
  display: grid; grid-template-columns: 1.2fr 1fr 1fr 1fr;
  align-items: center; padding: 0 16px;
}}
{s} .fpv-level-header {{
  height: 32px; font-size: 10px; font-weight: 700;
  text-transform: uppercase; letter-spacing: 1px;
  color: {MUTED_TEXT_COLOR}; border-bottom: 1px solid {BORDER_COLOR};
}}
{s} .fpv-level-body {{ position: relative; overflow-y: auto; }}
{s} .fpv-spacer {{ position: relative; }}
{s} .fpv-row {{ position: absolute; left: 0; right: 0; font-size: 12px; }}
{s} .fpv-even {{ background: {ROW_EVEN_COLOR}; }}
{s} .fpv-odd {{ background: {ROW_ODD_COLOR}; }}
{s} .fpv-row:hover, {s} .fpv-hovered {{ background: {ROW_HOVER_COLOR}; }}
{s} .fpv-unit {{ margin-left: 2px; font-size: 10px; color: {MUTED_TEXT_COLOR}; }}
{s} .fpv-empty {{ padding: 24px; text-align: center; color: {MUTED_TEXT_COLOR}; }}
{s} .fpv-more-above, {s} .fpv-more-below {{
  position: sticky; left: 0; right: 0; text-align: center;
  font-size: 10px; color: {ACCENT_COLOR}; pointer-events: none;
}}
{s} .fpv-more-above {{ top: 0; }}
{s} .fpv-more-below {{ bottom: 0; }}
"""

    # ---------------------------------------------------------- Summary
    def _summary_html(self) -> str:
        stats = self._summary
        items = [
            (str(stats.total_levels), "Levels"),
            (f"{format_number(stats.max_depth, 0)}m", "Max Depth"),
        ]
        if stats.temp_range is not None:
            items.append(
                (
                    f"{format_number(stats.temp_range.min, 1)}° - "
                    f"{format_number(stats.temp_range.max, 1)}°C",
                    "Temp Range",
                )
            )
        cells = "".join(
            f'<div class="fpv-summary-item">'
            f'<span class="fpv-summary-value">{html.escape(value)}</span>'
            f'<span class="fpv-summary-label">{label}</span>'
            f"</div>"
            for value, label in items
        )
        return f'<div class="{CSS_CLASSES["summary"]}">{cells}</div>'

    def _header_html(self) -> str:
        cells = "".join(f"<div>{label}</div>" for _, label, _, _ in LEVEL_COLUMNS)
        return f'<div class="{CSS_CLASSES["header"]}" role="row">{cells}</div>'

    # ------------------------------------------------------------- Body
    def _body_html(self, uid: str) -> str:
        viewport = self.viewport
        count = len(self._levels)
        parts = [
            f'<div class="{CSS_CLASSES["body"]}" id="fpv-body-{uid}" role="table" '
            f'aria-label="Ocean depth data with {count} levels" aria-rowcount="{count}" '
            f'style="height:{viewport.container_height}px;">'
        ]
        if count == 0:
            parts.append(f'<div class="{CSS_CLASSES["empty"]}">No level data available</div>')
            parts.append("</div>")
            return "\n".join(parts)

        indicators = self.scroll_indicators
        if indicators.more_above:
            parts.append(f'<div class="{CSS_CLASSES["indicator_top"]}">↑ More data above</div>')
        parts.append(
            f'<div class="{CSS_CLASSES["spacer"]}" id="fpv-spacer-{uid}" role="rowgroup" '
            f'style="height:{self.total_height}px;">'
        )
        for row in self.rows:
            parts.append(self._row_div(row))
        parts.append("</div>")
        if indicators.more_below:
            parts.append(
                f'<div class="{CSS_CLASSES["indicator_bottom"]}">↓ More data below</div>'
            )
        parts.append("</div>")
        return "\n".join(parts)

    def _row_div(self, row: RowDescriptor[DisplayLevel]) -> str:
        classes = [CSS_CLASSES["row"], CSS_CLASSES["even"] if row.is_even else CSS_CLASSES["odd"]]
        if row.is_hovered:
            classes.append(CSS_CLASSES["hovered"])
        cells = "".join(self._cell_html(row.level, col) for col in LEVEL_COLUMNS)
        return (
            f'<div class="{" ".join(classes)}" data-index="{row.index}" role="row" tabindex="0" '
            f'style="top:{row.top}px;height:{row.height}px;">{cells}</div>'
        )

    @staticmethod
    def _cell_html(level: DisplayLevel, column: tuple) -> str:
        key, _, unit, decimals = column
        value = getattr(level, key)
        text = format_number(value, decimals)
        unit_html = f'<span class="fpv-unit">{unit}</span>' if unit and text != PLACEHOLDER else ""
        return f'<div role="cell"><span class="fpv-value">{text}</span>{unit_html}</div>'

    # ---------------------------------------------------- Level data JSON
    def _level_data_script(self, uid: str) -> str:
        """Embed levels and layout constants for client-side windowing."""
        data = [level.to_dict() for level in self._levels]
        config = {
            "overscan": self._overscan,
            "rowHeight": self._row_height,
            "headerOffset": HEADER_OFFSET,
            "breakpoints": [
                {
                    "maxWidth": bp.max_width,
                    "rowHeight": bp.row_height,
                    "heightRatio": bp.height_ratio,
                    "heightCap": bp.height_cap,
                }
                for bp in BREAKPOINTS
            ],
            "placeholder": PLACEHOLDER,
            "columns": [list(col) for col in LEVEL_COLUMNS],
        }
        return (
            f"<script>var fpvLevels_{uid} = {json.dumps(data, ensure_ascii=False)};\n"
            f"var fpvConfig_{uid} = {json.dumps(config, ensure_ascii=False)};</script>"
        )

    # ---------------------------------------------------------- JavaScript
    def _js(self, uid: str) -> str:
        return f"""
(function() {{
  var body = document.getElementById('fpv-body-{uid}');
  var spacer = document.getElementById('fpv-spacer-{uid}');
  if (!body || !spacer) return;
  var levels = fpvLevels_{uid};
  var cfg = fpvConfig_{uid};
  var rowHeight = cfg.rowHeight;
  var pending = false;

  function fmt(value, decimals) {{
    if (value === null || value === undefined || isNaN(value)) return cfg.placeholder;
    return new Intl.NumberFormat('en-US', {{
      minimumFractionDigits: decimals, maximumFractionDigits: decimals, useGrouping: false
    }}).format(value);
  }}

  function breakpoint(vw) {{
    for (var i = 0; i < cfg.breakpoints.length; i++) {{
      var bp = cfg.breakpoints[i];
      if (bp.maxWidth === null || vw < bp.maxWidth) return bp;
    }}
    return cfg.breakpoints[cfg.breakpoints.length - 1];
  }}

  function layout() {{
    var bp = breakpoint(window.innerWidth);
    var maxHeight = Math.min(window.innerHeight * bp.heightRatio, bp.heightCap);
    rowHeight = bp.rowHeight;
    body.style.height = Math.max(maxHeight - cfg.headerOffset, rowHeight) + 'px';
    spacer.style.height = (levels.length * rowHeight) + 'px';
  }}

  function renderWindow() {{
    pending = false;
    var top = body.scrollTop, height = body.clientHeight;
    var start = Math.max(0, Math.floor(top / rowHeight) - cfg.overscan);
    var end = Math.min(levels.length - 1,
      Math.ceil((top + height) / rowHeight) + cfg.overscan);
    var out = [];
    for (var i = start; i <= end; i++) {{
      var lv = levels[i];
      var cells = cfg.columns.map(function(col) {{
        var text = fmt(lv[col[0]], col[3]);
        var unit = col[2] && text !== cfg.placeholder
          ? '<span class="fpv-unit">' + col[2] + '</span>' : '';
        return '<div role="cell"><span class="fpv-value">' + text + '</span>' + unit + '</div>';
      }}).join('');
      out.push('<div class="fpv-row ' + (i % 2 === 0 ? 'fpv-even' : 'fpv-odd') +
        '" data-index="' + i + '" role="row" tabindex="0" style="top:' + (i * rowHeight) +
        'px;height:' + rowHeight + 'px;">' + cells + '</div>');
    }}
    spacer.innerHTML = out.join('');
  }}

  function schedule() {{
    if (pending) return;
    pending = true;
    window.requestAnimationFrame(renderWindow);
  }}

  body.addEventListener('scroll', schedule);
  window.addEventListener('resize', function() {{ layout(); schedule(); }});
  layout();
  renderWindow();
}})();
"""

    def __len__(self) -> int:
        return len(self._levels)

