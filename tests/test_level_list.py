"""Tests for the LevelList widget: viewport events, windowing and HTML rendering."""

import json
import math
from unittest.mock import patch

from floater_profile.core.level_list import LevelList
from floater_profile.core.levels import DisplayLevel, normalize_levels
from floater_profile.core.scheduler import FrameScheduler
from floater_profile.layouts.responsive import BREAKPOINTS


def _make_levels(count=100):
    raw = [
        {"level_index": i, "pres": i * 1.02, "temp": 25.0 - i * 0.1, "psal": 34.5}
        for i in range(count)
    ]
    return normalize_levels(raw)


def _make_list(count=100, width=1280, height=1200, **kwargs):
    # 1280x1200 -> row height 40, container 480 - 90 = 390
    return LevelList(_make_levels(count), viewport_width=width, viewport_height=height, **kwargs)


def test_initial_layout_from_viewport():
    ll = _make_list()
    assert ll.viewport.row_height == 40
    assert ll.viewport.container_height == 390
    assert ll.viewport.scroll_offset == 0


def test_reference_window_through_widget():
    # 800x1200 -> row height 40, container 400 - 90 = 310
    ll = _make_list(width=800, height=1200)
    ll.scroll_to(400)
    window = ll.visible_window
    assert (window.start_index, window.end_index) == (5, 23)
    assert [r.index for r in ll.rows] == list(range(5, 24))


def test_empty_list():
    ll = LevelList()
    assert ll.visible_window.is_empty
    assert ll.rows == []
    assert ll.summary is None
    assert ll.total_height == 0
    assert "No level data available" in ll.to_html()


def test_only_visible_rows_are_materialized():
    ll = _make_list(count=5000)
    ll.scroll_to(100_000)
    rows = ll.rows
    bound = math.ceil(ll.viewport.container_height / ll.viewport.row_height) + 2 * 5 + 1
    assert 0 < len(rows) <= bound
    assert ll.total_height == 5000 * 40


def test_scroll_notifications_coalesce_per_frame():
    ll = _make_list()
    for offset in range(0, 800, 3):
        ll.on_scroll(offset)
    # Nothing applied until the frame runs
    assert ll.viewport.scroll_offset == 0
    assert ll.flush() == 1
    assert ll.viewport.scroll_offset == 798


def test_shared_scheduler_coalesces_per_widget():
    scheduler = FrameScheduler()
    a = _make_list(scheduler=scheduler)
    b = _make_list(scheduler=scheduler)
    a.on_scroll(100)
    b.on_scroll(200)
    a.on_scroll(120)
    assert scheduler.run_frame() == 2
    assert a.viewport.scroll_offset == 120
    assert b.viewport.scroll_offset == 200


def test_resize_and_scroll_order_does_not_matter():
    first = _make_list()
    first.on_scroll(1000)
    first.on_resize(400, 700)
    first.flush()

    second = _make_list()
    second.on_resize(400, 700)
    second.on_scroll(1000)
    second.flush()

    assert first.viewport == second.viewport
    assert first.visible_window == second.visible_window


def test_resize_changes_row_height():
    ll = _make_list()
    ll.resize(400, 700)
    assert ll.viewport.row_height == 36
    assert ll.total_height == 100 * 36
    assert all(r.top == r.index * 36 for r in ll.rows)


def test_tiny_viewport_keeps_positive_container():
    ll = _make_list(width=320, height=200)
    assert ll.viewport.container_height > 0
    assert not ll.visible_window.is_empty


def test_negative_scroll_clamps_to_zero():
    ll = _make_list()
    ll.scroll_to(-50)
    assert ll.viewport.scroll_offset == 0


def test_scroll_past_end_clamps_to_content():
    ll = _make_list()
    ll.scroll_to(1_000_000)
    assert ll.viewport.scroll_offset == 100 * 40 - 390
    assert ll.visible_window.end_index == 99


def test_data_replacement_recomputes_window():
    ll = _make_list()
    ll.scroll_to(4000)
    assert ll.visible_window.end_index == 99
    ll.rows

    ll.set_levels(_make_levels(10))
    window = ll.visible_window
    assert window.end_index <= 9
    assert all(r.index < 10 for r in ll.rows)
    assert ll.summary.total_levels == 10


def test_data_replacement_to_empty():
    ll = _make_list()
    ll.hover(3)
    ll.set_levels(())
    assert ll.visible_window.is_empty
    assert ll.rows == []
    assert ll.summary is None
    assert ll.hovered_index is None


def test_scrolling_one_row_builds_one_row():
    ll = _make_list()
    ll.rows
    built = ll.rows_built
    ll.scroll_to(40)
    ll.rows
    assert ll.rows_built == built + 1


def test_rows_are_cached_between_calls():
    ll = _make_list()
    assert ll.rows is ll.rows


def test_hover_state():
    ll = _make_list()
    ll.hover(2)
    assert [r.index for r in ll.rows if r.is_hovered] == [2]
    ll.hover(500)
    assert ll.hovered_index is None
    ll.hover(4)
    ll.leave()
    assert not any(r.is_hovered for r in ll.rows)


def test_scroll_indicators():
    ll = _make_list()
    assert ll.scroll_indicators.more_below
    assert not ll.scroll_indicators.more_above
    ll.scroll_to(10_000)
    assert ll.scroll_indicators.more_above
    assert not ll.scroll_indicators.more_below


class TestHtml:
    def test_contains_container_and_rows(self):
        ll = _make_list()
        h = ll.to_html()
        assert "fpv-level-list" in h
        assert 'data-index="0"' in h
        assert 'data-index="15"' in h
        assert 'data-index="99"' not in h

    def test_spacer_uses_full_height(self):
        ll = _make_list()
        h = ll.to_html()
        assert f"height:{ll.total_height}px;" in h

    def test_aria_row_count(self):
        h = _make_list().to_html()
        assert 'aria-rowcount="100"' in h
        assert "Ocean depth data with 100 levels" in h

    def test_summary_strip(self):
        h = _make_list().to_html()
        assert "Levels" in h
        assert "Max Depth" in h
        assert "99m" in h
        assert "Temp Range" in h
        assert "15.1° - 25.0°C" in h

    def test_cell_formats(self):
        levels = (DisplayLevel(depth_m=12, temp_c=None, pres=12.345678, psal=34.5, level_index=12),)
        h = LevelList(levels).to_html()
        assert ">12<" in h
        assert "—" in h
        assert "34.50" in h
        assert "Temp Range" not in h

    def test_row_parity_classes(self):
        h = _make_list().to_html()
        assert "fpv-row fpv-even" in h
        assert "fpv-row fpv-odd" in h

    def test_hovered_row_class(self):
        ll = _make_list()
        ll.hover(1)
        assert "fpv-hovered" in ll.to_html()

    def test_script_embeds_levels(self):
        ll = _make_list(count=3)
        h = ll.to_html()
        assert f"fpvLevels_{ll._uid}" in h
        assert "requestAnimationFrame" in h

    def test_script_config_carries_breakpoint_table(self):
        ll = _make_list(count=3)
        script = ll._level_data_script(ll._uid)
        prefix = f"var fpvConfig_{ll._uid} = "
        config = json.loads(script.split(prefix, 1)[1].rsplit(";</script>", 1)[0])
        assert config["breakpoints"] == [
            {
                "maxWidth": bp.max_width,
                "rowHeight": bp.row_height,
                "heightRatio": bp.height_ratio,
                "heightCap": bp.height_cap,
            }
            for bp in BREAKPOINTS
        ]
        assert "0.45" not in ll._js(ll._uid)

    def test_unique_instance_ids(self):
        a, b = _make_list(), _make_list()
        assert a._uid != b._uid
        assert a._uid in a.to_html()

    def test_render_failure_returns_fallback(self):
        ll = _make_list()
        with patch.object(LevelList, "_body_html", side_effect=RuntimeError("boom")):
            result = ll.render()
        assert not result.ok
        assert result.error.error_type == "RuntimeError"
        assert "Unable to display level list" in result.html
        assert "boom" in result.html

    def test_render_ok(self):
        result = _make_list().render()
        assert result.ok
        assert result.error is None

    def test_repr_html(self):
        ll = _make_list(count=2)
        assert "fpv-level-list" in ll._repr_html_()


def test_from_payload_convenience():
    from floater_profile import from_payload

    payload = {"summary": {"level_count": 3}, "levels": [{"level_index": i, "pres": 1.0, "temp": 9.0} for i in range(6)]}
    ll = from_payload(payload, viewport_width=400, viewport_height=700)
    assert len(ll) == 3
    assert ll.viewport.row_height == 36


def test_from_api_convenience():
    from floater_profile import from_api
    from floater_profile.clients.static_client import StaticFloaterClient, synthetic_profile

    client = StaticFloaterClient(latest={42: synthetic_profile(12, seed=0)})
    with patch("floater_profile.clients.http_client.HttpFloaterClient", return_value=client):
        profile = from_api(42)
    assert len(profile.levels) == 12
