"""Tests for FloaterProfile: request generations, data swaps and view states."""

from floater_profile.clients.base_client import DateOption, FetchError
from floater_profile.clients.static_client import StaticFloaterClient, synthetic_profile
from floater_profile.core.profile import (
    DATE_ERROR,
    LATEST_ERROR,
    OPEN_ERROR,
    FloaterProfile,
    ProfileStatus,
)

PLATFORM = 2902746


def _payload(count, level_count=None, cycle=1):
    payload = synthetic_profile(count, seed=count, cycle_number=cycle)
    payload["summary"]["level_count"] = level_count
    return payload


def _make_client():
    return StaticFloaterClient(
        latest={PLATFORM: _payload(100, level_count=100)},
        by_date={
            PLATFORM: {
                "20240115": _payload(100, level_count=40, cycle=12),
                "20240125": {"summary": {"level_count": 5}, "levels": [{"level_index": 0, "pres": -1}]},
            }
        },
        dates={
            PLATFORM: [
                DateOption("20240115", "2024-01-15"),
                DateOption("20240125", "2024-01-25"),
            ]
        },
    )


def _make_profile(**kwargs):
    floater = {"latitude": -12.5, "longitude": 73.25, "status": "active"}
    return FloaterProfile(_make_client(), PLATFORM, floater=floater, **kwargs)


def test_initial_state_is_idle():
    profile = _make_profile()
    assert profile.status is ProfileStatus.IDLE
    assert profile.levels == ()
    assert profile.summary is None


def test_open_loads_dates_and_latest():
    profile = _make_profile()
    profile.open()
    assert profile.status is ProfileStatus.READY
    assert len(profile.levels) == 100
    assert profile.summary.total_levels == 100
    assert [d.key for d in profile.dates] == ["20240115", "20240125"]
    assert profile.level_list.levels == profile.levels


def test_select_date_applies_level_count():
    profile = _make_profile()
    profile.open()
    profile.select_date("20240115")
    assert profile.selected_date == "20240115"
    assert len(profile.levels) == 40
    assert profile.cycle_number == 12
    assert len(profile.level_list) == 40


def test_select_empty_date_reloads_latest():
    profile = _make_profile()
    profile.open()
    profile.select_date("20240115")
    profile.select_date("")
    assert profile.selected_date is None
    assert len(profile.levels) == 100


def test_empty_profile_is_distinct_state():
    profile = _make_profile()
    profile.open()
    profile.select_date("20240125")
    assert profile.status is ProfileStatus.EMPTY
    assert profile.error is None
    assert profile.levels == ()
    assert profile.summary is None
    assert "No measurements for this profile" in profile.to_html()


def test_open_failure_sets_error_state():
    profile = FloaterProfile(StaticFloaterClient(latest={}), PLATFORM)
    profile.open()
    assert profile.status is ProfileStatus.ERROR
    assert profile.error == OPEN_ERROR
    assert OPEN_ERROR in profile.to_html()


def test_date_failure_message():
    profile = _make_profile()
    profile.open()
    profile.select_date("19990101")
    assert profile.status is ProfileStatus.ERROR
    assert profile.error == DATE_ERROR


def test_latest_failure_message():
    client = _make_client()
    profile = FloaterProfile(client, PLATFORM)
    profile.open()
    client._latest.clear()
    profile.select_date(None)
    assert profile.error == LATEST_ERROR


def test_loading_state_keeps_previous_profile_until_swap():
    profile = _make_profile()
    profile.open()
    previous = profile.snapshot
    request = profile.begin_request("20240115", DATE_ERROR)
    assert profile.status is ProfileStatus.LOADING
    assert profile.snapshot is previous
    assert len(profile.level_list) == 100
    assert "Loading profile" in profile.to_html()

    profile.resolve(request, _payload(10))
    assert profile.status is ProfileStatus.READY
    assert len(profile.levels) == 10
    assert len(profile.level_list) == 10


class TestStaleResponses:
    def test_late_response_is_discarded(self):
        profile = _make_profile()
        first = profile.begin_request("20240115")
        second = profile.begin_request("20240125")
        assert profile.resolve(second, _payload(7))
        assert not profile.resolve(first, _payload(50))
        assert len(profile.levels) == 7
        assert profile.status is ProfileStatus.READY

    def test_late_failure_is_discarded(self):
        profile = _make_profile()
        first = profile.begin_request()
        second = profile.begin_request()
        profile.resolve(second, _payload(3))
        assert not profile.fail(first, FetchError("timeout"))
        assert profile.status is ProfileStatus.READY
        assert profile.error is None

    def test_generation_is_monotonic(self):
        profile = _make_profile()
        generations = [profile.begin_request().generation for _ in range(5)]
        assert generations == sorted(set(generations))
        assert profile.generation == generations[-1]

    def test_only_latest_request_is_current(self):
        profile = _make_profile()
        first = profile.begin_request()
        assert profile.is_current(first)
        second = profile.begin_request()
        assert not profile.is_current(first)
        assert profile.is_current(second)


def test_level_list_window_follows_data_swap():
    profile = _make_profile(viewport_width=1280, viewport_height=1200)
    profile.open()
    profile.level_list.scroll_to(4000)
    assert profile.level_list.visible_window.end_index == 99
    profile.select_date("20240115")
    assert profile.level_list.visible_window.end_index <= 39
    assert all(r.index < 40 for r in profile.level_list.rows)



def test_open_survives_oversized_integers():
    huge = 10 ** 400
    payload = {
        "summary": {"level_count": huge, "avg_temp": huge},
        "levels": [
            {"level_index": 0, "pres": huge, "temp": 10.0},
            {"level_index": 1, "pres": 1.0, "temp": 11.0},
        ],
    }
    profile = FloaterProfile(StaticFloaterClient(latest={PLATFORM: payload}), PLATFORM)
    profile.open()
    assert profile.status is ProfileStatus.READY
    assert [lv.level_index for lv in profile.levels] == [1]
    assert "ARGO FLOAT" in profile.to_html()

def test_metrics_from_summary():
    profile = _make_profile()
    assert all(v is None for v in profile.metrics().values())
    profile.open()
    metrics = profile.metrics()
    assert metrics["depth_m"] == 100
    assert metrics["temperature_c"] is not None
    assert metrics["salinity_psu"] is not None
    assert metrics["pressure_dbar"] is not None


class TestHtml:
    def test_header(self):
        profile = _make_profile()
        profile.open()
        h = profile.to_html()
        assert f"ARGO FLOAT {PLATFORM}" in h
        assert "ACTIVE" in h
        assert "12.500°S, 73.250°E" in h

    def test_date_picker(self):
        profile = _make_profile()
        profile.open()
        profile.select_date("20240115")
        h = profile.to_html()
        assert "Latest Data" in h
        assert '<option value="20240115" selected>2024-01-15</option>' in h

    def test_no_dates(self):
        profile = FloaterProfile(StaticFloaterClient(latest={PLATFORM: _payload(3)}), PLATFORM)
        profile.open()
        assert "No dates available" in profile.to_html()

    def test_ready_state_embeds_level_list(self):
        profile = _make_profile()
        profile.open()
        assert "fpv-level-list" in profile.to_html()

    def test_inactive_status(self):
        profile = FloaterProfile(_make_client(), PLATFORM, floater={"status": "inactive"})
        assert "INACTIVE" in profile.to_html()
        assert profile.cycle_number == "N/A"
