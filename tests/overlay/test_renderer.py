"""Tests for FrameRenderer."""

from __future__ import annotations

import json

import pytest

from drft.currents.models import CurrentVector, GridLine
from drft.overlay.frame import FrameSnapshot
from drft.overlay.renderer import FrameRenderer
from drft.track.models import TrackPoint

# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def test_format_time_is_utc_clock():
    assert FrameRenderer().format_time(1_717_236_000_000) == "10:00:00"


def test_format_date():
    assert FrameRenderer().format_date(1_717_236_000_000) == "2024-06-01"


def test_format_time_fractional_ms():
    assert FrameRenderer().format_time(1_717_236_001_999.6) == "10:00:01"


@pytest.mark.parametrize(
    "multiplier, expected",
    [
        (100.0, "100x"),
        (10, "10x"),
        (12.5, "12.5x"),
    ],
)
def test_format_speed(multiplier, expected):
    assert FrameRenderer().format_speed(multiplier) == expected


# ---------------------------------------------------------------------------
# render_current
# ---------------------------------------------------------------------------


def _vector(speed: float = 1.0, direction: float = 45.0) -> CurrentVector:
    return CurrentVector(
        position=(4.27, 52.11),
        u=0.7,
        v=0.7,
        speed=speed,
        direction_deg=direction,
        color=(88.4, 27.6, 135.0),
    )


def test_render_current_icon_angle_is_counter_clockwise():
    assert FrameRenderer().render_current(_vector(direction=45.0))["angle"] == -45.0


def test_render_current_size_grows_with_speed():
    r = FrameRenderer()
    assert r.render_current(_vector(speed=0.0))["size"] == 10.0
    assert r.render_current(_vector(speed=1.0))["size"] == 25.0


def test_render_current_integer_color():
    assert FrameRenderer().render_current(_vector())["color"] == [88, 28, 135]


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def _snapshot(**kwargs) -> FrameSnapshot:
    defaults = dict(
        current_time=1_717_236_000_000,
        is_playing=True,
        speed_multiplier=100.0,
        source_id="rws",
        marker=TrackPoint(longitude=4.3, latitude=52.12, timestamp=1_717_236_000_000, elevation=2.0),
        path=[(4.27, 52.11), (4.3, 52.12)],
        currents=[_vector()],
        grid=(GridLine(path=((4.0, 52.0), (4.5, 52.0))),),
    )
    defaults.update(kwargs)
    return FrameSnapshot(**defaults)


def test_render_keys():
    out = FrameRenderer().render(_snapshot())
    assert set(out) == {
        "time", "clock", "date", "playing", "speed", "speed_label", "source",
        "marker", "path", "currents", "grid", "legend", "errors",
    }


def test_render_values():
    out = FrameRenderer().render(_snapshot())
    assert out["clock"] == "10:00:00"
    assert out["speed_label"] == "100x"
    assert out["marker"] == {"position": [4.3, 52.12], "elevation": 2.0, "timestamp": 1_717_236_000_000}
    assert out["path"] == [[4.27, 52.11], [4.3, 52.12]]
    assert out["grid"] == [[[4.0, 52.0], [4.5, 52.0]]]
    assert len(out["currents"]) == 1
    assert [s["label"] for s in out["legend"]] == ["0.0", "0.75", "1.5+"]


def test_render_missing_layers():
    out = FrameRenderer().render(
        _snapshot(marker=None, currents=None, errors={"currents": "boom"})
    )
    assert out["marker"] is None
    assert out["currents"] is None
    assert out["errors"] == {"currents": "boom"}


def test_render_is_json_serializable():
    json.dumps(FrameRenderer().render(_snapshot()))
