"""Tests for RaceTimeline and BoundingBox."""

from __future__ import annotations

import logging

import pytest

from drft.track.models import BoundingBox, TrackPoint
from drft.track.timeline import RaceTimeline

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _pt(ts: int, lon: float = 4.27, lat: float = 52.11) -> TrackPoint:
    return TrackPoint(longitude=lon, latitude=lat, timestamp=ts)


def _timeline(*timestamps: int) -> RaceTimeline:
    return RaceTimeline(_pt(ts, lon=4.0 + i * 0.01) for i, ts in enumerate(timestamps))


# ---------------------------------------------------------------------------
# Time range
# ---------------------------------------------------------------------------


class TestTimeRange:
    def test_bounds_from_first_and_last_point(self):
        tl = _timeline(1000, 2000, 5000)
        assert tl.start_time == 1000
        assert tl.end_time == 5000
        assert tl.duration == 4000

    def test_empty_timeline_is_zero(self):
        tl = RaceTimeline()
        assert tl.start_time == 0
        assert tl.end_time == 0
        assert tl.is_empty
        assert len(tl) == 0

    def test_single_point(self):
        tl = _timeline(42)
        assert tl.start_time == tl.end_time == 42

    def test_out_of_order_input_is_resorted(self, caplog):
        with caplog.at_level(logging.WARNING, logger="drft.track.timeline"):
            tl = _timeline(3000, 1000, 2000)
        assert [p.timestamp for p in tl.points] == [1000, 2000, 3000]
        assert tl.start_time <= tl.end_time
        assert "out-of-order" in caplog.text

    def test_resort_is_stable_for_equal_timestamps(self):
        a = _pt(2000, lon=1.0)
        b = _pt(1000, lon=2.0)
        c = _pt(2000, lon=3.0)
        tl = RaceTimeline([a, b, c])
        assert tl.points == (b, a, c)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


class TestPointAtOrAfter:
    def test_start_time_returns_first_point(self):
        tl = _timeline(1000, 2000, 3000)
        assert tl.point_at_or_after(tl.start_time) is tl.points[0]

    def test_after_end_returns_last_point(self):
        tl = _timeline(1000, 2000, 3000)
        assert tl.point_at_or_after(tl.end_time + 1) is tl.points[-1]

    def test_between_samples_returns_next_sample(self):
        tl = _timeline(1000, 2000, 3000)
        assert tl.point_at_or_after(1500).timestamp == 2000

    def test_exact_match(self):
        tl = _timeline(1000, 2000, 3000)
        assert tl.point_at_or_after(2000).timestamp == 2000

    def test_before_start_returns_first_point(self):
        tl = _timeline(1000, 2000)
        assert tl.point_at_or_after(0).timestamp == 1000

    def test_fractional_time(self):
        tl = _timeline(1000, 2000)
        assert tl.point_at_or_after(1000.5).timestamp == 2000

    def test_empty_timeline_returns_none(self):
        tl = RaceTimeline()
        assert tl.point_at_or_after(0) is None
        assert tl.index_at_or_after(123) is None

    def test_two_point_race_mid_seek_resolves_to_second_point(self):
        tl = RaceTimeline([
            TrackPoint(longitude=4.27, latitude=52.11, timestamp=0),
            TrackPoint(longitude=4.30, latitude=52.12, timestamp=3_600_000),
        ])
        point = tl.point_at_or_after(1_800_000)
        assert point.position == (4.30, 52.12)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


class TestGeometry:
    def test_path_is_lon_lat_pairs_in_order(self):
        tl = RaceTimeline([_pt(0, 4.0, 52.0), _pt(1, 4.1, 52.1)])
        assert tl.path() == [(4.0, 52.0), (4.1, 52.1)]

    def test_bounds(self):
        tl = RaceTimeline([_pt(0, 4.3, 52.0), _pt(1, 4.1, 52.2), _pt(2, 4.2, 52.1)])
        assert tl.bounds() == BoundingBox(4.1, 52.0, 4.3, 52.2)

    def test_bounds_empty(self):
        assert RaceTimeline().bounds() is None


class TestBoundingBox:
    def test_padded(self):
        box = BoundingBox(4.0, 52.0, 4.5, 52.3).padded(0.02)
        assert box.as_tuple() == pytest.approx((3.98, 51.98, 4.52, 52.32))

    def test_degenerate(self):
        assert BoundingBox(4.0, 52.0, 4.0, 52.3).is_degenerate
        assert BoundingBox(4.5, 52.0, 4.0, 52.3).is_degenerate
        assert not BoundingBox(4.0, 52.0, 4.5, 52.3).is_degenerate

    def test_center_lat(self):
        assert BoundingBox(0.0, 50.0, 1.0, 54.0).center_lat == pytest.approx(52.0)

    def test_from_sequence(self):
        assert BoundingBox.from_sequence(["3.8", "51.8", "4.7", "52.4"]) == BoundingBox(
            3.8, 51.8, 4.7, 52.4
        )

    def test_from_sequence_wrong_length(self):
        with pytest.raises(ValueError):
            BoundingBox.from_sequence([1.0, 2.0, 3.0])
