"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from drft.config import Settings
from drft.currents.registry import SourceRegistry
from drft.playback.controller import PlaybackController
from drft.track.models import BoundingBox, TrackPoint
from drft.track.timeline import RaceTimeline
from drft.web.app import create_app
from drft.web.service import ReplayService

HOUR_MS = 3_600_000


class FakeMonotonic:
    def __init__(self) -> None:
        self.now = 10.0

    def __call__(self) -> float:
        return self.now


def make_gpx(*points: tuple[float, float, str | None]) -> str:
    """Build a one-track GPX document from ``(lat, lon, time)`` tuples."""
    pts = []
    for lat, lon, ts in points:
        time_el = f"<time>{ts}</time>" if ts else ""
        pts.append(f'<trkpt lat="{lat}" lon="{lon}">{time_el}</trkpt>')
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">'
        f"<trk><trkseg>{''.join(pts)}</trkseg></trk></gpx>"
    )


@pytest.fixture
def mono():
    return FakeMonotonic()


@pytest.fixture
def service(mono):
    timeline = RaceTimeline([
        TrackPoint(longitude=4.27, latitude=52.11, timestamp=0),
        TrackPoint(longitude=4.30, latitude=52.12, timestamp=HOUR_MS),
    ])
    settings = Settings(
        current_resolution=0.01,
        reference_bounds=BoundingBox(4.0, 52.0, 4.5, 52.3),
        reference_spacing_nm=1.0,
        max_grid_points=10_000,
    )
    controller = PlaybackController(timeline, SourceRegistry(), settings, monotonic=mono)
    return ReplayService(controller)


@pytest.fixture
def client(service):
    """FastAPI test client bound to a two-point race."""
    with TestClient(create_app(service)) as c:
        yield c
