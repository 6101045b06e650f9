"""Recorded race track: points, bounds and the playback timeline."""

from drft.track.gpx_loader import GPXLoader, TrackLoadError, TrackLoadResult
from drft.track.models import BoundingBox, TrackPoint
from drft.track.timeline import RaceTimeline

__all__ = [
    "BoundingBox",
    "GPXLoader",
    "RaceTimeline",
    "TrackLoadError",
    "TrackLoadResult",
    "TrackPoint",
]
