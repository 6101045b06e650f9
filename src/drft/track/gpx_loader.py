"""GPXLoader — reads a recorded GPX race track into a RaceTimeline."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from datetime import datetime, timezone

import gpxpy
import gpxpy.gpx

from drft.track.models import TrackPoint
from drft.track.timeline import RaceTimeline

_logger = logging.getLogger(__name__)


class TrackLoadError(Exception):
    """Raised when a GPX document cannot be opened or parsed."""


@dataclass
class TrackLoadResult:
    """A loaded timeline plus the number of points that had to be dropped."""

    timeline: RaceTimeline
    dropped_points: int = 0


def _to_epoch_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(round(moment.timestamp() * 1000))


class GPXLoader:
    """Converts GPX content into a :class:`RaceTimeline`.

    Only the first track is used; all of its segments are concatenated.
    Points without a usable timestamp or with non-finite coordinates are
    dropped and counted rather than failing the whole load.
    """

    def parse(self, gpx_text: str) -> TrackLoadResult:
        """Parse a GPX document given as text.

        Raises
        ------
        TrackLoadError
            If the document is not valid GPX.
        """
        try:
            gpx = gpxpy.parse(gpx_text)
        except (gpxpy.gpx.GPXException, ValueError) as exc:
            raise TrackLoadError(f"Invalid GPX document: {exc}") from exc

        points: list[TrackPoint] = []
        dropped = 0
        if gpx.tracks:
            for segment in gpx.tracks[0].segments:
                for pt in segment.points:
                    track_point = self._convert(pt)
                    if track_point is None:
                        dropped += 1
                    else:
                        points.append(track_point)

        if dropped:
            _logger.warning("Dropped %d GPX point(s) without a usable timestamp", dropped)
        _logger.info("Loaded track with %d point(s)", len(points))
        return TrackLoadResult(timeline=RaceTimeline(points), dropped_points=dropped)

    def load(self, path: str) -> TrackLoadResult:
        """Read and parse the GPX file at *path*.

        Raises
        ------
        TrackLoadError
            If the file does not exist, cannot be read, or is not valid GPX.
        """
        if not os.path.exists(path):
            raise TrackLoadError(f"File not found: {path!r}")
        try:
            with open(path, encoding="utf-8") as fh:
                text = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise TrackLoadError(f"Could not read {path!r}: {exc}") from exc
        return self.parse(text)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _convert(pt: gpxpy.gpx.GPXTrackPoint) -> TrackPoint | None:
        if pt.time is None:
            return None
        if not (math.isfinite(pt.longitude) and math.isfinite(pt.latitude)):
            return None
        try:
            timestamp = _to_epoch_ms(pt.time)
        except (OverflowError, OSError, ValueError):
            return None
        return TrackPoint(
            longitude=pt.longitude,
            latitude=pt.latitude,
            timestamp=timestamp,
            elevation=pt.elevation,
        )


def parse_track(gpx_text: str) -> TrackLoadResult:
    """Module-level shortcut for :meth:`GPXLoader.parse`."""
    return GPXLoader().parse(gpx_text)


def load_track(path: str) -> TrackLoadResult:
    """Module-level shortcut for :meth:`GPXLoader.load`."""
    return GPXLoader().load(path)
