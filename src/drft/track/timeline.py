"""RaceTimeline — a recorded track normalized into a queryable time range."""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable

from drft.track.models import BoundingBox, TrackPoint

_logger = logging.getLogger(__name__)


class RaceTimeline:
    """Ordered track points with ``start_time`` / ``end_time`` bounds.

    Points are expected in timestamp order.  Out-of-order input is stably
    re-sorted by timestamp and a warning is logged, so lookups always run on
    a monotonic sequence.  An empty timeline has ``start_time == end_time == 0``.

    Parameters
    ----------
    points:
        Track points, normally as produced by
        :class:`~drft.track.gpx_loader.GPXLoader`.
    """

    def __init__(self, points: Iterable[TrackPoint] = ()) -> None:
        pts = list(points)
        inversions = sum(
            1 for a, b in zip(pts, pts[1:]) if b.timestamp < a.timestamp
        )
        if inversions:
            _logger.warning(
                "Track has %d out-of-order timestamp(s); re-sorting %d points",
                inversions,
                len(pts),
            )
            pts.sort(key=lambda p: p.timestamp)

        self._points: tuple[TrackPoint, ...] = tuple(pts)
        self._timestamps: list[int] = [p.timestamp for p in pts]

    # ------------------------------------------------------------------
    # Time range
    # ------------------------------------------------------------------

    @property
    def points(self) -> tuple[TrackPoint, ...]:
        return self._points

    @property
    def start_time(self) -> int:
        return self._timestamps[0] if self._timestamps else 0

    @property
    def end_time(self) -> int:
        return self._timestamps[-1] if self._timestamps else 0

    @property
    def duration(self) -> int:
        """Track duration in milliseconds."""
        return self.end_time - self.start_time

    @property
    def is_empty(self) -> bool:
        return not self._points

    def __len__(self) -> int:
        return len(self._points)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def index_at_or_after(self, t: float) -> int | None:
        """Index of the first point with ``timestamp >= t``.

        Past the last point the last index is returned; ``None`` when the
        timeline is empty.
        """
        if not self._timestamps:
            return None
        idx = bisect.bisect_left(self._timestamps, t)
        return min(idx, len(self._timestamps) - 1)

    def point_at_or_after(self, t: float) -> TrackPoint | None:
        """Nearest recorded point at or after *t* (no interpolation).

        Returns the last point when *t* is beyond the end of the track and
        ``None`` for an empty timeline.
        """
        idx = self.index_at_or_after(t)
        if idx is None:
            return None
        return self._points[idx]

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def path(self) -> list[tuple[float, float]]:
        """Full static path as ``[(lon, lat), ...]``."""
        return [p.position for p in self._points]

    def bounds(self) -> BoundingBox | None:
        """Bounding box of the whole track, ``None`` when empty."""
        return BoundingBox.from_points(self._points)
