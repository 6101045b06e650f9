"""Track modeling data structures."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class TrackPoint:
    """A single timestamped fix of the recorded race track."""

    longitude: float
    """Longitude in degrees (WGS84)."""

    latitude: float
    """Latitude in degrees (WGS84)."""

    timestamp: int
    """Milliseconds since the Unix epoch."""

    elevation: float | None = None
    """Elevation in metres, when the recording carries one."""

    @property
    def position(self) -> tuple[float, float]:
        """``(lon, lat)`` pair in map order."""
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class BoundingBox:
    """Geographic box in degrees.

    A box with ``min >= max`` on either axis is *degenerate*; it is allowed
    to exist but every grid generated over it is empty.
    """

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> BoundingBox:
        """Build from ``[min_lon, min_lat, max_lon, max_lat]``."""
        items = [float(v) for v in values]
        if len(items) != 4:
            raise ValueError(f"Bounding box needs 4 values, got {len(items)}")
        return cls(*items)

    @classmethod
    def from_points(cls, points: Iterable[TrackPoint]) -> BoundingBox | None:
        """Smallest box containing *points*, or ``None`` when there are none."""
        lons: list[float] = []
        lats: list[float] = []
        for p in points:
            lons.append(p.longitude)
            lats.append(p.latitude)
        if not lons:
            return None
        return cls(min(lons), min(lats), max(lons), max(lats))

    @property
    def is_degenerate(self) -> bool:
        return not (self.min_lon < self.max_lon and self.min_lat < self.max_lat)

    @property
    def center_lat(self) -> float:
        """Vertical midpoint latitude in degrees."""
        return (self.min_lat + self.max_lat) / 2

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_lon + self.max_lon) / 2, self.center_lat)

    def padded(self, margin: float) -> BoundingBox:
        """Return a copy grown by *margin* degrees on every side."""
        return BoundingBox(
            self.min_lon - margin,
            self.min_lat - margin,
            self.max_lon + margin,
            self.max_lat + margin,
        )

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.as_tuple())

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)
