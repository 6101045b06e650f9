"""Current field data models."""

from __future__ import annotations

from dataclasses import dataclass

Color = tuple[float, float, float]


@dataclass(frozen=True)
class CurrentVector:
    """Current at one lattice point.

    Derived per query from the active source; never persisted.
    """

    position: tuple[float, float]
    """``(lon, lat)`` of the sample."""

    u: float
    """Eastward component in m/s."""

    v: float
    """Northward component in m/s."""

    speed: float
    """Magnitude in m/s (>= 0)."""

    direction_deg: float
    """Compass bearing the current flows toward, in [0, 360)."""

    color: Color
    """RGB color from the speed ramp (floats in [0, 255])."""


@dataclass(frozen=True)
class TidalParams:
    """Per-source constants of the synthetic tidal model."""

    phase_offset: float = 0.0
    """Fraction of a tidal cycle added to the timestamp-derived phase."""

    speed_multiplier: float = 1.0
    """Scale applied to the maximum current speed."""

    direction_offset_rad: float = 0.0
    """Rotation applied to the flood/ebb bearing, in radians."""


@dataclass(frozen=True)
class GridLine:
    """A straight grid line given by its two ``(lon, lat)`` vertices."""

    path: tuple[tuple[float, float], tuple[float, float]]
