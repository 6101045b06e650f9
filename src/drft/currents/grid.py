"""Field grid sampler — lattice and line generation over a bounding box.

Shared by the current field (fine spacing in degrees, point lattice) and the
background reference grid (coarse spacing in nautical miles, full-width
lines).  Coordinates are derived from an integer step index
(``start + i * increment``) so repeated addition never drifts.
"""

from __future__ import annotations

import math

from drft.currents.models import GridLine
from drft.track.models import BoundingBox

NM_PER_DEGREE_LAT = 60.0  # 1 degree of latitude ~= 60 nautical miles
MIN_COS_LATITUDE = 1e-6

_EPS = 1e-9  # tolerates span/increment landing just below an integer


def _check_increment(increment: float) -> None:
    if not math.isfinite(increment) or increment <= 0:
        raise ValueError(f"Grid spacing must be a positive finite number, got {increment!r}")


def axis_steps(start: float, stop: float, increment: float) -> int:
    """Number of values :func:`axis_values` produces for ``[start, stop]``.

    Raises
    ------
    ValueError
        If *increment* is invalid or the span holds no finite number of steps.
    """
    _check_increment(increment)
    span = stop - start
    if not span > 0:
        return 0
    steps = span / increment
    if not math.isfinite(steps):
        raise ValueError(f"Grid over [{start}, {stop}] at {increment!r} has no finite size")
    return math.floor(steps + _EPS) + 1


def axis_values(start: float, stop: float, increment: float) -> list[float]:
    """Values ``start + i * increment`` for every step that stays inside ``stop``."""
    return [start + i * increment for i in range(axis_steps(start, stop, increment))]


def longitude_increment(bounds: BoundingBox, spacing: float, latitude_corrected: bool) -> float:
    """East-west step for *spacing*.

    When *latitude_corrected*, the step is widened by ``1 / cos(center_lat)``
    using the box's midpoint latitude for the whole box.  The cosine is
    clamped to :data:`MIN_COS_LATITUDE` so a box centred on a pole still
    yields a finite step.
    """
    if not latitude_corrected:
        return spacing
    cos_lat = abs(math.cos(math.radians(bounds.center_lat)))
    return spacing / max(cos_lat, MIN_COS_LATITUDE)


def lattice_size(bounds: BoundingBox, spacing: float, latitude_corrected: bool = False) -> int:
    """Number of points :func:`sample_points` would return."""
    if bounds.is_degenerate:
        return 0
    lon_inc = longitude_increment(bounds, spacing, latitude_corrected)
    return (
        axis_steps(bounds.min_lon, bounds.max_lon, lon_inc)
        * axis_steps(bounds.min_lat, bounds.max_lat, spacing)
    )


def line_count(bounds: BoundingBox, spacing: float, latitude_corrected: bool = False) -> int:
    """Number of lines :func:`grid_lines` would return."""
    if bounds.is_degenerate:
        return 0
    lon_inc = longitude_increment(bounds, spacing, latitude_corrected)
    return (
        axis_steps(bounds.min_lat, bounds.max_lat, spacing)
        + axis_steps(bounds.min_lon, bounds.max_lon, lon_inc)
    )


def sample_points(
    bounds: BoundingBox,
    spacing: float,
    latitude_corrected: bool = False,
) -> list[tuple[float, float]]:
    """Lattice of ``(lon, lat)`` sample locations, longitude-major.

    Returns an empty list for a degenerate box.

    Raises
    ------
    ValueError
        If *spacing* is not a positive finite number.
    """
    _check_increment(spacing)
    if bounds.is_degenerate:
        return []
    lons = axis_values(
        bounds.min_lon, bounds.max_lon, longitude_increment(bounds, spacing, latitude_corrected)
    )
    lats = axis_values(bounds.min_lat, bounds.max_lat, spacing)
    return [(lon, lat) for lon in lons for lat in lats]


def grid_lines(
    bounds: BoundingBox,
    spacing: float,
    latitude_corrected: bool = False,
) -> list[GridLine]:
    """Latitude lines followed by longitude lines, each spanning the full box."""
    _check_increment(spacing)
    if bounds.is_degenerate:
        return []
    lines: list[GridLine] = []
    for lat in axis_values(bounds.min_lat, bounds.max_lat, spacing):
        lines.append(GridLine(path=((bounds.min_lon, lat), (bounds.max_lon, lat))))
    lon_inc = longitude_increment(bounds, spacing, latitude_corrected)
    for lon in axis_values(bounds.min_lon, bounds.max_lon, lon_inc):
        lines.append(GridLine(path=((lon, bounds.min_lat), (lon, bounds.max_lat))))
    return lines


def reference_grid(bounds: BoundingBox, spacing_nm: float = 0.1) -> list[GridLine]:
    """Background reference grid with *spacing_nm* nautical miles between lines."""
    _check_increment(spacing_nm)
    return grid_lines(bounds, spacing_nm / NM_PER_DEGREE_LAT, latitude_corrected=True)


def reference_line_count(bounds: BoundingBox, spacing_nm: float = 0.1) -> int:
    """Number of lines :func:`reference_grid` would return."""
    _check_increment(spacing_nm)
    return line_count(bounds, spacing_nm / NM_PER_DEGREE_LAT, latitude_corrected=True)
