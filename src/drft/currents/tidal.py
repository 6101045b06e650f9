"""Synthetic semi-diurnal tidal current model and speed color ramp.

The model is a deterministic approximation tuned to the Scheveningen coast,
not measured data:

1. ``phase = (timestamp mod TIDE_PERIOD_MS) / TIDE_PERIOD_MS + phase_offset``
2. ``signed = cos(2 * pi * phase) * MAX_CURRENT_SPEED * speed_multiplier``
3. Flow runs toward the flood bearing while ``signed > 0`` and toward its
   reciprocal otherwise, rotated by ``direction_offset_rad``.
4. ``u``/``v`` come from sine/cosine of the flow direction; the reported
   bearing is ``atan2(u, v)`` normalized into [0, 360).

Every lattice point shares the same timestamp-derived phase, so the field is
spatially uniform; sources differ only in their :class:`TidalParams`.
"""

from __future__ import annotations

import math

from drft.currents.grid import sample_points
from drft.currents.models import Color, CurrentVector, TidalParams
from drft.track.models import BoundingBox

TIDE_PERIOD_MS = 44_712_000  # 12.42 h, principal lunar semi-diurnal (M2)
MAX_CURRENT_SPEED = 1.5  # m/s, roughly 3 knots
FLOOD_DIRECTION_DEG = 45.0

SLOW_COLOR: Color = (30.0, 58.0, 138.0)
MID_COLOR: Color = (88.0, 28.0, 135.0)
FAST_COLOR: Color = (255.0, 0.0, 200.0)

# (speed m/s, label) stops shown in the legend
LEGEND_STOPS: tuple[tuple[float, str], ...] = (
    (0.0, "0.0"),
    (MAX_CURRENT_SPEED / 2, "0.75"),
    (MAX_CURRENT_SPEED, "1.5+"),
)


def tidal_phase(timestamp: float, phase_offset: float = 0.0) -> float:
    """Fraction of the tidal cycle at *timestamp* (ms), plus *phase_offset*."""
    return (timestamp % TIDE_PERIOD_MS) / TIDE_PERIOD_MS + phase_offset


def tidal_vector(timestamp: float, params: TidalParams) -> tuple[float, float, float, float]:
    """Return ``(u, v, speed, direction_deg)`` of the current at *timestamp*."""
    angle = tidal_phase(timestamp, params.phase_offset) * 2 * math.pi
    signed_speed = math.cos(angle) * MAX_CURRENT_SPEED * params.speed_multiplier
    speed = abs(signed_speed)

    flood = math.radians(FLOOD_DIRECTION_DEG)
    flow_dir = (flood if signed_speed > 0 else flood + math.pi) + params.direction_offset_rad

    u = speed * math.sin(flow_dir)
    v = speed * math.cos(flow_dir)

    direction = math.degrees(math.atan2(u, v))
    if direction < 0:
        direction += 360.0
    if direction >= 360.0:
        direction -= 360.0
    return u, v, speed, direction


def _lerp(a: Color, b: Color, t: float) -> Color:
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


def speed_color(speed: float) -> Color:
    """Map *speed* onto the slow → mid → fast color ramp.

    Intensity is ``speed / MAX_CURRENT_SPEED`` clamped to [0, 1]; the lower
    half blends slow to mid, the upper half mid to fast.
    """
    intensity = min(max(speed / MAX_CURRENT_SPEED, 0.0), 1.0)
    if intensity < 0.5:
        return _lerp(SLOW_COLOR, MID_COLOR, intensity * 2)
    return _lerp(MID_COLOR, FAST_COLOR, (intensity - 0.5) * 2)


def generate_field(
    bounds: BoundingBox,
    timestamp: float,
    resolution: float,
    params: TidalParams,
) -> list[CurrentVector]:
    """Evaluate the model at every lattice point of *bounds*.

    Raises
    ------
    ValueError
        If *resolution* is not a positive finite number.
    """
    positions = sample_points(bounds, resolution)
    if not positions:
        return []
    u, v, speed, direction = tidal_vector(timestamp, params)
    color = speed_color(speed)
    return [
        CurrentVector(position=pos, u=u, v=v, speed=speed, direction_deg=direction, color=color)
        for pos in positions
    ]


def speed_legend() -> list[tuple[float, str, Color]]:
    """``(speed, label, color)`` stops for the current speed legend."""
    return [(speed, label, speed_color(speed)) for speed, label in LEGEND_STOPS]
