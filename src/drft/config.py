"""Runtime settings read from the environment.

Call :func:`dotenv.load_dotenv` before :meth:`Settings.from_env` to pick up a
project ``.env`` file; the web app and the replay script both do.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from drft.track.models import BoundingBox

_DEFAULT_REFERENCE_BOUNDS = BoundingBox(3.8, 51.8, 4.7, 52.4)


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _bounds(env: Mapping[str, str], name: str, default: BoundingBox) -> BoundingBox:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return BoundingBox.from_sequence(raw.split(","))
    except ValueError as exc:
        raise ValueError(f"{name} must be 'min_lon,min_lat,max_lon,max_lat', got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Playback and sampling configuration."""

    track_file: str | None = None
    default_source: str = "rws"
    playback_speed: float = 100.0
    speed_min: float = 10.0
    speed_max: float = 500.0
    current_resolution: float = 0.002  # degrees, ~0.12 nm
    current_padding: float = 0.02  # degrees around the track
    reference_bounds: BoundingBox = field(default=_DEFAULT_REFERENCE_BOUNDS)
    reference_spacing_nm: float = 0.1
    max_grid_points: int = 250_000
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0 < self.speed_min <= self.speed_max:
            raise ValueError(
                f"Speed range must satisfy 0 < min <= max, got [{self.speed_min}, {self.speed_max}]"
            )

    def clamp_speed(self, multiplier: float) -> float:
        """Clamp *multiplier* into ``[speed_min, speed_max]``."""
        return min(max(multiplier, self.speed_min), self.speed_max)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``DRFT_*`` environment variables.

        Raises
        ------
        ValueError
            If a variable is set to a value of the wrong type.
        """
        env = os.environ if environ is None else environ
        return cls(
            track_file=env.get("DRFT_TRACK_FILE") or None,
            default_source=env.get("DRFT_DEFAULT_SOURCE") or "rws",
            playback_speed=_float(env, "DRFT_PLAYBACK_SPEED", 100.0),
            speed_min=_float(env, "DRFT_SPEED_MIN", 10.0),
            speed_max=_float(env, "DRFT_SPEED_MAX", 500.0),
            current_resolution=_float(env, "DRFT_CURRENT_RESOLUTION", 0.002),
            current_padding=_float(env, "DRFT_CURRENT_PADDING", 0.02),
            reference_bounds=_bounds(env, "DRFT_REFERENCE_BOUNDS", _DEFAULT_REFERENCE_BOUNDS),
            reference_spacing_nm=_float(env, "DRFT_REFERENCE_SPACING_NM", 0.1),
            max_grid_points=_int(env, "DRFT_MAX_GRID_POINTS", 250_000),
            log_level=(env.get("DRFT_LOG_LEVEL") or "INFO").upper(),
        )
