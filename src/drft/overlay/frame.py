"""Frame assembly — the per-frame layers handed to the map renderer."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from drft.config import Settings
from drft.currents.grid import reference_grid
from drft.currents.models import CurrentVector, GridLine
from drft.currents.registry import DataSource
from drft.playback.clock import PlaybackState
from drft.track.models import TrackPoint
from drft.track.timeline import RaceTimeline

_logger = logging.getLogger(__name__)


@dataclass
class FrameSnapshot:
    """Everything the renderer needs to draw one frame.

    A layer that failed to build is ``None`` and its error message is kept in
    :attr:`errors` under the layer name.
    """

    current_time: float
    is_playing: bool
    speed_multiplier: float
    source_id: str
    marker: TrackPoint | None = None
    path: list[tuple[float, float]] | None = None
    currents: list[CurrentVector] | None = None
    grid: tuple[GridLine, ...] | None = None
    errors: dict[str, str] = field(default_factory=dict)


@functools.lru_cache(maxsize=8)
def _cached_reference_grid(bounds, spacing_nm: float) -> tuple[GridLine, ...]:
    return tuple(reference_grid(bounds, spacing_nm))


class FrameBuilder:
    """Builds :class:`FrameSnapshot` objects with per-layer isolation.

    A failure in one layer (for example the current field) is logged and
    recorded on the snapshot; the remaining layers are still produced.

    Parameters
    ----------
    settings:
        Sampling resolution, padding and reference-grid configuration.
    """

    LAYERS = ("marker", "path", "currents", "grid")

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    def build(
        self,
        timeline: RaceTimeline,
        state: PlaybackState,
        source: DataSource,
    ) -> FrameSnapshot:
        snap = FrameSnapshot(
            current_time=state.current_time,
            is_playing=state.is_playing,
            speed_multiplier=state.speed_multiplier,
            source_id=source.id,
        )
        snap.marker = self._layer(snap, "marker", lambda: timeline.point_at_or_after(state.current_time))
        snap.path = self._layer(snap, "path", timeline.path)
        snap.currents = self._layer(
            snap, "currents", lambda: self.currents(timeline, state.current_time, source)
        )
        snap.grid = self._layer(snap, "grid", self.grid)
        return snap

    def currents(
        self,
        timeline: RaceTimeline,
        timestamp: float,
        source: DataSource,
    ) -> list[CurrentVector]:
        """Current field around the track at *timestamp* (empty for an empty track)."""
        bounds = timeline.bounds()
        if bounds is None:
            return []
        cfg = self._settings
        return source.get_grid(bounds.padded(cfg.current_padding), timestamp, cfg.current_resolution)

    def grid(self) -> tuple[GridLine, ...]:
        """Static reference grid; regenerated only when bounds or spacing change."""
        cfg = self._settings
        return _cached_reference_grid(cfg.reference_bounds, cfg.reference_spacing_nm)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _layer(snap: FrameSnapshot, name: str, produce: Callable[[], Any]) -> Any:
        try:
            return produce()
        except Exception as exc:
            _logger.exception("Failed to build %s layer", name)
            snap.errors[name] = str(exc) or type(exc).__name__
            return None
