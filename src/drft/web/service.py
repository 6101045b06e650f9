"""ReplayService — wraps the playback controller for the Web API."""

from __future__ import annotations

import logging
import math

from drft.config import Settings
from drft.currents.grid import lattice_size, reference_grid, reference_line_count
from drft.currents.models import CurrentVector, GridLine
from drft.currents.registry import SourceRegistry
from drft.overlay.renderer import FrameRenderer
from drft.playback.controller import PlaybackController
from drft.track.gpx_loader import GPXLoader, TrackLoadError
from drft.track.models import BoundingBox
from drft.track.timeline import RaceTimeline
from drft.web.schemas import PlaybackResponse, SourceInfo, SourcesResponse, TrackResponse

_logger = logging.getLogger(__name__)


class ReplayService:
    """Holds one replay session: track, playback controller and renderer.

    Parameters
    ----------
    controller:
        Playback controller to expose.
    dropped_points:
        Diagnostic from loading the controller's current track.
    loader:
        GPX loader; injected for testing.
    """

    def __init__(
        self,
        controller: PlaybackController,
        dropped_points: int = 0,
        loader: GPXLoader | None = None,
    ) -> None:
        self._controller = controller
        self._dropped = dropped_points
        self._loader = loader or GPXLoader()
        self._renderer = FrameRenderer()

    @classmethod
    def from_settings(cls, settings: Settings) -> ReplayService:
        """Build a service, loading ``settings.track_file`` when configured.

        A track that fails to load is logged and replaced by an empty one so
        the service still starts.
        """
        timeline = RaceTimeline()
        dropped = 0
        if settings.track_file:
            try:
                result = GPXLoader().load(settings.track_file)
            except TrackLoadError as exc:
                _logger.error("Could not load track %s: %s", settings.track_file, exc)
            else:
                timeline, dropped = result.timeline, result.dropped_points
        controller = PlaybackController(timeline, SourceRegistry(), settings)
        return cls(controller, dropped_points=dropped)

    @property
    def controller(self) -> PlaybackController:
        return self._controller

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def sources(self) -> SourcesResponse:
        return SourcesResponse(
            active_id=self._controller.active_source.id,
            sources=[
                SourceInfo(
                    id=s.id,
                    name=s.name,
                    description=s.description,
                    info_url=s.info_url,
                    quality_description=s.quality_description,
                )
                for s in self._controller.registry
            ],
        )

    def select_source(self, source_id: str) -> SourcesResponse:
        self._controller.select_source(source_id)
        return self.sources()

    # ------------------------------------------------------------------
    # Track
    # ------------------------------------------------------------------

    def track(self) -> TrackResponse:
        timeline = self._controller.timeline
        bounds = timeline.bounds()
        return TrackResponse(
            start_time=timeline.start_time,
            end_time=timeline.end_time,
            point_count=len(timeline),
            dropped_points=self._dropped,
            path=timeline.path(),
            bounds=None if bounds is None else bounds.as_tuple(),
        )

    def load_gpx(self, gpx_text: str) -> TrackResponse:
        """Replace the track with *gpx_text*.

        Raises
        ------
        TrackLoadError
            If the document is not valid GPX.
        """
        result = self._loader.parse(gpx_text)
        self._controller.load_timeline(result.timeline)
        self._dropped = result.dropped_points
        return self.track()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def playback(self) -> PlaybackResponse:
        state = self._controller.state()
        timeline = self._controller.timeline
        return PlaybackResponse(
            current_time=state.current_time,
            is_playing=state.is_playing,
            speed_multiplier=state.speed_multiplier,
            start_time=timeline.start_time,
            end_time=timeline.end_time,
            source_id=self._controller.active_source.id,
        )

    def frame(self) -> dict:
        return self._renderer.render(self._controller.frame())

    # ------------------------------------------------------------------
    # Ad-hoc sampling
    # ------------------------------------------------------------------

    def currents(
        self,
        bounds: BoundingBox,
        timestamp: float,
        resolution: float,
        source_id: str | None = None,
    ) -> list[CurrentVector]:
        """Sample a source over *bounds* without touching the playback state.

        Raises
        ------
        ValueError
            If *bounds* or *timestamp* are not finite, *resolution* is
            invalid, or the lattice exceeds ``settings.max_grid_points``.
        """
        _check_bounds(bounds)
        if not math.isfinite(timestamp):
            raise ValueError(f"Timestamp must be finite, got {timestamp!r}")
        registry = self._controller.registry
        source = self._controller.active_source if source_id is None else registry.resolve(source_id)
        self._check_limit(lattice_size(bounds, resolution), "points")
        return source.get_grid(bounds, timestamp, resolution)

    def grid(self, bounds: BoundingBox, spacing_nm: float) -> list[GridLine]:
        """Reference grid lines over *bounds*.

        Raises
        ------
        ValueError
            If *bounds* are not finite, *spacing_nm* is invalid, or the line
            count exceeds ``settings.max_grid_points``.
        """
        _check_bounds(bounds)
        self._check_limit(reference_line_count(bounds, spacing_nm), "lines")
        return reference_grid(bounds, spacing_nm)

    def _check_limit(self, size: int, unit: str) -> None:
        limit = self._controller.settings.max_grid_points
        if size > limit:
            raise ValueError(f"Grid of {size} {unit} exceeds the limit of {limit}")


def _check_bounds(bounds: BoundingBox) -> None:
    if not bounds.is_finite():
        raise ValueError(f"Bounds must be finite, got {bounds.as_tuple()}")
