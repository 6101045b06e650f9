"""PlaybackController — single owner of the playback state."""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable

from drft.config import Settings
from drft.currents.registry import DataSource, SourceRegistry, SourceSelection
from drft.overlay.frame import FrameBuilder, FrameSnapshot
from drft.playback.clock import PlaybackClock, PlaybackState
from drft.track.timeline import RaceTimeline

_logger = logging.getLogger(__name__)


class PlaybackController:
    """Drives a :class:`PlaybackClock` over a timeline from a periodic refresh.

    Control calls may arrive from several threads (web workers, a UI); every
    mutation happens under one lock so only one writer touches the state per
    tick.  Seeks are consolidated: the most recent target is applied at the
    next tick boundary.

    Parameters
    ----------
    timeline:
        Track to replay.
    registry:
        Catalogue of current sources.
    settings:
        Speed range, default source and sampling configuration.
    monotonic:
        Clock used to measure real elapsed time between ticks (seconds).
        Injected for testability; defaults to :func:`time.monotonic`.
    """

    def __init__(
        self,
        timeline: RaceTimeline | None = None,
        registry: SourceRegistry | None = None,
        settings: Settings | None = None,
        monotonic: Callable[[], float] | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._monotonic = monotonic or time.monotonic
        self._lock = threading.Lock()
        self._selection = SourceSelection(
            registry or SourceRegistry(), self._settings.default_source
        )
        self._builder = FrameBuilder(self._settings)
        self._timeline = timeline or RaceTimeline()
        self._clock = self._new_clock(self._timeline, self._settings.playback_speed)
        self._pending_seek: float | None = None
        self._last_tick: float | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def timeline(self) -> RaceTimeline:
        return self._timeline

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def registry(self) -> SourceRegistry:
        return self._selection.registry

    @property
    def active_source(self) -> DataSource:
        return self._selection.active

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def play(self) -> PlaybackState:
        with self._lock:
            if not self._clock.is_playing:
                self._clock.play()
                self._last_tick = self._monotonic()
            return self._state_locked()

    def pause(self) -> PlaybackState:
        with self._lock:
            self._clock.pause()
            self._last_tick = None
            return self._state_locked()

    def toggle(self) -> PlaybackState:
        with self._lock:
            playing = self._clock.toggle()
            self._last_tick = self._monotonic() if playing else None
            return self._state_locked()

    def seek(self, t: float) -> None:
        """Request a jump to *t*; the latest request wins at the next tick."""
        if math.isnan(t):
            raise ValueError("Seek target must be a number")
        with self._lock:
            self._pending_seek = t

    def set_speed(self, multiplier: float) -> PlaybackState:
        """Set playback speed, clamped into the configured range.

        Raises
        ------
        ValueError
            If *multiplier* is NaN.
        """
        if math.isnan(multiplier):
            raise ValueError("Speed multiplier must be a number")
        with self._lock:
            self._clock.set_speed(self._settings.clamp_speed(multiplier))
            return self._state_locked()

    def select_source(self, source_id: str) -> DataSource:
        with self._lock:
            return self._selection.select(source_id)

    def load_timeline(self, timeline: RaceTimeline) -> PlaybackState:
        """Replace the track; playback restarts stopped at its beginning."""
        with self._lock:
            speed = self._clock.speed_multiplier
            self._timeline = timeline
            self._clock = self._new_clock(timeline, speed)
            self._pending_seek = None
            self._last_tick = None
            return self._state_locked()

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def state(self) -> PlaybackState:
        with self._lock:
            return self._state_locked()

    def advance(self, now: float | None = None) -> PlaybackState:
        """Tick the clock by the real time elapsed since the previous tick.

        *now* is a monotonic reading in seconds; it is sampled when omitted.
        Time is measured from the previous tick, or from :meth:`play` for the
        first tick after playback starts.
        """
        with self._lock:
            return self._advance_locked(now)

    def frame(self, now: float | None = None) -> FrameSnapshot:
        """Advance, then build the layers for the resulting time."""
        with self._lock:
            state = self._advance_locked(now)
            timeline = self._timeline
            source = self._selection.active
        return self._builder.build(timeline, state, source)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _new_clock(timeline: RaceTimeline, speed: float) -> PlaybackClock:
        return PlaybackClock(timeline.start_time, timeline.end_time, speed)

    def _apply_pending_seek_locked(self) -> None:
        if self._pending_seek is not None:
            self._clock.seek(self._pending_seek)
            self._pending_seek = None

    def _state_locked(self) -> PlaybackState:
        self._apply_pending_seek_locked()
        return self._clock.state

    def _advance_locked(self, now: float | None) -> PlaybackState:
        self._apply_pending_seek_locked()
        if not self._clock.is_playing:
            self._last_tick = None
            return self._clock.state

        now = self._monotonic() if now is None else now
        if self._last_tick is not None:
            self._clock.tick((now - self._last_tick) * 1000.0)
        self._last_tick = now if self._clock.is_playing else None
        if not self._clock.is_playing:
            _logger.info("Reached end of track at %d ms", self._clock.current_time)
        return self._clock.state
