"""PlaybackClock — virtual race time advanced by real elapsed time."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

_logger = logging.getLogger(__name__)

MIN_SPEED_MULTIPLIER = 0.01


@dataclass(frozen=True)
class PlaybackState:
    """Snapshot of the clock."""

    current_time: float
    """Virtual time in ms since epoch, within ``[start_time, end_time]``."""

    is_playing: bool

    speed_multiplier: float
    """Virtual milliseconds per real millisecond."""


class PlaybackClock:
    """Two-state (stopped/playing) clock bounded by a track's time range.

    The clock never looks at wall time itself: :meth:`tick` must be given the
    real elapsed milliseconds since the previous tick, so playback speed is
    independent of how often the caller refreshes.

    Parameters
    ----------
    start_time, end_time:
        Time range in ms.  ``end_time`` below ``start_time`` is raised to it.
    speed_multiplier:
        Initial playback speed (see :meth:`set_speed`).
    """

    def __init__(
        self,
        start_time: float = 0,
        end_time: float = 0,
        speed_multiplier: float = 1.0,
    ) -> None:
        self._start = start_time
        self._end = max(end_time, start_time)
        self._current: float = start_time
        self._playing = False
        self._speed = MIN_SPEED_MULTIPLIER
        self.set_speed(speed_multiplier)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def start_time(self) -> float:
        return self._start

    @property
    def end_time(self) -> float:
        return self._end

    @property
    def current_time(self) -> float:
        return self._current

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def speed_multiplier(self) -> float:
        return self._speed

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(
            current_time=self._current,
            is_playing=self._playing,
            speed_multiplier=self._speed,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def play(self) -> None:
        self._playing = True

    def pause(self) -> None:
        self._playing = False

    def toggle(self) -> bool:
        """Switch between playing and stopped; return the new ``is_playing``."""
        self._playing = not self._playing
        return self._playing

    def seek(self, t: float) -> float:
        """Jump to *t* clamped into the time range.  State is unchanged."""
        if math.isnan(t):
            raise ValueError("Seek target must be a number")
        self._current = min(max(t, self._start), self._end)
        return self._current

    def set_speed(self, multiplier: float) -> float:
        """Replace the speed multiplier for subsequent ticks.

        Zero or negative values would freeze or reverse time; they are
        clamped to :data:`MIN_SPEED_MULTIPLIER`.

        Raises
        ------
        ValueError
            If *multiplier* is NaN or infinite.
        """
        if not math.isfinite(multiplier):
            raise ValueError(f"Speed multiplier must be finite, got {multiplier!r}")
        if multiplier < MIN_SPEED_MULTIPLIER:
            _logger.warning(
                "Speed multiplier %r clamped to %s", multiplier, MIN_SPEED_MULTIPLIER
            )
            multiplier = MIN_SPEED_MULTIPLIER
        self._speed = multiplier
        return self._speed

    def tick(self, real_elapsed_ms: float) -> float:
        """Advance by ``real_elapsed_ms * speed_multiplier`` while playing.

        Passing ``end_time`` clamps to it and stops playback.
        Returns the new current time.
        """
        if not self._playing:
            return self._current
        elapsed = real_elapsed_ms if real_elapsed_ms > 0 else 0.0
        nxt = self._current + elapsed * self._speed
        if nxt > self._end:
            self._current = self._end
            self._playing = False
        else:
            self._current = nxt
        return self._current
