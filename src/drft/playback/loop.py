"""PlaybackLoop — periodic display-refresh driver for a PlaybackController."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from drft.overlay.frame import FrameSnapshot
from drft.playback.controller import PlaybackController

_logger = logging.getLogger(__name__)


class PlaybackLoop:
    """Calls :meth:`PlaybackController.frame` at *target_hz* on a daemon thread.

    The controller measures real elapsed time itself, so a late or skipped
    refresh never changes playback speed.  Stopping the loop is the only way
    to cancel; a frame already being built runs to completion.

    Parameters
    ----------
    controller:
        The controller to drive.
    on_frame:
        Optional callback receiving every :class:`FrameSnapshot`.  Exceptions
        it raises are logged and the loop keeps running.
    target_hz:
        Refresh frequency in Hz.
    """

    def __init__(
        self,
        controller: PlaybackController,
        on_frame: Callable[[FrameSnapshot], None] | None = None,
        target_hz: float = 60.0,
    ) -> None:
        if target_hz <= 0:
            raise ValueError("target_hz must be > 0")
        self._controller = controller
        self._on_frame = on_frame
        self._interval = 1.0 / target_hz
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._frames = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def frame_count(self) -> int:
        """Number of frames produced since the loop was created."""
        return self._frames

    def start(self) -> None:
        """Start the background refresh thread."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="PlaybackLoop")
        self._thread.start()

    def stop(self) -> None:
        """Signal the refresh thread to stop and join it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self) -> None:
        while not self._stop_event.is_set():
            t0 = time.monotonic()
            snapshot = self._controller.frame()
            self._frames += 1
            if self._on_frame is not None:
                try:
                    self._on_frame(snapshot)
                except Exception:
                    _logger.exception("Frame callback failed")
            elapsed = time.monotonic() - t0
            wait = self._interval - elapsed
            if wait > 0:
                self._stop_event.wait(wait)
