"""Tests for PlaybackLoop."""

from __future__ import annotations

import logging
import time
from unittest.mock import MagicMock

import pytest

from drft.playback.controller import PlaybackController
from drft.playback.loop import PlaybackLoop
from drft.track.models import TrackPoint
from drft.track.timeline import RaceTimeline


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


def test_loop_delivers_frames():
    """Frames produced by the controller reach the callback."""
    snapshot = object()
    controller = MagicMock()
    controller.frame.return_value = snapshot
    received = []

    loop = PlaybackLoop(controller, on_frame=received.append, target_hz=200)
    loop.start()
    assert _wait_for(lambda: len(received) >= 3)
    loop.stop()

    assert received[0] is snapshot
    assert loop.frame_count >= 3
    assert not loop.is_running


def test_loop_start_stop_no_exception():
    controller = MagicMock()
    loop = PlaybackLoop(controller, target_hz=10)
    loop.start()
    loop.start()  # already running: no second thread
    loop.stop()
    loop.stop()


def test_callback_errors_are_logged_and_loop_continues(caplog):
    controller = MagicMock()
    calls = []

    def explode(_snap):
        calls.append(1)
        raise RuntimeError("boom")

    loop = PlaybackLoop(controller, on_frame=explode, target_hz=200)
    with caplog.at_level(logging.ERROR, logger="drft.playback.loop"):
        loop.start()
        assert _wait_for(lambda: len(calls) >= 2)
        loop.stop()

    assert "Frame callback failed" in caplog.text


def test_invalid_rate_rejected():
    with pytest.raises(ValueError):
        PlaybackLoop(MagicMock(), target_hz=0)


def test_loop_drives_real_controller_to_end_of_track():
    """A short track at high speed plays to the end and auto-pauses."""
    timeline = RaceTimeline([
        TrackPoint(longitude=4.27, latitude=52.11, timestamp=0),
        TrackPoint(longitude=4.30, latitude=52.12, timestamp=1000),
    ])
    controller = PlaybackController(timeline)
    controller.set_speed(500)
    controller.play()

    loop = PlaybackLoop(controller, target_hz=100)
    loop.start()
    assert _wait_for(lambda: not controller.state().is_playing)
    loop.stop()

    state = controller.state()
    assert state.current_time == 1000
