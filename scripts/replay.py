"""Replay a recorded GPX race track with the tidal current overlay in the terminal.

Usage:
    uv run python scripts/replay.py race.gpx
    uv run python scripts/replay.py race.gpx --source cmems --speed 300
    uv run python scripts/replay.py race.gpx --start 1800000 --print-every 2
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
import time

from dotenv import load_dotenv

load_dotenv()

from drft.config import Settings  # noqa: E402
from drft.currents.registry import SourceRegistry  # noqa: E402
from drft.overlay.frame import FrameSnapshot  # noqa: E402
from drft.overlay.renderer import FrameRenderer  # noqa: E402
from drft.playback.controller import PlaybackController  # noqa: E402
from drft.playback.loop import PlaybackLoop  # noqa: E402
from drft.track.gpx_loader import GPXLoader, TrackLoadError  # noqa: E402


class _Printer:
    """Prints a one-line summary of a frame at most every *interval_s* seconds."""

    def __init__(self, interval_s: float) -> None:
        self._interval = interval_s
        self._last = -1e9
        self._renderer = FrameRenderer()

    def __call__(self, snap: FrameSnapshot) -> None:
        now = time.monotonic()
        if now - self._last < self._interval and snap.is_playing:
            return
        self._last = now

        clock = self._renderer.format_time(snap.current_time)
        if snap.marker is None:
            pos = "no position"
        else:
            pos = f"{snap.marker.latitude:.5f}N {snap.marker.longitude:.5f}E"
        if snap.currents:
            c = snap.currents[0]
            current = f"{c.speed:.2f} m/s -> {c.direction_deg:05.1f}deg ({len(snap.currents)} pts)"
        else:
            current = "no current data"
        line = f"  {clock}  [{snap.source_id}]  {pos}  {current}"
        if snap.errors:
            line += f"  errors: {', '.join(sorted(snap.errors))}"
        print(line, flush=True)


def main() -> None:
    ap = argparse.ArgumentParser(description="DRFT — race replay with tidal currents")
    ap.add_argument("gpx", help="GPX track file")
    ap.add_argument("--source", default=None, help="Data source id (default from DRFT_DEFAULT_SOURCE)")
    ap.add_argument("--speed", type=float, default=None, help="Playback speed multiplier")
    ap.add_argument("--start", type=float, default=None, help="Start offset into the track in ms")
    ap.add_argument("--hz", type=float, default=60.0, help="Refresh rate")
    ap.add_argument("--print-every", type=float, default=1.0, help="Seconds between status lines")
    args = ap.parse_args()
    if args.speed is not None and math.isnan(args.speed):
        ap.error("--speed must be a number")

    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = GPXLoader().load(args.gpx)
    except TrackLoadError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    timeline = result.timeline
    if timeline.is_empty:
        print("ERROR: track has no timestamped points.", file=sys.stderr)
        sys.exit(1)
    if result.dropped_points:
        print(f"WARNING: dropped {result.dropped_points} point(s) without timestamps.", file=sys.stderr)

    controller = PlaybackController(timeline, SourceRegistry(), settings)
    if args.source:
        controller.select_source(args.source)
    if args.speed is not None:
        controller.set_speed(args.speed)
    if args.start is not None:
        controller.seek(timeline.start_time + args.start)

    renderer = FrameRenderer()
    print(
        f"Track: {len(timeline)} points, "
        f"{renderer.format_date(timeline.start_time)} "
        f"{renderer.format_time(timeline.start_time)} - {renderer.format_time(timeline.end_time)}"
    )
    print(
        f"Source: {controller.active_source.name}  "
        f"Speed: {renderer.format_speed(controller.state().speed_multiplier)}"
    )

    loop = PlaybackLoop(controller, on_frame=_Printer(args.print_every), target_hz=args.hz)
    controller.play()
    loop.start()
    print("Replay running. Press Ctrl+C to stop.", flush=True)

    try:
        while controller.state().is_playing:
            time.sleep(0.1)
    except KeyboardInterrupt:
        pass
    finally:
        loop.stop()
        print("\nReplay stopped.")


if __name__ == "__main__":
    main()
