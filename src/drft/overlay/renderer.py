"""Frame rendering — display-ready data for the map overlay."""

from __future__ import annotations

from datetime import datetime, timezone

from drft.currents.models import Color, CurrentVector
from drft.currents.tidal import speed_legend
from drft.overlay.frame import FrameSnapshot

ICON_BASE_SIZE = 10.0
ICON_SIZE_PER_MPS = 15.0


def _rgb(color: Color) -> list[int]:
    return [int(round(c)) for c in color]


class FrameRenderer:
    """Formats :class:`FrameSnapshot` objects for the map client.

    All methods are pure data transformations with no side effects — safe to
    call from any thread.
    """

    def format_time(self, timestamp_ms: float) -> str:
        """Clock readout in UTC.

        Examples
        --------
        >>> FrameRenderer().format_time(3_600_000)
        '01:00:00'
        """
        return self._utc(timestamp_ms).strftime("%H:%M:%S")

    def format_date(self, timestamp_ms: float) -> str:
        """
        Examples
        --------
        >>> FrameRenderer().format_date(0)
        '1970-01-01'
        """
        return self._utc(timestamp_ms).strftime("%Y-%m-%d")

    def format_speed(self, multiplier: float) -> str:
        """Playback speed label, e.g. ``'100x'``."""
        return f"{multiplier:g}x"

    def render_current(self, vector: CurrentVector) -> dict:
        """Arrow icon for one current sample.

        ``angle`` is counter-clockwise (the map library's convention), hence
        the negated compass bearing; ``size`` grows with speed.
        """
        return {
            "position": list(vector.position),
            "u": vector.u,
            "v": vector.v,
            "speed": vector.speed,
            "direction": vector.direction_deg,
            "color": _rgb(vector.color),
            "angle": -vector.direction_deg,
            "size": ICON_BASE_SIZE + vector.speed * ICON_SIZE_PER_MPS,
        }

    def render_legend(self) -> list[dict]:
        return [
            {"speed": speed, "label": label, "color": _rgb(color)}
            for speed, label, color in speed_legend()
        ]

    def render(self, snapshot: FrameSnapshot) -> dict:
        """Return a JSON-ready dict of every layer in *snapshot*.

        Returns
        -------
        dict with keys:
            ``time`` / ``clock`` / ``date`` – current time (ms) and readouts
            ``playing`` / ``speed`` / ``speed_label`` – playback state
            ``source`` – active data source id
            ``marker`` – ``{"position", "elevation", "timestamp"}`` or ``None``
            ``path`` / ``currents`` / ``grid`` – layer data, ``None`` if failed
            ``legend`` – current speed legend stops
            ``errors`` – layer name → error message
        """
        marker = snapshot.marker
        return {
            "time": snapshot.current_time,
            "clock": self.format_time(snapshot.current_time),
            "date": self.format_date(snapshot.current_time),
            "playing": snapshot.is_playing,
            "speed": snapshot.speed_multiplier,
            "speed_label": self.format_speed(snapshot.speed_multiplier),
            "source": snapshot.source_id,
            "marker": None if marker is None else {
                "position": list(marker.position),
                "elevation": marker.elevation,
                "timestamp": marker.timestamp,
            },
            "path": None if snapshot.path is None else [list(p) for p in snapshot.path],
            "currents": None if snapshot.currents is None else [
                self.render_current(v) for v in snapshot.currents
            ],
            "grid": None if snapshot.grid is None else [
                [list(vertex) for vertex in line.path] for line in snapshot.grid
            ],
            "legend": self.render_legend(),
            "errors": dict(snapshot.errors),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _utc(timestamp_ms: float) -> datetime:
        return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc)
