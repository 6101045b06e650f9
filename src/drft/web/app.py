"""FastAPI Web application — race replay and current field data for the map client."""

from __future__ import annotations

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query, Request

from drft.config import Settings
from drft.overlay.renderer import FrameRenderer
from drft.track.gpx_loader import TrackLoadError
from drft.track.models import BoundingBox
from drft.web.schemas import (
    CurrentResponse,
    GridLineResponse,
    HealthResponse,
    PlaybackResponse,
    SeekRequest,
    SelectSourceRequest,
    SourcesResponse,
    SpeedRequest,
    TrackResponse,
    TrackUploadRequest,
)
from drft.web.service import ReplayService

VERSION = "0.1.0"

_renderer = FrameRenderer()


def _service(request: Request) -> ReplayService:
    return request.app.state.service


def _bounds(
    min_lon: float = Query(...),
    min_lat: float = Query(..., ge=-90, le=90),
    max_lon: float = Query(...),
    max_lat: float = Query(..., ge=-90, le=90),
) -> BoundingBox:
    return BoundingBox(min_lon, min_lat, max_lon, max_lat)


def create_app(service: ReplayService | None = None) -> FastAPI:
    """Build the application around *service* (created from the environment if omitted)."""
    if service is None:
        load_dotenv()  # loads .env from project root; must run before settings are read
        service = ReplayService.from_settings(Settings.from_env())

    app = FastAPI(title="DRFT Sea Currents Analysis", version=VERSION)
    app.state.service = service

    # ---------------------------------------------------------------------------
    # Endpoints
    # ---------------------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=VERSION)

    @app.get("/api/sources", response_model=SourcesResponse)
    def list_sources(svc: ReplayService = Depends(_service)) -> SourcesResponse:
        return svc.sources()

    @app.put("/api/sources/active", response_model=SourcesResponse)
    def select_source(
        req: SelectSourceRequest, svc: ReplayService = Depends(_service)
    ) -> SourcesResponse:
        """Switch the active source; unknown ids select the first source."""
        return svc.select_source(req.source_id)

    @app.get("/api/track", response_model=TrackResponse)
    def get_track(svc: ReplayService = Depends(_service)) -> TrackResponse:
        return svc.track()

    @app.post("/api/track", response_model=TrackResponse)
    def upload_track(
        req: TrackUploadRequest, svc: ReplayService = Depends(_service)
    ) -> TrackResponse:
        try:
            return svc.load_gpx(req.gpx)
        except TrackLoadError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    @app.get("/api/playback", response_model=PlaybackResponse)
    def get_playback(svc: ReplayService = Depends(_service)) -> PlaybackResponse:
        return svc.playback()

    @app.post("/api/playback/play", response_model=PlaybackResponse)
    def play(svc: ReplayService = Depends(_service)) -> PlaybackResponse:
        svc.controller.play()
        return svc.playback()

    @app.post("/api/playback/pause", response_model=PlaybackResponse)
    def pause(svc: ReplayService = Depends(_service)) -> PlaybackResponse:
        svc.controller.pause()
        return svc.playback()

    @app.post("/api/playback/toggle", response_model=PlaybackResponse)
    def toggle(svc: ReplayService = Depends(_service)) -> PlaybackResponse:
        svc.controller.toggle()
        return svc.playback()

    @app.post("/api/playback/seek", response_model=PlaybackResponse)
    def seek(req: SeekRequest, svc: ReplayService = Depends(_service)) -> PlaybackResponse:
        try:
            svc.controller.seek(req.time_ms)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return svc.playback()

    @app.post("/api/playback/speed", response_model=PlaybackResponse)
    def set_speed(req: SpeedRequest, svc: ReplayService = Depends(_service)) -> PlaybackResponse:
        svc.controller.set_speed(req.multiplier)
        return svc.playback()

    @app.get("/api/frame")
    def frame(svc: ReplayService = Depends(_service)) -> dict:
        """Advance playback by the real time since the last frame and render it."""
        return svc.frame()

    @app.get("/api/currents", response_model=list[CurrentResponse])
    def currents(
        bounds: BoundingBox = Depends(_bounds),
        timestamp: float = Query(...),
        resolution: float = Query(0.01, gt=0),
        source: str | None = None,
        svc: ReplayService = Depends(_service),
    ) -> list[CurrentResponse]:
        try:
            vectors = svc.currents(bounds, timestamp, resolution, source)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        out = []
        for v in vectors:
            rendered = _renderer.render_current(v)
            out.append(
                CurrentResponse(
                    position=v.position,
                    u=v.u,
                    v=v.v,
                    speed=v.speed,
                    direction=v.direction_deg,
                    color=tuple(rendered["color"]),
                )
            )
        return out

    @app.get("/api/grid", response_model=list[GridLineResponse])
    def grid(
        bounds: BoundingBox = Depends(_bounds),
        spacing_nm: float = Query(0.1, ge=0.01),
        svc: ReplayService = Depends(_service),
    ) -> list[GridLineResponse]:
        try:
            lines = svc.grid(bounds, spacing_nm)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return [GridLineResponse(path=list(line.path)) for line in lines]

    return app


app = create_app()
