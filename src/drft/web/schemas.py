"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str


class SourceInfo(BaseModel):
    id: str
    name: str
    description: str
    info_url: str
    quality_description: str


class SourcesResponse(BaseModel):
    active_id: str
    sources: list[SourceInfo]


class SelectSourceRequest(BaseModel):
    source_id: str


class TrackUploadRequest(BaseModel):
    gpx: str


class TrackResponse(BaseModel):
    start_time: int
    end_time: int
    point_count: int
    dropped_points: int
    path: list[tuple[float, float]]
    bounds: tuple[float, float, float, float] | None


class PlaybackResponse(BaseModel):
    current_time: float
    is_playing: bool
    speed_multiplier: float
    start_time: int
    end_time: int
    source_id: str


class SeekRequest(BaseModel):
    time_ms: float


class SpeedRequest(BaseModel):
    multiplier: float = Field(ge=10, le=500)


class CurrentResponse(BaseModel):
    position: tuple[float, float]
    u: float
    v: float
    speed: float
    direction: float
    color: tuple[int, int, int]


class GridLineResponse(BaseModel):
    path: list[tuple[float, float]]
