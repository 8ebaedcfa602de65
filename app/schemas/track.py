"""Track schemas for API requests and responses."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ArtistResponse(BaseModel):
    """Artist credited on a track."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class TrackResponse(BaseModel):
    """Stored track with its artists."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    isrc: str
    image_uri: str = ""
    title: str
    artists: list[ArtistResponse] = []


class TrackLookupResponse(BaseModel):
    """Lookup by ISRC; `track` is null when nothing is stored."""
    track: Optional[TrackResponse] = None


class TrackListResponse(BaseModel):
    tracks: list[TrackResponse] = []


class TrackCreateRequest(BaseModel):
    """Body for ingesting a track. `isrc` is validated by the service."""
    isrc: Any = None


class AliveResponse(BaseModel):
    success: bool = True
    msg: str = "I'm Alive"
