"""Track routes: lookup by ISRC, lookup by artist, ingest by ISRC."""

from typing import Optional

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.dependencies import DbSession, Spotify
from app.schemas.track import TrackCreateRequest, TrackListResponse, TrackLookupResponse, TrackResponse
from app.services import ingest_service, track_service

router = APIRouter()


@router.get(
    "/isrc",
    response_model=TrackLookupResponse,
    summary="Get a stored track by ISRC",
    responses={404: {"model": TrackLookupResponse}},
)
async def get_track_by_isrc(db: DbSession, isrc: Optional[str] = None):
    """
    Search the database for an exact ISRC match.

    Answers 404 with `{"track": null}` when the ISRC is well formed but not
    stored, and 400 when it is malformed.
    """
    track = await track_service.find_by_code(db, isrc)
    if track is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=TrackLookupResponse(track=None).model_dump(),
        )
    return TrackLookupResponse(track=TrackResponse.model_validate(track))


@router.get(
    "/artist",
    response_model=TrackListResponse,
    summary="Search stored tracks by artist name",
)
async def get_tracks_by_artist(
    db: DbSession,
    artist: Optional[str] = None,
    limit: Optional[str] = None,
    page: Optional[str] = None,
):
    """
    Case-insensitive substring search over artist names.

    - `limit`: page length, 1-20 (default 10)
    - `page`: 1-indexed page number (default 1)
    """
    tracks = await track_service.find_by_artist(db, artist, limit=limit, page=page)
    return TrackListResponse(tracks=[TrackResponse.model_validate(t) for t in tracks])


@router.post(
    "/track",
    response_class=PlainTextResponse,
    summary="Ingest a track from Spotify by ISRC",
)
async def create_track_by_isrc(
    db: DbSession,
    spotify: Spotify,
    payload: Optional[TrackCreateRequest] = None,
):
    """
    Look the ISRC up on Spotify and store the most popular match.

    Repeating the call for a stored ISRC is harmless and reports it as
    already saved.
    """
    isrc = payload.isrc if payload else None
    result = await ingest_service.ingest_by_code(db, isrc, spotify)
    if result.created:
        return f"Track {result.isrc} saved!"
    return f"Track {result.isrc} already saved!"
