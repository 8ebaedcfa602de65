"""Debug-only passthrough to the Spotify track search."""

from fastapi import APIRouter, Request

from app.core.exceptions import InvalidInputException
from app.dependencies import Spotify
from app.schemas.spotify import SpotifySearchResult

router = APIRouter()


@router.get(
    "/search",
    response_model=SpotifySearchResult,
    summary="Search Spotify tracks (debug)",
)
async def search_spotify(request: Request, spotify: Spotify):
    """Run a raw Spotify track search, useful when checking ISRC matches."""
    # Exactly one non-empty ?search= value; repeats are rejected, not collapsed
    values = request.query_params.getlist("search")
    if len(values) != 1 or not values[0]:
        raise InvalidInputException("Bad Request")
    return await spotify.search("track", values[0])
