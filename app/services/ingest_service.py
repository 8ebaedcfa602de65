"""
Ingest tracks from the Spotify catalog by ISRC.

Artists and tracks are find-or-create by natural key (exact artist name,
ISRC). Inserts run in a SAVEPOINT so that losing a race against a
concurrent ingest falls back to the row the other request stored.
"""
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.artist import Artist
from app.models.track import Track
from app.schemas.spotify import SpotifyArtist, SpotifyTrack
from app.services.spotify_service import SpotifyService
from app.utils.validators import validate_isrc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    created: bool
    track_id: int
    isrc: str


def select_most_popular(items: list[SpotifyTrack]) -> SpotifyTrack:
    """Highest popularity wins; ties keep catalog order."""
    return sorted(items, key=lambda item: item.popularity, reverse=True)[0]


async def _find_artist(db: AsyncSession, name: str) -> Artist | None:
    result = await db.execute(select(Artist).where(Artist.name == name))
    return result.scalar_one_or_none()


async def _find_track(db: AsyncSession, isrc: str) -> Track | None:
    result = await db.execute(select(Track).where(Track.isrc == isrc))
    return result.scalar_one_or_none()


async def get_or_create_artist(db: AsyncSession, name: str) -> Artist:
    """Return the artist with exactly this name, creating it if needed."""
    artist = await _find_artist(db, name)
    if artist:
        return artist

    artist = Artist(name=name)
    try:
        async with db.begin_nested():
            db.add(artist)
    except IntegrityError:
        logger.info(f"Artist '{name}' was created concurrently, reusing it")
        existing = await _find_artist(db, name)
        if existing is None:
            raise
        return existing

    logger.info(f"Artist '{name}' does not exist, created id={artist.id}")
    return artist


async def resolve_artists(db: AsyncSession, credited: list[SpotifyArtist]) -> list[Artist]:
    """Find-or-create each credited artist, in credit order, once per name."""
    artists: list[Artist] = []
    seen: set[str] = set()
    for artist_data in credited:
        if artist_data.name in seen:
            continue
        seen.add(artist_data.name)
        artists.append(await get_or_create_artist(db, artist_data.name))
    return artists


async def ingest_by_code(db: AsyncSession, code: Any, spotify: SpotifyService) -> IngestResult:
    """
    Store the most popular Spotify track matching an ISRC.

    An already stored ISRC is left as it is, even if Spotify's title,
    cover or artists have changed since.

    Raises:
        InvalidInputException: if `code` is not a well-formed ISRC
        NotFoundException: if Spotify has no track for the ISRC
    """
    isrc = validate_isrc(code)

    result = await spotify.search("track", f"isrc:{isrc}")
    if not result.track_items:
        raise NotFoundException("No Tracks Found")

    target = select_most_popular(result.track_items)
    artists = await resolve_artists(db, target.artists)

    existing = await _find_track(db, isrc)
    if existing:
        logger.info(f"Track {isrc} already stored as id={existing.id}")
        return IngestResult(created=False, track_id=existing.id, isrc=isrc)

    track = Track(
        isrc=isrc,
        image_uri=target.cover_image_url,
        title=target.name,
        artists=artists,
    )
    try:
        async with db.begin_nested():
            db.add(track)
    except IntegrityError:
        existing = await _find_track(db, isrc)
        if existing is None:
            raise
        logger.info(f"Track {isrc} was stored concurrently as id={existing.id}")
        return IngestResult(created=False, track_id=existing.id, isrc=isrc)

    logger.info(f"Track {isrc} saved as id={track.id}")
    return IngestResult(created=True, track_id=track.id, isrc=isrc)
