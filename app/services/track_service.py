"""Read-side queries over stored tracks."""
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.artist import Artist
from app.models.track import Track
from app.utils.validators import normalize_limit, normalize_page, validate_artist_name, validate_isrc

LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


async def find_by_code(db: AsyncSession, code: Any) -> Optional[Track]:
    """
    Find a stored track by exact ISRC.

    Raises:
        InvalidInputException: if `code` is not a well-formed ISRC
    """
    isrc = validate_isrc(code)
    result = await db.execute(
        select(Track)
        .where(Track.isrc == isrc)
        .options(selectinload(Track.artists))
    )
    return result.scalars().first()


async def find_by_artist(
    db: AsyncSession,
    name: Any,
    limit: Any = None,
    page: Any = None,
) -> list[Track]:
    """
    Find tracks credited to any artist whose name contains `name`,
    ignoring case.

    Args:
        db: Database session
        name: Substring of the artist name (1-200 chars)
        limit: Page length, clamped to [1, 20] (default 10)
        page: 1-indexed page number (default 1)

    Returns:
        One page of tracks ordered by id, each with its full artist list
    """
    name = validate_artist_name(name)
    limit = normalize_limit(limit)
    page = normalize_page(page)
    skip = (page - 1) * limit

    pattern = f"%{_escape_like(name)}%"
    result = await db.execute(
        select(Track)
        .where(Track.artists.any(Artist.name.ilike(pattern, escape=LIKE_ESCAPE)))
        .options(selectinload(Track.artists))
        .order_by(Track.id)
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all())
