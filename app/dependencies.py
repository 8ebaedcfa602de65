from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.spotify_service import SpotifyService, get_spotify_service

# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
Spotify = Annotated[SpotifyService, Depends(get_spotify_service)]
