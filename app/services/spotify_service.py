import asyncio
import base64
import logging
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

import httpx

from app.config import get_settings
from app.schemas.spotify import SpotifySearchResult, SpotifyTokenResponse
from app.services.http_client import get_http_client

logger = logging.getLogger(__name__)

SearchType = Literal["track", "album"]
SEARCH_TYPES = ("track", "album")


class SpotifyTokenCache:
    """
    Bearer token for the Client Credentials flow.

    The token is fetched lazily and replaced once it is within
    REFRESH_MARGIN of expiring. Refreshes are single-flight: concurrent
    callers that find the token stale wait for one exchange.
    """

    TOKEN_URL = "https://accounts.spotify.com/api/token"
    REFRESH_MARGIN = timedelta(seconds=120)

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._client = client
        self.value: Optional[str] = None
        self.expires_at: Optional[datetime] = None
        self._lock = asyncio.Lock()

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_http_client()

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        if not self.value or self.expires_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now + self.REFRESH_MARGIN > self.expires_at

    def invalidate(self) -> None:
        self.value = None
        self.expires_at = None

    def _basic_credentials(self) -> str:
        credentials = f"{self._client_id}:{self._client_secret}"
        return base64.b64encode(credentials.encode()).decode()

    async def get_valid_token(self) -> str:
        """Return the cached token, refreshing it first when stale."""
        if not self.is_stale():
            return self.value

        async with self._lock:
            # Another caller may have refreshed while we waited
            if self.is_stale():
                await self.refresh()
            return self.value

    async def refresh(self) -> None:
        """Exchange client credentials for a new token. Errors propagate."""
        logger.info("Spotify token missing or expired, fetching new token")
        response = await self.client.post(
            self.TOKEN_URL,
            headers={
                "Authorization": f"Basic {self._basic_credentials()}",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            data={"grant_type": "client_credentials"},
        )
        response.raise_for_status()
        token = SpotifyTokenResponse.model_validate(response.json())

        self.value = token.access_token
        self.expires_at = datetime.now(timezone.utc) + timedelta(seconds=token.expires_in)
        logger.info(f"Spotify token refreshed, expires at {self.expires_at.isoformat()}")


class SpotifyService:
    """Service for interacting with Spotify API."""

    API_BASE_URL = "https://api.spotify.com/v1"

    def __init__(
        self,
        token_cache: Optional[SpotifyTokenCache] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = client
        if token_cache is None:
            settings = get_settings()
            token_cache = SpotifyTokenCache(
                settings.spotify_client_id,
                settings.spotify_client_secret,
                client=client,
            )
        self.token_cache = token_cache

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_http_client()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        """Make an authenticated Spotify API call and return the JSON body."""
        token = await self.token_cache.get_valid_token()

        response = await self.client.request(
            method,
            f"{self.API_BASE_URL}{path}",
            headers={"Authorization": f"Bearer {token}"},
            **kwargs,
        )

        if response.status_code == 401:
            # Token revoked early; drop it so the next call fetches a new one
            logger.warning("Spotify rejected the cached token, invalidating it")
            self.token_cache.invalidate()

        response.raise_for_status()
        return response.json()

    async def search(self, type: SearchType, query: str) -> SpotifySearchResult:
        """
        Search the Spotify catalog.

        Args:
            type: Entity type to search for ("track" or "album")
            query: Spotify search query, e.g. "isrc:USX9P2062937"

        Returns:
            Parsed search result; only the section for `type` is populated
        """
        if type not in SEARCH_TYPES:
            raise ValueError(f"Unsupported Spotify search type: {type}")

        data = await self._request("GET", "/search", params={"type": type, "q": query})
        return SpotifySearchResult.model_validate(data)


_spotify_service: Optional[SpotifyService] = None


def get_spotify_service() -> SpotifyService:
    """Process-wide SpotifyService; the token cache lives as long as it does."""
    global _spotify_service
    if _spotify_service is None:
        _spotify_service = SpotifyService()
    return _spotify_service
