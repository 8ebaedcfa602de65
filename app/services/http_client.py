"""
Global HTTP client with connection pooling for Spotify API calls.

Token exchanges and catalog searches share one httpx.AsyncClient so TCP
and TLS connections to accounts.spotify.com and api.spotify.com are reused
across requests, with consistent timeouts.
"""
import httpx
from typing import Optional


class HTTPClientManager:
    """Manages a global httpx.AsyncClient with connection pooling."""

    _client: Optional[httpx.AsyncClient] = None

    @classmethod
    def get_client(cls) -> httpx.AsyncClient:
        """
        Get or create the global HTTP client.

        The client is created lazily on first use but then reused.
        """
        if cls._client is None:
            cls._client = httpx.AsyncClient(
                limits=httpx.Limits(
                    max_keepalive_connections=10,
                    max_connections=20,
                    keepalive_expiry=30.0,  # Close idle connections after 30s
                ),
                timeout=httpx.Timeout(
                    connect=5.0,
                    read=15.0,
                    write=10.0,
                    pool=5.0,
                ),
                http2=True,
                follow_redirects=True,
            )
        return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close the HTTP client. Call this on app shutdown."""
        if cls._client is not None:
            await cls._client.aclose()
            cls._client = None


def get_http_client() -> httpx.AsyncClient:
    """Get the global HTTP client instance."""
    return HTTPClientManager.get_client()
