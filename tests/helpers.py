"""Fake Spotify endpoints backed by httpx.MockTransport."""
from __future__ import annotations

from typing import Any

import httpx


def make_track_item(
    name: str,
    popularity: int,
    artists: list[str],
    image_url: str | None = "https://i.scdn.co/image/cover",
    isrc: str | None = None,
) -> dict[str, Any]:
    images = [{"url": image_url, "height": 640, "width": 640}] if image_url else []
    return {
        "id": f"id-{name}-{popularity}",
        "name": name,
        "popularity": popularity,
        "album": {"id": "album-1", "name": f"{name} (Album)", "images": images, "artists": []},
        "artists": [{"id": f"artist-{a}", "name": a} for a in artists],
        "external_ids": {"isrc": isrc} if isrc else {},
    }


class FakeSpotify:
    """Records token exchanges and searches; answers searches from `catalog`."""

    def __init__(self) -> None:
        self.catalog: dict[str, list[dict[str, Any]]] = {}
        self.token_requests: list[httpx.Request] = []
        self.search_requests: list[httpx.Request] = []
        self.expires_in = 3600
        self.token_status = 200
        self.search_status = 200

    def add(self, isrc: str, *items: dict[str, Any]) -> None:
        self.catalog.setdefault(isrc, []).extend(items)

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "accounts.spotify.com":
            self.token_requests.append(request)
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_client"})
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{len(self.token_requests)}",
                    "token_type": "Bearer",
                    "expires_in": self.expires_in,
                },
            )

        if request.url.path == "/v1/search":
            self.search_requests.append(request)
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"error": {"status": self.search_status}})
            query = request.url.params["q"]
            items = self.catalog.get(query.removeprefix("isrc:"), [])
            return httpx.Response(
                200,
                json={
                    "tracks": {
                        "href": str(request.url),
                        "items": items,
                        "limit": 20,
                        "offset": 0,
                        "total": len(items),
                    }
                },
            )

        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
