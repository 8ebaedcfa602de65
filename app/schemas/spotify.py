"""Typed view of the Spotify search API response."""

from typing import Optional

from pydantic import BaseModel


class SpotifyImage(BaseModel):
    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class SpotifyArtist(BaseModel):
    id: Optional[str] = None
    name: str


class SpotifyAlbum(BaseModel):
    id: Optional[str] = None
    name: str = ""
    release_date: Optional[str] = None
    artists: list[SpotifyArtist] = []
    images: list[SpotifyImage] = []

    @property
    def cover_image_url(self) -> str:
        """First album image, or an empty string when the album has none."""
        return self.images[0].url if self.images else ""


class SpotifyTrack(BaseModel):
    id: Optional[str] = None
    name: str
    popularity: int = 0
    album: SpotifyAlbum = SpotifyAlbum()
    artists: list[SpotifyArtist] = []
    external_ids: dict[str, str] = {}

    @property
    def cover_image_url(self) -> str:
        return self.album.cover_image_url


class SpotifyPage(BaseModel):
    """Generic paging object; `items` is the only field we rely on."""
    href: Optional[str] = None
    limit: int = 0
    offset: int = 0
    total: int = 0


class SpotifyTrackPage(SpotifyPage):
    items: list[SpotifyTrack] = []


class SpotifyAlbumPage(SpotifyPage):
    items: list[SpotifyAlbum] = []


class SpotifySearchResult(BaseModel):
    """Search response; only the section for the requested type is present."""
    tracks: Optional[SpotifyTrackPage] = None
    albums: Optional[SpotifyAlbumPage] = None

    @property
    def track_items(self) -> list[SpotifyTrack]:
        return self.tracks.items if self.tracks else []


class SpotifyTokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600
