# Import all models so create_all can detect them
from app.models.artist import Artist
from app.models.track import Track, track_artists

__all__ = [
    "Artist",
    "Track",
    "track_artists",
]
