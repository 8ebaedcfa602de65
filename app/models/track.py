"""Track model storing Spotify track metadata keyed by ISRC."""

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.artist import Artist


# Association table for the track <-> artist many-to-many relation
track_artists = Table(
    "track_artists",
    Base.metadata,
    Column("track_id", ForeignKey("tracks.id", ondelete="CASCADE"), primary_key=True),
    Column("artist_id", ForeignKey("artists.id", ondelete="CASCADE"), primary_key=True),
)


class Track(Base):
    """A single recording, unique by ISRC."""

    __tablename__ = "tracks"

    id: Mapped[int] = mapped_column(primary_key=True)
    isrc: Mapped[str] = mapped_column(String(12), unique=True, index=True)
    image_uri: Mapped[str] = mapped_column(Text, default="")
    title: Mapped[str] = mapped_column(Text)

    # Relationships
    artists: Mapped[list["Artist"]] = relationship(
        secondary=track_artists,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Track {self.isrc} {self.title}>"
