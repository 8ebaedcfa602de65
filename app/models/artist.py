"""Artist model for performers credited on stored tracks."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

ARTIST_NAME_MAX_LENGTH = 200


class Artist(Base):
    """Artist credited on one or more tracks, unique by exact name."""

    __tablename__ = "artists"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(ARTIST_NAME_MAX_LENGTH), unique=True, index=True)

    def __repr__(self) -> str:
        return f"<Artist {self.name}>"
