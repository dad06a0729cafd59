"""Content metadata models.

Metadata is the exchange format between every stage of a conversion: the
source item fetched from the original platform and each search candidate
from the target platform share the same shape. The three content types are
separate variants of a tagged union so that, for example, an artist can
never carry an ISRC.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class MetadataBase(BaseModel):
    """Fields shared by every content type.

    Attributes:
        title: Display title (track name, album name, or artist name).
        artist: Credited artist string as shown by the platform.
        artwork_url: Highest resolution artwork URL available.
        release_date: Release date as reported by the platform.
        genres: Genre names.
        popularity: Platform-native popularity (0-100), 0 when unknown.
        url: Public link to the item on its platform.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    artist: str
    artwork_url: str | None = None
    release_date: str | None = None
    genres: frozenset[str] = frozenset()
    popularity: int = Field(default=0, ge=0, le=100)
    url: str | None = None


class TrackMetadata(MetadataBase):
    """Metadata for a single recording."""

    content_type: Literal["track"] = "track"
    artists: tuple[str, ...] = ()
    album: str | None = None
    isrc: str | None = None
    track_number: int | None = None
    total_tracks: int | None = None
    disc_number: int | None = None
    total_discs: int | None = None
    duration_ms: int | None = None
    preview_url: str | None = None


class AlbumMetadata(MetadataBase):
    """Metadata for an album or single release."""

    content_type: Literal["album"] = "album"
    artists: tuple[str, ...] = ()
    total_tracks: int | None = None
    upc: str | None = None


class ArtistMetadata(MetadataBase):
    """Metadata for an artist. ``title`` and ``artist`` both hold the name."""

    content_type: Literal["artist"] = "artist"


ContentMetadata = Annotated[
    TrackMetadata | AlbumMetadata | ArtistMetadata,
    Field(discriminator="content_type"),
]


def credited_artists(metadata: MetadataBase) -> tuple[str, ...]:
    """Individual credited artist names, falling back to the credit string."""
    artists = getattr(metadata, "artists", ())
    if artists:
        return tuple(artists)
    return (metadata.artist,) if metadata.artist else ()
