"""Parsed link model."""

from pydantic import BaseModel, ConfigDict

from trackbridge.models.enums import ContentType, Platform


class ParsedLink(BaseModel):
    """Typed identifiers extracted from a platform URL.

    Attributes:
        platform: Platform the link belongs to.
        content_type: Track, album, or artist.
        id: Platform-native identifier of the item.
        region: Storefront region (Apple Music) or "global" (Spotify).
        path_segments: Non-empty URL path segments, in order.
    """

    model_config = ConfigDict(frozen=True)

    platform: Platform
    content_type: ContentType
    id: str
    region: str = "us"
    path_segments: tuple[str, ...] = ()
