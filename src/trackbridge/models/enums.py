"""Enumerations for trackbridge domain models."""

from enum import StrEnum


class Platform(StrEnum):
    """Supported streaming platforms."""

    APPLE_MUSIC = "apple_music"
    SPOTIFY = "spotify"

    @property
    def label(self) -> str:
        """Human-readable platform name."""
        match self:
            case Platform.APPLE_MUSIC:
                return "Apple Music"
            case Platform.SPOTIFY:
                return "Spotify"

    @property
    def counterpart(self) -> "Platform":
        """The platform a link from this platform converts to."""
        match self:
            case Platform.APPLE_MUSIC:
                return Platform.SPOTIFY
            case Platform.SPOTIFY:
                return Platform.APPLE_MUSIC


class ContentType(StrEnum):
    """Kind of catalog item a link points at.

    Determines which metadata fields are meaningful and which scoring
    branch applies.
    """

    TRACK = "track"
    ALBUM = "album"
    ARTIST = "artist"


class ConversionDirection(StrEnum):
    """Direction of a conversion."""

    APPLE_TO_SPOTIFY = "apple-to-spotify"
    SPOTIFY_TO_APPLE = "spotify-to-apple"

    @classmethod
    def from_source(cls, platform: Platform) -> "ConversionDirection":
        """Direction for a link originating on the given platform."""
        if platform is Platform.APPLE_MUSIC:
            return cls.APPLE_TO_SPOTIFY
        return cls.SPOTIFY_TO_APPLE

    @property
    def source(self) -> Platform:
        """Platform the converted link came from."""
        if self is ConversionDirection.APPLE_TO_SPOTIFY:
            return Platform.APPLE_MUSIC
        return Platform.SPOTIFY

    @property
    def target(self) -> Platform:
        """Platform the match was found on."""
        return self.source.counterpart
