"""trackbridge - Convert music links between Apple Music and Spotify.

This library resolves a track, album, or artist link from one platform,
searches the other platform for the same item, and reports the best match
with a confidence score. Matching is metadata-based: ISRC identity when
available, otherwise normalized title and artist comparison with
penalties for tribute and cover acts.

Designed for use as a library in applications (e.g., FastAPI) with
a CLI for debugging and development.

Examples:
    Convert a link:
    ```python
    from trackbridge import create_converter

    async with create_converter() as converter:
        result = await converter.convert("https://open.spotify.com/track/...")
        print(result.matched_url, result.confidence)
    ```

    Inspect a link without network access:
    ```python
    from trackbridge import parse_link

    parsed = parse_link("https://music.apple.com/us/album/x/123?i=456")
    ```
"""

import logging

import httpx

from trackbridge.clients import (
    AppleMusicClient,
    AppleMusicDeveloperToken,
    ITunesLookupClient,
    SpotifyClient,
    SpotifyClientCredentials,
)
from trackbridge.config import DEFAULT_DIALECTS, CatalogConfig, MatchPolicy
from trackbridge.exceptions import (
    ConfigurationError,
    CredentialsMissingError,
    ExternalApiError,
    InvalidLinkError,
    MetadataNotFoundError,
    NoMatchFoundError,
    TrackBridgeError,
)
from trackbridge.models import (
    AlbumMetadata,
    ArtistMetadata,
    ContentMetadata,
    ContentType,
    ConversionDirection,
    ConversionResult,
    ParsedLink,
    Platform,
    TrackMetadata,
)
from trackbridge.services import LinkConverter, MatchSelector, MetadataFetcher
from trackbridge.settings import Settings, get_settings
from trackbridge.utils.url import detect_platform, is_supported_url, parse_link

logger = logging.getLogger(__name__)


def create_converter(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> LinkConverter:
    """Create a configured link converter.

    This is the recommended way to create a converter for library usage.
    It wires the platform clients, token providers and default match
    policies.

    Args:
        settings: Optional settings. Loaded from the environment if not provided.
        http_client: Optional shared HTTP client. When provided, the caller
                     owns it and must close it; otherwise the converter
                     creates one and closes it on exit.

    Returns:
        A configured LinkConverter instance.

    Examples:
        Basic usage:
        ```python
        async with create_converter() as converter:
            result = await converter.convert(url)
        ```

        With explicit credentials:
        ```python
        settings = Settings(spotify_client_id="...", spotify_client_secret="...")
        converter = create_converter(settings)
        ```
    """
    settings = settings or get_settings()
    config: CatalogConfig = settings.catalog_config()

    if not settings.has_spotify_credentials:
        logger.warning("Spotify credentials are not set; Spotify requests will fail")
    if not settings.has_apple_music_credentials:
        logger.warning(
            "Apple Music credentials are not set; Apple Music search will fail"
        )

    owned_client = None
    if http_client is None:
        http_client = owned_client = httpx.AsyncClient(timeout=config.http_timeout)

    spotify = SpotifyClient(
        http_client,
        SpotifyClientCredentials(
            settings.spotify_client_id, settings.spotify_client_secret, http_client
        ),
        market=config.spotify_market,
    )
    apple_music = AppleMusicClient(
        http_client,
        AppleMusicDeveloperToken(
            settings.apple_team_id, settings.apple_key_id, settings.apple_private_key
        ),
        storefront=config.apple_storefront,
        music_user_token=settings.apple_music_user_token,
    )

    fetcher = MetadataFetcher(
        {
            Platform.APPLE_MUSIC: ITunesLookupClient(
                http_client,
                catalog=apple_music if settings.has_apple_music_credentials else None,
            ),
            Platform.SPOTIFY: spotify,
        }
    )
    selectors = {
        platform: MatchSelector(
            client,
            platform,
            config.policy_for(platform),
            DEFAULT_DIALECTS[platform],
        )
        for platform, client in (
            (Platform.SPOTIFY, spotify),
            (Platform.APPLE_MUSIC, apple_music),
        )
    }
    return LinkConverter(fetcher, selectors, http_client=owned_client)


__all__ = [
    "AlbumMetadata",
    "ArtistMetadata",
    "CatalogConfig",
    "ConfigurationError",
    "ContentMetadata",
    "ContentType",
    "ConversionDirection",
    "ConversionResult",
    "CredentialsMissingError",
    "ExternalApiError",
    "InvalidLinkError",
    "LinkConverter",
    "MatchPolicy",
    "MatchSelector",
    "MetadataFetcher",
    "MetadataNotFoundError",
    "NoMatchFoundError",
    "ParsedLink",
    "Platform",
    "Settings",
    "TrackBridgeError",
    "TrackMetadata",
    "create_converter",
    "detect_platform",
    "is_supported_url",
    "parse_link",
]
