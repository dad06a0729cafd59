"""Spotify Web API client."""

import logging
from typing import Any

import httpx

from trackbridge.clients.base import parse_payload, request_json
from trackbridge.clients.protocols import TokenProvider
from trackbridge.exceptions import ExternalApiError
from trackbridge.models.enums import ContentType
from trackbridge.models.metadata import (
    AlbumMetadata,
    ArtistMetadata,
    MetadataBase,
    TrackMetadata,
)

logger = logging.getLogger(__name__)

SPOTIFY_API_URL = "https://api.spotify.com/v1"

# Spotify rejects larger search pages
_MAX_SEARCH_LIMIT = 50


def _first_image(images: list[dict[str, Any]] | None) -> str | None:
    # Spotify orders images widest first
    if images:
        return images[0].get("url")
    return None


def _artist_names(artists: list[dict[str, Any]] | None) -> tuple[str, ...]:
    return tuple(a["name"] for a in artists or [] if a.get("name"))


def _external_url(data: dict[str, Any]) -> str | None:
    return (data.get("external_urls") or {}).get("spotify")


def parse_track(data: dict[str, Any]) -> TrackMetadata:
    """Map a Spotify track object to track metadata."""
    album = data.get("album") or {}
    artists = _artist_names(data.get("artists"))
    return TrackMetadata(
        title=data["name"],
        artist=", ".join(artists),
        artists=artists,
        album=album.get("name"),
        artwork_url=_first_image(album.get("images")),
        release_date=album.get("release_date"),
        track_number=data.get("track_number"),
        total_tracks=album.get("total_tracks"),
        disc_number=data.get("disc_number"),
        duration_ms=data.get("duration_ms"),
        popularity=data.get("popularity") or 0,
        preview_url=data.get("preview_url"),
        isrc=(data.get("external_ids") or {}).get("isrc"),
        url=_external_url(data),
    )


def parse_album(data: dict[str, Any]) -> AlbumMetadata:
    """Map a Spotify album object to album metadata."""
    artists = _artist_names(data.get("artists"))
    return AlbumMetadata(
        title=data["name"],
        artist=", ".join(artists),
        artists=artists,
        artwork_url=_first_image(data.get("images")),
        release_date=data.get("release_date"),
        total_tracks=data.get("total_tracks"),
        genres=frozenset(data.get("genres") or ()),
        popularity=data.get("popularity") or 0,
        upc=(data.get("external_ids") or {}).get("upc"),
        url=_external_url(data),
    )


def parse_artist(data: dict[str, Any]) -> ArtistMetadata:
    """Map a Spotify artist object to artist metadata."""
    return ArtistMetadata(
        title=data["name"],
        artist=data["name"],
        artwork_url=_first_image(data.get("images")),
        genres=frozenset(data.get("genres") or ()),
        popularity=data.get("popularity") or 0,
        url=_external_url(data),
    )


_PARSERS = {
    ContentType.TRACK: parse_track,
    ContentType.ALBUM: parse_album,
    ContentType.ARTIST: parse_artist,
}


class SpotifyClient:
    """Spotify Web API client.

    Implements both SourceCatalog and SearchCatalog. Every request carries
    a bearer token from the injected token provider.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token_provider: TokenProvider,
        market: str = "US",
        base_url: str = SPOTIFY_API_URL,
    ) -> None:
        self._http = http
        self._tokens = token_provider
        self._market = market
        self._base_url = base_url.rstrip("/")

    async def _get(
        self, path: str, params: dict[str, Any], *, allow_not_found: bool = False
    ) -> Any:
        token = await self._tokens.get_token()
        try:
            return await request_json(
                self._http,
                "GET",
                f"{self._base_url}{path}",
                service="Spotify",
                allow_not_found=allow_not_found,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except ExternalApiError as e:
            if e.status == httpx.codes.UNAUTHORIZED:
                self._tokens.invalidate()
            raise

    async def search(
        self, query: str, content_type: ContentType, limit: int = 10
    ) -> list[MetadataBase]:
        """Search the Spotify catalog.

        Args:
            query: Search string, field filters allowed.
            content_type: Kind of item to search for.
            limit: Maximum number of results.

        Returns:
            Candidate metadata in Spotify's rank order.

        Raises:
            CredentialsMissingError: If no token can be obtained.
            ExternalApiError: If the request fails.
        """
        logger.debug("Spotify search (%s): %s", content_type, query)
        data = await self._get(
            "/search",
            {
                "q": query,
                "type": content_type.value,
                "limit": min(limit, _MAX_SEARCH_LIMIT),
                "market": self._market,
            },
        )
        items = ((data or {}).get(f"{content_type.value}s") or {}).get("items") or []
        parse = _PARSERS[content_type]
        # Spotify occasionally returns null entries in search pages
        return [parse_payload(parse, item, "Spotify") for item in items if item]

    async def get_by_id(
        self, item_id: str, content_type: ContentType
    ) -> MetadataBase | None:
        """Fetch one item by its Spotify id.

        Returns:
            The item metadata, or None if Spotify reports 404.

        Raises:
            CredentialsMissingError: If no token can be obtained.
            ExternalApiError: If the request fails.
        """
        params = {} if content_type is ContentType.ARTIST else {"market": self._market}
        data = await self._get(
            f"/{content_type.value}s/{item_id}", params, allow_not_found=True
        )
        if not data:
            return None
        return parse_payload(_PARSERS[content_type], data, "Spotify")

    async def lookup(
        self, item_id: str, region: str, content_type: ContentType
    ) -> MetadataBase | None:
        """Source lookup; Spotify links carry no storefront, so region is unused."""
        return await self.get_by_id(item_id, content_type)
