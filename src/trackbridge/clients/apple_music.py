"""Apple Music catalog API client."""

import logging
from typing import Any

import httpx

from trackbridge.clients.base import parse_payload, request_json
from trackbridge.clients.protocols import TokenProvider
from trackbridge.exceptions import ExternalApiError
from trackbridge.lib.queries import is_isrc_query, isrc_from_query
from trackbridge.models.enums import ContentType
from trackbridge.models.metadata import (
    AlbumMetadata,
    ArtistMetadata,
    MetadataBase,
    TrackMetadata,
)
from trackbridge.utils.artwork import fill_artwork_template

logger = logging.getLogger(__name__)

APPLE_MUSIC_API_URL = "https://api.music.apple.com/v1"

# The catalog search endpoint caps each result type at 25
_MAX_SEARCH_LIMIT = 25

_RESOURCE_TYPES = {
    ContentType.TRACK: "songs",
    ContentType.ALBUM: "albums",
    ContentType.ARTIST: "artists",
}


def _artwork(attributes: dict[str, Any]) -> str | None:
    url = (attributes.get("artwork") or {}).get("url")
    return fill_artwork_template(url) if url else None


def parse_song(resource: dict[str, Any]) -> TrackMetadata:
    """Map a catalog song resource to track metadata."""
    attributes = resource["attributes"]
    previews = attributes.get("previews") or []
    return TrackMetadata(
        title=attributes["name"],
        artist=attributes["artistName"],
        album=attributes.get("albumName"),
        artwork_url=_artwork(attributes),
        release_date=attributes.get("releaseDate"),
        genres=frozenset(attributes.get("genreNames") or ()),
        track_number=attributes.get("trackNumber"),
        disc_number=attributes.get("discNumber"),
        duration_ms=attributes.get("durationInMillis"),
        isrc=attributes.get("isrc"),
        preview_url=previews[0].get("url") if previews else None,
        url=attributes.get("url"),
    )


def parse_album(resource: dict[str, Any]) -> AlbumMetadata:
    """Map a catalog album resource to album metadata."""
    attributes = resource["attributes"]
    return AlbumMetadata(
        title=attributes["name"],
        artist=attributes["artistName"],
        artwork_url=_artwork(attributes),
        release_date=attributes.get("releaseDate"),
        genres=frozenset(attributes.get("genreNames") or ()),
        total_tracks=attributes.get("trackCount"),
        upc=attributes.get("upc"),
        url=attributes.get("url"),
    )


def parse_artist(resource: dict[str, Any]) -> ArtistMetadata:
    """Map a catalog artist resource to artist metadata."""
    attributes = resource["attributes"]
    return ArtistMetadata(
        title=attributes["name"],
        artist=attributes["name"],
        artwork_url=_artwork(attributes),
        genres=frozenset(attributes.get("genreNames") or ()),
        url=attributes.get("url"),
    )


_PARSERS = {
    ContentType.TRACK: parse_song,
    ContentType.ALBUM: parse_album,
    ContentType.ARTIST: parse_artist,
}


class AppleMusicClient:
    """Apple Music catalog API client.

    Implements SearchCatalog. Requests carry the developer token from the
    injected token provider, plus a Music-User-Token header when one is
    configured. Apple Music exposes no popularity, so candidates report 0.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token_provider: TokenProvider,
        storefront: str = "us",
        music_user_token: str | None = None,
        base_url: str = APPLE_MUSIC_API_URL,
    ) -> None:
        self._http = http
        self._tokens = token_provider
        self._storefront = storefront
        self._music_user_token = music_user_token
        self._base_url = base_url.rstrip("/")

    async def _headers(self) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {await self._tokens.get_token()}"}
        if self._music_user_token:
            headers["Music-User-Token"] = self._music_user_token
        return headers

    async def _get(
        self, path: str, params: dict[str, Any], *, allow_not_found: bool = False
    ) -> Any:
        headers = await self._headers()
        try:
            return await request_json(
                self._http,
                "GET",
                f"{self._base_url}/catalog/{self._storefront}{path}",
                service="Apple Music",
                allow_not_found=allow_not_found,
                params=params,
                headers=headers,
            )
        except ExternalApiError as e:
            if e.status == httpx.codes.UNAUTHORIZED:
                self._tokens.invalidate()
            raise

    def _parse_all(
        self, resources: list[dict[str, Any]], content_type: ContentType
    ) -> list[MetadataBase]:
        parse = _PARSERS[content_type]
        return [parse_payload(parse, r, "Apple Music") for r in resources if r]

    async def search(
        self, query: str, content_type: ContentType, limit: int = 25
    ) -> list[MetadataBase]:
        """Search the Apple Music catalog.

        ``isrc:<code>`` queries for tracks are answered by the ISRC filter
        endpoint instead of keyword search.

        Args:
            query: Keyword search string or ``isrc:<code>``.
            content_type: Kind of item to search for.
            limit: Maximum number of results (at most 25).

        Returns:
            Candidate metadata in Apple Music's rank order.

        Raises:
            CredentialsMissingError: If no developer token can be produced.
            ExternalApiError: If the request fails.
        """
        resource_type = _RESOURCE_TYPES[content_type]

        if is_isrc_query(query):
            if content_type is not ContentType.TRACK:
                return []
            isrc = isrc_from_query(query)
            logger.debug("Apple Music ISRC lookup: %s", isrc)
            data = await self._get("/songs", {"filter[isrc]": isrc})
            return self._parse_all((data or {}).get("data") or [], content_type)

        logger.debug("Apple Music search (%s): %s", content_type, query)
        data = await self._get(
            "/search",
            {
                "term": query,
                "types": resource_type,
                "limit": min(limit, _MAX_SEARCH_LIMIT),
            },
        )
        results = ((data or {}).get("results") or {}).get(resource_type) or {}
        return self._parse_all(results.get("data") or [], content_type)

    async def get_by_id(
        self, item_id: str, content_type: ContentType
    ) -> MetadataBase | None:
        """Fetch one catalog item by id from the configured storefront.

        Returns:
            The item metadata, or None if the catalog reports 404.
        """
        data = await self._get(
            f"/{_RESOURCE_TYPES[content_type]}/{item_id}", {}, allow_not_found=True
        )
        items = (data or {}).get("data") or []
        if not items:
            return None
        return self._parse_all(items[:1], content_type)[0]
