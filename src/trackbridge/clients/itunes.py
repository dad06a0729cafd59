"""iTunes lookup API client.

The public lookup endpoint needs no credentials, which makes it the
source catalog for Apple Music links. Lookup results rarely carry an
ISRC, so when an Apple Music catalog client is available the track ISRC
is filled in from the catalog.
"""

import logging
from typing import Any

import httpx

from trackbridge.clients.apple_music import AppleMusicClient
from trackbridge.clients.base import parse_payload, request_json
from trackbridge.exceptions import ExternalApiError
from trackbridge.models.enums import ContentType
from trackbridge.models.metadata import (
    AlbumMetadata,
    ArtistMetadata,
    MetadataBase,
    TrackMetadata,
)
from trackbridge.utils.artwork import upscale_itunes_artwork

logger = logging.getLogger(__name__)

ITUNES_LOOKUP_URL = "https://itunes.apple.com/lookup"


def _genres(result: dict[str, Any]) -> frozenset[str]:
    genre = result.get("primaryGenreName")
    return frozenset({genre}) if genre else frozenset()


def _artwork(result: dict[str, Any]) -> str | None:
    url = result.get("artworkUrl100") or result.get("artworkUrl60")
    return upscale_itunes_artwork(url) if url else None


def parse_result(result: dict[str, Any]) -> MetadataBase | None:
    """Map one lookup result by its ``wrapperType``.

    Returns:
        Track, album or artist metadata, or None for other wrapper types.
    """
    match result.get("wrapperType"):
        case "track":
            return TrackMetadata(
                title=result["trackName"],
                artist=result["artistName"],
                album=result.get("collectionName"),
                artwork_url=_artwork(result),
                release_date=result.get("releaseDate"),
                genres=_genres(result),
                track_number=result.get("trackNumber"),
                total_tracks=result.get("trackCount"),
                disc_number=result.get("discNumber"),
                total_discs=result.get("discCount"),
                duration_ms=result.get("trackTimeMillis"),
                preview_url=result.get("previewUrl"),
                isrc=result.get("isrc"),
                url=result.get("trackViewUrl"),
            )
        case "collection":
            return AlbumMetadata(
                title=result["collectionName"],
                artist=result["artistName"],
                artwork_url=_artwork(result),
                release_date=result.get("releaseDate"),
                genres=_genres(result),
                total_tracks=result.get("trackCount"),
                url=result.get("collectionViewUrl"),
            )
        case "artist":
            return ArtistMetadata(
                title=result["artistName"],
                artist=result["artistName"],
                genres=_genres(result),
                url=result.get("artistLinkUrl"),
            )
    return None


class ITunesLookupClient:
    """Source catalog backed by the public iTunes lookup API.

    Args:
        http: Client used to send requests.
        catalog: Optional Apple Music catalog client used to add the ISRC
            that lookup results usually omit.
        lookup_url: Lookup endpoint.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        catalog: AppleMusicClient | None = None,
        lookup_url: str = ITUNES_LOOKUP_URL,
    ) -> None:
        self._http = http
        self._catalog = catalog
        self._lookup_url = lookup_url

    async def lookup(
        self, item_id: str, region: str, content_type: ContentType
    ) -> MetadataBase | None:
        """Look up an Apple Music id in the given storefront.

        The content type is not sent: the lookup endpoint resolves any id
        and reports what it found through ``wrapperType``.

        Returns:
            Metadata of the first result, or None when nothing was found.

        Raises:
            ExternalApiError: If the request fails.
        """
        logger.debug("iTunes lookup: id=%s country=%s", item_id, region)
        data = await request_json(
            self._http,
            "GET",
            self._lookup_url,
            service="iTunes",
            params={"id": item_id, "country": region},
        )
        results = (data or {}).get("results") or []
        if not results:
            return None
        metadata = parse_payload(parse_result, results[0], "iTunes")

        if isinstance(metadata, TrackMetadata) and not metadata.isrc:
            return await self._with_catalog_isrc(metadata, item_id)
        return metadata

    async def _with_catalog_isrc(
        self, track: TrackMetadata, item_id: str
    ) -> TrackMetadata:
        if self._catalog is None:
            return track
        try:
            song = await self._catalog.get_by_id(item_id, ContentType.TRACK)
        except ExternalApiError as e:
            # The track is still usable without an ISRC
            logger.warning("Could not fetch ISRC for %s: %s", item_id, e.message)
            return track
        if isinstance(song, TrackMetadata) and song.isrc:
            logger.debug("Catalog ISRC for %s: %s", item_id, song.isrc)
            return track.model_copy(update={"isrc": song.isrc})
        return track
