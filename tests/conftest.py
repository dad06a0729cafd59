"""Test fixtures and configuration."""

from collections.abc import Callable

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from trackbridge.exceptions import ExternalApiError
from trackbridge.models.enums import ContentType
from trackbridge.models.metadata import (
    AlbumMetadata,
    ArtistMetadata,
    MetadataBase,
    TrackMetadata,
)

# ============================================================================
# Fakes
# ============================================================================


class FakeSearchCatalog:
    """In-memory SearchCatalog.

    Maps queries to canned results. Unknown queries return ``default``.
    A query mapped to an exception instance raises it.
    """

    def __init__(
        self,
        results: dict[str, list[MetadataBase] | Exception] | None = None,
        default: list[MetadataBase] | None = None,
    ) -> None:
        self.results = results or {}
        self.default = default or []
        self.calls: list[tuple[str, ContentType, int]] = []

    async def search(
        self, query: str, content_type: ContentType, limit: int
    ) -> list[MetadataBase]:
        self.calls.append((query, content_type, limit))
        result = self.results.get(query, self.default)
        if isinstance(result, Exception):
            raise result
        return list(result)

    @property
    def queries(self) -> list[str]:
        return [query for query, _, _ in self.calls]


class FailingSearchCatalog(FakeSearchCatalog):
    """SearchCatalog whose every search fails."""

    async def search(
        self, query: str, content_type: ContentType, limit: int
    ) -> list[MetadataBase]:
        self.calls.append((query, content_type, limit))
        raise ExternalApiError("Service unavailable", status=503)


class FakeSourceCatalog:
    """In-memory SourceCatalog keyed by item id."""

    def __init__(self, items: dict[str, MetadataBase] | None = None) -> None:
        self.items = items or {}
        self.calls: list[tuple[str, str, ContentType]] = []

    async def lookup(
        self, item_id: str, region: str, content_type: ContentType
    ) -> MetadataBase | None:
        self.calls.append((item_id, region, content_type))
        return self.items.get(item_id)


class FakeTokenProvider:
    """TokenProvider returning a fixed token."""

    def __init__(self, token: str = "test-token") -> None:
        self.token = token
        self.invalidated = 0

    async def get_token(self) -> str:
        return self.token

    def invalidate(self) -> None:
        self.invalidated += 1


# ============================================================================
# HTTP helpers
# ============================================================================


def mock_http_client(
    handler: Callable[[httpx.Request], httpx.Response],
) -> httpx.AsyncClient:
    """Create an AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ============================================================================
# Metadata fixtures
# ============================================================================


@pytest.fixture
def blinding_lights() -> TrackMetadata:
    """Source track as fetched from Spotify."""
    return TrackMetadata(
        title="Blinding Lights",
        artist="The Weeknd",
        artists=("The Weeknd",),
        album="After Hours",
        isrc="USUG11904206",
        duration_ms=200040,
        popularity=90,
        url="https://open.spotify.com/track/0VjIjW4GlUZAMYd2vXMi3b",
    )


@pytest.fixture
def blinding_lights_apple() -> TrackMetadata:
    """The same recording as listed on Apple Music."""
    return TrackMetadata(
        title="Blinding Lights",
        artist="The Weeknd",
        album="After Hours",
        isrc="USUG11904206",
        duration_ms=200040,
        url="https://music.apple.com/us/album/blinding-lights/1499378108?i=1499378615",
    )


@pytest.fixture
def tribute_cover() -> TrackMetadata:
    """A popular tribute cover of the source track."""
    return TrackMetadata(
        title="Blinding Lights",
        artist="The Weeknd Tribute Band",
        album="Hits of 2020",
        duration_ms=201000,
        popularity=100,
        url="https://music.apple.com/us/album/blinding-lights/555?i=556",
    )


@pytest.fixture
def sample_album() -> AlbumMetadata:
    """Create a sample album."""
    return AlbumMetadata(
        title="After Hours",
        artist="The Weeknd",
        total_tracks=14,
        url="https://open.spotify.com/album/4yP0hdKOZPNshxUOjY0cZj",
    )


@pytest.fixture
def sample_artist() -> ArtistMetadata:
    """Create a sample artist."""
    return ArtistMetadata(
        title="The Weeknd",
        artist="The Weeknd",
        genres=frozenset({"canadian contemporary r&b", "pop"}),
        popularity=95,
        url="https://open.spotify.com/artist/1Xyo4u8uXC1ZmMpatF05PJ",
    )


# ============================================================================
# Credential fixtures
# ============================================================================


@pytest.fixture(scope="session")
def ec_key_pair() -> tuple[str, ec.EllipticCurvePublicKey]:
    """P-256 key pair for signing Apple Music developer tokens (PEM, public key)."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    return pem, private_key.public_key()
