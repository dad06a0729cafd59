"""Protocols for platform catalog clients.

These protocols enable dependency injection and testing: the fetcher and
selector only see these interfaces, so tests can pass in-memory fakes
instead of HTTP clients.
"""

from typing import Protocol

from trackbridge.models.enums import ContentType
from trackbridge.models.metadata import MetadataBase


class SourceCatalog(Protocol):
    """Looks up the item a parsed link points at."""

    async def lookup(
        self, item_id: str, region: str, content_type: ContentType
    ) -> MetadataBase | None:
        """Fetch metadata by id, or None if the platform has no such item."""
        ...


class SearchCatalog(Protocol):
    """Searches a target platform for candidates."""

    async def search(
        self, query: str, content_type: ContentType, limit: int
    ) -> list[MetadataBase]:
        """Run one search query and return candidate metadata in rank order."""
        ...


class TokenProvider(Protocol):
    """Produces a bearer credential for a platform API."""

    async def get_token(self) -> str:
        """Return a valid token, refreshing it when needed."""
        ...

    def invalidate(self) -> None:
        """Forget the cached token after the API rejected it."""
        ...