"""Link conversion service."""

import logging

import httpx

from trackbridge.exceptions import ConfigurationError
from trackbridge.lib.confidence import calculate_confidence
from trackbridge.models.enums import ConversionDirection, Platform
from trackbridge.models.link import ParsedLink
from trackbridge.models.metadata import MetadataBase
from trackbridge.models.results import ConversionResult
from trackbridge.services.fetcher import MetadataFetcher
from trackbridge.services.selector import MatchSelector
from trackbridge.utils.url import parse_link

logger = logging.getLogger(__name__)


class LinkConverter:
    """Converts a music link from one platform to the other.

    A conversion parses the link, fetches the source metadata, selects the
    best counterpart on the other platform and scores the confidence of
    the result. Conversions are independent of each other and may run
    concurrently.

    Use as an async context manager to close an owned HTTP client::

        async with create_converter() as converter:
            result = await converter.convert(url)
    """

    def __init__(
        self,
        fetcher: MetadataFetcher,
        selectors: dict[Platform, MatchSelector],
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the converter.

        Args:
            fetcher: Source metadata fetcher.
            selectors: Match selector per target platform.
            http_client: HTTP client owned by this converter, closed by
                ``aclose``. Pass None when the caller owns the client.
        """
        self._fetcher = fetcher
        self._selectors = selectors
        self._http_client = http_client

    async def resolve(self, link: str) -> tuple[ParsedLink, MetadataBase]:
        """Parse a link and fetch the metadata of the item it points at.

        Raises:
            InvalidLinkError: If the link cannot be parsed.
            MetadataNotFoundError: If the source item does not exist.
            ExternalApiError: If the source lookup fails.
        """
        parsed = parse_link(link)
        return parsed, await self._fetcher.fetch(parsed)

    async def convert(self, link: str) -> ConversionResult:
        """Convert a link to its counterpart on the other platform.

        Args:
            link: Apple Music or Spotify URL of a track, album, or artist.

        Returns:
            The conversion result.

        Raises:
            InvalidLinkError: If the link cannot be parsed.
            MetadataNotFoundError: If the source item does not exist.
            NoMatchFoundError: If no acceptable counterpart was found.
            CredentialsMissingError: If a needed platform is not configured.
            ConfigurationError: If no selector is registered for the target.
            ExternalApiError: If a platform API call fails.
        """
        parsed, source = await self.resolve(link)

        target = parsed.platform.counterpart
        selector = self._selectors.get(target)
        if selector is None:
            raise ConfigurationError(f"No selector configured for {target.label}")

        match = await selector.select(source)
        confidence = calculate_confidence(source, match.candidate)

        result = ConversionResult(
            direction=ConversionDirection.from_source(parsed.platform),
            source_metadata=source,
            matched_url=match.external_url,
            matched_metadata=match.candidate,
            confidence=confidence,
        )
        logger.info(
            "Converted %s '%s' by %s -> %s (%d%% confidence)",
            source.content_type,
            source.title,
            source.artist,
            result.matched_url,
            confidence,
        )
        return result

    async def aclose(self) -> None:
        """Close the owned HTTP client, if any."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "LinkConverter":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
