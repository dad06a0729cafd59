"""Source metadata fetching."""

import logging

from trackbridge.clients.protocols import SourceCatalog
from trackbridge.exceptions import ConfigurationError, MetadataNotFoundError
from trackbridge.models.enums import Platform
from trackbridge.models.link import ParsedLink
from trackbridge.models.metadata import MetadataBase

logger = logging.getLogger(__name__)


class MetadataFetcher:
    """Fetches the metadata of the item a parsed link points at.

    Lookups are delegated to the source catalog registered for the link's
    platform.
    """

    def __init__(self, catalogs: dict[Platform, SourceCatalog]) -> None:
        """Initialize the fetcher.

        Args:
            catalogs: Source catalog per platform.
        """
        self._catalogs = catalogs

    async def fetch(self, parsed: ParsedLink) -> MetadataBase:
        """Fetch source metadata for a parsed link.

        Args:
            parsed: Link identifiers from ``parse_link``.

        Returns:
            Metadata whose content type equals ``parsed.content_type``.

        Raises:
            MetadataNotFoundError: If the lookup finds nothing, or finds an
                item of a different content type.
            ConfigurationError: If no catalog is registered for the platform.
            CredentialsMissingError: If the catalog needs credentials that
                are not configured.
            ExternalApiError: If the catalog request fails.
        """
        catalog = self._catalogs.get(parsed.platform)
        if catalog is None:
            raise ConfigurationError(
                f"No source catalog registered for {parsed.platform.label}"
            )

        metadata = await catalog.lookup(parsed.id, parsed.region, parsed.content_type)

        if metadata is None:
            raise MetadataNotFoundError(
                f"No {parsed.content_type} with id {parsed.id} "
                f"on {parsed.platform.label}"
            )
        if metadata.content_type != parsed.content_type:
            raise MetadataNotFoundError(
                f"{parsed.platform.label} id {parsed.id} is a "
                f"{metadata.content_type}, not a {parsed.content_type}"
            )

        logger.debug(
            "Fetched %s: '%s' by %s",
            metadata.content_type,
            metadata.title,
            metadata.artist,
        )
        return metadata
