"""Best-match selection on a target platform."""

import logging

from trackbridge.clients.protocols import SearchCatalog
from trackbridge.config import MatchPolicy
from trackbridge.exceptions import ExternalApiError, NoMatchFoundError
from trackbridge.lib.matching import (
    boost_score,
    is_original_artist,
    isrc_matches,
    score_candidate,
)
from trackbridge.lib.queries import QueryDialect, generate_queries
from trackbridge.models.enums import ContentType, Platform
from trackbridge.models.metadata import MetadataBase
from trackbridge.models.results import ScoredCandidate

logger = logging.getLogger(__name__)


class MatchSelector:
    """Finds the best counterpart of a source item on one target platform.

    Selection Overview:
    ===================
    1. Queries are tried in order, most specific first.
    2. Each hit is scored; an ISRC-identical hit wins outright.
    3. A query whose hits include one above the high-confidence threshold
       ends the search with the best of those hits.
    4. Otherwise hits are pooled across queries and, once every query has
       run, the pool is ranked: original-artist candidates first, then
       popularity, then score.
    """

    def __init__(
        self,
        search_client: SearchCatalog,
        target_platform: Platform,
        policy: MatchPolicy,
        dialect: QueryDialect = QueryDialect.FIELD_FILTERS,
    ) -> None:
        """Initialize the selector.

        Args:
            search_client: Search catalog of the target platform.
            target_platform: Platform being searched, for messages.
            policy: Thresholds for this platform.
            dialect: Query syntax the target search engine understands.
        """
        self._client = search_client
        self._platform = target_platform
        self._policy = policy
        self._dialect = dialect

    @property
    def platform(self) -> Platform:
        return self._platform

    def _score(self, candidate: MetadataBase, source: MetadataBase) -> ScoredCandidate:
        raw = score_candidate(candidate, source)
        original = is_original_artist(candidate, source)
        return ScoredCandidate(
            candidate=candidate,
            raw_score=raw,
            boosted_score=boost_score(raw, candidate.popularity, original),
            external_url=candidate.url or "",
            is_original_artist=original,
        )

    async def select(self, source: MetadataBase) -> ScoredCandidate:
        """Pick the best candidate for the source item.

        Args:
            source: Metadata of the item being converted.

        Returns:
            The selected candidate.

        Raises:
            NoMatchFoundError: If no candidate clears the acceptance threshold.
            ExternalApiError: If nothing was accepted and at least one search
                failed; the last failure is re-raised.
            CredentialsMissingError: If the target platform is not configured.
        """
        content_type = ContentType(source.content_type)
        pool: dict[str, ScoredCandidate] = {}
        last_error: ExternalApiError | None = None

        for query in generate_queries(source, self._dialect):
            logger.debug("Searching %s: %s", self._platform.label, query)
            try:
                hits = await self._client.search(
                    query, content_type, self._policy.search_limit
                )
            except ExternalApiError as e:
                logger.warning(
                    "%s search failed for query '%s': %s",
                    self._platform.label,
                    query,
                    e.message,
                )
                last_error = e
                continue

            scored = [self._score(hit, source) for hit in hits if hit.url]

            for item in scored:
                if isrc_matches(item.candidate, source):
                    logger.debug("ISRC match: %s", item.external_url)
                    return item

            threshold = self._policy.high_confidence
            confident = [s for s in scored if s.raw_score > threshold]
            if confident:
                best = max(confident, key=lambda s: s.boosted_score)
                logger.debug(
                    "High-confidence match for '%s': %s (%.2f)",
                    query,
                    best.external_url,
                    best.raw_score,
                )
                return best

            for item in scored:
                known = pool.get(item.external_url)
                if known is None or item.boosted_score > known.boosted_score:
                    pool[item.external_url] = item

        best = self._rank_pool(list(pool.values()))
        if best is not None:
            logger.debug(
                "Selected pooled match %s (raw %.2f, boosted %.2f)",
                best.external_url,
                best.raw_score,
                best.boosted_score,
            )
            return best

        if last_error is not None:
            raise last_error
        raise NoMatchFoundError(
            f"No {source.content_type} match found on {self._platform.label}",
            platform=self._platform.label,
        )

    def _rank_pool(self, pool: list[ScoredCandidate]) -> ScoredCandidate | None:
        eligible = [s for s in pool if s.raw_score > self._policy.acceptance]
        if not eligible:
            return None

        decent = [s for s in eligible if s.raw_score > self._policy.decent]
        if decent:
            originals = [s for s in decent if s.is_original_artist]
            if originals:
                return max(originals, key=lambda s: s.boosted_score)
            return max(decent, key=lambda s: (s.candidate.popularity, s.raw_score))

        return max(eligible, key=lambda s: s.boosted_score)
