"""Configuration for trackbridge."""

from dataclasses import dataclass, field

from trackbridge.lib.queries import QueryDialect
from trackbridge.models.enums import Platform


@dataclass(frozen=True)
class MatchPolicy:
    """Selection thresholds for one target platform.

    All thresholds compare against the raw candidate score.

    Attributes:
        high_confidence: A hit above this ends the search immediately.
        decent: Pooled candidates above this are ranked by originality
            and popularity.
        acceptance: Minimum raw score for a candidate to be returned at all.
        search_limit: Maximum number of results requested per query.
    """

    high_confidence: float
    decent: float
    acceptance: float
    search_limit: int

    def __post_init__(self) -> None:
        if not 0 <= self.acceptance <= self.high_confidence:
            raise ValueError("acceptance must be between 0 and high_confidence")
        if self.search_limit < 1:
            raise ValueError("search_limit must be at least 1")


SPOTIFY_POLICY = MatchPolicy(
    high_confidence=0.8, decent=0.5, acceptance=0.3, search_limit=10
)
APPLE_MUSIC_POLICY = MatchPolicy(
    high_confidence=0.7, decent=0.5, acceptance=0.6, search_limit=25
)

DEFAULT_POLICIES: dict[Platform, MatchPolicy] = {
    Platform.SPOTIFY: SPOTIFY_POLICY,
    Platform.APPLE_MUSIC: APPLE_MUSIC_POLICY,
}

DEFAULT_DIALECTS: dict[Platform, QueryDialect] = {
    Platform.SPOTIFY: QueryDialect.FIELD_FILTERS,
    Platform.APPLE_MUSIC: QueryDialect.KEYWORDS,
}


@dataclass(frozen=True)
class CatalogConfig:
    """Catalog client configuration.

    Attributes:
        spotify_market: Market code for Spotify search and lookups.
        apple_storefront: Apple Music storefront searched as a target.
        http_timeout: Timeout in seconds for every HTTP request.
        policies: Selection thresholds per target platform.
    """

    spotify_market: str = "US"
    apple_storefront: str = "us"
    http_timeout: float = 10.0
    policies: dict[Platform, MatchPolicy] = field(
        default_factory=lambda: dict(DEFAULT_POLICIES)
    )

    def policy_for(self, platform: Platform) -> MatchPolicy:
        """Selection thresholds used when searching the given platform."""
        return self.policies.get(platform, DEFAULT_POLICIES[platform])
