"""Business logic services for trackbridge.

Public API:
    LinkConverter - Full conversion: parse + fetch + select + confidence
    MetadataFetcher - Source metadata lookup by parsed link
    MatchSelector - Best-match selection on one target platform
"""

from trackbridge.services.converter import LinkConverter
from trackbridge.services.fetcher import MetadataFetcher
from trackbridge.services.selector import MatchSelector

__all__ = [
    "LinkConverter",
    "MatchSelector",
    "MetadataFetcher",
]
