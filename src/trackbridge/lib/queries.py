"""Search query generation.

Builds the ordered list of search strings tried against a target platform,
from the most specific (exact ISRC) to the most permissive (loose keywords).
Early queries are high precision, so the selector can stop as soon as one
of them produces a confident hit.
"""

import logging
from enum import StrEnum

from trackbridge.lib.text import (
    clean,
    numbers_to_words,
    remove_featuring,
    split_artists,
    strip_version_tags,
)
from trackbridge.models.metadata import (
    AlbumMetadata,
    ArtistMetadata,
    MetadataBase,
    TrackMetadata,
)

logger = logging.getLogger(__name__)

ISRC_PREFIX = "isrc:"


class QueryDialect(StrEnum):
    """Query syntax understood by a target search engine.

    FIELD_FILTERS: Spotify-style ``track:"..." artist:"..."`` filters.
    KEYWORDS: Plain keyword search (Apple Music catalog search).
    """

    FIELD_FILTERS = "field_filters"
    KEYWORDS = "keywords"


def _phrase(
    dialect: QueryDialect, field: str, title: str, other_field: str, other: str
) -> str:
    if dialect is QueryDialect.FIELD_FILTERS:
        return f'{field}:"{title}" {other_field}:"{other}"'
    return f"{title} {other}"


def _dedupe(queries: list[str]) -> list[str]:
    """Drop empty and repeated queries, keeping first occurrences in order."""
    seen: set[str] = set()
    unique: list[str] = []
    for query in queries:
        query = query.strip()
        if query and query not in seen:
            seen.add(query)
            unique.append(query)
    return unique


def is_isrc_query(query: str) -> bool:
    """Check whether a query is an exact-identifier (ISRC) lookup."""
    return query.lower().startswith(ISRC_PREFIX)


def isrc_from_query(query: str) -> str:
    """Extract the ISRC code from an ``isrc:<code>`` query."""
    return query[len(ISRC_PREFIX) :].strip()


def _artist_queries(source: ArtistMetadata, dialect: QueryDialect) -> list[str]:
    artist = clean(source.artist)
    if dialect is QueryDialect.FIELD_FILTERS:
        return [f'artist:"{artist}"', artist]
    return [f'"{artist}"', artist]


def _release_queries(
    source: TrackMetadata | AlbumMetadata, dialect: QueryDialect
) -> list[str]:
    field = source.content_type
    queries: list[str] = []

    title = clean(source.title)
    defeatured = clean(remove_featuring(source.title))
    stripped = clean(strip_version_tags(remove_featuring(source.title)))
    artist_names = split_artists(source.artist)
    artist = " ".join(artist_names)

    # 1. Exact identifier
    if isinstance(source, TrackMetadata) and source.isrc:
        queries.append(f"{ISRC_PREFIX}{source.isrc}")

    # 2-4. Title variants, most to least literal
    queries.append(_phrase(dialect, field, title, "artist", artist))
    if defeatured and defeatured != title:
        queries.append(_phrase(dialect, field, defeatured, "artist", artist))
    if stripped and stripped != defeatured:
        queries.append(_phrase(dialect, field, stripped, "artist", artist))

    # 5. Title + album
    if isinstance(source, TrackMetadata) and source.album:
        album = clean(source.album)
        stripped_album = clean(strip_version_tags(source.album))
        queries.append(_phrase(dialect, field, defeatured or title, "album", album))
        if stripped_album and stripped_album != album:
            queries.append(
                _phrase(dialect, field, stripped or title, "album", stripped_album)
            )

    # 6. Loose keywords
    queries.append(f"{stripped or title} {artist}")

    # 7. Multi-artist delimiter variants
    if len(artist_names) > 1:
        for joiner in (" & ", ", ", " "):
            variant = joiner.join(artist_names)
            queries.append(
                _phrase(dialect, field, stripped or title, "artist", variant)
            )

    # 8. Spelled-out numbers
    numeric_title = numbers_to_words(title)
    if numeric_title != title:
        queries.append(_phrase(dialect, field, numeric_title, "artist", artist))

    return queries


def generate_queries(
    source: MetadataBase, dialect: QueryDialect = QueryDialect.FIELD_FILTERS
) -> list[str]:
    """Generate search queries for the source item, most specific first.

    The result is deterministic: the same metadata always yields the same
    list. Duplicates are removed while preserving first occurrences.

    Args:
        source: Metadata of the item being converted.
        dialect: Query syntax of the target search engine.

    Returns:
        Ordered list of query strings.

    Example:
        >>> generate_queries(TrackMetadata(title="Song", artist="A", isrc="X1"))[0]
        'isrc:X1'
    """
    if isinstance(source, ArtistMetadata):
        queries = _artist_queries(source, dialect)
    elif isinstance(source, TrackMetadata | AlbumMetadata):
        queries = _release_queries(source, dialect)
    else:
        raise TypeError(f"Unsupported metadata type: {type(source).__name__}")

    unique = _dedupe(queries)
    logger.debug("Generated %d queries for '%s'", len(unique), source.title)
    return unique
