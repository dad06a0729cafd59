"""Candidate scoring for cross-platform matching.

This module scores a target-platform search result against the source
metadata. Scores are a raw weighted signal (roughly 0-1, not a
probability): title and artist agreement carry most of the weight,
duration and album agreement add small bonuses, and candidates that look
like tribute or cover acts are heavily penalized.

ISRC identity is not part of the score. It is handled as a decisive
signal by the selector and the confidence calculator.
"""

import logging

from trackbridge.lib.text import (
    clean,
    fold,
    is_tribute_band,
    normalize_artist,
    remove_featuring,
    split_artists,
)
from trackbridge.models.metadata import (
    AlbumMetadata,
    ArtistMetadata,
    MetadataBase,
    TrackMetadata,
    credited_artists,
)

logger = logging.getLogger(__name__)

# ============================================================================
# PRIVATE CONSTANTS - Weights (fractions of a perfect score)
# ============================================================================

_TITLE_WEIGHT = 0.4
_ARTIST_WEIGHT = 0.4
_DURATION_BONUS = 0.1
_ALBUM_BONUS = 0.1

# Fraction of a field's weight awarded per match tier
_EXACT_TIER = 1.0
_DEFEATURED_TIER = 0.75
_CONTAINS_TIER = 0.5

_ARTIST_NAME_WEIGHT = 0.8
_ARTIST_GENRE_WEIGHT = 0.2

_DURATION_TOLERANCE_MS = 2000
_TRIBUTE_PENALTY = 0.1

# Boost applied on top of the raw score when ranking candidates
_ORIGINAL_ARTIST_BOOST = 2.0
_POPULARITY_DIVISOR = 1000


# ============================================================================
# FIELD COMPARISONS
# ============================================================================


def _contains_either_way(a: str, b: str) -> bool:
    return bool(a and b) and (a in b or b in a)


def _title_tier(candidate: str, source: str) -> float:
    """Fraction of the title weight earned by a candidate title."""
    cand_clean, src_clean = clean(candidate), clean(source)
    if cand_clean and (cand_clean == src_clean or fold(candidate) == fold(source)):
        return _EXACT_TIER
    cand_base = clean(remove_featuring(candidate))
    src_base = clean(remove_featuring(source))
    if cand_base and cand_base == src_base:
        return _DEFEATURED_TIER
    if _contains_either_way(cand_clean, src_clean):
        return _CONTAINS_TIER
    return 0.0


def _artist_tier(candidate: str, source: str) -> float:
    """Fraction of the artist weight earned by a candidate credit."""
    cand_norm, src_norm = normalize_artist(candidate), normalize_artist(source)
    if cand_norm and cand_norm == src_norm:
        return _EXACT_TIER
    if cand_norm and normalize_artist(fold(candidate)) == normalize_artist(
        fold(source)
    ):
        return _EXACT_TIER
    if _contains_either_way(cand_norm, src_norm):
        return _CONTAINS_TIER
    return 0.0


def _name_tier(candidate: str, source: str) -> float:
    """Fraction of the artist-name weight earned by a candidate name."""
    cand_clean, src_clean = clean(candidate), clean(source)
    if cand_clean and (cand_clean == src_clean or fold(candidate) == fold(source)):
        return _EXACT_TIER
    if _contains_either_way(cand_clean, src_clean):
        return _CONTAINS_TIER
    return 0.0


def _genre_overlap(candidate: frozenset[str], source: frozenset[str]) -> float:
    """Fraction of the source genres shared by the candidate (0-1)."""
    source_genres = {clean(g) for g in source if clean(g)}
    if not source_genres:
        return 0.0
    candidate_genres = {clean(g) for g in candidate}
    return len(source_genres & candidate_genres) / len(source_genres)


def _looks_like_tribute(candidate: MetadataBase, source: MetadataBase) -> bool:
    """Check every individually credited candidate artist for a tribute act."""
    source_artist = clean(remove_featuring(source.artist))
    names = [
        name for credit in credited_artists(candidate) for name in split_artists(credit)
    ]
    return any(is_tribute_band(name, source_artist) for name in names)


# ============================================================================
# PUBLIC API
# ============================================================================


def isrc_matches(candidate: MetadataBase, source: MetadataBase) -> bool:
    """Check whether both sides are tracks carrying the same ISRC."""
    if not isinstance(candidate, TrackMetadata) or not isinstance(
        source, TrackMetadata
    ):
        return False
    if not candidate.isrc or not source.isrc:
        return False
    return candidate.isrc.strip().upper() == source.isrc.strip().upper()


def is_original_artist(candidate: MetadataBase, source: MetadataBase) -> bool:
    """Check whether a candidate is credited to the source artist.

    True when the normalized credits are equal, or when any individually
    credited candidate artist equals the source artist.
    """
    source_norm = normalize_artist(source.artist)
    if source_norm and normalize_artist(candidate.artist) == source_norm:
        return True
    source_clean = clean(source.artist)
    return bool(source_clean) and any(
        name == source_clean
        for credit in credited_artists(candidate)
        for name in split_artists(credit)
    )


def score_candidate(candidate: MetadataBase, source: MetadataBase) -> float:
    """Score a search result against the source metadata.

    Tracks and albums:
        - title: 40% (exact), 30% (equal without featuring), 20% (substring)
        - artist: 40% (normalized equal), 20% (containment)
        - duration within 2 seconds: +10%
        - album name equal: +10%
    Artists:
        - name: 80% (exact), 40% (substring)
        - shared genres: up to +20%, proportional to overlap

    A tribute/cover-looking candidate has its total multiplied by 0.1.

    Args:
        candidate: Metadata of the search result.
        source: Metadata of the item being converted.

    Returns:
        Raw score, 0.0 and up (about 1.0 for a perfect text match).

    Raises:
        ValueError: If the two sides have different content types.
    """
    if candidate.content_type != source.content_type:
        raise ValueError(
            f"Cannot score {candidate.content_type} candidate "
            f"against {source.content_type} source"
        )

    if isinstance(source, ArtistMetadata):
        score = _ARTIST_NAME_WEIGHT * _name_tier(candidate.artist, source.artist)
        score += _ARTIST_GENRE_WEIGHT * _genre_overlap(candidate.genres, source.genres)
    else:
        score = _TITLE_WEIGHT * _title_tier(candidate.title, source.title)
        score += _ARTIST_WEIGHT * _artist_tier(candidate.artist, source.artist)
        score += _release_bonus(candidate, source)

    if _looks_like_tribute(candidate, source):
        score *= _TRIBUTE_PENALTY

    return score


def _release_bonus(
    candidate: MetadataBase, source: TrackMetadata | AlbumMetadata
) -> float:
    if not isinstance(candidate, TrackMetadata) or not isinstance(
        source, TrackMetadata
    ):
        return 0.0

    bonus = 0.0
    if (
        candidate.duration_ms is not None
        and source.duration_ms
        and abs(candidate.duration_ms - source.duration_ms) < _DURATION_TOLERANCE_MS
    ):
        bonus += _DURATION_BONUS
    if candidate.album and source.album and clean(candidate.album) == clean(
        source.album
    ):
        bonus += _ALBUM_BONUS
    return bonus


def boost_score(raw_score: float, popularity: int, is_original: bool) -> float:
    """Rank adjustment favoring original artists and popular releases.

    The original artist doubles the score; popularity adds up to 10%.
    """
    boost = _ORIGINAL_ARTIST_BOOST if is_original else 1.0
    return raw_score * boost * (1 + popularity / _POPULARITY_DIVISOR)
