"""User-facing confidence for a completed match.

The confidence is a 0-100 integer shown next to a conversion result. It is
computed independently of the selector's raw score: the raw score ranks
candidates, while confidence describes how alike the two final items are.
"""

from rapidfuzz import fuzz

from trackbridge.lib.matching import isrc_matches
from trackbridge.lib.text import clean, normalize_artist, remove_featuring
from trackbridge.models.metadata import MetadataBase, TrackMetadata

_TITLE_WEIGHT = 40
_ARTIST_WEIGHT = 40
_ALBUM_WEIGHT = 20

_FEATURELESS_SIMILARITY = 0.95
# Fuzzy fallback spans [0.5, 0.9], below the featureless tier
_FUZZY_FLOOR = 0.5
_FUZZY_SPAN = 0.4


def _squash(text: str) -> str:
    return " ".join(text.lower().split())


def string_similarity(a: str, b: str, *, artists: bool = False) -> float:
    """Similarity of two display strings in [0, 1].

    Args:
        a: First string.
        b: Second string.
        artists: Treat both strings as artist credits, so that credit
            order does not matter.

    Returns:
        1.0 for case/whitespace-insensitive equality, 0.95 when equal once
        featuring credits are removed, otherwise a fuzzy token-set score
        scaled into 0.5-0.9.
    """
    if _squash(a) == _squash(b):
        return 1.0
    if artists and normalize_artist(a) and normalize_artist(a) == normalize_artist(b):
        return 1.0

    base_a = clean(remove_featuring(a))
    if base_a and base_a == clean(remove_featuring(b)):
        return _FEATURELESS_SIMILARITY

    ratio = fuzz.token_set_ratio(clean(a), clean(b)) / 100
    return _FUZZY_FLOOR + _FUZZY_SPAN * ratio


def _album_of(metadata: MetadataBase) -> str | None:
    return metadata.album if isinstance(metadata, TrackMetadata) else None


def calculate_confidence(source: MetadataBase, matched: MetadataBase) -> int:
    """Compute the confidence of a conversion result.

    Equal ISRCs on two tracks mean the same recording and yield 100.
    Otherwise title (40), artist (40) and album (20) similarities are
    weighted, counting only the fields present on both sides, and the
    total is renormalized over the weights that were counted.

    Args:
        source: Metadata of the original item.
        matched: Metadata of the selected match.

    Returns:
        Integer confidence between 0 and 100.
    """
    if isrc_matches(matched, source):
        return 100

    fields = (
        (source.title, matched.title, _TITLE_WEIGHT, False),
        (source.artist, matched.artist, _ARTIST_WEIGHT, True),
        (_album_of(source), _album_of(matched), _ALBUM_WEIGHT, False),
    )

    total = 0.0
    weight_sum = 0
    for left, right, weight, artists in fields:
        if not left or not right:
            continue
        total += weight * string_similarity(left, right, artists=artists)
        weight_sum += weight

    if weight_sum == 0:
        return 0
    return max(0, min(100, round(total / weight_sum * 100)))
