"""Text normalization for cross-platform comparison.

Platforms format the same recording differently: "(feat. X)" versus
" - feat. X", "A & B" versus "B, A", "Song - 2011 Remaster" versus
"Song (Remastered)". The functions here canonicalize those differences so
that titles and artist credits can be compared with plain equality.

Every function is total: any string, including the empty string, is
accepted and nothing raises.
"""

import re

from unidecode import unidecode

# ASCII punctuation/symbols plus the Unicode General Punctuation and
# Supplemental Punctuation blocks (dashes, typographic quotes, ellipses).
_PUNCTUATION = re.compile(
    r"[\u2000-\u206F\u2E00-\u2E7F\\'!\"#$%&()*+,\-./:;<=>?@\[\]^_`{|}~\u00B4]"
)
_WHITESPACE = re.compile(r"\s+")

_FEATURE_WORDS = r"(?:feat|ft|featuring|with)"
_BRACKETED_FEATURE = re.compile(
    rf"[(\[{{]\s*\b{_FEATURE_WORDS}\b\.?\s+[^)\]}}]+[)\]}}]", re.IGNORECASE
)
_BARE_FEATURE = re.compile(rf"\b{_FEATURE_WORDS}\b\.?\s+[^(\[{{\n]+", re.IGNORECASE)
_BRACKETED = re.compile(r"[(\[{][^)\]}]*[)\]}]")

_VERSION_WORDS = r"(?:remaster|remix|version|edit|deluxe|anniversary|super|edition)"
_PAREN_VERSION = re.compile(rf"\([^)]*{_VERSION_WORDS}[^)]*\)", re.IGNORECASE)
_SQUARE_VERSION = re.compile(rf"\[[^\]]*{_VERSION_WORDS}[^\]]*\]", re.IGNORECASE)
_BRACKETED_YEAR = re.compile(r"[(\[]\s*\d{4}\s*[)\]]")
# "Song - 2011 Remaster", "Song - Radio Edit", "Song - Remastered 2009"
_DASH_VERSION = re.compile(
    r"\s+[-–—]\s+[^-–—]*"
    r"\b(?:remaster(?:ed)?|remix(?:ed)?|version|edit|deluxe|anniversary|edition)\b"
    r"[^-–—]*$",
    re.IGNORECASE,
)

_ARTIST_DELIMITERS = re.compile(r"[,&]")

TRIBUTE_INDICATORS = (
    "tribute",
    "covers",
    "performs",
    "plays",
    "karaoke",
    "in the style of",
    "ukulele",
    "instrumental",
    "orchestra",
    "string quartet",
    "lullaby",
    "piano version",
    "jazz version",
)

_NUMBER_WORDS = (
    "zero",
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
    "twenty",
)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def clean(text: str) -> str:
    """Lowercase, replace punctuation with spaces, and collapse whitespace.

    Args:
        text: Any string.

    Returns:
        Canonical comparison form, e.g. ``"Don't Stop (Live)"`` becomes
        ``"don t stop live"``.
    """
    return _collapse(_PUNCTUATION.sub(" ", text.lower()))


def remove_featuring(text: str) -> str:
    """Remove featured-artist credits and any other bracketed content.

    Handles ``(feat. X)``, ``[ft. X]``, ``{with X}`` as well as bare
    ``feat. X`` / ``featuring X`` runs, which extend to the next bracket or
    the end of the string. Remaining bracketed segments such as
    ``(Live)`` are dropped too.

    Args:
        text: Title or artist credit.

    Returns:
        Text without featuring credits or parenthetical content.
    """
    text = _BRACKETED_FEATURE.sub("", text)
    text = _BARE_FEATURE.sub("", text)
    text = _BRACKETED.sub("", text)
    return _collapse(text)


def _strip_version_once(text: str) -> str:
    text = _PAREN_VERSION.sub("", text)
    text = _SQUARE_VERSION.sub("", text)
    text = _BRACKETED_YEAR.sub("", text)
    text = _DASH_VERSION.sub("", text)
    return _collapse(text)


def strip_version_tags(text: str) -> str:
    """Remove remaster/remix/edition markers and bracketed years.

    Bracketed segments containing a version keyword, bracketed four-digit
    years and trailing ``" - <version>"`` suffixes are removed. Removal is
    repeated until nothing changes, so the function is idempotent.

    Args:
        text: Title or album name.

    Returns:
        Text without version information.
    """
    previous = None
    while previous != text:
        previous = text
        text = _strip_version_once(text)
    return text


def split_artists(text: str) -> list[str]:
    """Split a credit on ``,`` and ``&`` into cleaned names, in credit order."""
    names = (clean(remove_featuring(part)) for part in _ARTIST_DELIMITERS.split(text))
    return [name for name in names if name]


def normalize_artist(text: str) -> str:
    """Normalize an artist credit so that credit order does not matter.

    ``"Bob & Alice"`` and ``"Alice, Bob"`` both become ``"alice bob"``.

    Args:
        text: Artist credit string.

    Returns:
        Sorted, cleaned artist names joined by spaces.
    """
    return " ".join(sorted(split_artists(text)))


def is_tribute_band(candidate_artist: str, source_artist: str) -> bool:
    """Check whether a candidate artist looks like a cover or tribute act.

    Used as a scoring penalty, never as a hard filter.

    Args:
        candidate_artist: Artist name from a search result.
        source_artist: Artist name of the item being converted.

    Returns:
        True if the candidate is not the source artist but contains its
        name or a tribute indicator ("karaoke", "in the style of", ...).
    """
    candidate = candidate_artist.lower().strip()
    source = source_artist.lower().strip()

    if candidate == source:
        return False
    if source and source in candidate:
        return True
    return any(indicator in candidate for indicator in TRIBUTE_INDICATORS)


def fold(text: str) -> str:
    """Clean text after transliterating it to ASCII ("Beyoncé" -> "beyonce")."""
    return clean(unidecode(text))


# One or two digits standing alone, never part of a word like "4ever"
_STANDALONE_NUMBER = re.compile(r"\b\d{1,2}\b")


def _number_to_word(match: re.Match[str]) -> str:
    number = int(match.group(0))
    return _NUMBER_WORDS[number] if number <= 20 else match.group(0)


def numbers_to_words(text: str) -> str:
    """Spell out standalone integers from 0 to 20.

    "22", "1999" and digits inside words ("4ever", "Se7en") are left alone.
    """
    return _STANDALONE_NUMBER.sub(_number_to_word, text)
