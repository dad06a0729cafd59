"""URL parsing utilities."""

import logging
from urllib.parse import parse_qs, urlparse

from trackbridge.exceptions import InvalidLinkError
from trackbridge.models.enums import ContentType, Platform
from trackbridge.models.link import ParsedLink

logger = logging.getLogger(__name__)

# Maximum URL length to prevent potential abuse (standard browser limit)
MAX_URL_LENGTH = 2048

_APPLE_MUSIC_HOSTS = {"music.apple.com", "geo.music.apple.com"}
_SPOTIFY_HOSTS = {"open.spotify.com", "play.spotify.com"}

_APPLE_CONTENT_TYPES = {
    "song": ContentType.TRACK,
    "album": ContentType.ALBUM,
    "artist": ContentType.ARTIST,
}
_SPOTIFY_CONTENT_TYPES = {
    "track": ContentType.TRACK,
    "album": ContentType.ALBUM,
    "artist": ContentType.ARTIST,
}
# Recognized but not convertible
_UNSUPPORTED_TYPES = {
    "playlist",
    "music-video",
    "station",
    "curator",
    "podcast",
    "show",
    "episode",
    "user",
}

_DEFAULT_APPLE_REGION = "us"
_SPOTIFY_REGION = "global"


def _split_url(url: str) -> tuple[str, list[str], dict[str, list[str]]]:
    """Split a URL into (hostname, non-empty path segments, query parameters)."""
    if "://" not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    segments = [segment for segment in parsed.path.split("/") if segment]
    return host, segments, parse_qs(parsed.query)


def _strip_id_prefix(value: str) -> str:
    """Drop the legacy ``id`` prefix from numeric Apple Music ids."""
    if value.startswith("id") and value[2:].isdigit():
        return value[2:]
    return value


def _parse_apple_music(
    url: str, segments: list[str], query: dict[str, list[str]]
) -> ParsedLink:
    if not segments:
        raise InvalidLinkError(f"Apple Music link has no path: {url}")

    # /<region>/<type>/<name>/<id>, or /<type>/<name>/<id> without region
    if segments[0] in _APPLE_CONTENT_TYPES or segments[0] in _UNSUPPORTED_TYPES:
        region, rest = _DEFAULT_APPLE_REGION, segments
    else:
        region, rest = segments[0].lower(), segments[1:]

    if len(rest) < 2:
        raise InvalidLinkError(f"Apple Music link is missing an id: {url}")

    kind = rest[0]
    if kind in _UNSUPPORTED_TYPES:
        raise InvalidLinkError(f"Unsupported Apple Music content type '{kind}'")
    if kind not in _APPLE_CONTENT_TYPES:
        raise InvalidLinkError(f"Unrecognized Apple Music link: {url}")

    content_type = _APPLE_CONTENT_TYPES[kind]
    item_id = _strip_id_prefix(rest[-1])

    # ?i=<track id> on an album link selects one track of that album
    if track_ids := query.get("i"):
        content_type = ContentType.TRACK
        item_id = track_ids[0]

    return ParsedLink(
        platform=Platform.APPLE_MUSIC,
        content_type=content_type,
        id=item_id,
        region=region,
        path_segments=tuple(segments),
    )


def _parse_spotify(url: str, segments: list[str]) -> ParsedLink:
    rest = segments
    if rest and rest[0].startswith("intl-"):
        rest = rest[1:]

    if len(rest) < 2:
        raise InvalidLinkError(f"Spotify link is missing a type or id: {url}")

    kind, item_id = rest[0], rest[1]
    if kind in _UNSUPPORTED_TYPES:
        raise InvalidLinkError(f"Unsupported Spotify content type '{kind}'")
    if kind not in _SPOTIFY_CONTENT_TYPES:
        raise InvalidLinkError(f"Unrecognized Spotify link: {url}")

    return ParsedLink(
        platform=Platform.SPOTIFY,
        content_type=_SPOTIFY_CONTENT_TYPES[kind],
        id=item_id,
        region=_SPOTIFY_REGION,
        path_segments=tuple(segments),
    )


def detect_platform(url: str) -> Platform | None:
    """Identify the platform a URL belongs to.

    Args:
        url: Any string.

    Returns:
        The platform, or None if the host is not recognized.
    """
    if not url or len(url) > MAX_URL_LENGTH:
        return None
    host, _, _ = _split_url(url.strip())
    if host in _APPLE_MUSIC_HOSTS:
        return Platform.APPLE_MUSIC
    if host in _SPOTIFY_HOSTS:
        return Platform.SPOTIFY
    return None


def parse_link(url: str) -> ParsedLink:
    """Parse an Apple Music or Spotify link into typed identifiers.

    Supported forms::

        https://music.apple.com/us/album/name/1440833098?i=1440833099
        https://music.apple.com/gb/song/name/1440833099
        https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC
        https://open.spotify.com/intl-de/album/1DFixLWuPkv3KT3TnV35m3

    The scheme may be omitted.

    Args:
        url: Link to a track, album, or artist.

    Returns:
        The parsed link.

    Raises:
        InvalidLinkError: If the URL is empty, too long, from an unknown host,
            missing path segments, or points at unsupported content.
    """
    url = (url or "").strip()
    if not url:
        raise InvalidLinkError("Link is empty")
    if len(url) > MAX_URL_LENGTH:
        raise InvalidLinkError(f"Link exceeds {MAX_URL_LENGTH} characters")

    try:
        host, segments, query = _split_url(url)
    except ValueError as e:
        raise InvalidLinkError(f"Malformed link: {url}") from e

    if host in _APPLE_MUSIC_HOSTS:
        parsed = _parse_apple_music(url, segments, query)
    elif host in _SPOTIFY_HOSTS:
        parsed = _parse_spotify(url, segments)
    else:
        raise InvalidLinkError(f"Unsupported host '{host}' in link: {url}")

    logger.debug(
        "Parsed %s %s link: id=%s region=%s",
        parsed.platform.label,
        parsed.content_type,
        parsed.id,
        parsed.region,
    )
    return parsed


def is_supported_url(url: str) -> bool:
    """Check if a URL can be converted.

    Args:
        url: Any string.

    Returns:
        True if ``parse_link`` would succeed, False otherwise.
    """
    try:
        parse_link(url)
    except InvalidLinkError:
        return False
    return True
