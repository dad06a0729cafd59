"""Tests for link parsing."""

import pytest
from trackbridge.exceptions import InvalidLinkError
from trackbridge.models.enums import ContentType, Platform
from trackbridge.utils.url import (
    MAX_URL_LENGTH,
    detect_platform,
    is_supported_url,
    parse_link,
)

# ============================================================================
# Apple Music links
# ============================================================================


class TestParseAppleMusicLink:
    """Tests for Apple Music link parsing."""

    def test_album_link_with_track_parameter(self) -> None:
        """The i parameter selects a single track of the album."""
        parsed = parse_link(
            "https://music.apple.com/us/album/blinding-lights/1499378108?i=1499378615"
        )
        assert parsed.platform is Platform.APPLE_MUSIC
        assert parsed.content_type is ContentType.TRACK
        assert parsed.id == "1499378615"
        assert parsed.region == "us"

    def test_album_link(self) -> None:
        parsed = parse_link("https://music.apple.com/gb/album/after-hours/1499378108")
        assert parsed.content_type is ContentType.ALBUM
        assert parsed.id == "1499378108"
        assert parsed.region == "gb"
        assert parsed.path_segments == ("gb", "album", "after-hours", "1499378108")

    def test_song_maps_to_track(self) -> None:
        parsed = parse_link("https://music.apple.com/us/song/x/1499378615")
        assert parsed.content_type is ContentType.TRACK
        assert parsed.id == "1499378615"

    def test_artist_link(self) -> None:
        parsed = parse_link("https://music.apple.com/us/artist/the-weeknd/479756766")
        assert parsed.content_type is ContentType.ARTIST
        assert parsed.id == "479756766"

    def test_name_segment_is_optional(self) -> None:
        parsed = parse_link("https://music.apple.com/us/album/1499378108")
        assert parsed.content_type is ContentType.ALBUM
        assert parsed.id == "1499378108"

    def test_legacy_id_prefix_removed(self) -> None:
        parsed = parse_link("https://music.apple.com/us/artist/the-weeknd/id479756766")
        assert parsed.id == "479756766"

    def test_region_defaults_when_missing(self) -> None:
        parsed = parse_link("https://music.apple.com/album/after-hours/1499378108")
        assert parsed.region == "us"
        assert parsed.content_type is ContentType.ALBUM

    def test_geo_host(self) -> None:
        parsed = parse_link("https://geo.music.apple.com/de/album/x/123?i=456")
        assert parsed.platform is Platform.APPLE_MUSIC
        assert parsed.region == "de"
        assert parsed.id == "456"

    def test_missing_scheme_tolerated(self) -> None:
        parsed = parse_link("music.apple.com/us/album/x/123")
        assert parsed.id == "123"

    @pytest.mark.parametrize(
        "url",
        [
            "https://music.apple.com/us/playlist/todays-hits/pl.f4d106fed2bd4114",
            "https://music.apple.com/us/music-video/blinding-lights/1500004123",
        ],
        ids=["playlist", "music_video"],
    )
    def test_unsupported_content(self, url: str) -> None:
        with pytest.raises(InvalidLinkError):
            parse_link(url)

    def test_missing_id(self) -> None:
        with pytest.raises(InvalidLinkError):
            parse_link("https://music.apple.com/us/album")


# ============================================================================
# Spotify links
# ============================================================================


class TestParseSpotifyLink:
    """Tests for Spotify link parsing."""

    @pytest.mark.parametrize(
        ("url", "content_type", "item_id"),
        [
            (
                "https://open.spotify.com/track/0VjIjW4GlUZAMYd2vXMi3b",
                ContentType.TRACK,
                "0VjIjW4GlUZAMYd2vXMi3b",
            ),
            (
                "https://open.spotify.com/album/4yP0hdKOZPNshxUOjY0cZj?si=abc",
                ContentType.ALBUM,
                "4yP0hdKOZPNshxUOjY0cZj",
            ),
            (
                "https://open.spotify.com/artist/1Xyo4u8uXC1ZmMpatF05PJ",
                ContentType.ARTIST,
                "1Xyo4u8uXC1ZmMpatF05PJ",
            ),
            (
                "https://open.spotify.com/intl-de/track/0VjIjW4GlUZAMYd2vXMi3b",
                ContentType.TRACK,
                "0VjIjW4GlUZAMYd2vXMi3b",
            ),
            (
                "https://play.spotify.com/track/0VjIjW4GlUZAMYd2vXMi3b",
                ContentType.TRACK,
                "0VjIjW4GlUZAMYd2vXMi3b",
            ),
        ],
        ids=["track", "album_with_query", "artist", "intl_segment", "play_host"],
    )
    def test_parses_link(
        self, url: str, content_type: ContentType, item_id: str
    ) -> None:
        parsed = parse_link(url)
        assert parsed.platform is Platform.SPOTIFY
        assert parsed.content_type is content_type
        assert parsed.id == item_id
        assert parsed.region == "global"

    def test_missing_scheme_tolerated(self) -> None:
        parsed = parse_link("open.spotify.com/track/abc123")
        assert parsed.id == "abc123"

    def test_playlist_rejected(self) -> None:
        with pytest.raises(InvalidLinkError):
            parse_link("https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M")

    def test_missing_id(self) -> None:
        with pytest.raises(InvalidLinkError):
            parse_link("https://open.spotify.com/track")


# ============================================================================
# General validation
# ============================================================================


class TestParseLinkValidation:
    """Tests for input validation shared by all platforms."""

    @pytest.mark.parametrize("url", ["", "   "], ids=["empty", "whitespace"])
    def test_empty_input(self, url: str) -> None:
        with pytest.raises(InvalidLinkError):
            parse_link(url)

    def test_too_long(self) -> None:
        url = "https://open.spotify.com/track/" + "a" * MAX_URL_LENGTH
        with pytest.raises(InvalidLinkError):
            parse_link(url)

    def test_unknown_host(self) -> None:
        with pytest.raises(InvalidLinkError, match="Unsupported host"):
            parse_link("https://music.youtube.com/watch?v=abc")

    def test_surrounding_whitespace_ignored(self) -> None:
        parsed = parse_link("  https://open.spotify.com/track/abc123  ")
        assert parsed.id == "abc123"


class TestDetectPlatform:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://music.apple.com/us/album/x/1", Platform.APPLE_MUSIC),
            ("https://open.spotify.com/track/abc", Platform.SPOTIFY),
            ("https://example.com/track/abc", None),
            ("", None),
        ],
        ids=["apple", "spotify", "unknown", "empty"],
    )
    def test_detect_platform(self, url: str, expected: Platform | None) -> None:
        assert detect_platform(url) == expected


class TestIsSupportedUrl:
    def test_supported(self) -> None:
        assert is_supported_url("https://open.spotify.com/track/abc") is True

    def test_playlist_not_supported(self) -> None:
        assert is_supported_url("https://open.spotify.com/playlist/abc") is False

    def test_garbage_not_supported(self) -> None:
        assert is_supported_url("not a url") is False
