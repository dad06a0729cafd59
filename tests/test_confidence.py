"""Tests for the user-facing confidence score."""

import pytest
from trackbridge.lib.confidence import calculate_confidence, string_similarity
from trackbridge.models.metadata import AlbumMetadata, ArtistMetadata, TrackMetadata


class TestStringSimilarity:
    """Tests for the string_similarity function."""

    def test_case_and_whitespace_insensitive(self) -> None:
        assert string_similarity("Hello  World", " hello world") == 1.0

    def test_equal_without_featuring(self) -> None:
        assert string_similarity("Song (feat. Guest)", "Song") == 0.95

    def test_artist_order_with_artists_flag(self) -> None:
        assert string_similarity("Bob & Alice", "Alice, Bob", artists=True) == 1.0

    def test_fuzzy_fallback_subset(self) -> None:
        """A token subset has a token-set ratio of 100, the fuzzy ceiling."""
        score = string_similarity("Blinding Lights", "Blinding Lights Extended Mix")
        assert score == pytest.approx(0.9)

    def test_fuzzy_fallback_unrelated(self) -> None:
        assert string_similarity("abc", "xyz") == pytest.approx(0.5)

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("Starboy", "Star Boy"),
            ("After Hours", "After Hours (Deluxe)"),
            ("Levitating", "Levitating - Remix"),
        ],
    )
    def test_fuzzy_range(self, a: str, b: str) -> None:
        score = string_similarity(a, b)
        assert 0.5 <= score <= 0.95


class TestCalculateConfidence:
    """Tests for the calculate_confidence function."""

    def test_isrc_match_is_certain(
        self, blinding_lights: TrackMetadata, blinding_lights_apple: TrackMetadata
    ) -> None:
        assert calculate_confidence(blinding_lights, blinding_lights_apple) == 100

    def test_isrc_wins_over_text(self) -> None:
        source = TrackMetadata(title="Song", artist="Artist", isrc="ABC")
        matched = TrackMetadata(title="Canción", artist="Artista", isrc="abc")
        assert calculate_confidence(source, matched) == 100

    def test_all_fields_equal(self) -> None:
        source = TrackMetadata(title="Song", artist="Artist", album="Album")
        assert calculate_confidence(source, source.model_copy()) == 100

    def test_weighted_fields(self) -> None:
        """Title 0.95 x 40 + artist 1.0 x 40 + album 1.0 x 20."""
        source = TrackMetadata(title="Song (feat. Guest)", artist="A", album="Album")
        matched = TrackMetadata(title="Song", artist="A", album="Album")
        assert calculate_confidence(source, matched) == 98

    def test_missing_album_is_renormalized(self) -> None:
        """Without an album on one side, title and artist carry all the weight."""
        source = TrackMetadata(title="Song", artist="Artist")
        matched = TrackMetadata(title="Song", artist="Artist", album="Album")
        assert calculate_confidence(source, matched) == 100

    def test_albums_use_title_and_artist(self) -> None:
        source = AlbumMetadata(title="After Hours", artist="The Weeknd")
        matched = AlbumMetadata(title="After Hours", artist="The Weeknd")
        assert calculate_confidence(source, matched) == 100

    def test_artists(self) -> None:
        source = ArtistMetadata(title="The Weeknd", artist="The Weeknd")
        assert calculate_confidence(source, source.model_copy()) == 100

    def test_no_comparable_fields(self) -> None:
        source = TrackMetadata(title="", artist="")
        matched = TrackMetadata(title="Song", artist="Artist")
        assert calculate_confidence(source, matched) == 0

    def test_tribute_match_scores_lower(
        self, blinding_lights: TrackMetadata, tribute_cover: TrackMetadata
    ) -> None:
        confidence = calculate_confidence(blinding_lights, tribute_cover)
        assert 0 <= confidence < 100
