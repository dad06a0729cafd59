"""Tests for text normalization."""

import pytest
from trackbridge.lib.text import (
    clean,
    fold,
    is_tribute_band,
    normalize_artist,
    numbers_to_words,
    remove_featuring,
    split_artists,
    strip_version_tags,
)

# ============================================================================
# Tests for clean
# ============================================================================


class TestClean:
    """Tests for the clean function."""

    def test_empty_string(self) -> None:
        assert clean("") == ""

    def test_lowercases_and_replaces_punctuation(self) -> None:
        assert clean("Don't Stop (Live)") == "don t stop live"

    def test_collapses_whitespace(self) -> None:
        assert clean("  Hello   World \t") == "hello world"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Rock’n’Roll", "rock n roll"),
            ("Wait…", "wait"),
            ("Before — After", "before after"),
            ("AC/DC", "ac dc"),
        ],
        ids=["curly_quote", "ellipsis", "em_dash", "slash"],
    )
    def test_unicode_punctuation(self, text: str, expected: str) -> None:
        assert clean(text) == expected

    def test_keeps_accented_letters(self) -> None:
        assert clean("Beyoncé") == "beyoncé"


# ============================================================================
# Tests for remove_featuring
# ============================================================================


class TestRemoveFeaturing:
    """Tests for the remove_featuring function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Song (feat. Artist)", "Song"),
            ("Song [ft. Artist]", "Song"),
            ("Song (featuring A & B)", "Song"),
            ("Song {with Someone}", "Song"),
            ("Song feat. Artist", "Song"),
            ("Song ft Artist", "Song"),
            ("Song (Live)", "Song"),
        ],
        ids=["paren_feat", "square_ft", "featuring", "with", "bare", "ft", "other"],
    )
    def test_removes_credits_and_brackets(self, text: str, expected: str) -> None:
        assert remove_featuring(text) == expected

    def test_bare_feature_stops_at_bracket(self) -> None:
        assert remove_featuring("Song feat. Guest (Remix)") == "Song"

    def test_plain_text_unchanged(self) -> None:
        assert remove_featuring("Without Me") == "Without Me"

    def test_empty_string(self) -> None:
        assert remove_featuring("") == ""


# ============================================================================
# Tests for strip_version_tags
# ============================================================================


class TestStripVersionTags:
    """Tests for the strip_version_tags function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Song (Remastered)", "Song"),
            ("Song (2011 Remaster)", "Song"),
            ("Song [Deluxe Edition]", "Song"),
            ("Song - 2011 Remaster", "Song"),
            ("Song - Radio Edit", "Song"),
            ("Song (1999)", "Song"),
            ("Album (Super Deluxe)", "Album"),
            ("Song (Live)", "Song (Live)"),
        ],
        ids=[
            "remastered",
            "year_remaster",
            "deluxe_edition",
            "dash_remaster",
            "dash_edit",
            "bracketed_year",
            "super_deluxe",
            "unrelated_parenthetical",
        ],
    )
    def test_strips_version_information(self, text: str, expected: str) -> None:
        assert strip_version_tags(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "Song (Remastered) [Deluxe Edition] - 2011 Remaster",
            "Title (2009) (Remix)",
            "Plain Title",
            "",
        ],
    )
    def test_idempotent(self, text: str) -> None:
        once = strip_version_tags(text)
        assert strip_version_tags(once) == once


# ============================================================================
# Tests for artist helpers
# ============================================================================


class TestSplitArtists:
    """Tests for the split_artists function."""

    def test_splits_on_delimiters_in_order(self) -> None:
        assert split_artists("Bob, Alice & Carol") == ["bob", "alice", "carol"]

    def test_drops_featuring_and_empty_parts(self) -> None:
        assert split_artists("Drake (feat. Rihanna), ") == ["drake"]

    def test_empty_string(self) -> None:
        assert split_artists("") == []


class TestNormalizeArtist:
    """Tests for the normalize_artist function."""

    def test_order_independent(self) -> None:
        assert normalize_artist("Bob & Alice") == normalize_artist("Alice, Bob")

    def test_sorted_and_cleaned(self) -> None:
        assert normalize_artist("Bob & Alice") == "alice bob"

    def test_single_artist(self) -> None:
        assert normalize_artist("The Weeknd") == "the weeknd"


class TestIsTributeBand:
    """Tests for the is_tribute_band function."""

    @pytest.mark.parametrize(
        ("candidate", "source"),
        [
            ("The Weeknd Tribute Band", "The Weeknd"),
            ("Queen Covers", "Queen"),
            ("Karaoke Hits", "Adele"),
            ("Vitamin String Quartet", "Radiohead"),
            ("Rockabye Baby! Lullaby Renditions", "Metallica"),
        ],
        ids=["contains_name", "covers", "karaoke", "string_quartet", "lullaby"],
    )
    def test_detects_tribute_acts(self, candidate: str, source: str) -> None:
        assert is_tribute_band(candidate, source) is True

    def test_same_artist_is_not_tribute(self) -> None:
        assert is_tribute_band("The Weeknd", "the weeknd ") is False

    def test_unrelated_artist_is_not_tribute(self) -> None:
        assert is_tribute_band("Daft Punk", "The Weeknd") is False


# ============================================================================
# Tests for fold and numbers_to_words
# ============================================================================


class TestFold:
    def test_transliterates(self) -> None:
        assert fold("Beyoncé") == "beyonce"

    def test_cleans(self) -> None:
        assert fold("Sigur Rós - Hoppípolla") == "sigur ros hoppipolla"


class TestNumbersToWords:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("7 Rings", "seven Rings"),
            ("Route 66", "Route 66"),
            ("0 to 20", "zero to twenty"),
            ("1999", "1999"),
            ("4ever", "4ever"),
            ("Se7en", "Se7en"),
            ("Blink-182 vs 2 Chainz", "Blink-182 vs two Chainz"),
        ],
        ids=["small", "above_twenty", "bounds", "year", "prefix", "infix", "mixed"],
    )
    def test_spells_out_small_numbers(self, text: str, expected: str) -> None:
        assert numbers_to_words(text) == expected

    def test_long_digit_run_unchanged(self) -> None:
        digits = "1" * 5000
        assert numbers_to_words(digits) == digits
