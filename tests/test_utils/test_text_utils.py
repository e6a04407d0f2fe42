"""
Tests for text utility functions.

Tests whitespace normalization, truncation and size formatting.
"""

from pdf_scout.utils.text_utils import (
    collapse_whitespace,
    truncate_text,
    format_size
)


class TestCollapseWhitespace:
    """Tests for collapse_whitespace function."""

    def test_collapses_spaces_and_newlines(self):
        """Test that runs of mixed whitespace become one space."""
        text = "first\n\n  second\t\tthird"

        assert collapse_whitespace(text) == "first second third"

    def test_trims_ends(self):
        assert collapse_whitespace("  padded  \n") == "padded"

    def test_preserves_accented_characters(self):
        """Test that non-ASCII letters are untouched."""
        assert collapse_whitespace("café   résumé") == "café résumé"

    def test_empty_string_returns_empty(self):
        """Test that empty input returns empty string."""
        assert collapse_whitespace("") == ""
        assert collapse_whitespace(None) == ""
        assert collapse_whitespace(" \n\t ") == ""


class TestTruncateText:
    """Tests for truncate_text function."""

    def test_short_text_unchanged(self):
        """Test that text within max_length is unchanged."""
        assert truncate_text("Short", 100) == "Short"
        assert truncate_text("12345", 5) == "12345"

    def test_truncation_adds_suffix(self):
        """Test that truncated text ends with suffix."""
        result = truncate_text("This is a long sentence that needs truncation.", 20)

        assert result.endswith("...")
        assert len(result) <= 20

    def test_empty_string_returns_empty(self):
        assert truncate_text("", 10) == ""
        assert truncate_text(None, 10) is None

    def test_breaks_at_word_boundary_when_space_near_end(self):
        """Test that a space in the last 30% of the cut becomes the break point."""
        assert truncate_text("This is a very long text", 20) == "This is a very..."

    def test_no_word_break_when_space_too_early(self):
        """Test that an early space is ignored and the word is cut."""
        assert truncate_text("Hello beautiful world", 15) == "Hello beauti..."


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        assert format_size(512) == "512 B"

    def test_kibibytes(self):
        assert format_size(2048) == "2.0 KiB"

    def test_mebibytes(self):
        assert format_size(5 * 1024 * 1024) == "5.0 MiB"

    def test_gibibytes(self):
        assert format_size(3 * 1024 ** 3) == "3.0 GiB"
