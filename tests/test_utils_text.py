"""Tests for text utility functions."""

from __future__ import annotations

from tothepoint.utils.text import (
    STOPWORDS,
    is_likely_boilerplate,
    normalize_for_phrase,
    normalize_inline_text,
    split_paragraphs,
    to_snippet,
    tokenize,
)


class TestTokenize:
    """Test tokenize function."""

    def test_tokenize_drops_stopwords_and_punctuation(self) -> None:
        """Should keep internal apostrophes and drop stop-words."""
        assert tokenize("The Quick, Fox's nap!") == ["quick", "fox's", "nap"]

    def test_tokenize_drops_single_characters(self) -> None:
        """Should drop one-character tokens."""
        assert tokenize("x marks 9 spots") == ["marks", "spots"]

    def test_tokenize_only_stopwords(self) -> None:
        """Should return no tokens for stop-word only text."""
        assert tokenize("the and of to") == []

    def test_tokenize_empty(self) -> None:
        """Should handle empty text."""
        assert tokenize("") == []

    def test_stopword_list_is_closed(self) -> None:
        """Stop-word list should stay small and lowercase."""
        assert len(STOPWORDS) < 40
        assert all(word == word.lower() for word in STOPWORDS)


class TestNormalization:
    """Test inline, paragraph and phrase normalization."""

    def test_normalize_inline_collapses_whitespace(self) -> None:
        """Should collapse whitespace runs and trim."""
        assert normalize_inline_text("  one \n\t two   three ") == "one two three"

    def test_normalize_inline_none(self) -> None:
        """Should return empty string for missing text."""
        assert normalize_inline_text(None) == ""

    def test_normalize_for_phrase(self) -> None:
        """Should keep only alphanumeric words separated by single spaces."""
        assert normalize_for_phrase("Don't Stop—Believing!") == "don t stop believing"

    def test_split_paragraphs_filters_boilerplate(self) -> None:
        """Should split on line breaks and drop boilerplate lines."""
        raw = "Line one\r\n\r\nRead more here\nLine   two"
        assert split_paragraphs(raw) == ["Line one", "Line two"]


class TestBoilerplate:
    """Test is_likely_boilerplate function."""

    def test_prefix_match_is_case_insensitive(self) -> None:
        """Should match boilerplate prefixes in any case."""
        assert is_likely_boilerplate("ADVERTISEMENT")
        assert is_likely_boilerplate("Follow us on social media")

    def test_requires_word_boundary(self) -> None:
        """Should not match words that merely start with a phrase."""
        assert not is_likely_boilerplate("Shared values drive the project forward")

    def test_only_prefix_counts(self) -> None:
        """Should ignore phrases in the middle of the text."""
        assert not is_likely_boilerplate("Readers can subscribe later")


class TestSnippet:
    """Test to_snippet function."""

    def test_short_text_unchanged(self) -> None:
        """Should keep text up to the limit."""
        text = "a" * 180
        assert to_snippet(text) == text

    def test_long_text_truncated(self) -> None:
        """Should truncate to 177 characters plus ellipsis."""
        snippet = to_snippet("b" * 200)
        assert len(snippet) == 180
        assert snippet.endswith("...")
        assert snippet[:177] == "b" * 177

    def test_snippet_collapses_whitespace(self) -> None:
        """Should collapse whitespace before measuring."""
        assert to_snippet("one\n\n two") == "one two"
