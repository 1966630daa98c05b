"""Tests for one-pass document analysis."""

from __future__ import annotations

from tothepoint.analyzer import analyze_document
from tothepoint.dom.soup import SoupAccessor
from tothepoint.models import BodySource


class TestAnalyzeDocument:
    """Tests for analyze_document."""

    def test_uses_detected_title(self, article_html: str) -> None:
        """The detected title drives ranking when none is given."""
        analysis = analyze_document(SoupAccessor.from_html(article_html))

        assert analysis.detection.is_article
        assert analysis.title == "How Cities Adapt To Rising Heat"
        assert analysis.extraction.source is BodySource.SCORED_CONTAINER
        assert analysis.ranking is not None
        assert analysis.ranking.matches[0].start_block_index == 0

    def test_explicit_title_overrides_detection(self, article_html: str) -> None:
        """An explicit title replaces the detected one."""
        analysis = analyze_document(SoupAccessor.from_html(article_html), "Tree canopies and reflective roofing")

        assert analysis.title == "Tree canopies and reflective roofing"
        assert analysis.ranking is not None
        assert analysis.ranking.matches

    def test_skips_ranking_without_body(self, short_html: str) -> None:
        """Pages without a body are not ranked."""
        analysis = analyze_document(SoupAccessor.from_html(short_html), "Anything at all here")

        assert analysis.extraction.source is BodySource.ABSENT
        assert analysis.ranking is None

    def test_skips_ranking_without_title(self) -> None:
        """Pages without any title are not ranked."""
        paragraphs = "".join(
            f"<p>Paragraph {n} describes the harbour works in enough detail to count.</p>" for n in range(4)
        )
        analysis = analyze_document(SoupAccessor.from_html(f"<html><body><div>{paragraphs}</div></body></html>"))

        assert analysis.extraction.found
        assert analysis.title is None
        assert analysis.ranking is None
