"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from tothepoint.models import (
    ArticleBodyExtraction,
    Block,
    BlockKind,
    BodySource,
    RankedMatch,
    RankingResult,
)


class TestBlockKind:
    """Test BlockKind.from_tag."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("p", (BlockKind.PARAGRAPH, None)),
            ("H3", (BlockKind.HEADING, 3)),
            ("h6", (BlockKind.HEADING, 6)),
            ("li", (BlockKind.LIST_ITEM, None)),
            ("blockquote", (BlockKind.QUOTE, None)),
        ],
    )
    def test_from_tag(self, tag: str, expected: tuple) -> None:
        """Should map tag names to kinds and heading levels."""
        assert BlockKind.from_tag(tag) == expected


class TestBlock:
    """Test Block dataclass."""

    def test_block_is_immutable(self) -> None:
        """Should reject mutation."""
        block = Block(index=0, text="Some text", kind=BlockKind.PARAGRAPH)

        with pytest.raises(dataclasses.FrozenInstanceError):
            block.text = "Other"  # type: ignore[misc]

    def test_equality_ignores_element_ref(self) -> None:
        """Should compare blocks by content, not by source node."""
        first = Block(index=0, text="Text", kind=BlockKind.PARAGRAPH, element_ref=1)
        second = Block(index=0, text="Text", kind=BlockKind.PARAGRAPH, element_ref=2)

        assert first == second

    def test_is_heading(self) -> None:
        """Should flag heading blocks."""
        assert Block(index=0, text="Title here", kind=BlockKind.HEADING, level=2).is_heading
        assert not Block(index=0, text="Body", kind=BlockKind.QUOTE).is_heading


class TestResults:
    """Test ranking and extraction result types."""

    def test_ranking_result_counts_query_tokens(self) -> None:
        """Should derive the query token count."""
        result = RankingResult(query_tokens=("climate", "policy"), chunk_count=4, matches=[])

        assert result.query_token_count == 2
        assert dataclasses.asdict(result)["query_token_count"] == 2

    def test_ranked_match_span(self) -> None:
        """Should count blocks inclusively."""
        match = RankedMatch(start_block_index=2, end_block_index=4, score=1.0, text="t", snippet="t")

        assert match.span == 3

    def test_extraction_found(self) -> None:
        """Should report absence for the terminal fallback."""
        absent = ArticleBodyExtraction(body_text=None, source=BodySource.ABSENT, reasons=["body:not-found"])

        assert not absent.found
        assert absent.blocks == []
