"""Tests for block extraction."""

from __future__ import annotations

from tothepoint.dom.soup import SoupAccessor
from tothepoint.extraction.blocks import BlockExtractor, dedupe_blocks, index_blocks, join_blocks, normalize_blocks
from tothepoint.models import Block, BlockKind


def _extract(html: str) -> list[Block]:
    accessor = SoupAccessor.from_html(html)
    return BlockExtractor(accessor).extract(accessor.root())


class TestBlockExtractor:
    """Tests for BlockExtractor."""

    def test_extracts_blocks_in_document_order(self, article_html: str) -> None:
        """Should keep document order and assign sequential indexes."""
        blocks = _extract(article_html)

        assert [block.index for block in blocks] == list(range(len(blocks)))
        assert blocks[0].text == "How cities adapt to rising heat"
        assert blocks[0].kind is BlockKind.HEADING
        assert blocks[0].level == 2
        assert [block.kind for block in blocks[1:]] == [
            BlockKind.PARAGRAPH,
            BlockKind.PARAGRAPH,
            BlockKind.QUOTE,
            BlockKind.LIST_ITEM,
            BlockKind.LIST_ITEM,
        ]

    def test_skips_structural_chrome(self, article_html: str) -> None:
        """Should drop blocks inside header, nav and footer."""
        texts = " ".join(block.text for block in _extract(article_html))

        assert "Site header" not in texts
        assert "World news link" not in texts
        assert "Copyright" not in texts

    def test_skips_boilerplate(self, article_html: str) -> None:
        """Should drop blocks starting with boilerplate phrases."""
        assert all(not block.text.startswith("Read more") for block in _extract(article_html))

    def test_minimum_lengths_per_kind(self) -> None:
        """Should apply list, heading and default minimum lengths."""
        html = """
        <div>
          <ul><li>Short li</li><li>Tiny li</li></ul>
          <h3>Ten chars!</h3><h3>Nine char</h3>
          <p>Exactly twenty chars</p><p>Nineteen characters</p>
        </div>
        """
        texts = [block.text for block in _extract(html)]

        assert texts == ["Short li", "Ten chars!", "Exactly twenty chars"]

    def test_ignores_top_level_headings(self) -> None:
        """Should not treat h1 as a content block."""
        html = "<div><h1>The page title heading</h1><p>A paragraph that is long enough.</p></div>"

        assert [block.text for block in _extract(html)] == ["A paragraph that is long enough."]

    def test_dedupes_case_insensitively(self) -> None:
        """Should keep the first of two blocks with the same lowercase text."""
        html = """
        <div>
          <p>Repeated paragraph text appears here.</p>
          <p>REPEATED paragraph text appears HERE.</p>
          <p>Another paragraph that is unique.</p>
        </div>
        """
        blocks = _extract(html)
        keys = [block.text.lower() for block in blocks]

        assert len(keys) == len(set(keys))
        assert blocks[0].text == "Repeated paragraph text appears here."
        assert len(blocks) == 2

    def test_normalizes_whitespace(self) -> None:
        """Should collapse whitespace inside blocks."""
        html = "<div><p>  Spread\n   across\t\tseveral    lines  </p></div>"

        assert _extract(html)[0].text == "Spread across several lines"

    def test_element_refs_resolve(self, article_html: str) -> None:
        """Should keep a reference back to each source node."""
        accessor = SoupAccessor.from_html(article_html)
        blocks = BlockExtractor(accessor).extract(accessor.root())

        node = accessor.resolve(blocks[3].element_ref)
        assert node is not None
        assert node.name == "blockquote"

    def test_scoped_to_container(self, article_html: str) -> None:
        """Should only return blocks inside the given container."""
        accessor = SoupAccessor.from_html(article_html)
        article = accessor.query(accessor.root(), "article")[0]
        blocks = BlockExtractor(accessor).extract(article)

        assert len(blocks) == 6

    def test_empty_document(self) -> None:
        """Should return no blocks for an empty document."""
        assert _extract("") == []


class TestBlockHelpers:
    """Tests for dedupe, index and join helpers."""

    def test_dedupe_and_reindex(self) -> None:
        """Should drop duplicates and renumber from zero."""
        blocks = [
            Block(index=4, text="Alpha", kind=BlockKind.PARAGRAPH),
            Block(index=5, text="alpha", kind=BlockKind.PARAGRAPH),
            Block(index=6, text="Beta", kind=BlockKind.QUOTE),
        ]
        result = index_blocks(dedupe_blocks(blocks))

        assert [(block.index, block.text) for block in result] == [(0, "Alpha"), (1, "Beta")]

    def test_join_blocks(self) -> None:
        """Should join block texts with blank lines."""
        blocks = [
            Block(index=0, text="One", kind=BlockKind.PARAGRAPH),
            Block(index=1, text="Two", kind=BlockKind.PARAGRAPH),
        ]

        assert join_blocks(blocks) == "One\n\nTwo"

    def test_normalize_blocks(self) -> None:
        """Should collapse whitespace, drop empty and repeated blocks, and renumber."""
        blocks = [
            Block(index=0, text="Solar   energy\n\n report", kind=BlockKind.PARAGRAPH),
            Block(index=1, text="  \n ", kind=BlockKind.PARAGRAPH),
            Block(index=2, text="SOLAR ENERGY REPORT", kind=BlockKind.PARAGRAPH),
            Block(index=3, text="Town council notes", kind=BlockKind.HEADING, level=3),
        ]
        result = normalize_blocks(blocks)

        assert [(block.index, block.text) for block in result] == [(0, "Solar energy report"), (1, "Town council notes")]
        assert result[1].level == 3
