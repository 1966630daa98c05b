"""Segment a container into clean, ordered text blocks."""

from __future__ import annotations

import dataclasses
from typing import Iterable, List, Optional

from tothepoint.config import ExtractionConfig
from tothepoint.dom.accessor import DocumentAccessor, Node
from tothepoint.models import Block, BlockKind
from tothepoint.utils.text import is_likely_boilerplate, normalize_inline_text

BLOCK_SELECTOR = "p, h2, h3, h4, h5, h6, blockquote, li"
EXCLUDED_SELECTOR = (
    "nav, header, footer, aside, form, script, style, noscript, svg, canvas, iframe, "
    "button, input, select, textarea"
)


def dedupe_blocks(blocks: Iterable[Block]) -> List[Block]:
    """Drop blocks whose lowercase text was already seen, keeping document order."""
    seen: set[str] = set()
    deduped: List[Block] = []
    for block in blocks:
        key = block.text.lower()
        if key in seen:
            continue
        seen.add(key)
        deduped.append(block)
    return deduped


def index_blocks(blocks: Iterable[Block]) -> List[Block]:
    return [dataclasses.replace(block, index=position) for position, block in enumerate(blocks)]


def normalize_blocks(blocks: Iterable[Block]) -> List[Block]:
    """Collapse whitespace, drop empty and duplicate blocks, and renumber from zero."""
    collapsed = (dataclasses.replace(block, text=normalize_inline_text(block.text)) for block in blocks)
    return index_blocks(dedupe_blocks(block for block in collapsed if block.text))


def join_blocks(blocks: Iterable[Block]) -> str:
    return "\n\n".join(block.text for block in blocks)


class BlockExtractor:
    """Walk a container and produce its deduplicated block sequence."""

    def __init__(self, accessor: DocumentAccessor, config: Optional[ExtractionConfig] = None) -> None:
        self.accessor = accessor
        self.config = config or ExtractionConfig()

    def min_length(self, kind: BlockKind) -> int:
        if kind is BlockKind.LIST_ITEM:
            return self.config.min_list_item_chars
        if kind is BlockKind.HEADING:
            return self.config.min_heading_chars
        return self.config.min_default_chars

    def is_excluded(self, node: Node) -> bool:
        return self.accessor.closest(node, EXCLUDED_SELECTOR) is not None

    def extract(self, container: Node) -> List[Block]:
        accessor = self.accessor
        blocks: List[Block] = []
        for node in accessor.query(container, BLOCK_SELECTOR):
            if self.is_excluded(node) or not accessor.contains(container, node):
                continue

            text = normalize_inline_text(accessor.text(node))
            if not text or is_likely_boilerplate(text):
                continue

            kind, level = BlockKind.from_tag(accessor.tag_name(node))
            if len(text) < self.min_length(kind):
                continue

            blocks.append(
                Block(
                    index=len(blocks),
                    text=text,
                    kind=kind,
                    level=level,
                    element_ref=accessor.ref(node),
                )
            )
        return index_blocks(dedupe_blocks(blocks))
