"""Article body extraction fallback chain.

Sources are tried in order and the first valid one wins:

1. ``articleBody`` of an article-typed linked-data record;
2. blocks of the top-level ``itemprop="articleBody"`` containers;
3. the best container found by :class:`ContainerScorer`.

Exhausting the chain is a normal outcome for non-article pages and yields an
``ABSENT`` extraction rather than an error.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from tothepoint.config import ExtractionConfig
from tothepoint.dom.accessor import DocumentAccessor
from tothepoint.extraction.blocks import BlockExtractor, dedupe_blocks, index_blocks, join_blocks
from tothepoint.extraction.linked_data import article_body, iter_article_nodes, load_linked_data
from tothepoint.extraction.scoring import ContainerScorer, is_valid_body
from tothepoint.models import ArticleBodyExtraction, Block, BlockKind, BodySource
from tothepoint.utils.text import split_paragraphs

LOGGER = logging.getLogger(__name__)

ARTICLE_BODY_SELECTOR = '[itemprop="articleBody"]'


class ArticleBodyExtractor:
    def __init__(self, accessor: DocumentAccessor, config: Optional[ExtractionConfig] = None) -> None:
        self.accessor = accessor
        self.config = config or ExtractionConfig()
        self.blocks = BlockExtractor(accessor, self.config)
        self.scorer = ContainerScorer(accessor, self.config, extractor=self.blocks)

    def extract(self, linked_data: Optional[Sequence[Any]] = None) -> ArticleBodyExtraction:
        records = load_linked_data(self.accessor) if linked_data is None else linked_data

        blocks = self.from_linked_data(records)
        if blocks:
            LOGGER.debug("Body found in linked data (%d blocks)", len(blocks))
            return ArticleBodyExtraction(
                body_text=join_blocks(blocks),
                source=BodySource.LINKED_DATA,
                reasons=["body:jsonld:articleBody"],
                blocks=blocks,
            )

        blocks = self.from_marked_container()
        if blocks:
            LOGGER.debug("Body found in itemprop=articleBody (%d blocks)", len(blocks))
            return ArticleBodyExtraction(
                body_text=join_blocks(blocks),
                source=BodySource.MARKED_CONTAINER,
                reasons=["body:dom:itemprop=articleBody"],
                blocks=blocks,
            )

        best = self.scorer.best_container()
        if best is not None:
            body_text = best.body_text
            LOGGER.debug("Body found in scored container (score=%s)", best.score)
            return ArticleBodyExtraction(
                body_text=body_text,
                source=BodySource.SCORED_CONTAINER,
                reasons=[
                    f"body:dom:scored-container:score={round(best.score)}",
                    f"body:dom:scored-container:length={len(body_text)}",
                ],
                blocks=best.blocks,
            )

        LOGGER.debug("No article body found")
        return ArticleBodyExtraction(body_text=None, source=BodySource.ABSENT, reasons=["body:not-found"])

    def from_linked_data(self, records: Sequence[Any]) -> List[Block]:
        for node, _ in iter_article_nodes(records):
            raw_text = article_body(node).as_text()
            if raw_text is None:
                continue
            blocks = index_blocks(
                dedupe_blocks(
                    Block(index=position, text=paragraph, kind=BlockKind.PARAGRAPH)
                    for position, paragraph in enumerate(split_paragraphs(raw_text))
                )
            )
            body_text = join_blocks(blocks)
            if body_text and len(body_text) >= self.config.min_body_chars:
                return blocks
        return []

    def from_marked_container(self) -> List[Block]:
        accessor = self.accessor
        nodes = accessor.query(accessor.root(), ARTICLE_BODY_SELECTOR)
        if not nodes:
            return []

        top_level = []
        for node in nodes:
            parent = accessor.parent(node)
            if parent is None or accessor.closest(parent, ARTICLE_BODY_SELECTOR) is None:
                top_level.append(node)

        blocks = index_blocks(dedupe_blocks(block for node in top_level for block in self.blocks.extract(node)))
        if not is_valid_body(join_blocks(blocks), len(blocks), self.config):
            return []
        return blocks


def extract_article_body(
    accessor: DocumentAccessor,
    linked_data: Optional[Sequence[Any]] = None,
    *,
    config: Optional[ExtractionConfig] = None,
) -> ArticleBodyExtraction:
    return ArticleBodyExtractor(accessor, config).extract(linked_data)
