"""Pick the container most likely to hold the article body."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence

from tothepoint.config import ExtractionConfig
from tothepoint.dom.accessor import DocumentAccessor, Node
from tothepoint.extraction.blocks import EXCLUDED_SELECTOR, BlockExtractor, join_blocks
from tothepoint.models import Block, BlockKind
from tothepoint.utils.text import is_likely_boilerplate, normalize_inline_text

LOGGER = logging.getLogger(__name__)

SEMANTIC_SELECTORS = ("article", '[itemprop="articleBody"]', "main", '[role="main"]')
PARAGRAPH_CONTAINER_SELECTOR = 'article, main, section, div, [role="main"]'
ARTICLE_MARKER_SELECTOR = 'article, [itemprop="articleBody"]'
MAIN_MARKER_SELECTOR = 'main, [role="main"]'


@dataclass(slots=True)
class CandidateContainer:
    node: Node
    blocks: List[Block] = field(default_factory=list)
    score: float = 0.0

    @property
    def body_text(self) -> str:
        return join_blocks(self.blocks)


def is_valid_body(body_text: Optional[str], block_count: int, config: ExtractionConfig) -> bool:
    if not body_text or len(body_text) < config.min_body_chars:
        return False
    return block_count >= config.min_blocks


def compute_link_density(accessor: DocumentAccessor, container: Node) -> float:
    """Share of the container's normalized text that sits inside anchors."""
    total = len(normalize_inline_text(accessor.text(container)))
    if total == 0:
        return 0.0
    linked = sum(len(normalize_inline_text(accessor.text(link))) for link in accessor.query(container, "a"))
    return linked / total


def compute_container_score(
    blocks: Sequence[Block],
    *,
    text_length: int,
    link_density: float,
    is_article_marker: bool = False,
    is_main_marker: bool = False,
    config: Optional[ExtractionConfig] = None,
) -> float:
    config = config or ExtractionConfig()
    counts = {kind: 0 for kind in BlockKind}
    for block in blocks:
        counts[block.kind] += 1
    boilerplate_hits = sum(1 for block in blocks if is_likely_boilerplate(block.text))

    score = float(text_length)
    score += counts[BlockKind.PARAGRAPH] * config.paragraph_weight
    score += counts[BlockKind.HEADING] * config.heading_weight
    score += counts[BlockKind.LIST_ITEM] * config.list_item_weight
    score += counts[BlockKind.QUOTE] * config.quote_weight
    score -= round(link_density * config.link_density_penalty)
    score -= boilerplate_hits * config.boilerplate_penalty

    if is_article_marker:
        score += config.article_marker_bonus
    if is_main_marker:
        score += config.main_marker_bonus
    return score


class ContainerScorer:
    """Enumerate candidate containers, score them and keep the best one."""

    def __init__(
        self,
        accessor: DocumentAccessor,
        config: Optional[ExtractionConfig] = None,
        *,
        extractor: Optional[BlockExtractor] = None,
    ) -> None:
        self.accessor = accessor
        self.config = config or ExtractionConfig()
        self.extractor = extractor or BlockExtractor(accessor, self.config)

    def collect_candidates(self) -> List[Node]:
        accessor = self.accessor
        root = accessor.root()
        ordered: Dict[Hashable, Node] = {}

        for selector in SEMANTIC_SELECTORS:
            for node in accessor.query(root, selector):
                ordered.setdefault(accessor.ref(node), node)

        body = accessor.body()
        counts: Dict[Hashable, int] = {}
        containers: Dict[Hashable, Node] = {}
        for paragraph in accessor.query(root, "p"):
            if accessor.closest(paragraph, EXCLUDED_SELECTOR) is not None:
                continue
            container = accessor.closest(paragraph, PARAGRAPH_CONTAINER_SELECTOR)
            if container is None or (body is not None and accessor.same(container, body)):
                continue
            key = accessor.ref(container)
            containers.setdefault(key, container)
            counts[key] = counts.get(key, 0) + 1

        ranked = sorted(
            (key for key, count in counts.items() if count >= self.config.min_paragraphs_per_container),
            key=lambda key: counts[key],
            reverse=True,
        )
        for key in ranked[: self.config.max_scored_containers]:
            ordered.setdefault(key, containers[key])

        return list(ordered.values())

    def score_candidate(self, node: Node) -> Optional[CandidateContainer]:
        blocks = self.extractor.extract(node)
        if not blocks:
            return None

        candidate = CandidateContainer(node=node, blocks=blocks)
        body_text = candidate.body_text
        if not is_valid_body(body_text, len(blocks), self.config):
            return None

        candidate.score = compute_container_score(
            blocks,
            text_length=len(body_text),
            link_density=compute_link_density(self.accessor, node),
            is_article_marker=self.accessor.matches(node, ARTICLE_MARKER_SELECTOR),
            is_main_marker=self.accessor.matches(node, MAIN_MARKER_SELECTOR),
            config=self.config,
        )
        return candidate

    def best_container(self) -> Optional[CandidateContainer]:
        nodes = self.collect_candidates()
        scored = [candidate for candidate in map(self.score_candidate, nodes) if candidate is not None]
        LOGGER.debug("Scored %d of %d candidate containers", len(scored), len(nodes))
        if not scored:
            return None
        # stable: ties keep the earlier-enumerated candidate
        scored.sort(key=lambda candidate: candidate.score, reverse=True)
        return scored[0]
