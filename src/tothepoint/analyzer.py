"""Detection, body extraction and title ranking in one pass over a document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from tothepoint.config import AppConfig
from tothepoint.detection import classify_document
from tothepoint.dom.accessor import DocumentAccessor
from tothepoint.extraction.linked_data import load_linked_data
from tothepoint.extraction.pipeline import extract_article_body
from tothepoint.models import ArticleBodyExtraction, ArticleDetection, RankingResult
from tothepoint.ranking.ranker import rank_title_against_blocks

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DocumentAnalysis:
    detection: ArticleDetection
    extraction: ArticleBodyExtraction
    ranking: Optional[RankingResult]
    title: Optional[str]


def analyze_document(
    accessor: DocumentAccessor,
    title: Optional[str] = None,
    *,
    config: Optional[AppConfig] = None,
) -> DocumentAnalysis:
    config = config or AppConfig()
    linked_data = load_linked_data(accessor)

    detection = classify_document(accessor, linked_data)
    extraction = extract_article_body(accessor, linked_data, config=config.extraction)

    query = title if title and title.strip() else detection.title
    ranking = None
    if query and extraction.blocks:
        ranking = rank_title_against_blocks(query, extraction.blocks, config=config.ranking)
    else:
        LOGGER.debug("Skipping ranking (title=%r, blocks=%d)", query, len(extraction.blocks))

    return DocumentAnalysis(detection=detection, extraction=extraction, ranking=ranking, title=query)
