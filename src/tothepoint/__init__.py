"""Locate the body of an article and rank its passages against the title."""

from tothepoint.analyzer import DocumentAnalysis, analyze_document
from tothepoint.detection import classify_document
from tothepoint.extraction.pipeline import extract_article_body
from tothepoint.ranking.ranker import rank_title_against_blocks

__version__ = "0.1.0"

__all__ = [
    "DocumentAnalysis",
    "analyze_document",
    "classify_document",
    "extract_article_body",
    "rank_title_against_blocks",
]
