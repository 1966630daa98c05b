"""Article body extraction."""

from tothepoint.extraction.blocks import BlockExtractor
from tothepoint.extraction.pipeline import ArticleBodyExtractor, extract_article_body
from tothepoint.extraction.scoring import ContainerScorer

__all__ = ["ArticleBodyExtractor", "BlockExtractor", "ContainerScorer", "extract_article_body"]
