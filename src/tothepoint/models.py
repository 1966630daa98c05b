"""Core data models shared by extraction, detection and ranking."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, List, Mapping, Optional, Tuple


class BlockKind(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    QUOTE = "quote"
    LIST_ITEM = "list_item"

    @classmethod
    def from_tag(cls, tag_name: str) -> Tuple["BlockKind", Optional[int]]:
        """Map a block-level tag name to its kind and heading level."""
        tag = tag_name.lower()
        if len(tag) == 2 and tag[0] == "h" and tag[1] in "23456":
            return cls.HEADING, int(tag[1])
        if tag == "li":
            return cls.LIST_ITEM, None
        if tag == "blockquote":
            return cls.QUOTE, None
        return cls.PARAGRAPH, None


@dataclass(frozen=True, slots=True)
class Block:
    """Normalized unit of extracted body text."""

    index: int
    text: str
    kind: BlockKind
    level: Optional[int] = None
    element_ref: Optional[Hashable] = field(default=None, compare=False)

    @property
    def is_heading(self) -> bool:
        return self.kind is BlockKind.HEADING


@dataclass(frozen=True, slots=True)
class ChunkCandidate:
    """Contiguous window of blocks considered as a unit for ranking."""

    start_block_index: int
    end_block_index: int
    window_size: int
    text: str
    normalized_text: str
    tokens: Tuple[str, ...]
    term_frequency: Mapping[str, int]
    token_count: int
    starts_with_heading: bool


@dataclass(frozen=True, slots=True)
class RankedMatch:
    start_block_index: int
    end_block_index: int
    score: float
    text: str
    snippet: str

    @property
    def span(self) -> int:
        return self.end_block_index - self.start_block_index + 1


@dataclass(frozen=True, slots=True)
class RankingResult:
    query_tokens: Tuple[str, ...]
    chunk_count: int
    matches: List[RankedMatch]
    query_token_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "query_token_count", len(self.query_tokens))


class BodySource(str, Enum):
    LINKED_DATA = "linked-data"
    MARKED_CONTAINER = "marked-container"
    SCORED_CONTAINER = "scored-container"
    ABSENT = "absent"


@dataclass(slots=True)
class ArticleBodyExtraction:
    """Outcome of the body extraction fallback chain."""

    body_text: Optional[str]
    source: BodySource
    reasons: List[str]
    blocks: List[Block] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.body_text is not None


class TitleSource(str, Enum):
    LINKED_DATA_HEADLINE = "jsonld:headline"
    OG_TITLE = "meta:og:title"
    TWITTER_TITLE = "meta:twitter:title"


@dataclass(slots=True)
class ArticleDetection:
    is_article: bool
    metadata_matched: bool
    title: Optional[str]
    title_source: Optional[TitleSource]
    reasons: List[str]
