"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

MAX_MATCHES_LIMIT = 10


@dataclass(slots=True)
class ExtractionConfig:
    min_body_chars: int = 250
    min_blocks: int = 3
    max_scored_containers: int = 30
    min_paragraphs_per_container: int = 2

    min_list_item_chars: int = 8
    min_heading_chars: int = 10
    min_default_chars: int = 20

    paragraph_weight: int = 180
    heading_weight: int = 60
    list_item_weight: int = 30
    quote_weight: int = 90
    link_density_penalty: int = 1200
    boilerplate_penalty: int = 250
    article_marker_bonus: int = 500
    main_marker_bonus: int = 250


@dataclass(slots=True)
class RankingConfig:
    window_sizes: Tuple[int, ...] = (1, 2, 3)
    max_matches: int = 10
    k1: float = 1.2
    b: float = 0.75
    bigram_boost: float = 0.35
    phrase_boost: float = 1.2
    phrase_min_chars: int = 8
    heading_boost: float = 0.2
    max_overlap_ratio: float = 0.6
    snippet_chars: int = 180

    def __post_init__(self) -> None:
        self.window_sizes = tuple(sorted({size for size in self.window_sizes if size >= 1}))
        if not self.window_sizes:
            raise ValueError("At least one positive window size is required")
        self.max_matches = max(1, min(self.max_matches, MAX_MATCHES_LIMIT))


@dataclass(slots=True)
class AppConfig:
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    ranking: RankingConfig = field(default_factory=RankingConfig)
    fetch_timeout: float = 10.0
