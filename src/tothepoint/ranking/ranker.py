"""Rank passages of an extracted article against its title.

Candidates are 1-3 block windows scored with BM25 term relevance plus
bigram adjacency, exact phrase and heading boosts. The selection is greedy
and skips any candidate overlapping an accepted match too heavily, so the
result stays diverse.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from tothepoint.config import RankingConfig
from tothepoint.models import Block, ChunkCandidate, RankedMatch, RankingResult
from tothepoint.ranking.chunks import CorpusStats, build_chunk_candidates
from tothepoint.utils.text import normalize_for_phrase, to_snippet, tokenize

LOGGER = logging.getLogger(__name__)


def inverse_document_frequency(candidate_count: int, document_frequency: int) -> float:
    return math.log(1 + (candidate_count - document_frequency + 0.5) / (document_frequency + 0.5))


def tf_weight(tf: int, length: int, average_length: float, *, k1: float = 1.2, b: float = 0.75) -> float:
    """Saturating term-frequency weight with document length normalization."""
    relative_length = length / average_length if average_length else 0.0
    normalization = 1 - b + b * relative_length
    return tf * (k1 + 1) / (tf + k1 * normalization)


def query_weight(query_frequency: int) -> float:
    return 1 + math.log1p(query_frequency)


def bigrams(tokens: Sequence[str]) -> List[Tuple[str, str]]:
    return list(zip(tokens, tokens[1:]))


def overlap_ratio(left: Tuple[int, int], right: Tuple[int, int]) -> float:
    """Shared block span divided by the shorter of the two inclusive ranges."""
    start = max(left[0], right[0])
    end = min(left[1], right[1])
    if start > end:
        return 0.0
    shorter = min(left[1] - left[0] + 1, right[1] - right[0] + 1)
    return (end - start + 1) / shorter


@dataclass(frozen=True, slots=True)
class _Query:
    tokens: Tuple[str, ...]
    term_frequency: Mapping[str, int]
    bigrams: List[Tuple[str, str]]
    phrase: str


class ChunkRanker:
    """Score block windows against a title and keep a diverse top-K."""

    def __init__(self, config: Optional[RankingConfig] = None) -> None:
        self.config = config or RankingConfig()

    def rank(self, title: str, blocks: Sequence[Block]) -> RankingResult:
        query_tokens = tokenize(title)
        if not query_tokens or not blocks:
            return RankingResult(query_tokens=tuple(query_tokens), chunk_count=0, matches=[])

        candidates = build_chunk_candidates(blocks, self.config.window_sizes)
        if not candidates:
            return RankingResult(query_tokens=tuple(query_tokens), chunk_count=0, matches=[])

        query = _Query(
            tokens=tuple(query_tokens),
            term_frequency=Counter(query_tokens),
            bigrams=bigrams(query_tokens),
            phrase=normalize_for_phrase(title),
        )
        stats = CorpusStats.from_candidates(candidates)

        scored = []
        for candidate in candidates:
            score = self.score(candidate, query, stats)
            if score > 0:
                scored.append((candidate, score))

        by_range = self._collapse_ranges(scored)
        ordered = sorted(by_range, key=lambda item: item[1], reverse=True)
        matches = self._select(ordered)

        LOGGER.debug(
            "Ranked %d chunk candidates for %d query tokens, kept %d matches",
            len(candidates),
            len(query_tokens),
            len(matches),
        )
        return RankingResult(query_tokens=tuple(query_tokens), chunk_count=len(candidates), matches=matches)

    def score(self, candidate: ChunkCandidate, query: _Query, stats: CorpusStats) -> float:
        config = self.config
        score = 0.0
        for term, frequency in query.term_frequency.items():
            tf = candidate.term_frequency.get(term, 0)
            df = stats.document_frequency.get(term, 0)
            if tf == 0 or df == 0:
                continue
            score += (
                inverse_document_frequency(stats.candidate_count, df)
                * tf_weight(tf, candidate.token_count, stats.average_length, k1=config.k1, b=config.b)
                * query_weight(frequency)
            )

        score += self.bigram_boost(query.bigrams, candidate.tokens)
        score += self.phrase_boost(query.phrase, candidate.normalized_text)
        if candidate.starts_with_heading:
            score += config.heading_boost
        return score

    def bigram_boost(self, query_bigrams: Sequence[Tuple[str, str]], chunk_tokens: Sequence[str]) -> float:
        if not query_bigrams or len(chunk_tokens) < 2:
            return 0.0
        chunk_bigrams = set(bigrams(chunk_tokens))
        hits = sum(1 for pair in query_bigrams if pair in chunk_bigrams)
        return hits * self.config.bigram_boost

    def phrase_boost(self, phrase: str, normalized_text: str) -> float:
        if len(phrase) < self.config.phrase_min_chars or not normalized_text:
            return 0.0
        return self.config.phrase_boost if phrase in normalized_text else 0.0

    @staticmethod
    def _collapse_ranges(
        scored: Sequence[Tuple[ChunkCandidate, float]]
    ) -> List[Tuple[ChunkCandidate, float]]:
        # ranges are unique under sliding windows; kept as a guard if windowing changes
        by_range: Dict[Tuple[int, int], Tuple[ChunkCandidate, float]] = {}
        for candidate, score in scored:
            key = (candidate.start_block_index, candidate.end_block_index)
            current = by_range.get(key)
            if current is None or score > current[1]:
                by_range[key] = (candidate, score)
        return list(by_range.values())

    def _select(self, ordered: Sequence[Tuple[ChunkCandidate, float]]) -> List[RankedMatch]:
        config = self.config
        selected: List[RankedMatch] = []
        for candidate, score in ordered:
            span = (candidate.start_block_index, candidate.end_block_index)
            if any(
                overlap_ratio(span, (match.start_block_index, match.end_block_index)) > config.max_overlap_ratio
                for match in selected
            ):
                continue
            selected.append(
                RankedMatch(
                    start_block_index=candidate.start_block_index,
                    end_block_index=candidate.end_block_index,
                    score=round(score, 4),
                    text=candidate.text,
                    snippet=to_snippet(candidate.text, max_chars=config.snippet_chars),
                )
            )
            if len(selected) >= config.max_matches:
                break
        return selected


def rank_title_against_blocks(
    title: str, blocks: Sequence[Block], *, config: Optional[RankingConfig] = None
) -> RankingResult:
    return ChunkRanker(config).rank(title, blocks)
