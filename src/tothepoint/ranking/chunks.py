"""Sliding-window chunk candidates and the corpus statistics over them."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Sequence

from tothepoint.models import Block, ChunkCandidate
from tothepoint.utils.text import normalize_for_phrase, tokenize


def iter_chunk_candidates(blocks: Sequence[Block], window_sizes: Sequence[int]) -> Iterator[ChunkCandidate]:
    """Yield every contiguous window of each size, smallest windows first."""
    for window_size in window_sizes:
        if window_size > len(blocks):
            continue
        for start in range(len(blocks) - window_size + 1):
            window = blocks[start : start + window_size]
            text = " ".join(block.text for block in window)
            tokens = tokenize(text)
            if not tokens:
                continue
            yield ChunkCandidate(
                start_block_index=window[0].index,
                end_block_index=window[-1].index,
                window_size=window_size,
                text=text,
                normalized_text=normalize_for_phrase(text),
                tokens=tuple(tokens),
                term_frequency=Counter(tokens),
                token_count=len(tokens),
                starts_with_heading=window[0].is_heading,
            )


def build_chunk_candidates(blocks: Sequence[Block], window_sizes: Sequence[int]) -> List[ChunkCandidate]:
    return list(iter_chunk_candidates(blocks, window_sizes))


@dataclass(frozen=True, slots=True)
class CorpusStats:
    """Statistics shared by every candidate's score, computed once up front."""

    candidate_count: int
    document_frequency: Mapping[str, int]
    average_length: float

    @classmethod
    def from_candidates(cls, candidates: Sequence[ChunkCandidate]) -> "CorpusStats":
        document_frequency: Counter[str] = Counter()
        for candidate in candidates:
            document_frequency.update(candidate.term_frequency.keys())
        total_tokens = sum(candidate.token_count for candidate in candidates)
        return cls(
            candidate_count=len(candidates),
            document_frequency=dict(document_frequency),
            average_length=total_tokens / len(candidates) if candidates else 0.0,
        )
