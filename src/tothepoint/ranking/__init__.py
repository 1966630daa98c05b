"""Title-to-passage ranking."""

from tothepoint.ranking.ranker import ChunkRanker, rank_title_against_blocks

__all__ = ["ChunkRanker", "rank_title_against_blocks"]
