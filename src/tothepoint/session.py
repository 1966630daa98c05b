"""Navigation state over one ranking result, owned by the presentation layer."""

from __future__ import annotations

from typing import Hashable, List, Optional, Sequence

from tothepoint.models import Block, RankedMatch, RankingResult


class NavigatorSession:
    """Cursor over ranked matches that wraps around at both ends.

    A session is built per ranking call and holds no global state; the caller
    keeps it alive for as long as the page view needs it.
    """

    def __init__(self, result: RankingResult, blocks: Sequence[Block]) -> None:
        self.result = result
        self.blocks = list(blocks)
        self.position = 0

    def __len__(self) -> int:
        return len(self.result.matches)

    @property
    def is_empty(self) -> bool:
        return not self.result.matches

    def current(self) -> Optional[RankedMatch]:
        if self.is_empty:
            return None
        return self.result.matches[self.position]

    def next(self) -> Optional[RankedMatch]:
        if self.is_empty:
            return None
        self.position = (self.position + 1) % len(self)
        return self.current()

    def previous(self) -> Optional[RankedMatch]:
        if self.is_empty:
            return None
        self.position = (self.position - 1) % len(self)
        return self.current()

    def blocks_for(self, match: RankedMatch) -> List[Block]:
        return [
            block
            for block in self.blocks
            if match.start_block_index <= block.index <= match.end_block_index
        ]

    def element_refs(self, match: RankedMatch) -> List[Hashable]:
        """References of the source nodes to highlight, skipping text-only blocks."""
        return [block.element_ref for block in self.blocks_for(match) if block.element_ref is not None]
