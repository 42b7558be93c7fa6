"""
Backtracking Strategy - Depth-first placement under row/column clue limits.
"""

import logging
from typing import List, Optional, Tuple

from ..base import PlayOrderStrategy
from ..board import Board
from ..factory import register_strategy
from ..track import TrackType

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# Placements the search may try before it gives up and falls back
DEFAULT_MAX_NODES = 1_000_000


@register_strategy
class BacktrackingStrategy(PlayOrderStrategy):
    """
    Depth-first search with undo on constraint violation.

    Solution cells are candidates in row-major order. A cell may be
    placed only while its row and column stay within their clue counts;
    a full assignment succeeds when every count matches exactly. Dead
    ends pop the most recent placement and try the next candidate.

    If the search is exhausted (or exceeds max_nodes) the chain order is
    used instead, so a play order always exists.

    Attributes:
        max_nodes: Placement budget for the search
        fell_back: True if the last build used the chain order fallback
    """
    name = "backtracking"
    display_name = "Backtracking"
    description = "Recursive DFS with undo on constraint violation."
    time_complexity = "O(N·2^N) worst / O(N) avg"
    space_complexity = "O(N)"

    def __init__(self, board: Board, max_log: Optional[int] = None,
                 max_nodes: int = DEFAULT_MAX_NODES):
        super().__init__(board, max_log=max_log)
        self.max_nodes = max_nodes
        self.fell_back = False

    def build_play_order(self) -> List[Position]:
        board = self.board
        candidates = [
            (x, y)
            for y in range(board.height)
            for x in range(board.width)
            if board.solution[y][x] is not TrackType.EMPTY
        ]

        order = self._search(candidates, list(board.row_clues), list(board.col_clues))
        self.fell_back = order is None
        if order is None:
            logger.info("Backtracking search exhausted, falling back to chain order")
            return self.chain_order()
        return order

    def _search(self, candidates: List[Position],
                row_target: List[int], col_target: List[int]) -> Optional[List[Position]]:
        """
        Find a placement order whose row/column counts hit the targets.

        Explicit-stack form of the recursive search: cursor[d] is the next
        candidate index to try at depth d, order holds the indices placed.

        Returns:
            Ordered positions, or None if no assignment exists within budget
        """
        n = len(candidates)
        placed = [False] * n
        row_count = [0] * len(row_target)
        col_count = [0] * len(col_target)
        order: List[int] = []
        cursor = [0]
        nodes = 0

        def unplace(index: int) -> None:
            x, y = candidates[index]
            placed[index] = False
            row_count[y] -= 1
            col_count[x] -= 1

        while cursor:
            self._ops += 1
            if len(order) == n:
                if row_count == row_target and col_count == col_target:
                    return [candidates[i] for i in order]
                cursor.pop()
                unplace(order.pop())
                continue

            for i in range(cursor[-1], n):
                if placed[i]:
                    continue
                self._ops += 1
                x, y = candidates[i]
                if row_count[y] + 1 > row_target[y] or col_count[x] + 1 > col_target[x]:
                    continue
                cursor[-1] = i + 1
                placed[i] = True
                row_count[y] += 1
                col_count[x] += 1
                order.append(i)
                cursor.append(0)
                nodes += 1
                break
            else:
                # dead end: undo the placement that led here
                cursor.pop()
                if order:
                    unplace(order.pop())
                continue

            if nodes > self.max_nodes:
                return None
        return None
