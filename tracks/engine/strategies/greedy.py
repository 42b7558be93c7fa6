"""
Greedy Strategy - Always places the unsolved cell closest to the end.
"""

from typing import Optional, Tuple

from ..base import SolverStrategy
from ..factory import register_strategy
from ..graph import UNREACHABLE, distance_from_end


@register_strategy
class GreedyStrategy(SolverStrategy):
    """
    Greedy strategy that fills the path backwards from the end.

    Each step recomputes the BFS distance field from the end cell, then
    scans the board row-major for cells that differ from the solution and
    takes the one with the smallest distance (first found wins ties).
    No pre-computation; every step costs O(N).
    """
    name = "greedy"
    display_name = "Greedy"
    description = "Each step: BFS from end picks closest unsolved cell."
    time_complexity = "O(N²)"
    space_complexity = "O(N)"

    def _select_next(self) -> Optional[Tuple[int, int]]:
        board = self.board
        dist = distance_from_end(board)
        self._ops += board.width * board.height

        best = None
        best_distance = None
        for y in range(board.height):
            for x in range(board.width):
                self._ops += 1
                if not self._needs_placement(x, y):
                    continue
                d = dist[y][x]
                if d == UNREACHABLE:
                    continue
                if best_distance is None or d < best_distance:
                    best_distance = d
                    best = (x, y)
        return best
