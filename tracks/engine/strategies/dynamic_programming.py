"""
Dynamic Programming Strategy - Replays a table built once from the chain order.

Note the naming: the table is a single linear pass over the solution path,
reused across steps; there is no overlapping-subproblem memoization here.
The memoized minimum-moves computation lives in planner.MinimumMovesPlanner
and is deliberately not used by this replay.
"""

from typing import List, Tuple

from ..base import PlayOrderStrategy
from ..factory import register_strategy


@register_strategy
class DynamicProgrammingStrategy(PlayOrderStrategy):
    """
    Sequential fill from start to end.

    The chain order is computed once in O(N) and replayed strictly in
    path order, one cell per step.
    """
    name = "dynamic_programming"
    display_name = "Dynamic Programming"
    description = "dp table built once via chain-follow, replay each step."
    time_complexity = "O(N)"
    space_complexity = "O(N)"

    def build_play_order(self) -> List[Tuple[int, int]]:
        return self.chain_order()
