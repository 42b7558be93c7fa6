"""
Divide & Conquer Strategy - Fills the midpoint of each path segment first.
"""

from typing import List, Tuple

from ..base import PlayOrderStrategy
from ..factory import register_strategy


@register_strategy
class DivideConquerStrategy(PlayOrderStrategy):
    """
    Midpoint-first fill order over the chain-ordered solution path.

    The play order emits the midpoint of [lo, hi], then recurses into the
    left half and the right half, so the track appears spread out before
    the gaps close. Built once in O(N log N) and replayed one cell per step.
    """
    name = "divide_conquer"
    display_name = "Divide & Conquer"
    description = "Chain-follows path, splits in half, fills midpoint first."
    time_complexity = "O(N log N)"
    space_complexity = "O(N)"

    def build_play_order(self) -> List[Tuple[int, int]]:
        path = self.chain_order()
        order: List[Tuple[int, int]] = []
        self._split(path, 0, len(path) - 1, order)
        return order

    def _split(self, path, lo: int, hi: int, order: List[Tuple[int, int]]) -> None:
        self._ops += 1
        if lo > hi:
            return
        mid = (lo + hi) // 2
        order.append(path[mid])
        self._split(path, lo, mid - 1, order)
        self._split(path, mid + 1, hi, order)
