"""
Planner Module - Memoized minimum-moves analysis between two boards.

Standalone analytical tool: it compares an arbitrary current grid of track
types against a target grid. None of the step-by-step solver strategies
use it.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .track import TrackType

logger = logging.getLogger(__name__)

Grid = Sequence[Sequence[TrackType]]
FrozenGrid = Tuple[Tuple[TrackType, ...], ...]
Position = Tuple[int, int]

# Beyond this many differing cells the difference count is used as-is
DEFAULT_DIFFERENCE_CUTOFF = 12


@dataclass
class PlannerMetrics:
    """
    Statistics for the most recent minimum_moves() call.

    Attributes:
        states_explored: Board states expanded
        cache_hits: Memo lookups that hit
        cache_misses: States computed (or estimated) from scratch
        elapsed_ms: Wall time of the call
        optimal_moves: Result of the call
    """
    states_explored: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    elapsed_ms: float = 0.0
    optimal_moves: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.cache_hits + self.cache_misses
        return self.cache_hits / lookups if lookups else 0.0


def _freeze(grid: Grid) -> FrozenGrid:
    return tuple(tuple(row) for row in grid)


def _encode(grid: FrozenGrid) -> str:
    """Serialize a grid into the memo key."""
    return "/".join(",".join(track.value for track in row) for row in grid)


def _differences(current: FrozenGrid, target: FrozenGrid) -> List[Position]:
    return [
        (x, y)
        for y, row in enumerate(target)
        for x, track in enumerate(row)
        if current[y][x] is not track
    ]


def _with_cell(grid: FrozenGrid, x: int, y: int, track: TrackType) -> FrozenGrid:
    row = grid[y][:x] + (track,) + grid[y][x + 1:]
    return grid[:y] + (row,) + grid[y + 1:]


class MinimumMovesPlanner:
    """
    Top-down memoized search for the fewest single-cell corrections.

    A correction sets one differing cell to its target type. The memo is
    keyed by the serialized current and target grids together and persists
    across calls until clear_memo().

    Attributes:
        difference_cutoff: States with more differing cells than this are
            not expanded; their difference count is returned instead
        metrics: Statistics of the latest minimum_moves() call
    """

    def __init__(self, difference_cutoff: int = DEFAULT_DIFFERENCE_CUTOFF):
        self.difference_cutoff = difference_cutoff
        self._memo: Dict[str, int] = {}
        self.metrics = PlannerMetrics()

    def minimum_moves(self, current: Grid, target: Grid) -> int:
        """
        Fewest single-cell corrections turning current into target.

        Args:
            current: Current track types indexed [y][x]
            target: Target track types, same shape

        Returns:
            Minimum number of corrections
        """
        start_time = time.perf_counter()
        self.metrics = PlannerMetrics()
        result = self._solve(_freeze(current), _freeze(target))
        self.metrics.elapsed_ms = (time.perf_counter() - start_time) * 1000
        self.metrics.optimal_moves = result
        logger.debug(
            f"minimum_moves={result} explored={self.metrics.states_explored} "
            f"hits={self.metrics.cache_hits} memo={len(self._memo)}"
        )
        return result

    def _solve(self, current: FrozenGrid, target: FrozenGrid) -> int:
        key = f"{_encode(current)}|{_encode(target)}"
        if key in self._memo:
            self.metrics.cache_hits += 1
            return self._memo[key]

        self.metrics.cache_misses += 1
        differences = _differences(current, target)
        if not differences:
            self.metrics.states_explored += 1
            self._memo[key] = 0
            return 0
        if len(differences) > self.difference_cutoff:
            return len(differences)

        best = None
        for x, y in differences:
            self.metrics.states_explored += 1
            moves = 1 + self._solve(_with_cell(current, x, y, target[y][x]), target)
            if best is None or moves < best:
                best = moves

        self._memo[key] = best
        return best

    def optimal_sequence(self, current: Grid, target: Grid) -> List[Position]:
        """
        Greedy correction order guided by minimum_moves.

        At each step every single-cell fix is evaluated and the one leaving
        the smallest remaining minimum is applied (row-major tie-break).

        Returns:
            List of (x, y) corrections in application order
        """
        state = _freeze(current)
        goal = _freeze(target)
        sequence: List[Position] = []

        while True:
            best = None
            best_value = None
            for x, y in _differences(state, goal):
                candidate = _with_cell(state, x, y, goal[y][x])
                value = self._solve(candidate, goal)
                if best_value is None or value < best_value:
                    best_value = value
                    best = (x, y)
            if best is None:
                break
            x, y = best
            state = _with_cell(state, x, y, goal[y][x])
            sequence.append(best)
        return sequence

    def is_fixable_in_k_moves(self, current: Grid, target: Grid, k: int) -> bool:
        """
        Whether exactly k corrections turn current into target.

        Row-major table: fixable[i][m] is True when the first i cells can
        be brought to target with exactly m corrections. Every differing
        cell costs one correction and must be fixed.
        """
        if k < 0:
            return False
        frozen_current = _freeze(current)
        frozen_target = _freeze(target)
        costs = [
            0 if frozen_current[y][x] is track else 1
            for y, row in enumerate(frozen_target)
            for x, track in enumerate(row)
        ]

        fixable = [[False] * (k + 1) for _ in range(len(costs) + 1)]
        fixable[0][0] = True
        for i, cost in enumerate(costs, start=1):
            for moves in range(k + 1):
                if moves >= cost:
                    fixable[i][moves] = fixable[i - 1][moves - cost]
        return fixable[len(costs)][k]

    def similarity(self, current: Grid, target: Grid) -> int:
        """Longest common subsequence length of the row-major flattened grids."""
        a = [track for row in current for track in row]
        b = [track for row in target for track in row]

        previous = [0] * (len(b) + 1)
        for i in range(1, len(a) + 1):
            row = [0] * (len(b) + 1)
            for j in range(1, len(b) + 1):
                if a[i - 1] is b[j - 1]:
                    row[j] = previous[j - 1] + 1
                else:
                    row[j] = max(previous[j], row[j - 1])
            previous = row
        return previous[len(b)]

    def edit_distance(self, current: Grid, target: Grid) -> int:
        """Number of differing cells."""
        return len(_differences(_freeze(current), _freeze(target)))

    def clear_memo(self) -> None:
        self._memo.clear()

    @property
    def memo_size(self) -> int:
        return len(self._memo)
