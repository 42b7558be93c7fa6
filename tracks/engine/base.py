"""
Base Strategy Module - Abstract base classes for solving strategies.

A strategy is bound to one board and reproduces its solution one placement
per step() call so hosts can animate the fill order.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .board import Board
from .metrics import AlgoMetrics
from .track import TrackType

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses implement _select_next() and define the class attributes
    below. Operation counts are accumulated in self._ops during a step.

    Attributes:
        name: Short identifier used by the factory
        display_name: Human-readable algorithm name
        description: One-line summary for UI and metrics
        time_complexity: Theoretical time label
        space_complexity: Theoretical space label
    """
    name: str = "base"
    display_name: str = "Base"
    description: str = "Base strategy"
    time_complexity: str = ""
    space_complexity: str = "O(N)"

    def __init__(self, board: Board, max_log: Optional[int] = None):
        """
        Bind the strategy to a board that already carries a solution.

        Args:
            board: Board to fill; mutated by step()
            max_log: Keep only this many step records (None = unbounded)
        """
        self.board = board
        self._ops = 0
        self._metrics = AlgoMetrics(
            algorithm_name=self.display_name,
            time_complexity=self.time_complexity,
            space_complexity=self.space_complexity,
            strategy_description=self.description,
            max_log=max_log,
        )

    @abstractmethod
    def _select_next(self) -> Optional[Position]:
        """
        Choose the next cell to place.

        Returns:
            (x, y) of a cell whose current type differs from the solution,
            or None when nothing remains
        """

    def step(self) -> bool:
        """
        Place at most one solution cell.

        Records a Move, writes the solution type, clears the clue flag and
        rebuilds the connectivity graph.

        Returns:
            True if a cell was placed, False once the board is complete
        """
        start_time = time.perf_counter()
        self._ops = 0
        position = self._select_next()
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        space = self.board.width * self.board.height

        if position is None:
            self._metrics.record(elapsed_ms, self._ops, space, moved=False)
            return False

        x, y = position
        self.board.place(x, y, self.board.solution[y][x], is_clue=False)
        self._metrics.record(elapsed_ms, self._ops, space, moved=True)
        return True

    def run(self, max_steps: Optional[int] = None) -> int:
        """
        Call step() until it reports completion.

        Args:
            max_steps: Optional cap on the number of placements

        Returns:
            Number of placements applied
        """
        moves = 0
        while max_steps is None or moves < max_steps:
            if not self.step():
                break
            moves += 1
        return moves

    @property
    def metrics(self) -> AlgoMetrics:
        """Read-only snapshot of the metrics collected so far."""
        return self._metrics.snapshot()

    def get_metrics(self) -> AlgoMetrics:
        return self.metrics

    @property
    def total_moves(self) -> int:
        return self._metrics.total_moves

    def _needs_placement(self, x: int, y: int) -> bool:
        return self.board.cells[y][x].type is not self.board.solution[y][x]


class PlayOrderStrategy(SolverStrategy):
    """
    Strategy that computes its full play order once and replays it.

    The order is built lazily on the first step; the operations spent
    building it are charged to that step. Cells that already match the
    solution (clues) are skipped during replay.
    """

    def __init__(self, board: Board, max_log: Optional[int] = None):
        super().__init__(board, max_log=max_log)
        self.play_order: Optional[List[Position]] = None
        self._play_index = 0

    @abstractmethod
    def build_play_order(self) -> List[Position]:
        """Compute the complete placement order, counting into self._ops."""

    def _select_next(self) -> Optional[Position]:
        if self.play_order is None:
            self.play_order = self.build_play_order()
            self._play_index = 0
            logger.debug(f"{self.name}: play order of {len(self.play_order)} cells built")

        while self._play_index < len(self.play_order):
            x, y = self.play_order[self._play_index]
            self._play_index += 1
            self._ops += 1
            if (self.board.solution[y][x] is not TrackType.EMPTY
                    and self._needs_placement(x, y)):
                return (x, y)
        return None

    def chain_order(self) -> List[Position]:
        """
        Solution cells in path order from start to end.

        One operation is counted per cell visited.
        """
        path = self.board.trace_solution()
        self._ops += len(path)
        return path
