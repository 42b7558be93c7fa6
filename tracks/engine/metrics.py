"""
Metrics Module - Per-solver timing and operation statistics.

Pure observability: nothing here feeds back into solver control flow.
"""

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional


@dataclass(frozen=True)
class StepRecord:
    """
    Measurements for one solver step.

    Attributes:
        elapsed_ms: Wall time spent in the step
        ops: Operations counted during the step
        space: Auxiliary space estimate (cells) during the step
    """
    elapsed_ms: float
    ops: int
    space: int


@dataclass
class AlgoMetrics:
    """
    Running statistics for one solver instance.

    Attributes:
        algorithm_name: Display name (Greedy, Divide & Conquer, ...)
        time_complexity: Theoretical time label, e.g. "O(N log N)"
        space_complexity: Theoretical space label
        strategy_description: One-line summary of the approach
        step_time_ms: Wall time of the most recent step
        step_ops: Operations of the most recent step
        step_space: Space estimate of the most recent step
        total_time_ms: Cumulative wall time over all steps
        total_ops: Cumulative operations over all steps
        total_moves: Placements applied so far
        max_log: Keep only the newest max_log step records (None = all)
        step_log: Per-step records, oldest first
    """
    algorithm_name: str
    time_complexity: str = ""
    space_complexity: str = ""
    strategy_description: str = ""
    step_time_ms: float = 0.0
    step_ops: int = 0
    step_space: int = 0
    total_time_ms: float = 0.0
    total_ops: int = 0
    total_moves: int = 0
    max_log: Optional[int] = None
    step_log: Deque[StepRecord] = field(default_factory=deque)

    def __post_init__(self):
        self.step_log = deque(self.step_log, maxlen=self.max_log)

    def record(self, elapsed_ms: float, ops: int, space: int, moved: bool) -> None:
        """
        Account for one call to step().

        Time and operations always accumulate; a log entry and a move are
        only recorded when the step placed a cell.
        """
        self.total_time_ms += elapsed_ms
        self.total_ops += ops
        if not moved:
            return
        self.total_moves += 1
        self.step_time_ms = elapsed_ms
        self.step_ops = ops
        self.step_space = space
        self.step_log.append(StepRecord(elapsed_ms, ops, space))

    @property
    def average_step_ms(self) -> float:
        """Mean wall time per applied move."""
        if self.total_moves == 0:
            return 0.0
        return self.total_time_ms / self.total_moves

    def recent_steps(self, count: int = 10) -> List[StepRecord]:
        """Newest count step records, oldest first."""
        if count <= 0:
            return []
        return list(self.step_log)[-count:]

    def snapshot(self) -> "AlgoMetrics":
        """Independent copy safe to hand to presentation code."""
        return copy.deepcopy(self)
