"""
Move Module - Undo records and the history stack that holds them.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .track import TrackType


@dataclass(frozen=True)
class Move:
    """
    Minimal information needed to reverse one cell mutation.

    Pushed immediately before a cell's type changes, popped and applied
    in reverse by undo.

    Attributes:
        x: Column of the mutated cell
        y: Row of the mutated cell
        previous_type: Track type held before the mutation
        previous_is_clue: Clue flag held before the mutation
    """
    x: int
    y: int
    previous_type: TrackType
    previous_is_clue: bool

    @property
    def position(self):
        """(x, y) of the mutated cell."""
        return (self.x, self.y)


class MoveHistory:
    """
    LIFO stack of Move records.

    Cleared on restart and whenever a new puzzle is generated.
    """

    def __init__(self):
        self._moves: List[Move] = []

    def push(self, move: Move) -> None:
        self._moves.append(move)

    def pop(self) -> Optional[Move]:
        """
        Remove and return the most recent move.

        Returns:
            The most recent Move, or None if the history is empty
        """
        if not self._moves:
            return None
        return self._moves.pop()

    def peek(self) -> Optional[Move]:
        return self._moves[-1] if self._moves else None

    def clear(self) -> None:
        self._moves.clear()

    def __len__(self) -> int:
        return len(self._moves)

    def __bool__(self) -> bool:
        return bool(self._moves)

    def __iter__(self) -> Iterator[Move]:
        """Iterate most recent first."""
        return reversed(self._moves)
