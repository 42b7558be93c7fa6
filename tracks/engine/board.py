"""
Board Module - Mutable Tracks grid with its target solution.

The board owns the per-cell state, the solution grid, the row/column clue
counts, the move history and the connectivity graph derived from the
current cell contents.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .graph import ConnectivityGraph, path_exists
from .move import Move, MoveHistory
from .track import Direction, TrackType, directions_of, next_type

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
TypeGrid = Tuple[Tuple[TrackType, ...], ...]


@dataclass
class Cell:
    """
    State of one board cell.

    Attributes:
        type: Track piece currently in the cell
        is_clue: Pre-filled and locked against player edits
        is_start: The path starts here
        is_end: The path ends here
    """
    type: TrackType = TrackType.EMPTY
    is_clue: bool = False
    is_start: bool = False
    is_end: bool = False

    def copy(self) -> "Cell":
        return Cell(self.type, self.is_clue, self.is_start, self.is_end)


class Board:
    """
    A height x width grid of cells plus the solution it was generated from.

    Attributes:
        width: Number of columns
        height: Number of rows
        cells: Current cells indexed [y][x]
        solution: Target track types indexed [y][x]
        start: (x, y) of the start cell
        end: (x, y) of the end cell
        row_clues: Non-empty solution cells per row
        col_clues: Non-empty solution cells per column
        history: Undo stack
        graph: Connectivity graph over the current cells
        revealed: True once reveal_solution() ran; blocks player edits and undo
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.reset()

    def reset(self) -> None:
        """Clear the board to an empty grid with an all-EMPTY solution."""
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(self.width)] for _ in range(self.height)
        ]
        self.solution: List[List[TrackType]] = [
            [TrackType.EMPTY] * self.width for _ in range(self.height)
        ]
        self.start: Position = (0, 0)
        self.end: Position = (0, 0)
        self.row_clues: List[int] = [0] * self.height
        self.col_clues: List[int] = [0] * self.width
        self.history = MoveHistory()
        self.graph = ConnectivityGraph(self.width, self.height)
        self.revealed = False

    @classmethod
    def from_types(
        cls,
        rows: Sequence[Sequence[TrackType]],
        start: Position,
        end: Position,
        solution: Optional[Sequence[Sequence[TrackType]]] = None,
    ) -> "Board":
        """
        Build a board from explicit cell types.

        Args:
            rows: Current track types indexed [y][x]
            start: (x, y) of the start cell
            end: (x, y) of the end cell
            solution: Target types; defaults to rows

        Returns:
            Board with start/end flagged, clue counts computed and the
            graph built
        """
        height = len(rows)
        width = len(rows[0]) if height > 0 else 0
        board = cls(width, height)
        target = solution if solution is not None else rows

        for y in range(height):
            for x in range(width):
                board.cells[y][x].type = rows[y][x]
                board.solution[y][x] = target[y][x]

        board.set_endpoints(start, end)
        board.compute_clue_counts()
        board.rebuild_graph()
        return board

    def set_endpoints(self, start: Position, end: Position) -> None:
        """Flag the start and end cells."""
        sx, sy = self.start
        ex, ey = self.end
        self.cells[sy][sx].is_start = False
        self.cells[ey][ex].is_end = False

        self.start = start
        self.end = end
        self.cells[start[1]][start[0]].is_start = True
        self.cells[end[1]][end[0]].is_end = True

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def compute_clue_counts(self) -> None:
        """Count non-empty solution cells per row and per column."""
        self.row_clues = [0] * self.height
        self.col_clues = [0] * self.width
        for y in range(self.height):
            for x in range(self.width):
                if self.solution[y][x] is not TrackType.EMPTY:
                    self.row_clues[y] += 1
                    self.col_clues[x] += 1

    def rebuild_graph(self) -> None:
        self.graph.rebuild(self)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def place(self, x: int, y: int, track: TrackType, is_clue: bool = False) -> None:
        """
        Write a track type into a cell, recording the move for undo.

        Solvers call this directly; it does not check the clue lock.

        Args:
            x: Column
            y: Row
            track: New track type
            is_clue: New clue flag
        """
        cell = self.cells[y][x]
        self.history.push(Move(x, y, cell.type, cell.is_clue))
        cell.type = track
        cell.is_clue = is_clue
        self.rebuild_graph()

    def apply_player_move(self, x: int, y: int, cycle_forward: bool = True) -> None:
        """
        Apply a player edit to one cell.

        Clue cells, revealed boards and positions outside the grid are
        left untouched.

        Args:
            x: Column
            y: Row
            cycle_forward: Advance to the next type in the cycle when True,
                clear to EMPTY when False
        """
        if not self.in_bounds(x, y):
            logger.debug(f"Ignoring move at ({x},{y}): outside the board")
            return
        cell = self.cells[y][x]
        if self.revealed:
            logger.debug(f"Ignoring move at ({x},{y}): solution revealed")
            return
        if cell.is_clue:
            logger.debug(f"Ignoring move at ({x},{y}): clue cell is locked")
            return

        new_type = next_type(cell.type) if cycle_forward else TrackType.EMPTY
        self.place(x, y, new_type, is_clue=cell.is_clue)

    def undo(self) -> None:
        """Reverse the most recent move; no-op if none or solution revealed."""
        if self.revealed:
            return
        move = self.history.pop()
        if move is None:
            return
        cell = self.cells[move.y][move.x]
        cell.type = move.previous_type
        cell.is_clue = move.previous_is_clue
        self.rebuild_graph()

    def restart(self) -> None:
        """Reset every non-clue cell to EMPTY and every clue to its solution type."""
        for y in range(self.height):
            for x in range(self.width):
                cell = self.cells[y][x]
                cell.type = self.solution[y][x] if cell.is_clue else TrackType.EMPTY
        self.history.clear()
        self.revealed = False
        self.rebuild_graph()

    def reveal_solution(self) -> None:
        """Fill every cell with its solution type and lock out further edits."""
        for y in range(self.height):
            for x in range(self.width):
                self.cells[y][x].type = self.solution[y][x]
        self.revealed = True
        self.rebuild_graph()

    def is_solved(self) -> bool:
        """True when some track path joins start to end."""
        return path_exists(self)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def clone(self) -> "Board":
        """
        Deep copy for an independent session.

        Cells, solution and clue counts are copied; the clone gets its own
        empty history and a freshly built graph.

        Returns:
            New Board sharing no mutable state with this one
        """
        copy = Board(self.width, self.height)
        copy.cells = [[cell.copy() for cell in row] for row in self.cells]
        copy.solution = [list(row) for row in self.solution]
        copy.start = self.start
        copy.end = self.end
        copy.row_clues = list(self.row_clues)
        copy.col_clues = list(self.col_clues)
        copy.revealed = self.revealed
        copy.rebuild_graph()
        return copy

    def current_types(self) -> TypeGrid:
        """Immutable snapshot of the current track types."""
        return tuple(tuple(cell.type for cell in row) for row in self.cells)

    def solution_types(self) -> TypeGrid:
        """Immutable snapshot of the solution grid."""
        return tuple(tuple(row) for row in self.solution)

    def diff(self) -> List[Position]:
        """
        Find cells whose current type differs from the solution.

        Returns:
            List of (x, y) in row-major order
        """
        differences = []
        for y in range(self.height):
            for x in range(self.width):
                if self.cells[y][x].type is not self.solution[y][x]:
                    differences.append((x, y))
        return differences

    def trace_solution(self) -> List[Position]:
        """
        Walk the solution from start to end.

        At each cell the next step is the first direction (in Direction
        order) of the solution piece that leads to an unvisited in-bounds
        solution cell other than the one just left.

        Returns:
            Chain of (x, y) starting at start; ends at end for a valid solution
        """
        path = [self.start]
        seen = {self.start}
        previous: Optional[Position] = None
        x, y = self.start

        while (x, y) != self.end:
            forward = None
            for direction in Direction:
                if direction not in directions_of(self.solution[y][x]):
                    continue
                nx, ny = direction.step(x, y)
                if not self.in_bounds(nx, ny) or (nx, ny) == previous:
                    continue
                if self.solution[ny][nx] is TrackType.EMPTY or (nx, ny) in seen:
                    continue
                forward = (nx, ny)
                break
            if forward is None:
                break
            previous = (x, y)
            x, y = forward
            path.append(forward)
            seen.add(forward)
        return path

    def matches_solution(self) -> bool:
        return not self.diff()

    def to_text(self, solution: bool = False) -> str:
        """
        Render the board as text for logs and debugging.

        Row clue counts trail each row, column counts (mod 10) follow the
        grid, and the last line names the endpoints.
        """
        lines = []
        for y in range(self.height):
            glyphs = []
            for x in range(self.width):
                track = self.solution[y][x] if solution else self.cells[y][x].type
                glyphs.append(track.symbol)
            lines.append("".join(glyphs) + f" {self.row_clues[y]}")
        lines.append("".join(str(count % 10) for count in self.col_clues))
        sx, sy = self.start
        ex, ey = self.end
        lines.append(f"S=({sx},{sy}) E=({ex},{ey})")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, start={self.start}, end={self.end})"
