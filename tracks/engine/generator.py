"""
Generator Module - Random solution paths and clue selection.

A puzzle is built by a randomized depth-first walk from a cell on the left
edge down to the bottom row, converted into track pieces, and seeded with
a random subset of its cells as locked clues.

The walk is an explicit stack search with a shuffled candidate list per
cell, a visited bitmap and undo on dead ends. A shared try budget turns
pathological draws into a failed attempt; callers retry with fresh
randomness (see generate_board).
"""

import logging
import random
from enum import Enum
from typing import Iterator, List, Optional, Set, Tuple

from .board import Board
from .track import Direction, TrackType, type_from_directions

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

MIN_SIZE = 4
DEFAULT_MAX_TRIES = 20000
DEFAULT_ATTEMPTS = 50

# Column offsets tried when joining the top half to the bottom half
SPLICE_OFFSETS = (0, 1, -1, 2, -2)

_STEPS: Tuple[Position, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class GenerationMode(Enum):
    """
    Path construction strategy.

    SINGLE walks the whole grid in one search. SPLIT walks the top half,
    splices across the midpoint, then walks the bottom half, which keeps
    each search small on larger boards.
    """
    SINGLE = "single"
    SPLIT = "split"


class GenerationError(RuntimeError):
    """Raised when every generation attempt in the retry budget failed."""


def validate_config(width: int, height: int, clue_percent: int) -> None:
    """
    Reject configurations the generator cannot work with.

    Raises:
        ValueError: If width or height is below MIN_SIZE or clue_percent
            is outside [0, 100]
    """
    if width < MIN_SIZE or height < MIN_SIZE:
        raise ValueError(
            f"Board must be at least {MIN_SIZE}x{MIN_SIZE}, got {width}x{height}"
        )
    if not 0 <= clue_percent <= 100:
        raise ValueError(f"Clue percent must be in [0, 100], got {clue_percent}")


class PuzzleGenerator:
    """
    Builds a solution path, its track pieces and the clue layout.

    Attributes:
        rng: Random source; inject a seeded Random for reproducible puzzles
        max_tries: Cells the walk may enter per attempt before giving up
        mode: Path construction strategy
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_tries: int = DEFAULT_MAX_TRIES,
        mode: GenerationMode = GenerationMode.SPLIT,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.max_tries = max_tries
        self.mode = mode
        self._tries = 0

    def generate(self, board: Board, clue_percent: int) -> bool:
        """
        Generate a fresh puzzle into board.

        Args:
            board: Board to overwrite; its width and height set the size
            clue_percent: Chance (0-100) that each inner path cell is a clue

        Returns:
            True on success, False if this random draw failed and the
            caller should retry

        Raises:
            ValueError: If the board size or clue_percent is invalid
        """
        validate_config(board.width, board.height, clue_percent)
        board.reset()

        start = (0, self.rng.randrange(board.height))
        self._tries = 0
        path = self._build_path(board.width, board.height, start)
        if path is None:
            logger.debug(f"Walk failed after {self._tries} tries")
            return False

        self._write_solution(board, path)
        self._seed_clues(board, clue_percent)
        board.compute_clue_counts()
        board.history.clear()
        board.rebuild_graph()
        return True

    # ------------------------------------------------------------------
    # Path construction
    # ------------------------------------------------------------------

    def _build_path(self, width: int, height: int, start: Position) -> Optional[List[Position]]:
        visited = [[False] * width for _ in range(height)]
        path: List[Position] = []
        bottom = height - 1
        mid = (height - 1) // 2

        if self.mode is GenerationMode.SPLIT and start[1] <= mid:
            if not self._walk(start, visited, path, 0, mid):
                return None
            if not self._splice(visited, path, mid, bottom):
                return None
        elif not self._walk(start, visited, path, 0, bottom):
            return None

        if not self._extend_down(visited, path, bottom):
            return None
        return path

    def _shuffled_steps(self) -> Iterator[Position]:
        steps = list(_STEPS)
        self.rng.shuffle(steps)
        return iter(steps)

    def _enter(self, cell: Position, visited: List[List[bool]], path: List[Position]) -> bool:
        """Mark cell visited and append it, unless the try budget is spent."""
        self._tries += 1
        if self._tries > self.max_tries:
            return False
        x, y = cell
        visited[y][x] = True
        path.append(cell)
        return True

    def _walk(
        self,
        root: Position,
        visited: List[List[bool]],
        path: List[Position],
        y_min: int,
        y_max: int,
    ) -> bool:
        """
        Randomized depth-first walk from root to any cell in row y_max.

        Rows are bounded to [y_min, y_max]; columns span the whole board.
        The root itself never counts as reaching the terminal row. On
        failure every cell this walk added is removed again.
        """
        width = len(visited[0])
        if not self._enter(root, visited, path):
            return False
        frames = [self._shuffled_steps()]

        while frames:
            x, y = path[-1]
            for dx, dy in frames[-1]:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < width and y_min <= ny <= y_max) or visited[ny][nx]:
                    continue
                if not self._enter((nx, ny), visited, path):
                    return False
                if ny == y_max:
                    return True
                frames.append(self._shuffled_steps())
                break
            else:
                # dead end
                frames.pop()
                px, py = path.pop()
                visited[py][px] = False
        return False

    def _splice(self, visited: List[List[bool]], path: List[Position], mid: int, bottom: int) -> bool:
        """
        Join the finished top half to a walk through the bottom half.

        The bottom walk starts at row mid + 1 below the last top cell,
        shifted by each of SPLICE_OFFSETS in turn. A shifted start is
        reached by a straight bridge along row mid.
        """
        width = len(visited[0])
        hx, _ = path[-1]

        for offset in SPLICE_OFFSETS:
            nx = hx + offset
            if not 0 <= nx < width or visited[mid + 1][nx]:
                continue
            bridge = self._bridge(visited, hx, nx, mid)
            if bridge is None:
                continue

            for bx, by in bridge:
                visited[by][bx] = True
                path.append((bx, by))
            if self._walk((nx, mid + 1), visited, path, mid + 1, bottom):
                return True
            if self._tries > self.max_tries:
                return False
            for bx, by in reversed(bridge):
                path.pop()
                visited[by][bx] = False
        return False

    @staticmethod
    def _bridge(visited: List[List[bool]], from_x: int, to_x: int, row: int) -> Optional[List[Position]]:
        """Cells strictly after from_x up to to_x on row, or None if any is taken."""
        step = 1 if to_x > from_x else -1
        cells = [(x, row) for x in range(from_x + step, to_x + step, step)]
        if any(visited[y][x] for x, y in cells):
            return None
        return cells

    @staticmethod
    def _extend_down(visited: List[List[bool]], path: List[Position], bottom: int) -> bool:
        """Run straight down from the last cell until the bottom row."""
        x, y = path[-1]
        while y < bottom and not visited[y + 1][x]:
            y += 1
            visited[y][x] = True
            path.append((x, y))
        return y == bottom

    # ------------------------------------------------------------------
    # Pieces and clues
    # ------------------------------------------------------------------

    @staticmethod
    def _write_solution(board: Board, path: List[Position]) -> None:
        """Convert the coordinate path into solution track types."""
        last = len(path) - 1
        for i, cell in enumerate(path):
            directions: Set[Direction] = set()
            directions.add(Direction.LEFT if i == 0 else _direction_towards(cell, path[i - 1]))
            directions.add(Direction.DOWN if i == last else _direction_towards(cell, path[i + 1]))
            x, y = cell
            board.solution[y][x] = type_from_directions(directions)
        board.set_endpoints(path[0], path[-1])

    def _seed_clues(self, board: Board, clue_percent: int) -> None:
        """Lock start, end and a random share of the remaining path cells."""
        for x, y in (board.start, board.end):
            board.cells[y][x].type = board.solution[y][x]
            board.cells[y][x].is_clue = True

        for y in range(board.height):
            for x in range(board.width):
                if board.solution[y][x] is TrackType.EMPTY:
                    continue
                if (x, y) in (board.start, board.end):
                    continue
                if self.rng.randrange(100) < clue_percent:
                    board.cells[y][x].type = board.solution[y][x]
                    board.cells[y][x].is_clue = True


def _direction_towards(cell: Position, other: Position) -> Direction:
    for direction in Direction:
        if direction.step(*cell) == other:
            return direction
    raise ValueError(f"Cells {cell} and {other} are not adjacent")


def generate_board(
    width: int,
    height: int,
    clue_percent: int,
    attempts: int = DEFAULT_ATTEMPTS,
    rng: Optional[random.Random] = None,
    mode: GenerationMode = GenerationMode.SPLIT,
    max_tries: int = DEFAULT_MAX_TRIES,
) -> Board:
    """
    Generate a puzzle, retrying failed random draws.

    Args:
        width: Columns (>= 4)
        height: Rows (>= 4)
        clue_percent: Clue density 0-100
        attempts: Retry budget
        rng: Random source shared by all attempts
        mode: Path construction strategy
        max_tries: Walk budget per attempt

    Returns:
        Generated Board

    Raises:
        ValueError: If the configuration is invalid
        GenerationError: If every attempt failed
    """
    validate_config(width, height, clue_percent)
    generator = PuzzleGenerator(rng=rng, max_tries=max_tries, mode=mode)
    board = Board(width, height)

    for attempt in range(1, attempts + 1):
        if generator.generate(board, clue_percent):
            logger.info(
                f"Generated {width}x{height} puzzle on attempt {attempt}: "
                f"{sum(board.row_clues)} path cells, start={board.start}, end={board.end}"
            )
            return board
        logger.debug(f"Generation attempt {attempt}/{attempts} failed")

    logger.error(f"Could not generate a {width}x{height} puzzle in {attempts} attempts")
    raise GenerationError(
        f"Couldn't generate a {width}x{height} puzzle after {attempts} attempts; "
        f"try a different size"
    )
