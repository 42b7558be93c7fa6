"""
Tests for puzzle generation

Checks every generated puzzle for:
1. A single simple path from the left edge to the bottom row
2. Matching directions between consecutive path cells
3. Clue counts and locked start/end cells
4. Configuration errors and retry exhaustion

Usage:
    pytest tests/test_generator.py
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracks.engine import (
    Board,
    Direction,
    GenerationError,
    GenerationMode,
    PuzzleGenerator,
    TrackType,
    directions_of,
    generate_board,
)

SIZES = [(4, 4), (6, 9), (9, 6), (12, 12)]
SEEDS = [1, 7, 42, 2024]


def direction_between(a, b):
    for direction in Direction:
        if direction.step(*a) == b:
            return direction
    return None


def assert_valid_solution(board: Board):
    path = board.trace_solution()
    solution_cells = {
        (x, y)
        for y in range(board.height)
        for x in range(board.width)
        if board.solution[y][x] is not TrackType.EMPTY
    }

    assert path[0] == board.start
    assert path[-1] == board.end
    assert len(path) >= 2
    assert len(set(path)) == len(path)
    assert set(path) == solution_cells

    assert board.start[0] == 0
    assert board.end[1] == board.height - 1
    sx, sy = board.start
    ex, ey = board.end
    assert Direction.LEFT in directions_of(board.solution[sy][sx])
    assert Direction.DOWN in directions_of(board.solution[ey][ex])

    for a, b in zip(path, path[1:]):
        direction = direction_between(a, b)
        assert direction is not None
        assert direction in directions_of(board.solution[a[1]][a[0]])
        assert direction.opposite in directions_of(board.solution[b[1]][b[0]])


@pytest.mark.parametrize("mode", list(GenerationMode))
@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("seed", SEEDS)
def test_generated_path_is_valid(mode, size, seed):
    width, height = size
    board = generate_board(width, height, 35, rng=random.Random(seed), mode=mode)
    assert (board.width, board.height) == size
    assert_valid_solution(board)


@pytest.mark.parametrize("seed", SEEDS)
def test_clue_counts(seed):
    board = generate_board(8, 8, 35, rng=random.Random(seed))
    path = board.trace_solution()
    for y in range(board.height):
        assert board.row_clues[y] == sum(1 for _, py in path if py == y)
    for x in range(board.width):
        assert board.col_clues[x] == sum(1 for px, _ in path if px == x)
    assert sum(board.row_clues) == sum(board.col_clues) == len(path)


@pytest.mark.parametrize("seed", SEEDS)
def test_clues_show_solution(seed):
    board = generate_board(8, 8, 35, rng=random.Random(seed))
    for x, y in (board.start, board.end):
        assert board.cells[y][x].is_clue
        assert board.cells[y][x].type is board.solution[y][x]

    for y in range(board.height):
        for x in range(board.width):
            cell = board.cells[y][x]
            if cell.is_clue:
                assert cell.type is board.solution[y][x]
                assert cell.type is not TrackType.EMPTY
            else:
                assert cell.type is TrackType.EMPTY
    assert len(board.history) == 0


def test_clue_percent_extremes():
    none = generate_board(8, 8, 0, rng=random.Random(3))
    clues = [(x, y) for y in range(8) for x in range(8) if none.cells[y][x].is_clue]
    assert sorted(clues) == sorted({none.start, none.end})

    full = generate_board(8, 8, 100, rng=random.Random(3))
    assert full.matches_solution()
    assert full.is_solved()


def test_unsolved_until_revealed(generated_board):
    board = generated_board.clone()
    board.reveal_solution()
    assert board.is_solved()


def test_same_seed_same_puzzle():
    a = generate_board(10, 10, 35, rng=random.Random(99))
    b = generate_board(10, 10, 35, rng=random.Random(99))
    assert a.solution_types() == b.solution_types()
    assert a.current_types() == b.current_types()
    assert (a.start, a.end) == (b.start, b.end)


@pytest.mark.parametrize("width,height,clues", [
    (3, 8, 35),
    (8, 3, 35),
    (8, 8, -1),
    (8, 8, 101),
])
def test_invalid_config(width, height, clues):
    with pytest.raises(ValueError):
        generate_board(width, height, clues)


def test_generator_reports_failed_draw():
    generator = PuzzleGenerator(rng=random.Random(0), max_tries=1)
    assert generator.generate(Board(6, 6), 35) is False


def test_retry_budget_exhausted():
    with pytest.raises(GenerationError):
        generate_board(6, 6, 35, attempts=3, rng=random.Random(0), max_tries=1)
