"""
Shared fixtures for the Tracks test suites.
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracks.engine import Board, TrackType, generate_board


E = TrackType.EMPTY
H = TrackType.HORIZONTAL
V = TrackType.VERTICAL
SW = TrackType.SOUTH_WEST


def small_solution():
    """
    4x4 solution: start (0,1) runs right, turns down, ends at (1,3).

        . . . .
        ─ ┐ . .
        . │ . .
        . │ . .
    """
    return [
        [E, E, E, E],
        [H, SW, E, E],
        [E, V, E, E],
        [E, V, E, E],
    ]


def make_small_board():
    """Small puzzle with only the start and end cells filled in as clues."""
    solution = small_solution()
    rows = [[E] * 4 for _ in range(4)]
    rows[1][0] = H
    rows[3][1] = V
    board = Board.from_types(rows, start=(0, 1), end=(1, 3), solution=solution)
    for x, y in (board.start, board.end):
        board.cells[y][x].is_clue = True
    return board


@pytest.fixture
def small_board():
    return make_small_board()


@pytest.fixture
def generated_board():
    """Seeded 8x8 puzzle with medium clue density."""
    return generate_board(8, 8, 35, rng=random.Random(1234))
