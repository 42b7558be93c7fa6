"""
Tests for board state, undo history and cloning

Usage:
    pytest tests/test_board.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracks.engine import Board, Move, MoveHistory, TrackType, next_type

E = TrackType.EMPTY
H = TrackType.HORIZONTAL
V = TrackType.VERTICAL


def strip():
    return Board.from_types([[H, H, H]], start=(0, 0), end=(2, 0))


def test_from_types_flags_endpoints():
    board = strip()
    assert board.cells[0][0].is_start
    assert board.cells[0][2].is_end
    assert board.row_clues == [3]
    assert board.col_clues == [1, 1, 1]


def test_move_then_undo_restores_cell_and_win_state():
    board = strip()
    assert board.is_solved()

    board.apply_player_move(1, 0)
    assert board.cells[0][1].type is V
    assert not board.is_solved()
    assert len(board.history) == 1

    board.undo()
    assert board.cells[0][1].type is H
    assert not board.cells[0][1].is_clue
    assert board.is_solved()
    assert len(board.history) == 0


def test_undo_restores_clue_flag():
    board = strip()
    board.cells[0][1].is_clue = True
    board.place(1, 0, V, is_clue=False)
    assert not board.cells[0][1].is_clue

    board.undo()
    assert board.cells[0][1].type is H
    assert board.cells[0][1].is_clue
    assert board.is_solved()


def test_moves_outside_board_are_ignored():
    board = strip()
    for x, y in ((-1, 0), (0, -1), (3, 0), (0, 1)):
        board.apply_player_move(x, y)
    assert board.current_types() == ((H, H, H),)
    assert len(board.history) == 0


def test_clear_move():
    board = strip()
    board.apply_player_move(1, 0, cycle_forward=False)
    assert board.cells[0][1].type is E


def test_clue_cells_are_locked():
    board = strip()
    board.cells[0][1].is_clue = True
    board.apply_player_move(1, 0)
    assert board.cells[0][1].type is H
    assert len(board.history) == 0


def test_undo_on_empty_history_is_noop():
    board = strip()
    board.undo()
    assert board.current_types() == ((H, H, H),)


def test_reveal_blocks_moves_and_undo(small_board):
    small_board.apply_player_move(2, 2)
    small_board.reveal_solution()
    assert small_board.matches_solution()
    assert small_board.is_solved()

    small_board.apply_player_move(1, 1)
    assert small_board.cells[1][1].type is TrackType.SOUTH_WEST
    small_board.undo()
    assert small_board.matches_solution()


def test_restart(small_board):
    small_board.apply_player_move(1, 1)
    small_board.apply_player_move(3, 3)
    small_board.restart()
    assert len(small_board.history) == 0
    assert not small_board.revealed
    for y in range(small_board.height):
        for x in range(small_board.width):
            cell = small_board.cells[y][x]
            expected = small_board.solution[y][x] if cell.is_clue else E
            assert cell.type is expected


def test_diff_is_row_major(small_board):
    assert small_board.diff() == [(1, 1), (1, 2)]


def test_trace_solution(small_board):
    assert small_board.trace_solution() == [(0, 1), (1, 1), (1, 2), (1, 3)]


def test_clone_is_independent(generated_board):
    copy = generated_board.clone()
    assert copy.current_types() == generated_board.current_types()
    assert copy.solution_types() == generated_board.solution_types()
    assert copy.row_clues == generated_board.row_clues
    assert len(copy.history) == 0

    x, y = next(
        (x, y)
        for y in range(copy.height)
        for x in range(copy.width)
        if not copy.cells[y][x].is_clue
    )
    before = generated_board.cells[y][x].type
    solution_before = generated_board.solution[0][0]
    clues_before = list(generated_board.row_clues)
    copy.apply_player_move(x, y)
    copy.solution[0][0] = next_type(solution_before)
    copy.row_clues[0] += 1

    assert generated_board.cells[y][x].type is before
    assert generated_board.solution[0][0] is solution_before
    assert generated_board.row_clues == clues_before
    assert len(generated_board.history) == 0


def test_move_history_order():
    history = MoveHistory()
    assert history.pop() is None
    assert not history
    first = Move(0, 0, E, False)
    second = Move(1, 0, H, True)
    history.push(first)
    history.push(second)
    assert history.peek() is second
    assert list(history) == [second, first]
    assert history.pop() is second
    assert len(history) == 1
    assert second.position == (1, 0)


def test_to_text(small_board):
    text = small_board.to_text(solution=True)
    lines = text.splitlines()
    assert lines[1].startswith("─┐··")
    assert lines[-1] == "S=(0,1) E=(1,3)"
