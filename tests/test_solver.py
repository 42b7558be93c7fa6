"""
Tests for solver strategies

Covers:
1. Factory registry and metadata
2. Every strategy reproduces the solution and connects start to end
3. Play orders of each strategy on a hand-built puzzle
4. Backtracking clue constraints and its chain-order fallback
5. Metrics accumulation

Usage:
    pytest tests/test_solver.py
"""

import random
import sys
from collections import Counter
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracks.engine import (
    create_strategy,
    generate_board,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
)
from tracks.engine.strategies import BacktrackingStrategy

from conftest import make_small_board

STRATEGIES = ["greedy", "divide_conquer", "dynamic_programming", "backtracking"]


def placements(board):
    """Positions placed so far, oldest first."""
    return [move.position for move in reversed(list(board.history))]


def test_registry():
    names = get_strategy_names()
    for name in STRATEGIES:
        assert name in names
    assert get_default_strategy_name() == "greedy"

    info = {entry["name"]: entry for entry in get_strategy_info()}
    assert info["divide_conquer"]["display_name"] == "Divide & Conquer"
    assert info["divide_conquer"]["time_complexity"] == "O(N log N)"
    for entry in info.values():
        assert entry["description"]
        assert entry["space_complexity"]


def test_unknown_strategy(small_board):
    with pytest.raises(ValueError, match="Unknown strategy"):
        create_strategy("simulated_annealing", small_board)


@pytest.mark.parametrize("name", STRATEGIES)
@pytest.mark.parametrize("seed", [5, 11, 23])
def test_strategy_solves_generated_board(name, seed):
    board = generate_board(8, 8, 35, rng=random.Random(seed))
    missing = len(board.diff())

    solver = create_strategy(name, board)
    applied = solver.run()

    assert applied == missing
    assert solver.total_moves == missing
    assert board.current_types() == board.solution_types()
    assert board.is_solved()
    assert solver.step() is False


@pytest.mark.parametrize("name", STRATEGIES)
def test_placements_clear_clue_flag(name):
    board = make_small_board()
    solver = create_strategy(name, board)
    solver.run()
    for x, y in placements(board):
        assert not board.cells[y][x].is_clue


def test_greedy_fills_from_the_end():
    board = make_small_board()
    solver = create_strategy("greedy", board)
    solver.run()
    assert placements(board) == [(1, 2), (1, 1)]


def test_divide_conquer_midpoint_order():
    board = make_small_board()
    solver = create_strategy("divide_conquer", board)
    solver.run()
    assert solver.play_order == [(1, 1), (0, 1), (1, 2), (1, 3)]
    # start and end are clues and already match
    assert placements(board) == [(1, 1), (1, 2)]


def test_dynamic_programming_follows_chain():
    board = make_small_board()
    solver = create_strategy("dynamic_programming", board)
    solver.run()
    assert solver.play_order == board.trace_solution()
    assert placements(board) == [(1, 1), (1, 2)]


def test_backtracking_respects_clue_counts(generated_board):
    solver = create_strategy("backtracking", generated_board)
    solver.run()
    assert not solver.fell_back

    rows = Counter(y for _, y in solver.play_order)
    cols = Counter(x for x, _ in solver.play_order)
    board = generated_board
    assert [rows[y] for y in range(board.height)] == board.row_clues
    assert [cols[x] for x in range(board.width)] == board.col_clues


def test_backtracking_falls_back_to_chain_order():
    board = make_small_board()
    # no assignment can satisfy a row that claims zero cells
    board.row_clues[1] = 0
    solver = BacktrackingStrategy(board)
    solver.run()
    assert solver.fell_back
    assert solver.play_order == board.trace_solution()
    assert board.matches_solution()
    assert board.is_solved()


def test_backtracking_node_budget_triggers_fallback(generated_board):
    solver = create_strategy("backtracking", generated_board, max_nodes=1)
    solver.run()
    assert solver.fell_back
    assert generated_board.is_solved()


@pytest.mark.parametrize("name", STRATEGIES)
def test_metrics_accumulate(name, generated_board):
    solver = create_strategy(name, generated_board, max_log=3)
    totals = []
    while solver.step():
        metrics = solver.metrics
        totals.append((metrics.total_ops, metrics.total_time_ms, metrics.total_moves))

    for before, after in zip(totals, totals[1:]):
        assert after[0] >= before[0]
        assert after[1] >= before[1]
        assert after[2] == before[2] + 1

    final = solver.metrics
    assert final.total_ops > 0
    assert final.algorithm_name == solver.display_name
    assert len(final.step_log) == min(3, final.total_moves)
    assert final.recent_steps(2) == list(final.step_log)[-2:]


def test_metrics_snapshot_is_read_only(small_board):
    solver = create_strategy("greedy", small_board)
    solver.step()
    snapshot = solver.metrics
    snapshot.total_moves = 100
    snapshot.step_log.clear()
    assert solver.total_moves == 1
    assert len(solver.metrics.step_log) == 1


def test_finished_step_counts_no_move(small_board):
    solver = create_strategy("dynamic_programming", small_board)
    solver.run()
    moves = solver.total_moves
    assert solver.step() is False
    assert solver.total_moves == moves
