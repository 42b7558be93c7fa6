"""
Tests for the timer-driven solver worker

Ticks are driven directly instead of through a running event loop.

Usage:
    pytest tests/test_worker.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

QtCore = pytest.importorskip("PyQt5.QtCore")

from tracks.game import ComputerState, GameSession
from tracks.solver_worker import SolverWorker


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app


@pytest.fixture
def session():
    game = GameSession({"seed": 77, "width": 6, "height": 6})
    game.new_game()
    return game


def test_ticks_until_solved(qt_app, session):
    worker = SolverWorker(session, interval_ms=0)
    steps = []
    finished = []
    worker.step_completed.connect(lambda moves, solved: steps.append((moves, solved)))
    worker.finished.connect(finished.append)

    for _ in range(session.original.width * session.original.height + 1):
        if finished:
            break
        worker.tick()

    assert finished == [True]
    assert steps[-1] == (session.solver.total_moves, True)
    assert [moves for moves, _ in steps] == list(range(1, len(steps) + 1))
    assert session.computer_state is ComputerState.SOLVED


def test_start_and_stop(qt_app, session):
    worker = SolverWorker(session, interval_ms=500)
    assert worker.interval_ms == 500
    worker.start()
    assert worker.is_running()
    worker.stop()
    assert not worker.is_running()


def test_start_without_game(qt_app):
    worker = SolverWorker(GameSession())
    worker.start()
    assert not worker.is_running()


def test_set_interval(qt_app, session):
    worker = SolverWorker(session)
    assert worker.interval_ms == SolverWorker.DEFAULT_INTERVAL_MS
    worker.set_interval(-5)
    assert worker.interval_ms == 0


def test_step_error_is_reported(qt_app, session, monkeypatch):
    worker = SolverWorker(session, interval_ms=0)
    errors = []
    worker.error_occurred.connect(errors.append)

    def broken():
        raise RuntimeError("boom")

    monkeypatch.setattr(session, "step_computer", broken)
    worker.start()
    worker.tick()
    assert errors == ["boom"]
    assert not worker.is_running()
