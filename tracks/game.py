"""
Game Session Module - Player and computer boards for one puzzle.

A session keeps three independent boards cloned from one generated puzzle:
a pristine original that is never touched, the player's board, and the
computer's board driven by a solver strategy. The boards share no mutable
state, so the player and the computer can race on the same puzzle.

For the puzzle engine itself, see the tracks.engine package.
"""

import logging
import random
import time
from enum import Enum, auto
from typing import Any, Dict, Optional

from tracks.engine import (
    Board,
    GenerationMode,
    SolverStrategy,
    create_strategy,
    generate_board,
    get_default_strategy_name,
)
from tracks.settings import DEFAULT_SETTINGS, clue_percent_for

logger = logging.getLogger(__name__)


__all__ = [
    "ComputerState",
    "Winner",
    "GameSession",
]


class ComputerState(Enum):
    """
    Progress of the computer solver.

    States:
        READY: Solver built, no step taken yet
        SOLVING: At least one step taken, board not yet connected
        SOLVED: Start and end are connected on the computer board
        FINISHED: Solver ran out of placements without connecting
    """
    READY = auto()
    SOLVING = auto()
    SOLVED = auto()
    FINISHED = auto()


class Winner(Enum):
    """Outcome of the player-versus-computer race."""
    PLAYER = auto()
    COMPUTER = auto()
    TIE = auto()
    NONE = auto()


class GameSession:
    """
    One puzzle shared by a player and a computer solver.

    Flow:
        new_game() -> generate puzzle -> clone player / computer boards
        player_*() mutate the player board
        step_computer() advances the solver one placement at a time
        restart_computer() re-clones the pristine board for another run
    """

    def __init__(self, settings: Optional[Dict[str, Any]] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize an empty session.

        Args:
            settings: Settings dictionary (see tracks.settings); defaults used
                for missing keys
            rng: Random source for generation; seeded from settings["seed"]
                when omitted
        """
        self.settings = DEFAULT_SETTINGS.copy()
        if settings:
            self.settings.update(settings)

        self._rng = rng if rng is not None else random.Random(self.settings.get("seed"))
        self._strategy_name = self.settings.get("strategy_name") or get_default_strategy_name()

        self._original: Optional[Board] = None
        self._player: Optional[Board] = None
        self._computer: Optional[Board] = None
        self._solver: Optional[SolverStrategy] = None
        self._computer_state = ComputerState.READY

        self._player_moves = 0
        self._player_started = 0.0
        self._player_solved_at: Optional[float] = None
        self._computer_started: Optional[float] = None
        self._computer_solved_at: Optional[float] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def original(self) -> Optional[Board]:
        """Pristine puzzle as generated."""
        return self._original

    @property
    def player_board(self) -> Optional[Board]:
        return self._player

    @property
    def computer_board(self) -> Optional[Board]:
        return self._computer

    @property
    def solver(self) -> Optional[SolverStrategy]:
        return self._solver

    @property
    def strategy_name(self) -> str:
        return self._strategy_name

    @property
    def computer_state(self) -> ComputerState:
        return self._computer_state

    @property
    def player_moves(self) -> int:
        return self._player_moves

    @property
    def player_solved(self) -> bool:
        return self._player_solved_at is not None

    @property
    def computer_solved(self) -> bool:
        return self._computer_state == ComputerState.SOLVED

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def new_game(self, width: Optional[int] = None, height: Optional[int] = None,
                 clue_percent: Optional[int] = None,
                 strategy_name: Optional[str] = None) -> Board:
        """
        Generate a new puzzle and set up both sides.

        Arguments default to the session settings.

        Returns:
            The pristine generated board

        Raises:
            ValueError: If the configuration or strategy name is invalid
            GenerationError: If generation failed for every attempt
        """
        width = width if width is not None else self.settings["width"]
        height = height if height is not None else self.settings["height"]
        if clue_percent is None:
            clue_percent = clue_percent_for(self.settings["difficulty"])
        if strategy_name is not None:
            self._strategy_name = strategy_name

        board = generate_board(
            width,
            height,
            clue_percent,
            attempts=self.settings["generation_attempts"],
            rng=self._rng,
            mode=GenerationMode(self.settings["generation_mode"]),
        )

        self._original = board
        self._player = board.clone()
        self._player_moves = 0
        self._player_started = time.perf_counter()
        self._player_solved_at = None
        self._reset_computer()

        logger.info(
            f"New {width}x{height} game, {clue_percent}% clues, "
            f"algorithm: {self._solver.display_name}"
        )
        return board

    def set_strategy(self, strategy_name: str) -> None:
        """
        Change the computer's algorithm and reset its board.

        Raises:
            ValueError: If the strategy name is unknown
        """
        previous = self._strategy_name
        self._strategy_name = strategy_name
        if self._original is None:
            return
        try:
            self._reset_computer()
        except ValueError:
            self._strategy_name = previous
            raise
        logger.info(f"Strategy changed to: {strategy_name}")

    def _reset_computer(self) -> None:
        self._computer = self._original.clone()
        self._solver = create_strategy(self._strategy_name, self._computer)
        self._computer_state = ComputerState.READY
        self._computer_started = None
        self._computer_solved_at = None

    # ------------------------------------------------------------------
    # Player side
    # ------------------------------------------------------------------

    def player_move(self, x: int, y: int, cycle_forward: bool = True) -> bool:
        """
        Apply a player edit.

        Ignored once the player has solved the puzzle; the board itself
        ignores clue cells and revealed boards.

        Returns:
            True if the player board is solved after the move
        """
        if self._player is None or self.player_solved:
            return self.player_solved

        history_before = len(self._player.history)
        self._player.apply_player_move(x, y, cycle_forward)
        if len(self._player.history) != history_before:
            self._player_moves += 1

        if self._player.is_solved():
            self._player_solved_at = time.perf_counter()
            logger.info(f"Player solved the puzzle in {self._player_moves} moves")
        return self.player_solved

    def player_undo(self) -> None:
        if self._player is None or self.player_solved:
            return
        self._player.undo()

    def player_restart(self) -> None:
        if self._player is None:
            return
        self._player.restart()
        self._player_solved_at = None

    def reveal_solution(self) -> None:
        if self._player is None:
            return
        self._player.reveal_solution()

    def check_player(self) -> bool:
        """Win check on the player board."""
        return self._player is not None and self._player.is_solved()

    # ------------------------------------------------------------------
    # Computer side
    # ------------------------------------------------------------------

    def step_computer(self) -> bool:
        """
        Advance the computer solver by one placement.

        Returns:
            True while the computer should keep stepping
        """
        if self._solver is None:
            return False
        if self._computer_state in (ComputerState.SOLVED, ComputerState.FINISHED):
            return False

        if self._computer_started is None:
            self._computer_started = time.perf_counter()
            logger.info(f"State[READY]: {self._solver.display_name} is solving")
        self._computer_state = ComputerState.SOLVING

        moved = self._solver.step()
        if self._computer.is_solved():
            self._computer_solved_at = time.perf_counter()
            self._computer_state = ComputerState.SOLVED
            logger.info(
                f"State[SOLVING]: computer solved in {self._solver.total_moves} steps, "
                f"transitioning to SOLVED"
            )
            return False
        if not moved:
            self._computer_state = ComputerState.FINISHED
            logger.info("State[SOLVING]: solver finished without connecting start and end")
            return False
        return True

    def run_computer(self, max_steps: Optional[int] = None) -> ComputerState:
        """Step the computer until it stops (or max_steps placements)."""
        steps = 0
        while (max_steps is None or steps < max_steps) and self.step_computer():
            steps += 1
        return self._computer_state

    def restart_computer(self) -> None:
        """Re-clone the pristine puzzle and build a fresh solver."""
        if self._original is None:
            return
        self._reset_computer()
        logger.info(f"Computer board reset, algorithm: {self._solver.display_name}")

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def winner(self) -> Winner:
        """Compare solve times; a side that has not solved cannot win."""
        player_time = self._elapsed(self._player_started, self._player_solved_at)
        computer_time = self._elapsed(self._computer_started, self._computer_solved_at)

        if player_time is not None and computer_time is not None:
            if player_time < computer_time:
                return Winner.PLAYER
            if computer_time < player_time:
                return Winner.COMPUTER
            return Winner.TIE
        if player_time is not None:
            return Winner.PLAYER
        if computer_time is not None:
            return Winner.COMPUTER
        return Winner.NONE

    @staticmethod
    def _elapsed(started: Optional[float], finished: Optional[float]) -> Optional[float]:
        if started is None or finished is None:
            return None
        return finished - started

    def analysis(self) -> Dict[str, Any]:
        """
        Summary of the session for external presentation.

        Returns:
            Dict with board size, player and computer results, the metrics
            snapshot and the winner
        """
        board = self._original
        metrics = self._solver.metrics if self._solver is not None else None
        return {
            "width": board.width if board else 0,
            "height": board.height if board else 0,
            "cells": board.width * board.height if board else 0,
            "player_solved": self.player_solved,
            "player_moves": self._player_moves,
            "player_time_s": self._elapsed(self._player_started, self._player_solved_at),
            "computer_state": self._computer_state.name,
            "computer_solved": self.computer_solved,
            "computer_steps": metrics.total_moves if metrics else 0,
            "computer_time_s": self._elapsed(self._computer_started, self._computer_solved_at),
            "metrics": metrics,
            "winner": self.winner().name,
        }
