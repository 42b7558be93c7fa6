"""
Tracks Puzzle - Entry Point

Generates a puzzle and lets the selected computer algorithm solve it one
placement at a time, paced by a Qt timer, then logs the analysis.

Example:
    python main.py
    python main.py --width 10 --height 10 --strategy backtracking --seed 7
    python main.py --list-strategies
"""

import sys
import logging
import argparse
from typing import Optional

from PyQt5.QtCore import QCoreApplication

from tracks.engine import GenerationError, get_strategy_info, get_strategy_names
from tracks.game import GameSession
from tracks.settings import (
    DIFFICULTY_CLUE_PERCENT,
    clue_percent_for,
    load_settings,
    save_settings,
)
from tracks.solver_worker import SolverWorker


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging - output to console and optionally a file."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


class Application:
    """
    Command line application controller.

    Owns the game session and the worker, and connects the worker's
    signals to logging and shutdown.
    """

    def __init__(self, settings: dict):
        self.settings = settings
        self.session = GameSession(settings)
        self.worker: Optional[SolverWorker] = None
        self.exit_code = 0

    def setup(self) -> bool:
        """Generate the puzzle and create the worker."""
        try:
            board = self.session.new_game()
        except (ValueError, GenerationError) as e:
            logger.error(f"Could not start game: {e}")
            self.exit_code = 1
            return False

        logger.debug(f"Puzzle:\n{board.to_text()}")
        logger.debug(f"Solution:\n{board.to_text(solution=True)}")

        self.worker = SolverWorker(self.session, self.settings["step_interval_ms"])
        self.worker.step_completed.connect(self._on_step)
        self.worker.finished.connect(self._on_finished)
        self.worker.error_occurred.connect(self._on_error)
        return True

    def _on_step(self, total_moves: int, solved: bool):
        metrics = self.session.solver.metrics
        logger.debug(
            f"Step {total_moves}: {metrics.step_time_ms:.3f} ms, "
            f"{metrics.step_ops} ops, solved={solved}"
        )

    def _on_finished(self, solved: bool):
        self.log_analysis()
        if not solved:
            self.exit_code = 2
        QCoreApplication.quit()

    def _on_error(self, error_msg: str):
        logger.error(f"Worker error: {error_msg}")
        self.exit_code = 1
        QCoreApplication.quit()

    def log_analysis(self):
        """Log the session analysis."""
        report = self.session.analysis()
        metrics = report["metrics"]
        logger.info(
            f"{metrics.algorithm_name}: {report['computer_state']} after "
            f"{report['computer_steps']} steps on {report['width']}x{report['height']} "
            f"({report['cells']} cells)"
        )
        logger.info(
            f"Complexity: time {metrics.time_complexity}, space {metrics.space_complexity} "
            f"- {metrics.strategy_description}"
        )
        logger.info(
            f"Total ops: {metrics.total_ops:,}, total algo time: {metrics.total_time_ms:.2f} ms, "
            f"avg/step: {metrics.average_step_ms:.3f} ms"
        )
        logger.debug(f"Final board:\n{self.session.computer_board.to_text()}")


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tracks Puzzle - generate a puzzle and watch an algorithm solve it"
    )
    parser.add_argument("--width", "-W", type=int, help="Board width (>= 4)")
    parser.add_argument("--height", "-H", type=int, help="Board height (>= 4)")
    parser.add_argument(
        "--difficulty", "-d",
        choices=sorted(DIFFICULTY_CLUE_PERCENT.keys()),
        help="Clue density: easy 50%%, medium 35%%, hard 20%%"
    )
    parser.add_argument("--strategy", "-s", help="Solver algorithm (see --list-strategies)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible puzzles")
    parser.add_argument("--interval", type=int, help="Milliseconds between solver steps")
    parser.add_argument("--mode", choices=["single", "split"], help="Path generation mode")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the given options to config.json"
    )
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="List available solver algorithms and exit"
    )
    return parser.parse_args()


def apply_overrides(settings: dict, args) -> dict:
    """Merge command line options over loaded settings."""
    overrides = {
        "width": args.width,
        "height": args.height,
        "difficulty": args.difficulty,
        "strategy_name": args.strategy,
        "seed": args.seed,
        "step_interval_ms": args.interval,
        "generation_mode": args.mode,
        "log_level": args.log_level,
    }
    result = dict(settings)
    result.update({key: value for key, value in overrides.items() if value is not None})
    return result


def main():
    """Run the Tracks puzzle from the command line."""
    args = parse_args()
    settings = apply_overrides(load_settings(), args)
    configure_logging(settings["log_level"], args.log_file)

    if args.list_strategies:
        for info in get_strategy_info():
            print(f"{info['name']:<20} {info['display_name']:<20} "
                  f"{info['time_complexity']:<26} {info['description']}")
        return 0

    if settings["strategy_name"] not in get_strategy_names():
        logger.error(
            f"Unknown strategy: {settings['strategy_name']}. "
            f"Available: {', '.join(get_strategy_names())}"
        )
        return 1
    try:
        clue_percent_for(settings["difficulty"])
    except ValueError as e:
        logger.error(str(e))
        return 1

    if args.save_settings:
        save_settings(settings)

    app = QCoreApplication(sys.argv)

    application = Application(settings)
    if not application.setup():
        return application.exit_code

    application.worker.start()
    app.exec_()
    return application.exit_code


if __name__ == "__main__":
    sys.exit(main())
