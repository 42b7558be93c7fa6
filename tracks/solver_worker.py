"""
Solver Worker Module for the Tracks puzzle

Paces the computer solver on the Qt event loop: a QTimer calls
GameSession.step_computer() once per tick so hosts can animate the fill.
Communicates with views via Qt signals.
"""

import logging

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from tracks.game import GameSession


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QObject):
    """
    Timer-driven stepping of the computer solver.

    Signals:
        step_completed(int, bool): Emitted after every tick with the total
            placements so far and whether the computer board is solved
        finished(bool): Emitted once when stepping stops; True if solved
        error_occurred(str): Emitted when a step raises

    Example:
        worker = SolverWorker(session, interval_ms=180)
        worker.step_completed.connect(view.refresh)
        worker.finished.connect(view.show_result)
        worker.start()
    """

    step_completed = pyqtSignal(int, bool)
    finished = pyqtSignal(bool)
    error_occurred = pyqtSignal(str)

    DEFAULT_INTERVAL_MS = 180

    def __init__(self, session: GameSession, interval_ms: int = DEFAULT_INTERVAL_MS, parent=None):
        """
        Initialize the worker.

        Args:
            session: Session whose computer side is stepped
            interval_ms: Delay between placements
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self.session = session
        self._timer = QTimer(self)
        self._timer.setInterval(max(0, int(interval_ms)))
        self._timer.timeout.connect(self.tick)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def set_interval(self, interval_ms: int) -> None:
        self._timer.setInterval(max(0, int(interval_ms)))

    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        """Start stepping; ignored if already running or nothing to solve."""
        if self._timer.isActive():
            logger.warning("Worker already running")
            return
        if self.session.solver is None:
            logger.warning("No game in progress, nothing to solve")
            return
        logger.info(f"Solver worker started ({self.interval_ms} ms per step)")
        self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
            logger.info("Solver worker stopped")

    def tick(self) -> None:
        """
        Single timer tick: advance the solver one placement.

        Stops the timer and emits finished once the session reports the
        computer is done; exceptions stop the timer and emit error_occurred.
        """
        try:
            keep_going = self.session.step_computer()
        except Exception as e:
            logger.exception("Error in solver step")
            self._timer.stop()
            self.error_occurred.emit(str(e))
            return

        solver = self.session.solver
        self.step_completed.emit(solver.total_moves, self.session.computer_solved)

        if not keep_going:
            self._timer.stop()
            logger.info(f"Solver worker finished, solved={self.session.computer_solved}")
            self.finished.emit(self.session.computer_solved)
