"""
Engine Package - Puzzle engine for the Tracks connection puzzle.

This package generates solution paths, tracks board state and undo history,
answers connectivity queries, and provides a pluggable framework of solver
strategies that reproduce a solution one placement at a time.

Public API:
    - Direction, TrackType: Piece vocabulary and lookups
    - Board, Cell: Mutable grid with its solution
    - Move, MoveHistory: Undo records
    - ConnectivityGraph: Derived adjacency and BFS queries
    - PuzzleGenerator, generate_board(): Puzzle generation
    - AlgoMetrics, StepRecord: Solver observability
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function
    - MinimumMovesPlanner: Standalone minimum-moves analysis

Usage:
    from tracks.engine import generate_board, create_strategy

    board = generate_board(8, 8, clue_percent=35)
    solver = create_strategy("divide_conquer", board.clone())

    while solver.step():
        pass

    print(solver.metrics.total_moves, solver.board.is_solved())
"""

# Core data structures
from .track import (
    CYCLE,
    Direction,
    TrackType,
    directions_of,
    next_type,
    opposite,
    type_from_directions,
)
from .move import Move, MoveHistory
from .board import Board, Cell
from .graph import (
    UNREACHABLE,
    ConnectivityGraph,
    GraphNode,
    distance_from_end,
    path_exists,
    shortest_path,
)
from .generator import (
    GenerationError,
    GenerationMode,
    PuzzleGenerator,
    generate_board,
    validate_config,
)
from .metrics import AlgoMetrics, StepRecord
from .planner import MinimumMovesPlanner, PlannerMetrics

# Strategy framework
from .base import PlayOrderStrategy, SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Pieces
    "CYCLE",
    "Direction",
    "TrackType",
    "directions_of",
    "next_type",
    "opposite",
    "type_from_directions",
    # Board state
    "Board",
    "Cell",
    "Move",
    "MoveHistory",
    # Connectivity
    "UNREACHABLE",
    "ConnectivityGraph",
    "GraphNode",
    "distance_from_end",
    "path_exists",
    "shortest_path",
    # Generation
    "GenerationError",
    "GenerationMode",
    "PuzzleGenerator",
    "generate_board",
    "validate_config",
    # Metrics and analysis
    "AlgoMetrics",
    "StepRecord",
    "MinimumMovesPlanner",
    "PlannerMetrics",
    # Strategy framework
    "PlayOrderStrategy",
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
]
