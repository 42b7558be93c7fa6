"""
Tracks - grid connection puzzle with a step-by-step algorithm solver.

Packages:
    - tracks.engine: generation, board state, connectivity, solver strategies
    - tracks.game: player / computer session for one puzzle
    - tracks.solver_worker: Qt timer pacing for the computer solver
    - tracks.settings: persistent JSON settings
"""

__version__ = "1.0.0"
