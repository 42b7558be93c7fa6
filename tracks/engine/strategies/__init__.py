"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .greedy import GreedyStrategy
from .divide_conquer import DivideConquerStrategy
from .dynamic_programming import DynamicProgrammingStrategy
from .backtracking import BacktrackingStrategy

__all__ = [
    "GreedyStrategy",
    "DivideConquerStrategy",
    "DynamicProgrammingStrategy",
    "BacktrackingStrategy",
]
