"""
Strategy Factory Module - Registry and factory for strategy instantiation.
"""

from typing import Any, Dict, List, Type

from .base import SolverStrategy
from .board import Board


# Global registry of strategies, in registration order
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a strategy class.

    Usage:
        @register_strategy
        class MyStrategy(SolverStrategy):
            name = "my_strategy"
            ...

    Args:
        cls: Strategy class to register

    Returns:
        The same class (for decorator chaining)
    """
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, board: Board, **kwargs: Any) -> SolverStrategy:
    """
    Create a strategy instance by name, bound to board.

    Args:
        name: Strategy name (e.g., "greedy", "backtracking")
        board: Board carrying a generated solution
        **kwargs: Additional arguments passed to strategy constructor

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    if name not in _STRATEGIES:
        available = ", ".join(_STRATEGIES.keys())
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return _STRATEGIES[name](board, **kwargs)


def get_strategy_names() -> List[str]:
    """
    Get list of available strategy names.

    Returns:
        List of registered strategy names
    """
    return list(_STRATEGIES.keys())


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Get metadata for all registered strategies.

    Returns:
        List of dicts with 'name', 'display_name', 'description',
        'time_complexity' and 'space_complexity' keys
    """
    return [
        {
            "name": cls.name,
            "display_name": cls.display_name,
            "description": cls.description,
            "time_complexity": cls.time_complexity,
            "space_complexity": cls.space_complexity,
        }
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    """
    Get the default strategy name.

    Returns:
        "greedy" if registered, else the first registered name
    """
    if "greedy" in _STRATEGIES:
        return "greedy"
    return next(iter(_STRATEGIES))
