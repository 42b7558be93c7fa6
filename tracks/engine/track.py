"""
Track Module - Piece orientations and the directions they expose.

Pure lookup logic shared by the board, the connectivity graph, the
generator and the solvers. Coordinates use x to the right and y downward.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Tuple


class Direction(Enum):
    """
    The four cardinal directions on the grid.

    Enumeration order (UP, DOWN, LEFT, RIGHT) is also the tie-break order
    used when following the solution chain.
    """
    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) offset of the neighbour in this direction."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        """Direction pointing back (UP<->DOWN, LEFT<->RIGHT)."""
        return _OPPOSITES[self]

    def step(self, x: int, y: int) -> Tuple[int, int]:
        """Coordinate of the neighbour of (x, y) in this direction."""
        dx, dy = _DELTAS[self]
        return x + dx, y + dy


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class TrackType(Enum):
    """
    Track piece placed in a cell.

    EMPTY holds no track; HORIZONTAL and VERTICAL are straights; the four
    curves are named after the two compass sides they join.
    """
    EMPTY = "empty"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    NORTH_EAST = "north_east"
    NORTH_WEST = "north_west"
    SOUTH_EAST = "south_east"
    SOUTH_WEST = "south_west"

    @property
    def directions(self) -> FrozenSet[Direction]:
        """Directions this piece connects to."""
        return _DIRECTIONS[self]

    @property
    def symbol(self) -> str:
        """Single glyph used by debug dumps."""
        return _SYMBOLS[self]

    @property
    def is_empty(self) -> bool:
        return self is TrackType.EMPTY


_DIRECTIONS: Dict[TrackType, FrozenSet[Direction]] = {
    TrackType.EMPTY: frozenset(),
    TrackType.HORIZONTAL: frozenset({Direction.LEFT, Direction.RIGHT}),
    TrackType.VERTICAL: frozenset({Direction.UP, Direction.DOWN}),
    TrackType.NORTH_EAST: frozenset({Direction.UP, Direction.RIGHT}),
    TrackType.NORTH_WEST: frozenset({Direction.UP, Direction.LEFT}),
    TrackType.SOUTH_EAST: frozenset({Direction.DOWN, Direction.RIGHT}),
    TrackType.SOUTH_WEST: frozenset({Direction.DOWN, Direction.LEFT}),
}

# Inverse of _DIRECTIONS for the six real pieces
_TYPES_BY_DIRECTIONS: Dict[FrozenSet[Direction], TrackType] = {
    dirs: track for track, dirs in _DIRECTIONS.items() if dirs
}

_SYMBOLS: Dict[TrackType, str] = {
    TrackType.EMPTY: "·",
    TrackType.HORIZONTAL: "─",
    TrackType.VERTICAL: "│",
    TrackType.NORTH_EAST: "└",
    TrackType.NORTH_WEST: "┘",
    TrackType.SOUTH_EAST: "┌",
    TrackType.SOUTH_WEST: "┐",
}

# Click-to-cycle order
CYCLE: Tuple[TrackType, ...] = (
    TrackType.EMPTY,
    TrackType.HORIZONTAL,
    TrackType.VERTICAL,
    TrackType.NORTH_EAST,
    TrackType.NORTH_WEST,
    TrackType.SOUTH_EAST,
    TrackType.SOUTH_WEST,
)


def opposite(direction: Direction) -> Direction:
    """Return the opposite direction."""
    return direction.opposite


def directions_of(track: TrackType) -> FrozenSet[Direction]:
    """
    Map a track type to the directions it connects.

    Args:
        track: Track type

    Returns:
        Frozen set of two directions, or an empty set for EMPTY
    """
    return _DIRECTIONS[track]


def type_from_directions(directions: Iterable[Direction]) -> TrackType:
    """
    Map a set of directions back to the matching track type.

    Args:
        directions: Any collection of directions

    Returns:
        Matching TrackType, or EMPTY if the set does not hold exactly
        two directions or no piece joins them
    """
    key = frozenset(directions)
    if len(key) != 2:
        return TrackType.EMPTY
    return _TYPES_BY_DIRECTIONS.get(key, TrackType.EMPTY)


def next_type(track: TrackType) -> TrackType:
    """Next type in the click cycle, wrapping back to EMPTY after the last."""
    index = CYCLE.index(track)
    return CYCLE[(index + 1) % len(CYCLE)]
