"""
Connectivity Graph Module - Derived adjacency over board cells.

The graph is a pure function of the board contents: every mutation is
followed by a full rebuild rather than patching individual edges.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple, TYPE_CHECKING

from .track import Direction, directions_of

if TYPE_CHECKING:
    from .board import Board


Position = Tuple[int, int]

# Distance assigned to cells the BFS never reaches
UNREACHABLE = -1


@dataclass(eq=False)
class GraphNode:
    """
    One node per board cell.

    Attributes:
        x: Column index
        y: Row index
        neighbors: Nodes this cell's track connects to reciprocally
    """
    x: int
    y: int
    neighbors: List["GraphNode"] = field(default_factory=list)

    @property
    def position(self) -> Position:
        return (self.x, self.y)


class ConnectivityGraph:
    """
    Adjacency structure over a width x height grid.

    An edge (x, y) -> neighbour exists when the cell's track points at the
    neighbour and the neighbour's track points back. Edges are added from
    each endpoint independently, so a valid connection appears once in each
    node's neighbour list.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.nodes: List[List[GraphNode]] = [
            [GraphNode(x, y) for x in range(width)] for y in range(height)
        ]

    @classmethod
    def build(cls, board: "Board") -> "ConnectivityGraph":
        """Create a graph sized for board and populate it."""
        graph = cls(board.width, board.height)
        graph.rebuild(board)
        return graph

    def node(self, x: int, y: int) -> GraphNode:
        return self.nodes[y][x]

    def rebuild(self, board: "Board") -> None:
        """
        Recompute every edge from the current board contents.

        Args:
            board: Board whose cell types define the edges
        """
        for row in self.nodes:
            for node in row:
                node.neighbors.clear()

        for y in range(self.height):
            for x in range(self.width):
                for direction in directions_of(board.cells[y][x].type):
                    nx, ny = direction.step(x, y)
                    if not (0 <= nx < self.width and 0 <= ny < self.height):
                        continue
                    if direction.opposite in directions_of(board.cells[ny][nx].type):
                        self.nodes[y][x].neighbors.append(self.nodes[ny][nx])

    def edge_count(self) -> int:
        """Number of directed edges currently in the graph."""
        return sum(len(node.neighbors) for row in self.nodes for node in row)

    def bfs(self, start: Position, goal: Position) -> Optional[Dict[Position, Optional[Position]]]:
        """
        Breadth-first search from start over the current edges.

        Returns:
            Predecessor map containing goal, or None if goal is unreachable
        """
        sx, sy = start
        previous: Dict[Position, Optional[Position]] = {start: None}
        queue: Deque[GraphNode] = deque([self.nodes[sy][sx]])

        while queue:
            current = queue.popleft()
            if current.position == goal:
                return previous
            for neighbor in current.neighbors:
                if neighbor.position not in previous:
                    previous[neighbor.position] = current.position
                    queue.append(neighbor)
        return None


def path_exists(board: "Board") -> bool:
    """
    Check whether any track path currently joins start to end.

    This is the win check: the player does not have to reproduce the
    generated solution, only connect start to end.

    Args:
        board: Board to test (its graph is rebuilt first)

    Returns:
        True if the end cell is reachable from the start cell
    """
    board.rebuild_graph()
    return board.graph.bfs(board.start, board.end) is not None


def shortest_path(board: "Board") -> Optional[List[Position]]:
    """
    Find the shortest track path from start to end.

    Args:
        board: Board to search (its graph is rebuilt first)

    Returns:
        List of (x, y) from start to end inclusive, or None if unreachable
    """
    board.rebuild_graph()
    previous = board.graph.bfs(board.start, board.end)
    if previous is None:
        return None

    path: List[Position] = []
    current: Optional[Position] = board.end
    while current is not None:
        path.append(current)
        current = previous[current]
    path.reverse()
    return path


def distance_from_end(board: "Board") -> List[List[int]]:
    """
    BFS distance of every cell from the end cell.

    Distances are measured over the grid's four-neighbour adjacency, so
    they describe how close a cell sits to the end regardless of what
    track is laid yet.

    Args:
        board: Board providing the dimensions and the end cell

    Returns:
        Distance map indexed [y][x]; UNREACHABLE for cells never reached
    """
    dist = [[UNREACHABLE] * board.width for _ in range(board.height)]
    ex, ey = board.end
    dist[ey][ex] = 0
    queue: Deque[Position] = deque([(ex, ey)])

    while queue:
        x, y = queue.popleft()
        for direction in Direction:
            nx, ny = direction.step(x, y)
            if board.in_bounds(nx, ny) and dist[ny][nx] == UNREACHABLE:
                dist[ny][nx] = dist[y][x] + 1
                queue.append((nx, ny))
    return dist
