"""Turn-aware path search over the hexagonal grid."""

from __future__ import annotations

import heapq
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from itertools import count

from escapegrid.cells import CellType
from escapegrid.grid import Grid

logger = logging.getLogger(__name__)

Step = tuple[int, int]
_Key = tuple[int, int, int]


@dataclass(eq=False)
class PathNode:
    """A search state: a cell reached on a given turn."""

    x: int
    y: int
    turn: int
    g_cost: int = 0
    h_cost: int = 0
    f_cost: int = 0
    parent: PathNode | None = field(default=None, repr=False)

    @property
    def key(self) -> _Key:
        return (self.x, self.y, self.turn)


def heuristic(x1: int, y1: int, x2: int, y2: int) -> int:
    """Manhattan distance between two grid coordinates."""
    return abs(x2 - x1) + abs(y2 - y1)


def reconstruct_path(end_node: PathNode | None) -> list[Step]:
    """The cells from the root of the node chain to end_node, in order."""
    path: list[Step] = []
    node = end_node
    while node is not None:
        path.append((node.x, node.y))
        node = node.parent
    path.reverse()
    return path


class PathFinder:
    """Searches a grid for a route whose gates and walls are open when reached."""

    ASTAR_MAX_ITERATIONS = 10000
    ASTAR_MAX_TIME_MS = 5000
    ASTAR_MAX_TURN = 100
    ASTAR_MAX_NODES = 10000

    BFS_MAX_ITERATIONS = 5000
    BFS_MAX_TIME_MS = 3000
    BFS_MAX_TURN = 50
    BFS_MAX_NODES = 5000

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def _endpoints(self) -> tuple[int, int, int, int]:
        start_x, start_y = self.grid.start_pos
        goal_x, goal_y = self.grid.goal_pos
        return int(start_x), int(start_y), int(goal_x), int(goal_y)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid.width and 0 <= y < self.grid.height

    def find_path_astar(self) -> list[Step]:
        """A* search over (cell, turn) states; an empty list if no route is found."""
        start_x, start_y, goal_x, goal_y = self._endpoints()
        logger.info(
            "A* from (%d,%d) to (%d,%d)", start_x, start_y, goal_x, goal_y
        )
        if not (self._in_bounds(start_x, start_y) and self._in_bounds(goal_x, goal_y)):
            logger.warning("A*: start or goal outside the grid")
            return []

        started = time.monotonic()
        sequence = count()
        start = PathNode(start_x, start_y, 0)
        start.h_cost = heuristic(start_x, start_y, goal_x, goal_y)
        start.f_cost = start.g_cost + start.h_cost

        open_nodes: dict[_Key, tuple[PathNode, int]] = {start.key: (start, next(sequence))}
        heap: list[tuple[int, int, int, _Key]] = [
            (start.f_cost, start.h_cost, open_nodes[start.key][1], start.key)
        ]
        closed: set[_Key] = set()
        iterations = 0

        while open_nodes and iterations < self.ASTAR_MAX_ITERATIONS:
            iterations += 1
            if iterations % 100 == 0:
                elapsed_ms = (time.monotonic() - started) * 1000.0
                if elapsed_ms > self.ASTAR_MAX_TIME_MS:
                    logger.warning("A* timed out after %d ms", self.ASTAR_MAX_TIME_MS)
                    break
                logger.debug(
                    "A* progress: %d iterations, %d open, %d closed",
                    iterations,
                    len(open_nodes),
                    len(closed),
                )

            current = self._pop_best(heap, open_nodes)
            closed.add(current.key)

            if (current.x, current.y) == (goal_x, goal_y):
                logger.info("A* found a path in %d iterations", iterations)
                return reconstruct_path(current)

            if current.turn > self.ASTAR_MAX_TURN:
                continue

            new_turn = current.turn + 1
            for nx, ny in self.grid.neighbors(current.x, current.y):
                if not self.is_valid_move_at_turn(current.x, current.y, nx, ny, new_turn):
                    continue
                key = (nx, ny, new_turn)
                if key in closed:
                    continue
                tentative = current.g_cost + 1
                entry = open_nodes.get(key)
                if entry is None:
                    node = PathNode(nx, ny, new_turn, parent=current)
                    node.g_cost = tentative
                    node.h_cost = heuristic(nx, ny, goal_x, goal_y)
                    node.f_cost = node.g_cost + node.h_cost
                    seq = next(sequence)
                    open_nodes[key] = (node, seq)
                    heapq.heappush(heap, (node.f_cost, node.h_cost, seq, key))
                elif tentative < entry[0].g_cost:
                    node, seq = entry
                    node.g_cost = tentative
                    node.f_cost = node.g_cost + node.h_cost
                    node.parent = current
                    heapq.heappush(heap, (node.f_cost, node.h_cost, seq, key))

            if len(open_nodes) + len(closed) > self.ASTAR_MAX_NODES:
                logger.warning("A* node limit reached")
                break

        logger.info(
            "A* failed after %d iterations: %d explored, %d queued",
            iterations,
            len(closed),
            len(open_nodes),
        )
        return []

    @staticmethod
    def _pop_best(
        heap: list[tuple[int, int, int, _Key]],
        open_nodes: dict[_Key, tuple[PathNode, int]],
    ) -> PathNode:
        while True:
            f_cost, _, _, key = heapq.heappop(heap)
            entry = open_nodes.get(key)
            if entry is not None and entry[0].f_cost == f_cost:
                del open_nodes[key]
                return entry[0]

    def find_path_bfs(self) -> list[Step]:
        """Breadth-first search over (cell, turn) states; empty if no route is found."""
        start_x, start_y, goal_x, goal_y = self._endpoints()
        logger.info(
            "BFS from (%d,%d) to (%d,%d)", start_x, start_y, goal_x, goal_y
        )
        started = time.monotonic()
        start = PathNode(start_x, start_y, 0)
        queue: deque[PathNode] = deque([start])
        visited: set[_Key] = {start.key}
        iterations = 0

        while queue and iterations < self.BFS_MAX_ITERATIONS:
            iterations += 1
            if iterations % 100 == 0:
                elapsed_ms = (time.monotonic() - started) * 1000.0
                if elapsed_ms > self.BFS_MAX_TIME_MS:
                    logger.warning("BFS timed out after %.0f ms", elapsed_ms)
                    break
                logger.debug("BFS progress: %d iterations", iterations)

            current = queue.popleft()
            if (current.x, current.y) == (goal_x, goal_y):
                logger.info("BFS found a path in %d iterations", iterations)
                return reconstruct_path(current)

            if current.turn > self.BFS_MAX_TURN:
                continue

            new_turn = current.turn + 1
            for nx, ny in self.grid.neighbors(current.x, current.y):
                if not self.is_valid_move_at_turn(current.x, current.y, nx, ny, new_turn):
                    continue
                key = (nx, ny, new_turn)
                if key in visited:
                    continue
                visited.add(key)
                queue.append(PathNode(nx, ny, new_turn, parent=current))

            if len(visited) > self.BFS_MAX_NODES:
                logger.warning("BFS node limit reached")
                break

        logger.info("BFS failed after %d iterations", iterations)
        return []

    def find_path_dijkstra(self) -> list[Step]:
        """Uniform-cost search; every step costs the same, so this is BFS."""
        logger.info("using BFS for Dijkstra")
        return self.find_path_bfs()

    def is_valid_move_at_turn(
        self, from_x: int, from_y: int, to_x: int, to_y: int, turn: int
    ) -> bool:
        """Whether stepping from one cell to a neighbour is allowed on the given turn."""
        if not self._in_bounds(to_x, to_y):
            return False
        if (to_x, to_y) not in self.grid.neighbors(from_x, from_y):
            return False

        target = self.grid.cells[to_y][to_x]
        if target.type is CellType.WALL:
            return False
        if target.type is CellType.GATE:
            pattern = self.grid.gate_patterns.get(target.gate_pattern)
            if pattern is not None:
                cycle_position = turn % self.grid.turn_cycle_length
                if cycle_position < len(pattern):
                    return pattern[cycle_position]
            return True
        if target.type is CellType.TEMPORAL_WALL:
            return turn >= target.turns_to_open
        return True