"""A* pathfinding on the routing grid.

4-connected search with a corridor-biased step cost, plus the ``route``
entry point that frames the grid path with the exact endpoints and falls
back to a direct manhattan path when the search gives up.
"""

from __future__ import annotations

import heapq

from ..constants import MAX_ITERATIONS_DEFAULT
from ..logging_config import create_logger
from ..schema.common import AABB, Point
from ..schema.options import RouterOptions
from .grid import Node, RoutingGrid
from .paths import manhattan_path, orthogonalize, simplify
from .types import RouteResult

logger = create_logger(__name__)

# 4 cardinal directions: (dx, dy)
_CARDINAL_MOVES: list[tuple[int, int]] = [
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
]


def _heuristic(node: Node, goal: Node) -> float:
    """Manhattan distance in grid steps.

    Admissible: every step costs at least 1 and the corridor penalty is
    never negative.
    """
    return float(abs(node[0] - goal[0]) + abs(node[1] - goal[1]))


def astar_search(
    grid: RoutingGrid,
    start: Node,
    goal: Node,
    max_iterations: int = MAX_ITERATIONS_DEFAULT,
) -> tuple[list[Node] | None, int]:
    """Run A* on the routing grid.

    The open set is a heap of ``(f, sequence, node)``; among nodes with equal
    ``f`` the one pushed first is expanded first, which keeps the output
    deterministic.

    Args:
        grid: The routing grid.
        start: Start node. Not checked for blocking; routes may leave a
            padded zone but never enter one.
        goal: Goal node.
        max_iterations: Maximum node expansions before giving up.

    Returns:
        ``(path, expansions)``; ``path`` runs from start to goal inclusive,
        or is None when the goal is blocked, unreachable or the iteration
        budget runs out.
    """
    if start == goal:
        return [start], 0

    if grid.is_blocked(*goal):
        return None, 0

    open_set: list[tuple[float, int, Node]] = []
    counter = 0
    heapq.heappush(open_set, (_heuristic(start, goal), counter, start))
    counter += 1

    came_from: dict[Node, Node] = {}
    g_score: dict[Node, float] = {start: 0.0}
    closed_set: set[Node] = set()

    iterations = 0

    while open_set:
        _, _, current = heapq.heappop(open_set)

        # Skip if already processed (found a better path)
        if current in closed_set:
            continue

        if iterations >= max_iterations:
            return None, iterations  # budget exhausted
        iterations += 1
        closed_set.add(current)

        if current == goal:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path, iterations

        cx, cy = current
        current_g = g_score[current]

        for dx, dy in _CARDINAL_MOVES:
            neighbor: Node = (cx + dx, cy + dy)
            if neighbor in closed_set or grid.is_blocked(*neighbor):
                continue

            step_cost = 1.0 + grid.corridor_cost(grid.to_point(*neighbor))
            tentative_g = current_g + step_cost
            if tentative_g < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g
                f = tentative_g + _heuristic(neighbor, goal)
                heapq.heappush(open_set, (f, counter, neighbor))
                counter += 1

    return None, iterations  # no path found


def route(
    start: Point,
    end: Point,
    obstacles: list[AABB],
    options: RouterOptions,
    bounds: AABB,
) -> RouteResult:
    """Route an orthogonal polyline from ``start`` to ``end`` avoiding obstacles.

    The grid-quantised path is framed by the exact ``start`` and ``end``
    points, with elbows inserted where a snapped grid point is off-axis from
    them, and collinear points are collapsed. An elbow never lands inside an
    obstacle. When the search fails, or neither elbow orientation is clear,
    the result is the direct two-segment path
    ``start -> (end.x, start.y) -> end`` with ``used_fallback`` set. Never
    raises for a missing path.

    Args:
        start: Route start (diagram units).
        end: Route end (diagram units).
        obstacles: AABBs to avoid. Not modified.
        options: Grid, iteration and corridor settings.
        bounds: Visible diagram bounds; nodes outside are impassable.
    """
    grid = RoutingGrid.from_options(bounds, obstacles, options)
    start_node = grid.to_index(start)
    goal_node = grid.to_index(end)

    path, iterations = astar_search(grid, start_node, goal_node, options.max_iterations)

    framed = None
    if path is None:
        logger.debug(
            f"No grid path {start_node} -> {goal_node} after {iterations} expansions; "
            "using manhattan fallback"
        )
    else:
        grid_points = [grid.to_point(ix, iy) for ix, iy in path]
        framed = orthogonalize([start, *grid_points, end], obstacles)
        if framed is None:
            logger.debug(f"Both elbows blocked at {start} -> {end}; using manhattan fallback")

    if framed is None:
        return RouteResult(
            points=simplify(manhattan_path(start, end)),
            used_fallback=True,
            iterations=iterations,
        )

    logger.debug(f"Routed {len(grid_points)} grid nodes in {iterations} expansions")
    return RouteResult(points=simplify(framed), used_fallback=False, iterations=iterations)
