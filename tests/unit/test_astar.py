"""Tests for A* pathfinding and the route entry point (algorithms/astar.py)."""

from __future__ import annotations

from schematic_router.algorithms.astar import _heuristic, astar_search, route
from schematic_router.algorithms.grid import RoutingGrid
from schematic_router.schema import AABB, Corridors, Point, RouterOptions


def _make_grid(
    width: float = 100.0,
    height: float = 100.0,
    grid_size: float = 10.0,
    obstacles: list[AABB] | None = None,
) -> RoutingGrid:
    """Create a corridor-free routing grid for testing."""
    return RoutingGrid(
        bounds=AABB(0, 0, width, height),
        grid_size=grid_size,
        obstacles=tuple(obstacles or ()),
    )


def _assert_orthogonal(points: list[Point]) -> None:
    for a, b in zip(points, points[1:]):
        assert a.x == b.x or a.y == b.y, f"diagonal segment {a} -> {b}"


class TestHeuristic:
    def test_same_position(self) -> None:
        assert _heuristic((5, 5), (5, 5)) == 0.0

    def test_manhattan(self) -> None:
        assert _heuristic((0, 0), (3, 4)) == 7.0
        assert _heuristic((3, 4), (0, 0)) == 7.0


class TestAstarSearch:
    def test_start_equals_goal(self) -> None:
        grid = _make_grid()
        path, iterations = astar_search(grid, (2, 2), (2, 2))
        assert path == [(2, 2)]
        assert iterations == 0

    def test_straight_line(self) -> None:
        grid = _make_grid()
        path, _ = astar_search(grid, (0, 0), (5, 0))
        assert path == [(i, 0) for i in range(6)]

    def test_blocked_goal_returns_none_immediately(self) -> None:
        grid = _make_grid(obstacles=[AABB(40, 40, 60, 60)])
        path, iterations = astar_search(grid, (0, 0), (5, 5))
        assert path is None
        assert iterations == 0

    def test_start_inside_obstacle_allowed(self) -> None:
        grid = _make_grid(obstacles=[AABB(0, 0, 20, 20)])
        path, _ = astar_search(grid, (1, 1), (8, 1))
        assert path is not None
        assert path[0] == (1, 1)
        # Never re-enters the blocked zone after leaving it
        assert not any(grid.is_blocked(*n) for n in path[1:])

    def test_routes_around_wall(self) -> None:
        grid = _make_grid(obstacles=[AABB(45, 0, 55, 80)])
        path, _ = astar_search(grid, (2, 2), (8, 2))
        assert path is not None
        assert path[0] == (2, 2)
        assert path[-1] == (8, 2)
        assert not any(grid.is_blocked(*n) for n in path)
        for (x1, y1), (x2, y2) in zip(path, path[1:]):
            assert abs(x1 - x2) + abs(y1 - y2) == 1

    def test_unreachable(self) -> None:
        grid = _make_grid(obstacles=[AABB(45, -10, 55, 110)])
        path, iterations = astar_search(grid, (2, 2), (8, 2))
        assert path is None
        assert iterations > 0

    def test_iteration_budget(self) -> None:
        grid = _make_grid(obstacles=[AABB(45, 0, 55, 80)])
        path, iterations = astar_search(grid, (2, 2), (8, 2), max_iterations=5)
        assert path is None
        assert iterations == 5

    def test_deterministic(self) -> None:
        obstacles = [AABB(25, 15, 35, 85), AABB(55, 0, 65, 60)]
        first, _ = astar_search(_make_grid(obstacles=obstacles), (1, 5), (9, 5))
        second, _ = astar_search(_make_grid(obstacles=obstacles), (1, 5), (9, 5))
        assert first is not None
        assert first == second


class TestRoute:
    def test_no_obstacles_straight(self) -> None:
        result = route(Point(0, 0), Point(100, 0), [], RouterOptions(), AABB(0, 0, 100, 100))
        assert result.points == [Point(0, 0), Point(100, 0)]
        assert not result.used_fallback
        assert result.iterations > 0

    def test_endpoints_exact_off_grid(self) -> None:
        result = route(Point(3, 2), Point(97, 2), [], RouterOptions(), AABB(0, 0, 100, 100))
        assert result.points[0] == Point(3, 2)
        assert result.points[-1] == Point(97, 2)
        _assert_orthogonal(result.points)

    def test_endpoint_elbow_avoids_obstacle(self) -> None:
        box = AABB(102, 98, 110, 102)
        result = route(
            Point(0, 100), Point(104, 96), [box], RouterOptions(), AABB(0, 0, 200, 200)
        )
        assert not result.used_fallback
        assert result.points == [Point(0, 100), Point(100, 100), Point(100, 96), Point(104, 96)]
        assert not any(box.strictly_contains(p) for p in result.points)

    def test_both_endpoint_elbows_blocked_falls_back(self) -> None:
        boxes = [AABB(102, 98, 110, 102), AABB(98, 94, 101, 98)]
        result = route(
            Point(0, 100), Point(104, 96), boxes, RouterOptions(), AABB(0, 0, 200, 200)
        )
        assert result.used_fallback
        assert result.iterations > 0
        assert result.points == [Point(0, 100), Point(104, 100), Point(104, 96)]

    def test_avoids_obstacle(self) -> None:
        wall = AABB(45, 0, 55, 80)
        result = route(Point(20, 20), Point(80, 20), [wall], RouterOptions(), AABB(0, 0, 100, 100))
        assert not result.used_fallback
        assert result.points[0] == Point(20, 20)
        assert result.points[-1] == Point(80, 20)
        assert not any(wall.contains(p) for p in result.points)
        _assert_orthogonal(result.points)
        # Has to pass below the wall
        assert max(p.y for p in result.points) > 80

    def test_corridor_pulls_vertical_segment(self) -> None:
        options = RouterOptions(
            corridors=Corridors(x=(50,)), corridor_penalty=10, corridor_snap_distance=0
        )
        result = route(Point(0, 0), Point(100, 20), [], options, AABB(-20, -20, 120, 40))
        assert result.points == [Point(0, 0), Point(50, 0), Point(50, 20), Point(100, 20)]

    def test_unreachable_falls_back(self) -> None:
        wall = AABB(45, -10, 55, 110)
        result = route(Point(10, 50), Point(90, 20), [wall], RouterOptions(), AABB(0, 0, 100, 100))
        assert result.used_fallback
        assert result.points == [Point(10, 50), Point(90, 50), Point(90, 20)]

    def test_goal_inside_obstacle_falls_back(self) -> None:
        box = AABB(70, 10, 100, 40)
        result = route(Point(10, 20), Point(90, 20), [box], RouterOptions(), AABB(0, 0, 100, 100))
        assert result.used_fallback
        assert result.iterations == 0
        assert result.points == [Point(10, 20), Point(90, 20)]

    def test_exhausted_budget_falls_back(self) -> None:
        wall = AABB(45, 0, 55, 80)
        options = RouterOptions(max_iterations=3)
        result = route(Point(20, 20), Point(80, 20), [wall], options, AABB(0, 0, 100, 100))
        assert result.used_fallback
        assert result.iterations == 3

    def test_obstacles_not_modified(self) -> None:
        obstacles = [AABB(45, 0, 55, 80)]
        route(Point(20, 20), Point(80, 20), obstacles, RouterOptions(), AABB(0, 0, 100, 100))
        assert obstacles == [AABB(45, 0, 55, 80)]

    def test_repeatable(self) -> None:
        obstacles = [AABB(25, 15, 35, 85), AABB(55, 0, 65, 60)]
        args = (Point(10, 50), Point(90, 50), obstacles, RouterOptions(), AABB(0, 0, 100, 100))
        assert route(*args).points == route(*args).points
