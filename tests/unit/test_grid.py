"""Tests for the routing grid (algorithms/grid.py)."""

from __future__ import annotations

import pytest

from schematic_router.algorithms.grid import RoutingGrid
from schematic_router.schema import AABB, Corridors, Point, RouterOptions


def _make_grid(
    bounds: AABB | None = None,
    grid_size: float = 10.0,
    obstacles: list[AABB] | None = None,
    corridors: Corridors | None = None,
    penalty: float = 0.0,
    snap: float = 0.0,
) -> RoutingGrid:
    return RoutingGrid(
        bounds=bounds or AABB(0, 0, 100, 100),
        grid_size=grid_size,
        obstacles=tuple(obstacles or ()),
        corridors=corridors or Corridors(),
        corridor_penalty=penalty,
        corridor_snap_distance=snap,
    )


class TestCoordinateConversion:
    def test_to_index_rounds_to_nearest(self) -> None:
        grid = _make_grid()
        assert grid.to_index(Point(14, 15)) == (1, 2)
        assert grid.to_index(Point(16, 24.9)) == (2, 2)

    def test_to_index_halves_round_up(self) -> None:
        grid = _make_grid()
        assert grid.to_index(Point(-5, 25)) == (0, 3)

    def test_to_index_relative_to_bounds(self) -> None:
        grid = _make_grid(bounds=AABB(-20, -20, 100, 100))
        assert grid.to_index(Point(0, 0)) == (2, 2)

    def test_to_point(self) -> None:
        grid = _make_grid(bounds=AABB(-20, -20, 100, 100))
        assert grid.to_point(0, 0) == Point(-20, -20)
        assert grid.to_point(3, 4) == Point(10, 20)


class TestBlocking:
    def test_outside_viewport_blocked(self) -> None:
        grid = _make_grid()
        assert grid.is_blocked(-1, 0)
        assert grid.is_blocked(11, 0)
        assert not grid.is_blocked(10, 10)  # bounds are inclusive

    def test_obstacle_blocks_inclusive(self) -> None:
        grid = _make_grid(obstacles=[AABB(20, 20, 40, 40)])
        assert grid.is_blocked(2, 2)
        assert grid.is_blocked(3, 3)
        assert grid.is_blocked(4, 4)
        assert not grid.is_blocked(5, 5)
        assert not grid.is_blocked(1, 3)

    def test_blocking_is_memoised(self) -> None:
        grid = _make_grid(obstacles=[AABB(20, 20, 40, 40)])
        grid.is_blocked(3, 3)
        grid.is_blocked(3, 3)
        stats = grid.get_stats()
        assert stats["probed_cells"] == 1
        assert stats["blocked_probed"] == 1


class TestCorridorCost:
    def test_no_corridors_no_cost(self) -> None:
        grid = _make_grid(penalty=5.0)
        assert grid.corridor_cost(Point(80, 80)) == 0.0

    def test_within_snap_distance_free(self) -> None:
        grid = _make_grid(corridors=Corridors(x=(50,)), penalty=0.5, snap=10)
        assert grid.corridor_cost(Point(55, 0)) == 0.0
        assert grid.corridor_cost(Point(60, 0)) == 0.0

    def test_grows_linearly_beyond_snap(self) -> None:
        grid = _make_grid(corridors=Corridors(x=(50,)), penalty=0.5, snap=10)
        assert grid.corridor_cost(Point(80, 0)) == pytest.approx(10.0)
        assert grid.corridor_cost(Point(0, 0)) == pytest.approx(20.0)

    def test_nearest_line_on_either_axis(self) -> None:
        grid = _make_grid(corridors=Corridors(x=(50,), y=(0,)), penalty=1.0)
        assert grid.corridor_distance(Point(90, 0)) == 0.0
        assert grid.corridor_distance(Point(90, 30)) == 30.0


class TestFromOptions:
    def test_copies_options(self) -> None:
        options = RouterOptions(grid_size=5, corridor_penalty=0.3, corridor_snap_distance=7)
        grid = RoutingGrid.from_options(AABB(0, 0, 100, 100), [AABB(1, 1, 2, 2)], options)
        assert grid.grid_size == 5
        assert grid.corridor_penalty == 0.3
        assert grid.corridor_snap_distance == 7
        assert grid.obstacles == (AABB(1, 1, 2, 2),)

    def test_prefer_edges_adds_corridors(self) -> None:
        options = RouterOptions(
            corridors=Corridors(x=(100,)), prefer_edges=True, edge_margin=30
        )
        grid = RoutingGrid.from_options(AABB(0, 0, 200, 100), [], options)
        assert grid.corridors.x == (100, 30, 170)
        assert grid.corridors.y == (30, 70)

    def test_obstacle_list_not_shared(self) -> None:
        obstacles = [AABB(0, 0, 10, 10)]
        grid = RoutingGrid.from_options(AABB(0, 0, 100, 100), obstacles, RouterOptions())
        obstacles.append(AABB(50, 50, 60, 60))
        assert len(grid.obstacles) == 1


class TestStats:
    def test_dimensions(self) -> None:
        grid = _make_grid(corridors=Corridors(x=(1, 2), y=(3,)))
        stats = grid.get_stats()
        assert stats["cols"] == 11
        assert stats["rows"] == 11
        assert stats["total_cells"] == 121
        assert stats["corridors_x"] == 2
        assert stats["corridors_y"] == 1
