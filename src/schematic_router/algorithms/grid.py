"""Routing grid over the diagram viewport, with obstacle and corridor lookups."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from ..schema.common import AABB, Point
from ..schema.options import Corridors, RouterOptions

# Grid node: (ix, iy)
Node = tuple[int, int]


@dataclass
class RoutingGrid:
    """Uniform grid covering ``bounds`` with spacing ``grid_size``.

    Grid point ``(ix, iy)`` sits at ``bounds.min + index * grid_size``. Cells
    are never materialised; blocking is tested against the obstacle AABBs on
    demand and memoised per node, since A* only touches a small region.
    """

    bounds: AABB
    grid_size: float
    obstacles: tuple[AABB, ...] = ()
    corridors: Corridors = field(default_factory=Corridors)
    corridor_penalty: float = 0.0
    corridor_snap_distance: float = 0.0
    _blocked: dict[Node, bool] = field(default_factory=dict, repr=False)

    @classmethod
    def from_options(
        cls, bounds: AABB, obstacles: list[AABB], options: RouterOptions
    ) -> RoutingGrid:
        """Build a grid, adding edge corridors when ``prefer_edges`` is set."""
        corridors = options.corridors
        if options.prefer_edges:
            m = options.edge_margin
            corridors = corridors.with_lines(
                (bounds.min_x + m, bounds.max_x - m),
                (bounds.min_y + m, bounds.max_y - m),
            )
        return cls(
            bounds=bounds,
            grid_size=options.grid_size,
            obstacles=tuple(obstacles),
            corridors=corridors,
            corridor_penalty=options.corridor_penalty,
            corridor_snap_distance=options.corridor_snap_distance,
        )

    # ── Coordinate conversion ──────────────────────────────────────

    def to_index(self, p: Point) -> Node:
        """Snap a diagram point to the nearest grid node (halves round up)."""
        return (
            math.floor((p.x - self.bounds.min_x) / self.grid_size + 0.5),
            math.floor((p.y - self.bounds.min_y) / self.grid_size + 0.5),
        )

    def to_point(self, ix: int, iy: int) -> Point:
        return Point(
            self.bounds.min_x + ix * self.grid_size,
            self.bounds.min_y + iy * self.grid_size,
        )

    def in_bounds(self, p: Point) -> bool:
        return self.bounds.contains(p)

    def is_blocked(self, ix: int, iy: int) -> bool:
        """A node is blocked outside the viewport or inside any obstacle."""
        node = (ix, iy)
        cached = self._blocked.get(node)
        if cached is not None:
            return cached
        p = self.to_point(ix, iy)
        blocked = not self.in_bounds(p) or any(o.contains(p) for o in self.obstacles)
        self._blocked[node] = blocked
        return blocked

    # ── Corridor cost ──────────────────────────────────────────────

    def corridor_distance(self, p: Point) -> float:
        """Distance to the nearest corridor line on either axis (inf if none)."""
        dx = min((abs(p.x - lx) for lx in self.corridors.x), default=math.inf)
        dy = min((abs(p.y - ly) for ly in self.corridors.y), default=math.inf)
        return min(dx, dy)

    def corridor_cost(self, p: Point) -> float:
        """Extra step cost for being away from every corridor.

        Zero within ``corridor_snap_distance`` of a corridor and when no
        corridors are declared; grows linearly beyond that.
        """
        d = self.corridor_distance(p)
        if not math.isfinite(d):
            return 0.0
        return max(0.0, d - self.corridor_snap_distance) * self.corridor_penalty

    def get_stats(self) -> dict[str, Any]:
        """Return grid statistics."""
        cols = math.floor(self.bounds.width / self.grid_size) + 1
        rows = math.floor(self.bounds.height / self.grid_size) + 1
        return {
            "cols": cols,
            "rows": rows,
            "total_cells": cols * rows,
            "obstacles": len(self.obstacles),
            "corridors_x": len(self.corridors.x),
            "corridors_y": len(self.corridors.y),
            "grid_size": self.grid_size,
            "probed_cells": len(self._blocked),
            "blocked_probed": sum(1 for b in self._blocked.values() if b),
        }
