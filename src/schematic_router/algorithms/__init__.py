"""Autorouting algorithms: obstacles, grid A*, path post-processing."""

from .astar import astar_search, route
from .grid import RoutingGrid
from .obstacles import build_obstacles, instance_aabb, transform_direction, transform_point
from .paths import manhattan_path, orthogonalize, points_to_path, simplify
from .types import LayoutResult, ResolvedPort, RoutedConnection, RouteResult

__all__ = [
    "LayoutResult",
    "ResolvedPort",
    "RouteResult",
    "RoutedConnection",
    "RoutingGrid",
    "astar_search",
    "build_obstacles",
    "instance_aabb",
    "manhattan_path",
    "orthogonalize",
    "points_to_path",
    "route",
    "simplify",
    "transform_direction",
    "transform_point",
]
