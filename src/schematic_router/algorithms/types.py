"""Shared dataclasses for routing results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..schema.common import Direction, Point
from ..schema.diagram import ManualPath
from .paths import points_to_path


@dataclass
class RouteResult:
    """Result of routing between two points."""

    points: list[Point] = field(default_factory=list)
    used_fallback: bool = False
    iterations: int = 0  # A* node expansions

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "used_fallback": self.used_fallback,
            "iterations": self.iterations,
        }


@dataclass(frozen=True)
class ResolvedPort:
    """A port resolved to diagram coordinates and a diagram-space exit direction."""

    component_id: str
    port_name: str
    point: Point
    direction: Direction | None = None

    @property
    def key(self) -> str:
        return f"{self.component_id}:{self.port_name}"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"key": self.key, **self.point.to_dict()}
        if self.direction is not None:
            d["dir"] = self.direction.value
        return d


@dataclass
class RoutedConnection:
    """Final polyline for one connection, ready for the rendering layer."""

    key: str
    from_key: str
    to_key: str
    points: list[Point]
    style: str = "pipe"
    kind: str = "pipe"
    marker: str | None = None
    route_mode: str = "auto"
    used_fallback: bool = False

    @property
    def path(self) -> str:
        return points_to_path(self.points)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "key": self.key,
            "from": self.from_key,
            "to": self.to_key,
            "kind": self.kind,
            "style": self.style,
            "route_mode": self.route_mode,
            "used_fallback": self.used_fallback,
            "points": [p.to_dict() for p in self.points],
            "path": self.path,
        }
        if self.marker:
            d["marker"] = self.marker
        return d


@dataclass
class LayoutResult:
    """Result of one full layout pass."""

    routes: dict[str, RoutedConnection] = field(default_factory=dict)
    manual_paths: list[ManualPath] = field(default_factory=list)
    layout_id: str = ""

    @property
    def fallback_count(self) -> int:
        return sum(1 for r in self.routes.values() if r.used_fallback)

    def points_by_key(self) -> dict[str, list[Point]]:
        return {key: list(route.points) for key, route in self.routes.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "layout_id": self.layout_id,
            "route_count": len(self.routes),
            "fallback_count": self.fallback_count,
            "routes": [r.to_dict() for r in self.routes.values()],
            "manual_paths": [
                {**m.to_dict(), "path": points_to_path(m.points)} for m in self.manual_paths
            ],
        }
