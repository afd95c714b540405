"""Typed models for a schematic diagram: templates, instances, connections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..constants import ROUTE_MODES
from ..exceptions import DiagramFormatError
from .common import AABB, Direction, Placement, Point
from .options import Corridors, RouterOptions


@dataclass(frozen=True)
class PortSpec:
    """A named anchor on a template, in template-local coordinates."""

    name: str
    anchor: Point
    direction: Direction | None = None

    def to_dict(self) -> dict[str, Any]:
        d = {"name": self.name, **self.anchor.to_dict()}
        if self.direction is not None:
            d["dir"] = self.direction.value
        return d


@dataclass(frozen=True)
class Template:
    """Drawable component shape: local bounds plus named ports.

    ``bounds`` is ``None`` for templates with no footprint worth avoiding
    (labels, overlays); such instances never become obstacles.
    """

    id: str
    bounds: AABB | None = None
    ports: dict[str, PortSpec] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "bounds": self.bounds.to_dict() if self.bounds else None,
            "ports": [p.to_dict() for p in self.ports.values()],
        }


@dataclass(frozen=True)
class Instance:
    """A placed component. Geometry only; visual variables live elsewhere."""

    id: str
    template_id: str
    placement: Placement

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "template": self.template_id, **self.placement.to_dict()}


@dataclass(frozen=True)
class PortRef:
    """Reference to a port on a placed component."""

    component_id: str
    port_name: str

    @classmethod
    def parse(cls, ref: Any) -> PortRef:
        """Accept ``"comp:PORT"``, ``["comp", "PORT"]``, ``{"c": .., "p": ..}``
        or ``{"component": .., "port": ..}``."""
        if isinstance(ref, PortRef):
            return ref
        if isinstance(ref, str):
            parts = ref.split(":")
            if len(parts) == 2 and all(parts):
                return cls(parts[0], parts[1])
            raise DiagramFormatError(f"Invalid port ref string: {ref!r}", source="port_ref")
        if isinstance(ref, (list, tuple)) and len(ref) == 2 and all(
            isinstance(v, str) and v for v in ref
        ):
            return cls(ref[0], ref[1])
        if isinstance(ref, dict):
            comp = ref.get("c", ref.get("component"))
            port = ref.get("p", ref.get("port"))
            if isinstance(comp, str) and comp and isinstance(port, str) and port:
                return cls(comp, port)
        raise DiagramFormatError(f"Invalid port ref: {ref!r}", source="port_ref")

    @property
    def key(self) -> str:
        return f"{self.component_id}:{self.port_name}"

    def __str__(self) -> str:
        return self.key


def connection_key(from_ref: PortRef, to_ref: PortRef) -> str:
    """Stable key used by the rendering and live-state layers."""
    return f"{from_ref.key}->{to_ref.key}"


@dataclass(frozen=True)
class Connection:
    """A desired port-to-port link."""

    from_ref: PortRef
    to_ref: PortRef
    style: str = "pipe"
    route_mode: str = "auto"
    stub_length: float | None = None
    corridor_hints: Corridors | None = None
    router_overrides: dict[str, Any] | None = None
    mid_x: float | None = None
    marker: str | None = None

    def __post_init__(self) -> None:
        if self.route_mode not in ROUTE_MODES:
            raise DiagramFormatError(
                f"Unknown route mode {self.route_mode!r} for {self.key} "
                f"(expected one of {', '.join(ROUTE_MODES)})",
                source="connection",
            )

    @property
    def key(self) -> str:
        return connection_key(self.from_ref, self.to_ref)

    @property
    def kind(self) -> str:
        """Coarse category: the first of wire/supply/return/preheat found in the style."""
        for kind in ("wire", "supply", "return", "preheat"):
            if kind in self.style:
                return kind
        return "pipe"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "from": self.from_ref.key,
            "to": self.to_ref.key,
            "style": self.style,
            "route": self.route_mode,
        }
        if self.stub_length is not None:
            d["stub"] = self.stub_length
        if self.corridor_hints is not None:
            d["corridors"] = self.corridor_hints.to_dict()
        if self.router_overrides:
            d["router"] = dict(self.router_overrides)
        if self.mid_x is not None:
            d["mid_x"] = self.mid_x
        if self.marker:
            d["marker"] = self.marker
        return d


@dataclass(frozen=True)
class ManualPath:
    """A hand-drawn polyline that bypasses port resolution and routing."""

    points: tuple[Point, ...]
    style: str = "pipe"
    marker: str | None = None
    attrs: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"points": [p.to_dict() for p in self.points], "style": self.style}
        if self.marker:
            d["marker"] = self.marker
        if self.attrs:
            d["attrs"] = dict(self.attrs)
        return d


@dataclass
class Diagram:
    """A complete diagram declaration.

    ``visual_state`` holds each instance's renderer variables (temperatures,
    pump angles, ...). It is mutable and owned by the renderer; nothing in
    the routing path reads it.
    """

    templates: dict[str, Template] = field(default_factory=dict)
    instances: list[Instance] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    manual_paths: list[ManualPath] = field(default_factory=list)
    router_options: RouterOptions = field(default_factory=RouterOptions)
    view_box: AABB | None = None
    visual_state: dict[str, dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "template_count": len(self.templates),
            "instance_count": len(self.instances),
            "connection_count": len(self.connections),
            "manual_path_count": len(self.manual_paths),
            "router": self.router_options.to_dict(),
            "view_box": self.view_box.to_dict() if self.view_box else None,
        }
