"""Route orchestration: one full, stateless layout pass over a diagram.

For every connection the two ports are resolved to diagram coordinates, a
short stub is extended from each port along its exit direction, the stub
ends are joined either directly (manhattan mode) or by the grid router, and
the result is stitched into ``port -> stub -> middle -> stub -> port``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from .algorithms.astar import route
from .algorithms.obstacles import (
    build_obstacles,
    instance_aabb,
    lookup_template,
    transform_direction,
    transform_point,
)
from .algorithms.paths import manhattan_path, simplify
from .algorithms.types import LayoutResult, ResolvedPort, RoutedConnection, RouteResult
from .cache import LRUCache
from .constants import OBSTACLE_PADDING_DEFAULT, STUB_LENGTH_DEFAULT, VIEWPORT_MARGIN_DEFAULT
from .exceptions import ConfigurationError, UnknownComponentError, UnknownPortError
from .logging_config import create_logger, new_layout_id
from .schema.common import AABB, Point
from .schema.diagram import Connection, Diagram, PortRef
from .schema.options import RouterOptions

logger = create_logger(__name__)

RouterFn = Callable[[Point, Point, list[AABB], RouterOptions, AABB], RouteResult]


@dataclass
class PortMap:
    """Pre-resolved ports of every placed instance, built once per layout pass."""

    ports: dict[tuple[str, str], ResolvedPort] = field(default_factory=dict)
    components: set[str] = field(default_factory=set)

    def resolve(self, ref: PortRef) -> ResolvedPort:
        """Look up a port.

        Raises:
            UnknownComponentError: if the component is not placed.
            UnknownPortError: if its template has no such port.
        """
        if ref.component_id not in self.components:
            raise UnknownComponentError(
                f"Unknown component in connection: {ref.component_id!r}",
                component_id=ref.component_id,
            )
        port = self.ports.get((ref.component_id, ref.port_name))
        if port is None:
            raise UnknownPortError(
                f"Port {ref.port_name!r} not found in {ref.component_id!r}",
                component_id=ref.component_id,
                port_name=ref.port_name,
            )
        return port

    def points(self) -> list[Point]:
        return [p.point for p in self.ports.values()]


def resolve_ports(diagram: Diagram) -> PortMap:
    """Resolve every template port of every instance into diagram space.

    Raises:
        UnknownTemplateError: if an instance's template is missing.
    """
    port_map = PortMap()
    for inst in diagram.instances:
        template = lookup_template(inst, diagram.templates)
        port_map.components.add(inst.id)
        for name, spec in template.ports.items():
            direction = (
                transform_direction(spec.direction, inst.placement)
                if spec.direction is not None
                else None
            )
            port_map.ports[(inst.id, name)] = ResolvedPort(
                component_id=inst.id,
                port_name=name,
                point=transform_point(spec.anchor, inst.placement),
                direction=direction,
            )
    return port_map


def stub_point(port: ResolvedPort, length: float = STUB_LENGTH_DEFAULT) -> Point:
    """Offset a port along its exit direction; ports without one stay put."""
    if port.direction is None:
        return port.point
    dx, dy = port.direction.vector
    return port.point.offset(dx * length, dy * length)


def _stub_ends(connection: Connection, port_map: PortMap) -> tuple[Point, Point]:
    length = (
        connection.stub_length if connection.stub_length is not None else STUB_LENGTH_DEFAULT
    )
    return (
        stub_point(port_map.resolve(connection.from_ref), length),
        stub_point(port_map.resolve(connection.to_ref), length),
    )


def diagram_bounds(
    diagram: Diagram,
    port_map: PortMap | None = None,
    margin: float = VIEWPORT_MARGIN_DEFAULT,
    cache: LRUCache | None = None,
    connections: Sequence[Connection] | None = None,
) -> AABB:
    """Routing bounds: the declared view box, else the content extent plus ``margin``.

    The content extent covers every instance box, every port and the stub
    ends of ``connections`` (the diagram's own by default), so long stubs
    never start a route outside the grid.

    Raises:
        ConfigurationError: if a connection names an unknown component or port.
    """
    if diagram.view_box is not None:
        return diagram.view_box

    port_map = port_map or resolve_ports(diagram)
    boxes: list[AABB] = []
    for inst in diagram.instances:
        box = instance_aabb(inst, lookup_template(inst, diagram.templates), 0.0, cache)
        if box is not None:
            boxes.append(box)
    points = port_map.points()
    for connection in diagram.connections if connections is None else connections:
        points.extend(_stub_ends(connection, port_map))
    if points:
        boxes.append(AABB.from_points(points))
    if not boxes:
        return AABB(0.0, 0.0, 0.0, 0.0).expanded(margin)

    extent = boxes[0]
    for box in boxes[1:]:
        extent = extent.union(box)
    return extent.expanded(margin)


def connection_options(diagram: Diagram, connection: Connection) -> RouterOptions:
    """Diagram defaults merged with the connection's overrides and corridor hints."""
    options = diagram.router_options.merged(connection.router_overrides)
    if connection.corridor_hints is not None:
        options = replace(options, corridors=connection.corridor_hints)
    return options


def route_connection(
    diagram: Diagram,
    connection: Connection,
    port_map: PortMap,
    bounds: AABB,
    cache: LRUCache | None = None,
    router: RouterFn | None = route,
) -> RoutedConnection:
    """Compute the final polyline for one connection.

    The first and last points are exactly the port coordinates; only the
    routed middle is grid-quantised.

    Raises:
        ConfigurationError: for unknown components or ports.
    """
    start_port = port_map.resolve(connection.from_ref)
    end_port = port_map.resolve(connection.to_ref)

    a0, b0 = start_port.point, end_port.point
    a1, b1 = _stub_ends(connection, port_map)

    used_fallback = False
    if connection.route_mode == "manhattan" or router is None:
        middle = manhattan_path(a1, b1, connection.mid_x)
    else:
        ignore = {connection.from_ref.component_id, connection.to_ref.component_id}
        obstacles = build_obstacles(
            diagram.instances, diagram.templates, ignore, OBSTACLE_PADDING_DEFAULT, cache
        )
        result = router(a1, b1, obstacles, connection_options(diagram, connection), bounds)
        middle = result.points
        used_fallback = result.used_fallback
        if used_fallback:
            logger.warning(f"No obstacle-free route for {connection.key}; drew direct path")

    return RoutedConnection(
        key=connection.key,
        from_key=connection.from_ref.key,
        to_key=connection.to_ref.key,
        points=simplify([a0, *middle, b0]),
        style=connection.style,
        kind=connection.kind,
        marker=connection.marker,
        route_mode=connection.route_mode,
        used_fallback=used_fallback,
    )


def layout_diagram(
    diagram: Diagram,
    cache: LRUCache | None = None,
    router: RouterFn | None = route,
) -> LayoutResult:
    """Run a full layout pass.

    Connections are routed independently and in declaration order; the
    obstacle lists they see are rebuilt per connection and never shared
    mutably. Manual paths are passed through unchanged.

    Args:
        diagram: The diagram declaration.
        cache: Optional AABB memo reused across passes.
        router: Grid router to use for ``auto`` connections. ``None`` draws
            every connection as a direct manhattan path.

    Raises:
        ConfigurationError: on the first inconsistency between the diagram
            and its template catalog.
    """
    layout_id = new_layout_id()
    port_map = resolve_ports(diagram)
    bounds = diagram_bounds(diagram, port_map, cache=cache)

    result = LayoutResult(layout_id=layout_id)
    for connection in diagram.connections:
        key = connection.key
        if key in result.routes:
            raise ConfigurationError(f"Duplicate connection {key}", connection_key=key)
        result.routes[key] = route_connection(
            diagram, connection, port_map, bounds, cache=cache, router=router
        )

    result.manual_paths = list(diagram.manual_paths)
    logger.info(
        f"Layout pass complete: {len(result.routes)} connections "
        f"({result.fallback_count} fallback), {len(result.manual_paths)} manual paths"
    )
    return result
