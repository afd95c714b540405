"""Diagram tools — load a diagram, run layout passes, inspect routes."""

from __future__ import annotations

from typing import Any

from ..exceptions import SchematicRouterError
from .registry import TOOL_REGISTRY, register_tool


def _load_diagram_handler(
    diagram_path: str | None = None,
    diagram: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Load a diagram from a JSON file or an inline document.

    Args:
        diagram_path: Path to a JSON diagram file.
        diagram: Inline diagram document (alternative to diagram_path).
    """
    from .. import state
    from ..schema import parse_diagram

    if diagram_path is None and diagram is None:
        return {"error": "Specify diagram_path or diagram"}

    try:
        if diagram_path is not None:
            loaded = state.load_diagram(diagram_path)
        else:
            loaded = parse_diagram(diagram or {})
            state.set_diagram(loaded, source=None)
    except SchematicRouterError as e:
        return e.to_dict()

    return {
        "status": "ok",
        "message": f"Loaded diagram: {diagram_path or 'inline document'}",
        "summary": loaded.to_dict(),
    }


def _route_diagram_handler(use_cache: bool = True) -> dict[str, Any]:
    """Run a full layout pass over the loaded diagram.

    Args:
        use_cache: Reuse component boxes from earlier passes. Default: True.
    """
    from .. import state
    from ..cache import get_aabb_cache
    from ..layout import layout_diagram

    try:
        diagram = state.get_diagram()
    except RuntimeError as e:
        return {"error": str(e)}

    try:
        layout = layout_diagram(diagram, cache=get_aabb_cache() if use_cache else None)
    except SchematicRouterError as e:
        return e.to_dict()

    state.set_layout(layout)
    return {"status": "ok", "result": layout.to_dict()}


def _get_route_handler(key: str) -> dict[str, Any]:
    """Get one routed connection from the last layout pass.

    Args:
        key: Connection key, e.g. "boiler:T->v1:AB".
    """
    from .. import state

    layout = state.get_layout()
    if layout is None:
        return {"error": "No layout computed. Use route_diagram first."}

    routed = layout.routes.get(key)
    if routed is None:
        return {
            "found": False,
            "key": key,
            "available_keys": sorted(layout.routes)[:50],
        }
    return {"found": True, "route": routed.to_dict()}


def _list_obstacles_handler(
    ignore: list[str] | None = None,
    padding: float | None = None,
) -> dict[str, Any]:
    """List the obstacle boxes the router would avoid.

    Args:
        ignore: Component ids to leave out (e.g. a connection's endpoints).
        padding: Margin around each footprint. Default: routing padding.
    """
    from .. import state
    from ..algorithms.obstacles import build_obstacles
    from ..constants import OBSTACLE_PADDING_DEFAULT

    try:
        diagram = state.get_diagram()
        obstacles = build_obstacles(
            diagram.instances,
            diagram.templates,
            ignore or (),
            OBSTACLE_PADDING_DEFAULT if padding is None else padding,
        )
    except RuntimeError as e:
        return {"error": str(e)}
    except SchematicRouterError as e:
        return e.to_dict()

    return {"count": len(obstacles), "obstacles": [o.to_dict() for o in obstacles]}


def _preview_route_handler(
    from_ref: str,
    to_ref: str,
    route_mode: str = "auto",
    stub: float | None = None,
    router: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Route an ad-hoc connection on the loaded diagram without storing it.

    Args:
        from_ref: Start port, "component:PORT".
        to_ref: End port, "component:PORT".
        route_mode: "auto" or "manhattan". Default: "auto".
        stub: Stub length. Default: 16.
        router: Router option overrides for this connection.
    """
    from .. import state
    from ..layout import diagram_bounds, resolve_ports, route_connection
    from ..schema.extract import extract_connection

    try:
        diagram = state.get_diagram()
    except RuntimeError as e:
        return {"error": str(e)}

    raw: dict[str, Any] = {"from": from_ref, "to": to_ref, "route": route_mode}
    if stub is not None:
        raw["stub"] = stub
    if router:
        raw["router"] = router

    try:
        connection = extract_connection(raw)
        port_map = resolve_ports(diagram)
        bounds = diagram_bounds(
            diagram, port_map, connections=[*diagram.connections, connection]
        )
        routed = route_connection(diagram, connection, port_map, bounds)
    except SchematicRouterError as e:
        return e.to_dict()

    return {"status": "preview", "route": routed.to_dict()}


def _list_tools_handler() -> dict[str, Any]:
    """List every registered tool with its parameters."""
    return {"tools": [spec.to_dict() for spec in TOOL_REGISTRY.values()]}


register_tool(
    name="load_diagram",
    description="Load a schematic diagram (templates, instances, connections) from JSON.",
    parameters={
        "diagram_path": {"type": "string", "description": "Path to a JSON diagram file."},
        "diagram": {"type": "object", "description": "Inline diagram document."},
    },
    handler=_load_diagram_handler,
    category="diagram",
)

register_tool(
    name="route_diagram",
    description="Route every connection of the loaded diagram and return the polylines.",
    parameters={
        "use_cache": {
            "type": "boolean",
            "description": "Reuse component boxes across passes. Default: true.",
        },
    },
    handler=_route_diagram_handler,
    category="layout",
)

register_tool(
    name="get_route",
    description="Get one routed connection by key from the last layout pass.",
    parameters={
        "key": {"type": "string", "description": "Connection key, e.g. 'boiler:T->v1:AB'."},
    },
    handler=_get_route_handler,
    category="layout",
)

register_tool(
    name="list_obstacles",
    description="List the padded component boxes the router avoids.",
    parameters={
        "ignore": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Component ids to leave out.",
        },
        "padding": {"type": "number", "description": "Padding. Default: 18."},
    },
    handler=_list_obstacles_handler,
    category="layout",
)

register_tool(
    name="preview_route",
    description="Route an ad-hoc port-to-port connection on the loaded diagram.",
    parameters={
        "from_ref": {"type": "string", "description": "Start port, 'component:PORT'."},
        "to_ref": {"type": "string", "description": "End port, 'component:PORT'."},
        "route_mode": {
            "type": "string",
            "description": "'auto' or 'manhattan'. Default: 'auto'.",
        },
        "stub": {"type": "number", "description": "Stub length. Default: 16."},
        "router": {"type": "object", "description": "Router option overrides."},
    },
    handler=_preview_route_handler,
    category="layout",
)

register_tool(
    name="list_tools",
    description="List every available schematic router tool.",
    parameters={},
    handler=_list_tools_handler,
)
