"""MCP Resources — read-only diagram state exposed to clients.

The routes resource returns the key -> polyline map the rendering and
live-state layers consume; keys are stable across layout passes.
"""

from __future__ import annotations

import json

from fastmcp import FastMCP


def summary_json() -> str:
    from .. import state

    if not state.is_loaded():
        return json.dumps({"error": "No diagram loaded. Use load_diagram first."})
    summary = state.get_diagram().to_dict()
    summary["source"] = state.get_source()
    return json.dumps(summary, indent=2)


def routes_json() -> str:
    from .. import state

    layout = state.get_layout()
    if layout is None:
        return json.dumps({"error": "No layout computed. Use route_diagram first."})
    return json.dumps(
        {
            "layout_id": layout.layout_id,
            "routes": {
                key: {"path": route.path, "kind": route.kind, "style": route.style}
                for key, route in layout.routes.items()
            },
        },
        indent=2,
    )


def register_diagram_resources(mcp: FastMCP) -> None:
    """Register diagram-related MCP resources."""

    @mcp.resource("schematic://diagram/summary")
    def diagram_summary() -> str:
        """Summary of the currently loaded diagram and its router defaults."""
        return summary_json()

    @mcp.resource("schematic://diagram/routes")
    def diagram_routes() -> str:
        """Polylines of the last layout pass, keyed by connection."""
        return routes_json()
