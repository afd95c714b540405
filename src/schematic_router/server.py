"""Schematic Router MCP Server — entry point."""

from __future__ import annotations

from fastmcp import FastMCP

from .logging_config import setup_logging
from .resources import register_diagram_resources
from .tools import TOOL_REGISTRY


def create_server() -> FastMCP:
    """Create and configure the schematic router MCP server."""
    mcp = FastMCP("schematic-router")

    for spec in TOOL_REGISTRY.values():
        mcp.tool(spec.handler, name=spec.name, description=spec.description)

    register_diagram_resources(mcp)

    return mcp


def main() -> None:
    """CLI entry point."""
    setup_logging()
    server = create_server()
    server.run()


if __name__ == "__main__":
    main()
