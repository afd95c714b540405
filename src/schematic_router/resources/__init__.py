"""MCP resources — read-only diagram state."""

from .diagram import register_diagram_resources

__all__ = ["register_diagram_resources"]
