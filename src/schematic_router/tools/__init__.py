"""Schematic router tools."""

# Import modules to trigger tool registration via register_tool() calls
from . import diagram  # noqa: F401
from .registry import TOOL_REGISTRY, get_categories, register_tool

__all__ = [
    "TOOL_REGISTRY",
    "get_categories",
    "register_tool",
]
