"""Tool registry: one declaration per MCP tool, shared by the server and ``list_tools``."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class ToolSpec:
    """Declarative specification for a single MCP tool."""

    name: str
    description: str
    handler: Callable[..., dict[str, Any]]
    parameters: dict[str, Any] = field(default_factory=dict)
    category: str = "general"

    @property
    def required(self) -> list[str]:
        """Handler parameters without a default."""
        return [
            p.name
            for p in inspect.signature(self.handler).parameters.values()
            if p.default is inspect.Parameter.empty
            and p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "parameters": self.parameters,
            "required": self.required,
        }


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    description: str,
    parameters: dict[str, Any],
    handler: Callable[..., dict[str, Any]],
    *,
    category: str = "general",
) -> None:
    """Add a handler to the registry under ``name``.

    Raises:
        ValueError: if a tool with the same name is already registered.
    """
    if name in TOOL_REGISTRY:
        raise ValueError(f"Tool {name!r} is already registered")
    TOOL_REGISTRY[name] = ToolSpec(
        name=name,
        description=description,
        handler=handler,
        parameters=parameters,
        category=category,
    )


def get_categories() -> dict[str, list[ToolSpec]]:
    """Return tools grouped by category, in registration order."""
    categories: dict[str, list[ToolSpec]] = {}
    for tool in TOOL_REGISTRY.values():
        categories.setdefault(tool.category, []).append(tool)
    return categories
