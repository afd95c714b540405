"""Global diagram state for the MCP server.

Holds the currently loaded diagram and the result of its last layout pass.
Thread-safe: all reads and writes go through a module-level lock. The router
itself is stateless; this module only serves the tool and resource layer.
"""

from __future__ import annotations

import threading

from .algorithms.types import LayoutResult
from .schema import Diagram
from .schema.extract import load_diagram as _load_diagram_file

_lock = threading.Lock()
_current_diagram: Diagram | None = None
_current_source: str | None = None
_last_layout: LayoutResult | None = None


def load_diagram(path: str) -> Diagram:
    """Load a diagram file and make it current."""
    # Do I/O outside the lock
    diagram = _load_diagram_file(path)
    set_diagram(diagram, source=path)
    return diagram


def set_diagram(diagram: Diagram, source: str | None = None) -> None:
    """Replace the current diagram, dropping any previous layout."""
    global _current_diagram, _current_source, _last_layout
    with _lock:
        _current_diagram = diagram
        _current_source = source
        _last_layout = None


def get_diagram() -> Diagram:
    """Get the currently loaded diagram, or raise."""
    with _lock:
        if _current_diagram is None:
            raise RuntimeError("No diagram loaded. Use load_diagram first.")
        return _current_diagram


def get_source() -> str | None:
    """Get the path the current diagram was loaded from, if any."""
    with _lock:
        return _current_source


def set_layout(layout: LayoutResult) -> None:
    global _last_layout
    with _lock:
        _last_layout = layout


def get_layout() -> LayoutResult | None:
    """Get the last layout result for the current diagram, if one was computed."""
    with _lock:
        return _last_layout


def is_loaded() -> bool:
    """Check if a diagram is currently loaded."""
    with _lock:
        return _current_diagram is not None


def clear() -> None:
    global _current_diagram, _current_source, _last_layout
    with _lock:
        _current_diagram = None
        _current_source = None
        _last_layout = None
