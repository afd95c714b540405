"""Shorthand builders for heating-system connections.

Each flavour only changes the default style classes and arrow marker; any
explicit ``style`` or ``marker`` wins.
"""

from __future__ import annotations

from typing import Any

from .diagram import Connection, PortRef
from .options import Corridors


def connect(
    from_component: str,
    from_port: str,
    to_component: str,
    to_port: str,
    *,
    style: str | None = None,
    marker: str | None = None,
    route: str = "auto",
    stub: float | None = None,
    mid_x: float | None = None,
    corridors: dict[str, Any] | Corridors | None = None,
    router: dict[str, Any] | None = None,
) -> Connection:
    """Build a port-to-port connection."""
    return Connection(
        from_ref=PortRef(from_component, from_port),
        to_ref=PortRef(to_component, to_port),
        style=style or "pipe",
        route_mode=route,
        stub_length=stub,
        corridor_hints=Corridors.from_dict(corridors) if corridors is not None else None,
        router_overrides=router,
        mid_x=mid_x,
        marker=marker,
    )


def connect_supply(*args: Any, **kwargs: Any) -> Connection:
    """Hot supply pipe, solid with a supply arrow."""
    kwargs["style"] = kwargs.get("style") or "pipe supply"
    kwargs["marker"] = kwargs.get("marker") or "url(#arrow_supply)"
    return connect(*args, **kwargs)


def connect_return(*args: Any, **kwargs: Any) -> Connection:
    """Return pipe, dashed with a return arrow."""
    kwargs["style"] = kwargs.get("style") or "pipe return dashed"
    kwargs["marker"] = kwargs.get("marker") or "url(#arrow_return)"
    return connect(*args, **kwargs)


def connect_preheat(*args: Any, **kwargs: Any) -> Connection:
    kwargs["style"] = kwargs.get("style") or "pipe preheat dashed"
    kwargs["marker"] = kwargs.get("marker") or "url(#arrow_preheat)"
    return connect(*args, **kwargs)


def connect_wire(*args: Any, **kwargs: Any) -> Connection:
    """Sensor signal wire; no arrow unless one is given."""
    kwargs["style"] = kwargs.get("style") or "wire dashed"
    return connect(*args, **kwargs)
