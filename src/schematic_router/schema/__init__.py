"""Typed data models for schematic diagrams."""

from .common import AABB, Direction, Placement, Point
from .diagram import (
    Connection,
    Diagram,
    Instance,
    ManualPath,
    PortRef,
    PortSpec,
    Template,
    connection_key,
)
from .extract import load_diagram, parse_diagram
from .helpers import connect, connect_preheat, connect_return, connect_supply, connect_wire
from .options import Corridors, RouterOptions

__all__ = [
    "AABB",
    "Connection",
    "Corridors",
    "Diagram",
    "Direction",
    "Instance",
    "ManualPath",
    "Placement",
    "Point",
    "PortRef",
    "PortSpec",
    "RouterOptions",
    "Template",
    "connect",
    "connect_preheat",
    "connect_return",
    "connect_supply",
    "connect_wire",
    "connection_key",
    "load_diagram",
    "parse_diagram",
]
