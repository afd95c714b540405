"""Extract typed diagram models from a JSON diagram document."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..exceptions import DiagramFormatError, ValidationError
from ..logging_config import create_logger
from ..validation import (
    ValidationResult,
    validate_angle,
    validate_choice,
    validate_coordinate,
    validate_dimension,
    validate_identifier,
)
from .common import AABB, Direction, Placement, Point
from .diagram import Connection, Diagram, Instance, ManualPath, PortRef, PortSpec, Template
from .options import Corridors, RouterOptions

logger = create_logger(__name__)

_DIRECTIONS = tuple(d.value for d in Direction)


def _require(result: ValidationResult, source: str) -> Any:
    if not result.valid:
        raise DiagramFormatError(result.error or f"Invalid {source}", source=source)
    return result.value


def _first(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def extract_point(raw: Any, source: str = "point") -> Point:
    """Parse ``{"x": .., "y": ..}`` or ``[x, y]``."""
    if isinstance(raw, dict):
        x, y = raw.get("x"), raw.get("y")
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        x, y = raw
    else:
        raise DiagramFormatError(f"Invalid point in {source}: {raw!r}", source=source)
    return Point(
        _require(validate_coordinate(x, f"{source}.x"), source),
        _require(validate_coordinate(y, f"{source}.y"), source),
    )


def extract_rect(raw: Any, source: str) -> AABB:
    """Parse an ``x/y/width/height`` rectangle, a ``min_x..max_y`` box or ``[x, y, w, h]``."""
    if isinstance(raw, (list, tuple)) and len(raw) == 4:
        raw = dict(zip(("x", "y", "width", "height"), raw))
    if not isinstance(raw, dict):
        raise DiagramFormatError(f"Invalid rectangle in {source}: {raw!r}", source=source)

    if "min_x" in raw:
        values = [
            _require(validate_coordinate(raw.get(k), f"{source}.{k}"), source)
            for k in ("min_x", "min_y", "max_x", "max_y")
        ]
        try:
            return AABB(*values)
        except ValidationError as e:
            raise DiagramFormatError(e.message, source=source) from e

    x = _require(validate_coordinate(raw.get("x", 0.0), f"{source}.x"), source)
    y = _require(validate_coordinate(raw.get("y", 0.0), f"{source}.y"), source)
    w = _require(validate_dimension(raw.get("width"), f"{source}.width"), source)
    h = _require(validate_dimension(raw.get("height"), f"{source}.height"), source)
    return AABB.from_rect(x, y, w, h)


def extract_port(name: str, raw: Any, template_id: str) -> PortSpec:
    source = f"template {template_id} port {name}"
    _require(validate_identifier(name, "port name"), source)
    if not isinstance(raw, dict):
        raise DiagramFormatError(f"Invalid port definition in {source}", source=source)
    anchor = extract_point(raw.get("anchor", raw), source)
    raw_dir = _first(raw, "dir", "direction")
    direction = None
    if raw_dir is not None:
        direction = Direction(_require(validate_choice(raw_dir, _DIRECTIONS, "dir"), source))
    return PortSpec(name=name, anchor=anchor, direction=direction)


def extract_template(template_id: str, raw: Any) -> Template:
    source = f"template {template_id}"
    _require(validate_identifier(template_id, "template id"), source)
    if not isinstance(raw, dict):
        raise DiagramFormatError(f"Invalid definition for {source}", source=source)

    raw_bounds = raw.get("bounds")
    bounds = extract_rect(raw_bounds, f"{source}.bounds") if raw_bounds is not None else None

    raw_ports = raw.get("ports") or {}
    if isinstance(raw_ports, list):
        raw_ports = {p.get("name"): p for p in raw_ports if isinstance(p, dict)}
    if not isinstance(raw_ports, dict):
        raise DiagramFormatError(f"ports of {source} must be an object", source=source)

    ports = {name: extract_port(name, spec, template_id) for name, spec in raw_ports.items()}
    return Template(id=template_id, bounds=bounds, ports=ports)


def extract_templates(raw: Any) -> dict[str, Template]:
    if isinstance(raw, list):
        raw = {t.get("id"): t for t in raw if isinstance(t, dict)}
    if not isinstance(raw, dict):
        raise DiagramFormatError("templates must be an object or a list", source="templates")
    return {tid: extract_template(tid, spec) for tid, spec in raw.items()}


def extract_instance(raw: Any) -> tuple[Instance, dict[str, Any]]:
    """Parse one instance, returning its geometry and its visual variables."""
    if not isinstance(raw, dict):
        raise DiagramFormatError(f"Invalid instance: {raw!r}", source="instances")
    inst_id = _require(validate_identifier(raw.get("id"), "instance id"), "instances")
    source = f"instance {inst_id}"
    template_id = _require(
        validate_identifier(_first(raw, "template", "tpl", "template_id"), "template id"),
        source,
    )
    placement = Placement(
        x=_require(validate_coordinate(raw.get("x"), f"{source}.x"), source),
        y=_require(validate_coordinate(raw.get("y"), f"{source}.y"), source),
        rotation_deg=_require(
            validate_angle(_first(raw, "rotation_deg", "rotateDeg", "rotation", default=0.0)),
            source,
        ),
        scale=_require(
            validate_dimension(raw.get("scale", 1.0), f"{source}.scale", exclusive_min=True),
            source,
        ),
    )
    vars_ = raw.get("vars") or {}
    if not isinstance(vars_, dict):
        raise DiagramFormatError(f"vars of {source} must be an object", source=source)
    return Instance(id=inst_id, template_id=template_id, placement=placement), dict(vars_)


def extract_connection(raw: Any, index: int = 0) -> Connection:
    source = f"connection #{index}"
    if not isinstance(raw, dict):
        raise DiagramFormatError(f"Invalid {source}: {raw!r}", source=source)
    if raw.get("from") is None or raw.get("to") is None:
        raise DiagramFormatError(f"{source} must have from/to", source=source)

    from_ref = PortRef.parse(raw["from"])
    to_ref = PortRef.parse(raw["to"])

    stub = _first(raw, "stub", "stub_length")
    if stub is not None:
        stub = _require(validate_dimension(stub, f"{source}.stub"), source)
    mid_x = _first(raw, "mid_x", "midX")
    if mid_x is not None:
        mid_x = _require(validate_coordinate(mid_x, f"{source}.mid_x"), source)

    overrides = _first(raw, "router", "router_options")
    if overrides is not None and not isinstance(overrides, dict):
        raise DiagramFormatError(f"router of {source} must be an object", source=source)

    hints = _first(raw, "corridors", "corridor_hints")
    try:
        corridor_hints = Corridors.from_dict(hints) if hints is not None else None
        if overrides:
            # Fail on bad overrides at load time, not midway through a layout pass
            RouterOptions().merged(overrides)
    except ValidationError as e:
        raise DiagramFormatError(f"{source}: {e.message}", source=source) from e

    return Connection(
        from_ref=from_ref,
        to_ref=to_ref,
        style=str(_first(raw, "style", "cls", default="pipe")),
        route_mode=str(_first(raw, "route", "route_mode", default="auto")),
        stub_length=stub,
        corridor_hints=corridor_hints,
        router_overrides=dict(overrides) if overrides else None,
        mid_x=mid_x,
        marker=raw.get("marker"),
    )


def extract_manual_path(raw: Any, index: int = 0) -> ManualPath:
    source = f"manual path #{index}"
    if not isinstance(raw, dict) or not isinstance(raw.get("points"), list):
        raise DiagramFormatError(f"{source} must have a points list", source=source)
    points = tuple(extract_point(p, source) for p in raw["points"])
    attrs = raw.get("attrs")
    if attrs is not None and not isinstance(attrs, dict):
        raise DiagramFormatError(f"attrs of {source} must be an object", source=source)
    return ManualPath(
        points=points,
        style=str(_first(raw, "style", "cls", default="pipe")),
        marker=raw.get("marker"),
        attrs=attrs,
    )


def parse_diagram(data: dict[str, Any]) -> Diagram:
    """Build a :class:`Diagram` from a decoded JSON document.

    Raises:
        DiagramFormatError: if any part of the document is malformed.
    """
    if not isinstance(data, dict):
        raise DiagramFormatError("Diagram document must be a JSON object", source="document")

    templates = extract_templates(data.get("templates") or {})

    instances: list[Instance] = []
    visual_state: dict[str, dict[str, Any]] = {}
    for raw in data.get("instances") or []:
        inst, vars_ = extract_instance(raw)
        if inst.id in visual_state:
            raise DiagramFormatError(f"Duplicate instance id {inst.id!r}", source="instances")
        instances.append(inst)
        visual_state[inst.id] = vars_

    connections = [
        extract_connection(raw, i) for i, raw in enumerate(data.get("connections") or [])
    ]
    manual_paths = [
        extract_manual_path(raw, i)
        for i, raw in enumerate(_first(data, "manual_paths", "manualPaths", default=[]))
    ]

    try:
        router_options = RouterOptions.from_dict(_first(data, "router", "router_options"))
    except ValidationError as e:
        raise DiagramFormatError(f"router: {e.message}", source="router") from e

    raw_view_box = _first(data, "view_box", "viewBox")
    view_box = extract_rect(raw_view_box, "view_box") if raw_view_box is not None else None

    logger.debug(
        f"Parsed diagram: {len(templates)} templates, {len(instances)} instances, "
        f"{len(connections)} connections"
    )
    return Diagram(
        templates=templates,
        instances=instances,
        connections=connections,
        manual_paths=manual_paths,
        router_options=router_options,
        view_box=view_box,
        visual_state=visual_state,
    )


def load_diagram(path: str | Path) -> Diagram:
    """Load and parse a JSON diagram file."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise DiagramFormatError(f"Cannot read diagram {p}: {e}", source=str(p)) from e
    except json.JSONDecodeError as e:
        raise DiagramFormatError(f"Invalid JSON in {p}: {e}", source=str(p)) from e
    return parse_diagram(data)
