"""Router configuration: corridors and grid-search options."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

from ..constants import (
    CORRIDOR_PENALTY_DEFAULT,
    CORRIDOR_SNAP_DEFAULT,
    EDGE_MARGIN_DEFAULT,
    GRID_SIZE_DEFAULT,
    MAX_ITERATIONS_DEFAULT,
)
from ..exceptions import ValidationError
from ..validation import validate_coordinate, validate_count, validate_dimension

# Diagram documents written for the browser front end use these spellings
_OPTION_ALIASES: dict[str, str] = {
    "grid": "grid_size",
    "gridSize": "grid_size",
    "maxIter": "max_iterations",
    "maxIterations": "max_iterations",
    "corridorPenalty": "corridor_penalty",
    "corridorSnap": "corridor_snap_distance",
    "corridorSnapDistance": "corridor_snap_distance",
    "corridor_snap": "corridor_snap_distance",
    "preferEdges": "prefer_edges",
    "edgeMargin": "edge_margin",
}


@dataclass(frozen=True)
class Corridors:
    """Preferred vertical (``x``) and horizontal (``y``) routing lines."""

    x: tuple[float, ...] = ()
    y: tuple[float, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | Corridors | None) -> Corridors:
        if data is None:
            return cls()
        if isinstance(data, Corridors):
            return data
        if not isinstance(data, dict):
            raise ValidationError(
                f"corridors must be an object with x/y lists, got {type(data).__name__}",
                field="corridors",
            )
        return cls(
            x=_coordinate_tuple(data.get("x") or (), "corridors.x"),
            y=_coordinate_tuple(data.get("y") or (), "corridors.y"),
        )

    def __bool__(self) -> bool:
        return bool(self.x or self.y)

    def with_lines(self, xs: tuple[float, ...], ys: tuple[float, ...]) -> Corridors:
        return Corridors(self.x + tuple(xs), self.y + tuple(ys))

    def to_dict(self) -> dict[str, Any]:
        return {"x": list(self.x), "y": list(self.y)}


def _coordinate_tuple(values: Any, name: str) -> tuple[float, ...]:
    if not isinstance(values, (list, tuple)):
        raise ValidationError(f"{name} must be a list of numbers", field=name)
    out = []
    for v in values:
        result = validate_coordinate(v, name)
        if not result.valid:
            raise ValidationError(result.error or f"Invalid {name}", field=name)
        out.append(result.value)
    return tuple(out)


@dataclass(frozen=True)
class RouterOptions:
    """Options for the grid router.

    Diagram-wide defaults are merged over the module constants, and
    per-connection overrides are merged over those with :meth:`merged`.
    """

    grid_size: float = GRID_SIZE_DEFAULT
    max_iterations: int = MAX_ITERATIONS_DEFAULT
    corridors: Corridors = field(default_factory=Corridors)
    corridor_penalty: float = CORRIDOR_PENALTY_DEFAULT
    corridor_snap_distance: float = CORRIDOR_SNAP_DEFAULT
    prefer_edges: bool = False
    edge_margin: float = EDGE_MARGIN_DEFAULT

    def __post_init__(self) -> None:
        checks = (
            validate_dimension(self.grid_size, "grid_size", min_value=0.0, exclusive_min=True),
            validate_count(self.max_iterations, "max_iterations"),
            validate_dimension(self.corridor_penalty, "corridor_penalty"),
            validate_dimension(self.corridor_snap_distance, "corridor_snap_distance"),
            validate_dimension(self.edge_margin, "edge_margin"),
        )
        for check in checks:
            if not check.valid:
                raise ValidationError(check.error or "Invalid router option", field="router")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RouterOptions:
        return cls().merged(data)

    def merged(self, overrides: dict[str, Any] | None) -> RouterOptions:
        """Return a copy with the given overrides applied.

        Unknown keys are rejected so that typos in a diagram surface early.
        """
        if not overrides:
            return self
        if not isinstance(overrides, dict):
            raise ValidationError(
                f"router options must be an object, got {type(overrides).__name__}",
                field="router",
            )

        known = {f.name for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValidationError(f"Unknown router option {key!r}", field=key)
            if name == "corridors":
                value = Corridors.from_dict(value)
            elif name == "prefer_edges":
                if not isinstance(value, bool):
                    raise ValidationError(
                        f"{key} must be true or false, got {value!r}", field=key
                    )
            else:
                result = (
                    validate_count(value, name)
                    if name == "max_iterations"
                    else validate_coordinate(value, name)
                )
                if not result.valid:
                    raise ValidationError(result.error or f"Invalid {name}", field=name)
                value = result.value
            changes[name] = value
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "grid_size": self.grid_size,
            "max_iterations": self.max_iterations,
            "corridors": self.corridors.to_dict(),
            "corridor_penalty": self.corridor_penalty,
            "corridor_snap_distance": self.corridor_snap_distance,
            "prefer_edges": self.prefer_edges,
            "edge_margin": self.edge_margin,
        }
