"""Common geometry models shared across the router (diagram units)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import ValidationError


def _num(value: float) -> float | int:
    """Render whole floats as ints for compact output."""
    if math.isfinite(value) and value == int(value):
        return int(value)
    return value


@dataclass(frozen=True)
class Point:
    """2D point in diagram coordinates."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, Any]:
        return {"x": _num(self.x), "y": _num(self.y)}


@dataclass(frozen=True)
class AABB:
    """Axis-aligned bounding box used as a routing obstacle."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValidationError(
                f"Invalid AABB: min ({self.min_x}, {self.min_y}) exceeds "
                f"max ({self.max_x}, {self.max_y})",
                field="aabb",
            )

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> AABB:
        """Build from an SVG-style ``x/y/width/height`` rectangle."""
        return cls(min(x, x + width), min(y, y + height), max(x, x + width), max(y, y + height))

    @classmethod
    def from_points(cls, points: list[Point]) -> AABB:
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def corners(self) -> list[Point]:
        return [
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.min_x, self.max_y),
            Point(self.max_x, self.max_y),
        ]

    def contains(self, p: Point) -> bool:
        """Inclusive containment test."""
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def strictly_contains(self, p: Point) -> bool:
        """True when ``p`` lies in the interior, not on the border."""
        return self.min_x < p.x < self.max_x and self.min_y < p.y < self.max_y

    def expanded(self, pad: float) -> AABB:
        return AABB(self.min_x - pad, self.min_y - pad, self.max_x + pad, self.max_y + pad)

    def union(self, other: AABB) -> AABB:
        return AABB(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_x": _num(self.min_x),
            "min_y": _num(self.min_y),
            "max_x": _num(self.max_x),
            "max_y": _num(self.max_y),
        }


class Direction(str, Enum):
    """Preferred exit direction of a port (screen axes, y grows downward)."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def vector(self) -> tuple[int, int]:
        return _DIRECTION_VECTORS[self]

    @classmethod
    def from_vector(cls, dx: float, dy: float) -> Direction:
        """Pick the dominant axis of a vector; ties resolve to horizontal."""
        if abs(dx) >= abs(dy):
            return cls.RIGHT if dx >= 0 else cls.LEFT
        return cls.DOWN if dy >= 0 else cls.UP


_DIRECTION_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}


_QUARTER_TURNS: dict[float, tuple[float, float]] = {
    0.0: (1.0, 0.0),
    90.0: (0.0, 1.0),
    180.0: (-1.0, 0.0),
    270.0: (0.0, -1.0),
}


@dataclass(frozen=True)
class Placement:
    """Instance transform: scale and rotate about the local origin, then translate.

    Positive ``rotation_deg`` turns clockwise on screen, matching SVG's
    ``rotate()`` in a y-down coordinate system.
    """

    x: float
    y: float
    rotation_deg: float = 0.0
    scale: float = 1.0

    @property
    def is_degenerate(self) -> bool:
        """True when the transform cannot place anything (non-finite or zero scale)."""
        values = (self.x, self.y, self.rotation_deg, self.scale)
        return not all(math.isfinite(v) for v in values) or self.scale == 0

    def _cos_sin(self) -> tuple[float, float]:
        # Quarter turns are exact so rotated ports stay on whole coordinates
        quarter = _QUARTER_TURNS.get(self.rotation_deg % 360)
        if quarter is not None:
            return quarter
        rad = math.radians(self.rotation_deg)
        return math.cos(rad), math.sin(rad)

    def apply(self, p: Point) -> Point:
        """Map a template-local point into diagram space."""
        cos_a, sin_a = self._cos_sin()
        lx, ly = p.x * self.scale, p.y * self.scale
        return Point(
            self.x + lx * cos_a - ly * sin_a,
            self.y + lx * sin_a + ly * cos_a,
        )

    def rotate_direction(self, direction: Direction) -> Direction:
        """Map a local exit direction into diagram space."""
        dx, dy = direction.vector
        dx, dy = dx * self.scale, dy * self.scale
        cos_a, sin_a = self._cos_sin()
        return Direction.from_vector(dx * cos_a - dy * sin_a, dx * sin_a + dy * cos_a)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"x": _num(self.x), "y": _num(self.y)}
        if self.rotation_deg != 0.0:
            d["rotation_deg"] = _num(self.rotation_deg)
        if self.scale != 1.0:
            d["scale"] = _num(self.scale)
        return d
