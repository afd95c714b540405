"""Polyline helpers: simplification, manhattan fallbacks, path descriptors."""

from __future__ import annotations

from collections.abc import Sequence

from ..schema.common import AABB, Point


def simplify(points: Sequence[Point]) -> list[Point]:
    """Remove interior points that continue a straight horizontal or vertical run.

    Each candidate is compared against the last point already kept, so
    repeated points collapse too. Passes repeat until nothing changes, which
    makes ``simplify(simplify(p)) == simplify(p)`` hold even for paths that
    double back on themselves. Both endpoints and all true corners are kept.
    """
    result = list(points)
    while True:
        reduced = _collapse_collinear(result)
        if len(reduced) == len(result):
            return reduced
        result = reduced


def _collapse_collinear(points: list[Point]) -> list[Point]:
    if len(points) <= 2:
        return list(points)

    result = [points[0]]
    for i in range(1, len(points) - 1):
        a = result[-1]
        b = points[i]
        c = points[i + 1]

        if (a.x == b.x == c.x) or (a.y == b.y == c.y):
            continue
        result.append(b)

    result.append(points[-1])
    return result


def manhattan_path(a: Point, b: Point, mid_x: float | None = None) -> list[Point]:
    """Direct orthogonal path from ``a`` to ``b``, ignoring obstacles.

    Horizontal first, then vertical. With ``mid_x`` the path runs
    horizontally to ``mid_x``, vertically to ``b.y``, then horizontally to ``b``.
    """
    if mid_x is None:
        return [a, Point(b.x, a.y), b]
    return [a, Point(mid_x, a.y), Point(mid_x, b.y), b]


def orthogonalize(
    points: Sequence[Point], obstacles: Sequence[AABB] = ()
) -> list[Point] | None:
    """Insert an elbow between neighbours that differ on both axes.

    The elbow is ``(b.x, a.y)`` unless that lies inside an obstacle, in which
    case ``(a.x, b.y)`` is tried. Returns None when both are blocked.
    """
    if not points:
        return []
    result = [points[0]]
    for b in points[1:]:
        a = result[-1]
        if a.x != b.x and a.y != b.y:
            for elbow in (Point(b.x, a.y), Point(a.x, b.y)):
                if not any(o.strictly_contains(elbow) for o in obstacles):
                    result.append(elbow)
                    break
            else:
                return None
        result.append(b)
    return result


def _fmt(v: float) -> str:
    if v == int(v):
        return str(int(v))
    return repr(round(v, 6))


def points_to_path(points: Sequence[Point]) -> str:
    """Render a ``M x y L x y ...`` descriptor for a vector-graphics renderer."""
    if not points:
        return ""
    first, *rest = points
    parts = [f"M {_fmt(first.x)} {_fmt(first.y)}"]
    parts.extend(f"L {_fmt(p.x)} {_fmt(p.y)}" for p in rest)
    return " ".join(parts)
