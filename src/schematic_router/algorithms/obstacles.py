"""Obstacle derivation: placed component footprints to padded AABBs."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from ..cache import LRUCache
from ..constants import AABB_PADDING_DEFAULT
from ..exceptions import UnknownTemplateError
from ..logging_config import create_logger
from ..schema.common import AABB, Direction, Placement, Point
from ..schema.diagram import Instance, Template

logger = create_logger(__name__)


def transform_point(point: Point, placement: Placement) -> Point:
    """Map a template-local point into diagram space."""
    return placement.apply(point)


def transform_direction(direction: Direction, placement: Placement) -> Direction:
    """Rotate a port exit direction; off-axis results snap to the dominant axis."""
    return placement.rotate_direction(direction)


def lookup_template(instance: Instance, templates: Mapping[str, Template]) -> Template:
    """Get an instance's template, or raise a configuration error."""
    template = templates.get(instance.template_id)
    if template is None:
        raise UnknownTemplateError(
            f"Template {instance.template_id!r} of instance {instance.id!r} not in catalog",
            template_id=instance.template_id,
        )
    return template


def instance_aabb(
    instance: Instance,
    template: Template,
    padding: float = AABB_PADDING_DEFAULT,
    cache: LRUCache | None = None,
) -> AABB | None:
    """Compute the padded diagram-space bounding box of a placed instance.

    The four corners of the template's local bounds are transformed by the
    instance placement; the axis-aligned hull of the result is inflated by
    ``padding`` on every side.

    Returns:
        The AABB, or None when the template has no bounds or the placement
        is degenerate (non-finite or zero scale). Such instances are not
        obstacles.
    """
    if template.bounds is None or instance.placement.is_degenerate:
        return None

    bounds, placement = template.bounds, instance.placement
    if cache is None:
        return _padded_hull(bounds, placement, padding)
    key = (template.id, bounds, placement, padding)
    return cache.get_or_compute(key, lambda: _padded_hull(bounds, placement, padding))


def _padded_hull(bounds: AABB, placement: Placement, padding: float) -> AABB | None:
    corners = [transform_point(c, placement) for c in bounds.corners()]
    if not all(math.isfinite(c.x) and math.isfinite(c.y) for c in corners):
        return None
    return AABB.from_points(corners).expanded(padding)


def build_obstacles(
    instances: Iterable[Instance],
    templates: Mapping[str, Template],
    ignore_ids: Iterable[str] = (),
    padding: float = AABB_PADDING_DEFAULT,
    cache: LRUCache | None = None,
) -> list[AABB]:
    """Build the obstacle list for one routing call.

    Args:
        instances: All placed instances.
        templates: Template catalog.
        ignore_ids: Component ids that are not obstacles (usually the two
            endpoints of the connection being routed).
        padding: Margin added around each footprint.
        cache: Optional AABB memo shared across layout passes.

    Raises:
        UnknownTemplateError: if an instance's template is missing.
    """
    ignore = set(ignore_ids)
    obstacles: list[AABB] = []
    for inst in instances:
        if inst.id in ignore:
            continue
        aabb = instance_aabb(inst, lookup_template(inst, templates), padding, cache)
        if aabb is None:
            logger.debug(f"Instance {inst.id} has no usable footprint; not an obstacle")
            continue
        obstacles.append(aabb)
    return obstacles
