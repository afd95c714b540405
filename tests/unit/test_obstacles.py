"""Tests for obstacle derivation (algorithms/obstacles.py)."""

from __future__ import annotations

import pytest

from schematic_router.algorithms.obstacles import (
    build_obstacles,
    instance_aabb,
    lookup_template,
    transform_direction,
    transform_point,
)
from schematic_router.cache import LRUCache
from schematic_router.exceptions import ConfigurationError, UnknownTemplateError
from schematic_router.schema import AABB, Direction, Instance, Placement, Point, Template


def _make_template(bounds: AABB | None = None) -> Template:
    return Template(id="box", bounds=bounds if bounds is not None else AABB(-10, -5, 10, 5))


def _make_instance(
    inst_id: str = "c1",
    x: float = 100.0,
    y: float = 100.0,
    rotation: float = 0.0,
    scale: float = 1.0,
    template_id: str = "box",
) -> Instance:
    return Instance(
        id=inst_id,
        template_id=template_id,
        placement=Placement(x=x, y=y, rotation_deg=rotation, scale=scale),
    )


class TestInstanceAabb:
    def test_translation_only(self) -> None:
        aabb = instance_aabb(_make_instance(), _make_template(), padding=0)
        assert aabb == AABB(90, 95, 110, 105)

    def test_padding(self) -> None:
        aabb = instance_aabb(_make_instance(), _make_template(), padding=12)
        assert aabb == AABB(78, 83, 122, 117)

    def test_default_padding(self) -> None:
        aabb = instance_aabb(_make_instance(), _make_template())
        assert aabb == AABB(78, 83, 122, 117)

    def test_quarter_turn_swaps_extent(self) -> None:
        aabb = instance_aabb(_make_instance(rotation=90), _make_template(), padding=0)
        assert aabb == AABB(95, 90, 105, 110)

    def test_half_turn(self) -> None:
        template = _make_template(AABB(0, 0, 20, 10))
        aabb = instance_aabb(_make_instance(rotation=180), template, padding=0)
        assert aabb == AABB(80, 90, 100, 100)

    def test_arbitrary_rotation_covers_corners(self) -> None:
        aabb = instance_aabb(_make_instance(rotation=45), _make_template(), padding=0)
        assert aabb is not None
        # Rotated 20x10 box: half-extent (10 + 5) / sqrt(2) on both axes
        assert aabb.width == pytest.approx(15 * 2**0.5)
        assert aabb.height == pytest.approx(15 * 2**0.5)
        assert aabb.center.x == pytest.approx(100)
        assert aabb.center.y == pytest.approx(100)

    def test_scale(self) -> None:
        aabb = instance_aabb(_make_instance(scale=0.5), _make_template(), padding=0)
        assert aabb == AABB(95, 97.5, 105, 102.5)

    def test_no_bounds_is_not_obstacle(self) -> None:
        template = Template(id="label")
        assert instance_aabb(_make_instance(template_id="label"), template) is None

    def test_degenerate_placement_skipped(self) -> None:
        assert instance_aabb(_make_instance(scale=0), _make_template()) is None
        assert instance_aabb(_make_instance(x=float("nan")), _make_template()) is None
        assert instance_aabb(_make_instance(rotation=float("inf")), _make_template()) is None

    def test_cache_returns_same_box(self) -> None:
        cache = LRUCache(max_size=8)
        inst, tpl = _make_instance(), _make_template()
        first = instance_aabb(inst, tpl, padding=12, cache=cache)
        second = instance_aabb(inst, tpl, padding=12, cache=cache)
        assert first == second == instance_aabb(inst, tpl, padding=12)
        assert cache.stats["hits"] == 1

    def test_cache_keyed_by_padding(self) -> None:
        cache = LRUCache(max_size=8)
        inst, tpl = _make_instance(), _make_template()
        a = instance_aabb(inst, tpl, padding=0, cache=cache)
        b = instance_aabb(inst, tpl, padding=18, cache=cache)
        assert a != b
        assert len(cache) == 2


class TestBuildObstacles:
    def test_one_box_per_instance(self) -> None:
        templates = {"box": _make_template()}
        instances = [_make_instance("a", x=0), _make_instance("b", x=200)]
        obstacles = build_obstacles(instances, templates, padding=0)
        assert obstacles == [AABB(-10, 95, 10, 105), AABB(190, 95, 210, 105)]

    def test_ignored_ids_skipped(self) -> None:
        templates = {"box": _make_template()}
        instances = [_make_instance("a"), _make_instance("b"), _make_instance("c")]
        obstacles = build_obstacles(instances, templates, ignore_ids={"a", "c"})
        assert len(obstacles) == 1

    def test_degenerate_instances_dropped(self) -> None:
        templates = {"box": _make_template()}
        instances = [_make_instance("a"), _make_instance("b", scale=0)]
        assert len(build_obstacles(instances, templates)) == 1

    def test_unknown_template_raises(self) -> None:
        with pytest.raises(UnknownTemplateError) as exc_info:
            build_obstacles([_make_instance(template_id="missing")], {})
        assert exc_info.value.template_id == "missing"
        assert isinstance(exc_info.value, ConfigurationError)


class TestLookupTemplate:
    def test_found(self) -> None:
        tpl = _make_template()
        assert lookup_template(_make_instance(), {"box": tpl}) is tpl

    def test_missing(self) -> None:
        with pytest.raises(UnknownTemplateError, match="missing"):
            lookup_template(_make_instance(template_id="missing"), {})


class TestTransforms:
    def test_transform_point(self) -> None:
        placement = Placement(269, 160, 180, 0.6)
        assert transform_point(Point(-50, 0), placement) == Point(299, 160)
        assert transform_point(Point(0, 50), placement) == Point(269, 130)

    def test_transform_direction(self) -> None:
        placement = Placement(0, 0, 270)
        assert transform_direction(Direction.RIGHT, placement) is Direction.UP
        assert transform_direction(Direction.DOWN, placement) is Direction.RIGHT
