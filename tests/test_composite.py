import math

import pytest

from raytracer.box import Box
from raytracer.composite import Composite
from raytracer.ray import Ray
from raytracer.sphere import Sphere
from raytracer.vector import Vec3


@pytest.fixture
def pair():
    comp = Composite()
    comp.add_child(Sphere(1, Vec3(0, 0, -1), "back"))
    comp.add_child(Box(Vec3(-1, -1, 0), Vec3(1, 1, 2), "front"))
    comp.build_octree()
    return comp


def test_hits_nearest_child(pair):
    hit_front = pair.intersect(Ray(Vec3(0, 10, 1), Vec3(0, -1, 0)))
    assert hit_front.does_intersect
    assert hit_front.hit_object == "front"

    hit_back = pair.intersect(Ray(Vec3(0, 10, -1), Vec3(0, -1, 0)))
    assert hit_back.does_intersect
    assert hit_back.hit_object == "back"


def test_miss_outside_bounds(pair):
    assert not pair.intersect(Ray(Vec3(50, 10, 0), Vec3(0, -1, 0))).does_intersect


def test_intersect_without_bounds_raises():
    comp = Composite()
    comp.add_child(Sphere(1, Vec3(), "s"))
    with pytest.raises(RuntimeError):
        comp.intersect(Ray())


def test_area_and_volume_are_sums():
    s = Sphere(1, Vec3(), "s")
    b = Box(Vec3(0, 0, 0), Vec3(1, 2, 3), "b")
    comp = Composite()
    comp.add_child(s)
    comp.add_child(b)
    assert comp.area() == pytest.approx(s.area() + b.area())
    assert comp.volume() == pytest.approx(s.volume() + b.volume())


def test_min_max_span_children(pair):
    assert pair.min() == Vec3(-1, -1, -1) + Vec3(0, 0, -1)
    assert pair.max() == Vec3(1, 1, 2)


def test_empty_composite_bounds_are_origin():
    comp = Composite()
    assert comp.min() == Vec3()
    assert comp.max() == Vec3()
    assert comp.area() == 0


def test_child_management():
    comp = Composite()
    first = Sphere(1, Vec3(), "s")
    comp.add_child(first)
    comp.add_child(Sphere(2, Vec3(), "s"))
    assert comp.child_count() == 1
    assert comp.find_child("s") is first
    comp.remove_child("s")
    assert comp.child_count() == 0
    assert comp.find_child("s") is None
    comp.remove_child("absent")
    assert comp.child_count() == 0


def test_translate_moves_hits(pair):
    pair.translate(10, 0, 0)
    ray = Ray(Vec3(10, 10, 1), Vec3(0, -1, 0))
    hit = pair.intersect(ray)
    assert hit.does_intersect
    assert hit.hit_object == "front"
    assert hit.position.x == pytest.approx(10)
    assert hit.ray_direction == ray.direction
    assert not pair.intersect(Ray(Vec3(0, 10, 1), Vec3(0, -1, 0))).does_intersect


def test_with_bounds_allows_intersect_without_build():
    comp = Composite.with_bounds(Vec3(-5, -5, -5), Vec3(5, 5, 5), "group")
    comp.add_child(Sphere(1, Vec3(), "ball"))
    hit = comp.intersect(Ray(Vec3(0, 0, 10), Vec3(0, 0, -1)))
    assert hit.does_intersect
    assert hit.hit_object == "ball"


def test_octree_keeps_every_shape_reachable():
    comp = Composite("row")
    xs = [3.0 * i for i in range(70)]
    for i, x in enumerate(xs):
        comp.add_child(Sphere(1, Vec3(x, 0, 0), f"s{i}"))
    total_before = comp.child_count()
    comp.build_octree()
    assert comp.child_count() < total_before
    assert comp.child_count() <= 8
    assert isinstance(comp.find_child("0"), Composite)
    for i, x in enumerate(xs):
        hit = comp.intersect(Ray(Vec3(x, 10, 0), Vec3(0, -1, 0)))
        assert hit.does_intersect
        assert hit.hit_object == f"s{i}"


def test_small_composite_not_subdivided(pair):
    assert pair.child_count() == 2
    assert pair.find_child("front") is not None and pair.find_child("back") is not None


def test_str_includes_children(pair):
    text = str(pair)
    assert text.startswith("=== composite ===")
    assert "=== back ===" in text
    assert "=== front ===" in text


def test_rotation_keeps_hit_normal_unit(pair):
    pair.rotate(0, 0, math.pi / 4)
    hit = pair.intersect(Ray(Vec3(0, 10, 1), Vec3(0, -1, 0)))
    assert hit.does_intersect
    assert hit.surface_normal.length() == pytest.approx(1)