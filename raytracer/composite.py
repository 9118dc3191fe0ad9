"""Groups of shapes with an octree of bounding boxes."""

from __future__ import annotations

import dataclasses
from itertools import product
from typing import Iterator, Optional

from .box import Box
from .material import Material
from .ray import Ray, transform_ray
from .shape import IDENTITY, HitPoint, Shape
from .vector import Mat4, Vec3

_OCTREE_LEAF_LIMIT = 64


class Composite(Shape):
    """A named collection of child shapes sharing one transformation."""

    def __init__(self, name: str = "composite", material: Optional[Material] = None) -> None:
        super().__init__(name, material)
        self._bounds: Optional[Box] = None
        self._children: dict[str, Shape] = {}

    @classmethod
    def with_bounds(
        cls,
        minimum: Vec3,
        maximum: Vec3,
        name: str = "composite",
        material: Optional[Material] = None,
    ) -> Composite:
        composite = cls(name, material)
        composite._bounds = Box(minimum, maximum)
        return composite

    def _ordered_children(self) -> Iterator[Shape]:
        for name in sorted(self._children):
            yield self._children[name]

    def area(self) -> float:
        return sum(child.area() for child in self._ordered_children())

    def volume(self) -> float:
        return sum(child.volume() for child in self._ordered_children())

    def min(self, transformation: Mat4 = IDENTITY) -> Vec3:
        combined = transformation @ self._world_transformation
        result: Optional[Vec3] = None
        for child in self._ordered_children():
            child_min = child.min(combined)
            result = child_min if result is None else result.componentwise_min(child_min)
        return result if result is not None else Vec3()

    def max(self, transformation: Mat4 = IDENTITY) -> Vec3:
        combined = transformation @ self._world_transformation
        result: Optional[Vec3] = None
        for child in self._ordered_children():
            child_max = child.max(combined)
            result = child_max if result is None else result.componentwise_max(child_max)
        return result if result is not None else Vec3()

    def translate(self, dx: float, dy: float, dz: float) -> None:
        super().translate(dx, dy, dz)
        self.build_octree()

    def rotate(self, roll: float, pitch: float, yaw: float) -> None:
        super().rotate(roll, pitch, yaw)
        self.build_octree()

    def scale(self, sx: float, sy: float, sz: float) -> None:
        super().scale(sx, sy, sz)
        self.build_octree()

    def intersect(self, ray: Ray) -> HitPoint:
        """Closest hit among the children, skipped when the bounds are missed."""
        if self._bounds is None:
            raise RuntimeError(f"composite {self.name!r} has no bounds; call build_octree first")
        if self._bounds.intersect_distance(ray) is None:
            return HitPoint()
        ray_inv = transform_ray(self._world_transformation_inv, ray)
        closest = HitPoint()
        for child in self._ordered_children():
            hit = child.intersect(ray_inv)
            if hit.does_intersect and (
                not closest.does_intersect or hit.distance < closest.distance
            ):
                closest = hit
        if not closest.does_intersect:
            return closest
        world = self._world_transformation
        return dataclasses.replace(
            closest,
            position=world.transform_point(closest.position),
            surface_normal=world.transform_direction(closest.surface_normal).normalized(),
            ray_direction=ray.direction,
        )

    def add_child(self, shape: Shape) -> None:
        """Add a child; an existing child with the same name is kept."""
        self._children.setdefault(shape.name, shape)

    def remove_child(self, name: str) -> None:
        self._children.pop(name, None)

    def find_child(self, name: str) -> Optional[Shape]:
        return self._children.get(name)

    def child_count(self) -> int:
        return len(self._children)

    def build_octree(self) -> None:
        """Recompute the bounds and split large groups into octants."""
        minimum = self.min(IDENTITY)
        maximum = self.max(IDENTITY)
        self._bounds = Box(minimum, maximum)
        if len(self._children) <= _OCTREE_LEAF_LIMIT:
            return
        half = (maximum - minimum) * 0.5
        octants = [
            Composite.with_bounds(
                minimum + Vec3(x * half.x, y * half.y, z * half.z),
                minimum + Vec3((x + 1) * half.x, (y + 1) * half.y, (z + 1) * half.z),
                str(x + 2 * y + 4 * z),
            )
            for x, y, z in product(range(2), repeat=3)
        ]
        for octant in octants:
            assert octant._bounds is not None
            for child in self._ordered_children():
                if octant._bounds.intersects_bounds(child):
                    octant.add_child(child)
        if any(octant.child_count() == len(self._children) for octant in octants):
            return
        self._children.clear()
        for octant in octants:
            if octant.child_count() > 0:
                octant.build_octree()
                self._children.setdefault(octant.name, octant)

    def __str__(self) -> str:
        return super().__str__() + "".join(str(child) for child in self._ordered_children())