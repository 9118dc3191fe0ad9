"""Axis-aligned boxes."""

from __future__ import annotations

from itertools import product
from typing import Optional

from .material import Material
from .ray import Ray, transform_ray, transform_vec3
from .shape import EPSILON, IDENTITY, HitPoint, Shape
from .vector import Mat4, Vec3


def _axis_overlaps(lo: float, hi: float, box_lo: float, box_hi: float) -> bool:
    return (
        box_lo <= lo <= box_hi
        or box_lo <= hi <= box_hi
        or (lo < box_lo and hi > box_hi)
    )


class Box(Shape):
    """A box spanned by two opposite corners in its local space."""

    def __init__(
        self,
        minimum: Vec3 = Vec3(),
        maximum: Vec3 = Vec3(),
        name: str = "box",
        material: Optional[Material] = None,
    ) -> None:
        super().__init__(name, material)
        if minimum.x > maximum.x or minimum.y > maximum.y or minimum.z > maximum.z:
            raise ValueError("Box minimum cannot be greater than maximum")
        self.min_corner = minimum
        self.max_corner = maximum

    def size_x(self) -> float:
        return self.max_corner.x - self.min_corner.x

    def size_y(self) -> float:
        return self.max_corner.y - self.min_corner.y

    def size_z(self) -> float:
        return self.max_corner.z - self.min_corner.z

    def area(self) -> float:
        sx, sy, sz = self.size_x(), self.size_y(), self.size_z()
        return 2 * sx * sy + 2 * sy * sz + 2 * sz * sx

    def volume(self) -> float:
        return self.size_x() * self.size_y() * self.size_z()

    def _transformed_corners(self, transformation: Mat4) -> list[Vec3]:
        combined = transformation @ self._world_transformation
        lo, hi = self.min_corner, self.max_corner
        return [
            combined.transform_point(Vec3(x, y, z))
            for x, y, z in product((lo.x, hi.x), (lo.y, hi.y), (lo.z, hi.z))
        ]

    def min(self, transformation: Mat4 = IDENTITY) -> Vec3:
        first, *rest = self._transformed_corners(transformation)
        for corner in rest:
            first = first.componentwise_min(corner)
        return first

    def max(self, transformation: Mat4 = IDENTITY) -> Vec3:
        first, *rest = self._transformed_corners(transformation)
        for corner in rest:
            first = first.componentwise_max(corner)
        return first

    def intersects_bounds(self, shape: Shape) -> bool:
        """Whether the shape's world bounds overlap this box's local extent."""
        lo = shape.min(IDENTITY)
        hi = shape.max(IDENTITY)
        return all(
            _axis_overlaps(a, b, c, d)
            for a, b, c, d in zip(lo, hi, self.min_corner, self.max_corner)
        )

    def contains(self, v: Vec3) -> bool:
        return all(
            lo <= value <= hi for value, lo, hi in zip(v, self.min_corner, self.max_corner)
        )

    def intersect(self, ray: Ray) -> HitPoint:
        ray_inv = transform_ray(self._world_transformation_inv, ray)
        t = self.intersect_distance(ray_inv)
        if t is None:
            return HitPoint()
        normal_inv = self._surface_normal(ray_inv.point(t))
        normal = transform_vec3(self._world_transformation, normal_inv).normalized()
        return HitPoint(True, t, self.name, self.material, ray.point(t), ray.direction, normal)

    def intersect_distance(self, ray: Ray) -> Optional[float]:
        """Slab test of a ray given in the box's local space.

        Returns the distance to the entry point (or exit point when the ray
        starts inside), pulled back by EPSILON, or None on a miss.
        """
        t_min = float("-inf")
        t_max = float("inf")
        for origin, direction, lo, hi in zip(
            ray.origin, ray.direction, self.min_corner, self.max_corner
        ):
            if direction == 0:
                if origin < lo or origin > hi:
                    return None
                continue
            inv = 1 / direction
            t1 = (lo - origin) * inv
            t2 = (hi - origin) * inv
            t_min = max(t_min, min(t1, t2))
            t_max = min(t_max, max(t1, t2))
        if t_max < t_min:
            return None
        if t_min > 0:
            t = t_min
        elif t_max > 0:
            t = t_max
        else:
            return None
        return t - EPSILON

    def _surface_normal(self, point: Vec3) -> Vec3:
        lo, hi = self.min_corner, self.max_corner
        if point.x <= lo.x:
            return Vec3(-1.0, 0.0, 0.0)
        if point.y <= lo.y:
            return Vec3(0.0, -1.0, 0.0)
        if point.z <= lo.z:
            return Vec3(0.0, 0.0, -1.0)
        if point.x >= hi.x:
            return Vec3(1.0, 0.0, 0.0)
        if point.y >= hi.y:
            return Vec3(0.0, 1.0, 0.0)
        return Vec3(0.0, 0.0, 1.0)

    def __str__(self) -> str:
        return f"{super().__str__()}\nmin:{self.min_corner}\nmax: {self.max_corner}\n"