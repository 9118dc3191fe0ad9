"""Spheres."""

from __future__ import annotations

from typing import Optional

from .material import Material
from .ray import Ray, transform_ray, transform_vec3
from .shape import EPSILON, IDENTITY, HitPoint, Shape
from .vector import Mat4, Vec3

PI = 3.14159265
_FLOAT_EPSILON = 1.1920929e-07


def _intersect_ray_sphere(
    origin: Vec3, unit_direction: Vec3, center: Vec3, radius_squared: float
) -> Optional[float]:
    diff = center - origin
    t0 = diff.dot(unit_direction)
    d_squared = diff.dot(diff) - t0 * t0
    if d_squared > radius_squared:
        return None
    t1 = (radius_squared - d_squared) ** 0.5
    distance = t0 - t1 if t0 > t1 + _FLOAT_EPSILON else t0 + t1
    return distance if distance > _FLOAT_EPSILON else None


def _translation_of(matrix: Mat4) -> Vec3:
    x, y, z, _ = matrix.column(3)
    return Vec3(x, y, z)


class Sphere(Shape):
    """A sphere given by radius and centre; negative radii are made positive."""

    def __init__(
        self,
        radius: float = 1.0,
        center: Vec3 = Vec3(),
        name: str = "sphere",
        material: Optional[Material] = None,
    ) -> None:
        super().__init__(name, material)
        self.radius = abs(radius)
        self.center = center

    def area(self) -> float:
        return 4.0 * PI * self.radius ** 2

    def volume(self) -> float:
        return 4.0 / 3.0 * PI * abs(self.radius ** 3)

    def _radius_extent(self, combined: Mat4) -> Vec3:
        return combined.transform_direction(Vec3(self.radius, self.radius, self.radius))

    def min(self, transformation: Mat4 = IDENTITY) -> Vec3:
        combined = transformation @ self._world_transformation
        return self.center + _translation_of(combined) - self._radius_extent(combined)

    def max(self, transformation: Mat4 = IDENTITY) -> Vec3:
        combined = transformation @ self._world_transformation
        return self.center + _translation_of(combined) + self._radius_extent(combined)

    def intersect(self, ray: Ray) -> HitPoint:
        ray_inv = transform_ray(self._world_transformation_inv, ray)
        distance = _intersect_ray_sphere(
            ray_inv.origin, ray_inv.direction.normalized(), self.center, self.radius ** 2
        )
        if distance is None:
            return HitPoint()
        t = distance / ray_inv.direction.length() - EPSILON
        normal_inv = (ray_inv.point(t) - self.center).normalized()
        normal = transform_vec3(self._world_transformation, normal_inv).normalized()
        return HitPoint(True, t, self.name, self.material, ray.point(t), ray.direction, normal)

    def __str__(self) -> str:
        return f"{super().__str__()}\nradius: {format(self.radius, 'g')}\ncenter: {self.center}\n"