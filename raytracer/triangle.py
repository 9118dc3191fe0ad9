"""Triangles."""

from __future__ import annotations

from typing import Optional

from .material import Material
from .ray import Ray, transform_ray, transform_vec3
from .shape import EPSILON, IDENTITY, HitPoint, Shape
from .vector import Mat4, Vec3


class Triangle(Shape):
    """A triangle; its normal defaults to the right-handed face normal."""

    def __init__(
        self,
        v0: Vec3,
        v1: Vec3,
        v2: Vec3,
        name: str = "triangle",
        material: Optional[Material] = None,
        *,
        normal: Optional[Vec3] = None,
    ) -> None:
        super().__init__(name, material)
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.normal = normal if normal is not None else (v1 - v0).cross(v2 - v0).normalized()

    def area(self) -> float:
        return (self.v1 - self.v0).cross(self.v2 - self.v0).length() / 2

    def volume(self) -> float:
        return 0.0

    def _transformed_vertices(self, transformation: Mat4) -> list[Vec3]:
        combined = transformation @ self._world_transformation
        return [combined.transform_point(v) for v in (self.v0, self.v1, self.v2)]

    def min(self, transformation: Mat4 = IDENTITY) -> Vec3:
        a, b, c = self._transformed_vertices(transformation)
        return a.componentwise_min(b).componentwise_min(c)

    def max(self, transformation: Mat4 = IDENTITY) -> Vec3:
        a, b, c = self._transformed_vertices(transformation)
        return a.componentwise_max(b).componentwise_max(c)

    def intersect(self, ray: Ray) -> HitPoint:
        """Moeller-Trumbore intersection in the triangle's local space."""
        ray_inv = transform_ray(self._world_transformation_inv, ray)
        edge1 = self.v1 - self.v0
        edge2 = self.v2 - self.v0
        p_vec = ray_inv.direction.cross(edge2)
        det = edge1.dot(p_vec)
        if -EPSILON < det < EPSILON:
            return HitPoint()
        inv_det = 1 / det
        t_vec = ray_inv.origin - self.v0
        u = t_vec.dot(p_vec) * inv_det
        if u < 0 or u > 1:
            return HitPoint()
        q_vec = t_vec.cross(edge1)
        v = ray_inv.direction.dot(q_vec) * inv_det
        if v < 0 or u + v > 1:
            return HitPoint()
        t = edge2.dot(q_vec) * inv_det
        if t < EPSILON:
            return HitPoint()
        t -= EPSILON
        normal = transform_vec3(self._world_transformation, self.normal)
        if normal.dot(ray_inv.direction) > 0:
            normal = -normal
        return HitPoint(
            True, t, self.name, self.material, ray.point(t), ray.direction, normal.normalized()
        )

    def __str__(self) -> str:
        return (
            f"{super().__str__()}\nv0:{self.v0}\nv1:{self.v1}\nv2:{self.v2}\nn:{self.normal}\n"
        )