"""Rays and helpers to transform them."""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Mat4, Vec3


@dataclass(frozen=True)
class Ray:
    """A half-line starting at origin and running along direction."""

    origin: Vec3 = Vec3(0.0, 0.0, 0.0)
    direction: Vec3 = Vec3(0.0, 0.0, -1.0)

    def point(self, distance: float) -> Vec3:
        return self.origin + self.direction * distance


def transform_ray(mat: Mat4, ray: Ray) -> Ray:
    """Transform the ray's origin as a point and its direction as a vector."""
    return Ray(mat.transform_point(ray.origin), mat.transform_direction(ray.direction))


def transform_vec3(mat: Mat4, v: Vec3, is_origin: bool = False) -> Vec3:
    """Transform v as a point when is_origin is true, else as a direction."""
    return mat.transform_point(v) if is_origin else mat.transform_direction(v)