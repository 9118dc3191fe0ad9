"""Base class for shapes and the record of a ray hit."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .material import Material
from .ray import Ray
from .vector import Mat4, Vec3

EPSILON = 0.1
IDENTITY = Mat4.identity()


@dataclass
class HitPoint:
    """Where and how a ray met a shape."""

    does_intersect: bool = False
    distance: float = 0.0
    hit_object: str = "null"
    hit_material: Optional[Material] = None
    position: Vec3 = Vec3()
    ray_direction: Vec3 = Vec3()
    surface_normal: Vec3 = Vec3()


def _rotation_z(angle: float) -> Mat4:
    c, s = math.cos(angle), math.sin(angle)
    return Mat4(((c, -s, 0.0, 0.0), (s, c, 0.0, 0.0), (0.0, 0.0, 1.0, 0.0), (0.0, 0.0, 0.0, 1.0)))


def _rotation_x(angle: float) -> Mat4:
    c, s = math.cos(angle), math.sin(angle)
    return Mat4(((1.0, 0.0, 0.0, 0.0), (0.0, c, -s, 0.0), (0.0, s, c, 0.0), (0.0, 0.0, 0.0, 1.0)))


def _rotation_y(angle: float) -> Mat4:
    c, s = math.cos(angle), math.sin(angle)
    return Mat4(((c, 0.0, s, 0.0), (0.0, 1.0, 0.0, 0.0), (-s, 0.0, c, 0.0), (0.0, 0.0, 0.0, 1.0)))


class Shape(ABC):
    """A named, transformable object that rays can hit."""

    def __init__(self, name: str, material: Optional[Material] = None) -> None:
        self.name = name
        self.material = material
        self._world_transformation = Mat4.identity()
        self._world_transformation_inv = self._world_transformation.inverse()

    @abstractmethod
    def area(self) -> float:
        """Surface area."""

    @abstractmethod
    def volume(self) -> float:
        """Enclosed volume."""

    @abstractmethod
    def min(self, transformation: Mat4 = IDENTITY) -> Vec3:
        """Lower corner of the bounds under transformation and the shape's own."""

    @abstractmethod
    def max(self, transformation: Mat4 = IDENTITY) -> Vec3:
        """Upper corner of the bounds under transformation and the shape's own."""

    @abstractmethod
    def intersect(self, ray: Ray) -> HitPoint:
        """Intersect the ray with the shape."""

    def _transform_by(self, matrix: Mat4) -> None:
        self._world_transformation = self._world_transformation @ matrix
        self._world_transformation_inv = self._world_transformation.inverse()

    def translate(self, dx: float, dy: float, dz: float) -> None:
        self._transform_by(Mat4.translation(dx, dy, dz))

    def rotate(self, roll: float, pitch: float, yaw: float) -> None:
        """Rotate by Euler angles in radians: yaw about y, pitch about x, roll about z."""
        self._transform_by(_rotation_y(yaw) @ _rotation_x(pitch) @ _rotation_z(roll))

    def scale(self, sx: float, sy: float, sz: float) -> None:
        self._transform_by(Mat4.scaling(sx, sy, sz))

    def __str__(self) -> str:
        return f"=== {self.name} ===\ncolor:{self.material}"