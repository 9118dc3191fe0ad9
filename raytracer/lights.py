"""Lights and the camera."""

from __future__ import annotations

from dataclasses import dataclass, field

from .color import Color
from .vector import Vec3


@dataclass
class Light:
    """A light with a colour and brightness; used as the ambient light."""

    name: str = "default"
    color: Color = field(default_factory=lambda: Color(255, 255, 255))
    brightness: float = 1.0


@dataclass
class PointLight(Light):
    """A light emitting from a single position."""

    position: Vec3 = Vec3()


@dataclass
class Camera:
    """A pinhole camera with a horizontal field of view in degrees."""

    name: str = "default"
    fov_x: float = 60.0
    position: Vec3 = Vec3()
    direction: Vec3 = Vec3(0.0, 0.0, -1.0)
    up: Vec3 = Vec3(0.0, 1.0, 0.0)