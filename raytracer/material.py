"""Surface materials."""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Vec3


@dataclass
class Material:
    """Phong reflection coefficients plus reflectance and transparency."""

    name: str = "default"
    ka: Vec3 = Vec3(0.2, 0.2, 0.2)
    kd: Vec3 = Vec3(0.5, 0.5, 0.5)
    ks: Vec3 = Vec3()
    m: float = 0.0
    glossy: float = 0.0
    opacity: float = 1.0
    ior: float = 1.0

    def __str__(self) -> str:
        return (
            f"(name:{self.name}"
            f"\nka:{self.ka}"
            f"\nkd{self.kd}"
            f"\nks{self.ks}"
            f"\nm{format(self.m, 'g')})"
        )