"""RGB colours with arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .vector import Vec3


def _fmt(value: float) -> str:
    return format(value, "g")


@dataclass
class Color:
    """An RGB colour with float channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, factor: Union[float, int, Vec3]) -> Color:
        """Scale by a number, or channel-wise by a coefficient vector."""
        if isinstance(factor, Vec3):
            return Color(self.r * factor.x, self.g * factor.y, self.b * factor.z)
        if isinstance(factor, (int, float)):
            return Color(self.r * factor, self.g * factor, self.b * factor)
        return NotImplemented

    def __rmul__(self, factor: Union[float, int]) -> Color:
        if isinstance(factor, (int, float)):
            return Color(self.r * factor, self.g * factor, self.b * factor)
        return NotImplemented

    def __str__(self) -> str:
        return f"({_fmt(self.r)},{_fmt(self.g)},{_fmt(self.b)})\n"