"""Image pixels."""

from __future__ import annotations

from dataclasses import dataclass, field

from .color import Color


@dataclass
class Pixel:
    """A pixel position and its colour."""

    x: int = 0
    y: int = 0
    color: Color = field(default_factory=Color)

    def __str__(self) -> str:
        c = self.color
        return (
            f"Pixel[{int(self.x)},{int(self.y)}]"
            f"({format(c.r, 'g')},{format(c.g, 'g')},{format(c.b, 'g')})"
        )