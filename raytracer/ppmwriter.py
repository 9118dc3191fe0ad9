"""Writing images as plain-text PPM files."""

from __future__ import annotations

import os
from typing import Optional, Union

from .pixel import Pixel

_CHANNELS = 3
_VALUES_PER_LINE = 19


def _channel(value: float) -> int:
    return int(max(0.0, min(255.0 * value, 255.0)))


class PpmWriter:
    """Collects pixels into a buffer and saves them as a P3 image."""

    def __init__(self, width: int, height: int, file: Union[str, os.PathLike] = "untitled.ppm") -> None:
        self.width = width
        self.height = height
        self.file = file
        self._data = [0] * (width * height * _CHANNELS)

    def write(self, pixel: Pixel) -> None:
        """Store a pixel; rows are flipped so that y = 0 is the bottom row."""
        position = self.width * (self.height - 1 - pixel.y) + pixel.x
        start = _CHANNELS * position
        if position < 0 or start + _CHANNELS - 1 >= len(self._data):
            raise IndexError(f"pixel ({pixel.x}, {pixel.y}) lies outside the image")
        color = pixel.color
        self._data[start:start + _CHANNELS] = [
            _channel(color.r),
            _channel(color.g),
            _channel(color.b),
        ]

    def save(self, file: Optional[Union[str, os.PathLike]] = None) -> None:
        """Write the image, to file if given (which then becomes the default)."""
        if file is not None:
            self.file = file
        body = "".join(
            f"{value} " + ("\n" if count % _VALUES_PER_LINE == 0 else "")
            for count, value in enumerate(self._data, 1)
        )
        with open(self.file, "w") as out:
            out.write(f"P3 {self.width} {self.height} 255 \n")
            out.write(body)