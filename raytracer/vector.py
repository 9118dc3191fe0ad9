"""Three-component vectors and 4x4 affine matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union

Number = Union[int, float]
Row = Tuple[float, float, float, float]


def _fmt(value: float) -> str:
    return format(value, "g")


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Return the unit vector; a zero vector yields NaN components."""
        length = self.length()
        if length == 0:
            return Vec3(math.nan, math.nan, math.nan)
        return Vec3(self.x / length, self.y / length, self.z / length)

    def componentwise_min(self, other: Vec3) -> Vec3:
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def componentwise_max(self, other: Vec3) -> Vec3:
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union[Vec3, Number]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Number) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, other: Number) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __str__(self) -> str:
        return f"({_fmt(self.x)}, {_fmt(self.y)}, {_fmt(self.z)})"


_IDENTITY_ROWS: Tuple[Row, ...] = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


@dataclass(frozen=True)
class Mat4:
    """An immutable 4x4 matrix stored by rows; vectors are columns."""

    rows: Tuple[Row, ...] = _IDENTITY_ROWS

    @classmethod
    def identity(cls) -> Mat4:
        return cls()

    @classmethod
    def from_columns(
        cls,
        c0: Sequence[float],
        c1: Sequence[float],
        c2: Sequence[float],
        c3: Sequence[float],
    ) -> Mat4:
        columns = [tuple(float(v) for v in column) for column in (c0, c1, c2, c3)]
        if any(len(column) != 4 for column in columns):
            raise ValueError("each column must have four components")
        return cls(tuple(tuple(row) for row in zip(*columns)))

    @classmethod
    def translation(cls, dx: float, dy: float, dz: float) -> Mat4:
        return cls(
            (
                (1.0, 0.0, 0.0, float(dx)),
                (0.0, 1.0, 0.0, float(dy)),
                (0.0, 0.0, 1.0, float(dz)),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> Mat4:
        return cls(
            (
                (float(sx), 0.0, 0.0, 0.0),
                (0.0, float(sy), 0.0, 0.0),
                (0.0, 0.0, float(sz), 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    def column(self, index: int) -> Row:
        return tuple(row[index] for row in self.rows)

    def __matmul__(self, other: Mat4) -> Mat4:
        if not isinstance(other, Mat4):
            return NotImplemented
        columns = list(zip(*other.rows))
        return Mat4(
            tuple(
                tuple(sum(a * b for a, b in zip(row, column)) for column in columns)
                for row in self.rows
            )
        )

    def _apply(self, vector: Sequence[float]) -> Tuple[float, ...]:
        return tuple(sum(a * b for a, b in zip(row, vector)) for row in self.rows)

    def inverse(self) -> Mat4:
        """Return the inverse matrix; raise ValueError if it is singular."""
        work = [
            list(row) + [1.0 if r == c else 0.0 for c in range(4)]
            for r, row in enumerate(self.rows)
        ]
        for col in range(4):
            pivot = max(range(col, 4), key=lambda r: abs(work[r][col]))
            if work[pivot][col] == 0:
                raise ValueError("matrix is singular")
            work[col], work[pivot] = work[pivot], work[col]
            lead = work[col][col]
            work[col] = [value / lead for value in work[col]]
            for r, row in enumerate(work):
                factor = row[col]
                if r != col and factor != 0:
                    work[r] = [a - factor * b for a, b in zip(row, work[col])]
        return Mat4(tuple(tuple(row[4:]) for row in work))

    def transform_point(self, v: Vec3) -> Vec3:
        x, y, z, _ = self._apply((v.x, v.y, v.z, 1.0))
        return Vec3(x, y, z)

    def transform_direction(self, v: Vec3) -> Vec3:
        x, y, z, _ = self._apply((v.x, v.y, v.z, 0.0))
        return Vec3(x, y, z)