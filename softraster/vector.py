"""Fixed-size float vectors and the small helpers built on them."""

from __future__ import annotations

import math
import numbers
from typing import Iterator

EPSILON = 1e-5
PI = 3.14159265359


def angle_to_radians(angle: float) -> float:
    """Convert an angle in degrees to radians."""
    return PI * angle / 180


class Vec:
    """An immutable vector of floats of any dimension."""

    __slots__ = ("_raw",)

    def __init__(self, *args) -> None:
        if len(args) == 1 and not isinstance(args[0], numbers.Real):
            args = tuple(args[0])
        if not args:
            raise ValueError("a vector needs at least one component")
        self._raw = tuple(float(a) for a in args)

    def _component(self, index: int, name: str) -> float:
        if index >= len(self._raw):
            raise IndexError(f"a {len(self._raw)}-component vector has no {name}")
        return self._raw[index]

    @property
    def x(self) -> float:
        return self._raw[0]

    @property
    def y(self) -> float:
        return self._component(1, "y")

    @property
    def z(self) -> float:
        return self._component(2, "z")

    @property
    def w(self) -> float:
        return self._component(3, "w")

    def __getitem__(self, index):
        return self._raw[index]

    def __len__(self) -> int:
        return len(self._raw)

    def __iter__(self) -> Iterator[float]:
        return iter(self._raw)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vec):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Vec{self._raw!r}"

    def _same_size(self, other: Vec) -> None:
        if len(other) != len(self):
            raise ValueError(
                f"vector sizes differ: {len(self)} and {len(other)}"
            )

    def __add__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        self._same_size(other)
        return Vec(a + b for a, b in zip(self._raw, other._raw))

    def __sub__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        self._same_size(other)
        return Vec(a - b for a, b in zip(self._raw, other._raw))

    def __neg__(self) -> Vec:
        return Vec(-a for a in self._raw)

    def __mul__(self, factor):
        if not isinstance(factor, numbers.Real):
            return NotImplemented
        return Vec(a * factor for a in self._raw)

    def __rmul__(self, factor):
        return self.__mul__(factor)

    def __truediv__(self, factor):
        if not isinstance(factor, numbers.Real):
            return NotImplemented
        # Division by zero follows IEEE float rules rather than raising.
        inverse = 1.0 / factor if factor != 0 else math.copysign(math.inf, factor)
        return Vec(a * inverse for a in self._raw)

    def length_squared(self) -> float:
        return sum(a * a for a in self._raw)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec:
        """Return the unit vector; a near-zero vector is returned unchanged."""
        l2 = self.length_squared()
        if l2 < EPSILON * EPSILON:
            return self
        return self * (1.0 / math.sqrt(l2))

    def homogeneous(self) -> Vec:
        """Extend a 3-component vector with w = 1."""
        if len(self) != 3:
            raise ValueError("only a 3-component vector can be made homogeneous")
        return Vec(*self._raw, 1.0)

    def xyz(self) -> Vec:
        """The first three components."""
        if len(self) < 3:
            raise ValueError("the vector has fewer than three components")
        return Vec(self._raw[:3])


def dot(a: Vec, b: Vec) -> float:
    """Dot product of two vectors of the same size."""
    if len(a) != len(b):
        raise ValueError(f"vector sizes differ: {len(a)} and {len(b)}")
    return sum(x * y for x, y in zip(a, b))


def cross(a: Vec, b: Vec) -> Vec:
    """Cross product of two 3-component vectors."""
    if len(a) != 3 or len(b) != 3:
        raise ValueError("the cross product needs two 3-component vectors")
    return Vec(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def determinant_2d(a: Vec, b: Vec) -> float:
    """Determinant of the 2x2 matrix with columns a and b."""
    return a.x * b.y - a.y * b.x