"""
vector.py

Floating-point displacement vectors with the arithmetic the gradient noise
needs: elementwise +, -, *, /, dot product, magnitude and normalization.

Division by a zero scalar and normalizing a zero vector are not checked; the
result follows IEEE-754 (inf / nan) and numpy may emit a RuntimeWarning.
Gradients are never zero by construction, so the noise generators never hit
this path.
"""
import numbers

import numpy as np

from .point import Point, _Components


class Vector(_Components):
    """A displacement of D floating-point components."""

    __slots__ = ()

    def __init__(self, *components, dtype=np.float64):
        if not np.issubdtype(np.dtype(dtype), np.floating):
            raise TypeError(f"Vector needs a floating point dtype, got {np.dtype(dtype)}")
        super().__init__(*components, dtype=dtype)

    @classmethod
    def from_point(cls, p: Point):
        dtype = p.dtype if np.issubdtype(p.dtype, np.floating) else np.float64
        return cls(p.to_array(), dtype=dtype)

    @classmethod
    def from_value(cls, value, dims, dtype=np.float64):
        return cls(np.full(dims, value), dtype=dtype)

    @classmethod
    def random_unit(cls, rng, dims, dtype=np.float64):
        """
        Draw a uniformly distributed unit vector.

        Components are drawn from [-1, 1] until the vector falls inside the unit
        ball, then it is scaled to length 1. There is no retry cap; the expected
        number of draws is the hypercube / hypersphere volume ratio, which stays
        small for the dimensionalities noise is used in.
        """
        while True:
            candidate = rng.uniform(-1.0, 1.0, size=dims)
            mag = np.sqrt(np.dot(candidate, candidate))
            if 0.0 < mag <= 1.0:
                return cls(candidate / mag, dtype=dtype)

    def to_point(self):
        return Point(self._elems, dtype=self.dtype)

    def _operand(self, other):
        if isinstance(other, Vector):
            self._check_dims(other)
            return other._elems
        if isinstance(other, numbers.Number) or np.ndim(other) == 0:
            return other
        return NotImplemented

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_dims(other)
        return Vector._wrap(self._elems + other._elems)

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_dims(other)
        return Vector._wrap(self._elems - other._elems)

    def __neg__(self):
        return Vector._wrap(-self._elems)

    def __mul__(self, other):
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return Vector._wrap(self._elems * operand)

    __rmul__ = __mul__

    def __truediv__(self, other):
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return Vector._wrap(self._elems / operand)


def dot(v1: Vector, v2: Vector) -> float:
    v1._check_dims(v2)
    return float(np.dot(v1._elems, v2._elems))


def magnitude(v: Vector) -> float:
    return float(np.sqrt(np.dot(v._elems, v._elems)))


def normalized(v: Vector) -> Vector:
    """v scaled to unit length. A zero vector yields nan components."""
    return v / magnitude(v)
