"""
point.py

Fixed-dimension coordinate tuples backed by a read-only numpy array.

A Point is a location on (or off) the noise grid. Its numeric type is a numpy
dtype: grid corners use an integer dtype, evaluation points a floating one.
"""
import numpy as np


class _Components:
    """Immutable, positionally indexed tuple of numeric components."""

    __slots__ = ("_elems",)

    # numpy scalars and arrays defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, *components, dtype=np.float64):
        # Point(1, 2) and Point([1, 2]) are equivalent
        if len(components) == 1 and np.ndim(components[0]) == 1:
            components = components[0]
        elems = np.array(components, dtype=dtype)
        if elems.ndim != 1 or elems.size == 0:
            raise ValueError(f"{type(self).__name__} needs at least one component, got {components!r}")
        if not np.issubdtype(elems.dtype, np.number):
            raise TypeError(f"{type(self).__name__} components must be numeric, got {elems.dtype}")
        elems.flags.writeable = False
        self._elems = elems

    @classmethod
    def _wrap(cls, elems):
        obj = cls.__new__(cls)
        elems = np.array(elems)
        elems.flags.writeable = False
        obj._elems = elems
        return obj

    @property
    def dims(self):
        return self._elems.size

    @property
    def dtype(self):
        return self._elems.dtype

    def to_array(self):
        """Writable copy of the components."""
        return self._elems.copy()

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._elems.copy()
        return self._elems.astype(dtype)

    def __len__(self):
        return self._elems.size

    def __getitem__(self, i):
        return self._elems[i].item()

    def __iter__(self):
        return iter(self._elems.tolist())

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.dims == other.dims and bool(np.all(self._elems == other._elems))

    def __hash__(self):
        return hash((type(self).__name__, tuple(self._elems.tolist())))

    def __repr__(self):
        inner = ", ".join(repr(e) for e in self._elems.tolist())
        return f"{type(self).__name__}({inner})"

    def _check_dims(self, other):
        if other.dims != self.dims:
            raise ValueError(f"dimension mismatch: {self.dims} vs {other.dims}")


class Point(_Components):
    """
    An ordered tuple of D numeric components (D >= 1).

    Conversions produce a new point and never modify this one:
      convert_to(dtype) truncates toward zero when going from float to int,
      floor(dtype) and ceil(dtype) round per component before converting.
    """

    __slots__ = ()

    def convert_to(self, dtype):
        return Point._wrap(self._elems.astype(dtype))

    def floor(self, dtype=None):
        return Point._wrap(np.floor(self._elems).astype(self.dtype if dtype is None else dtype))

    def ceil(self, dtype=None):
        return Point._wrap(np.ceil(self._elems).astype(self.dtype if dtype is None else dtype))

    def scaled(self, factor):
        """Every component multiplied by factor."""
        return Point._wrap(self._elems * factor)


def as_point(p, dims=None, dtype=np.float64):
    """
    Coerce a Point, sequence or 1-D array into a Point of the given dtype,
    checking its dimensionality when dims is given.
    """
    if isinstance(p, Point):
        point = p if p.dtype == dtype else p.convert_to(dtype)
    else:
        point = Point(np.asarray(p), dtype=dtype)
    if dims is not None and point.dims != dims:
        raise ValueError(f"expected a {dims}-dimensional point, got {point.dims} components")
    return point
