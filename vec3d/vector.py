"""
Three-dimensional vector value type.

This module defines ``Vector``, a small ``x, y, z`` value type for graphics,
physics and simulation code. Every operation is a plain method whose first
argument is the left operand, so each one can be called on an instance or
through the class with explicit operands:

>>> from vec3d.vector import Vector
>>> v1 = Vector(1, 2, 3)
>>> v2 = Vector(4, 5, 6)
>>> v1.add(v2)
Vector(5.0000, 7.0000, 9.0000)
>>> Vector.add(v1, 1)
Vector(2.0000, 3.0000, 4.0000)
>>> v1.dot(v2)
32.0

Vector-producing operations accept an optional ``out`` vector which receives
the result instead of a freshly allocated one. Apart from ``out`` and
``init`` no operation mutates a vector.

Degenerate input is not guarded: normalising a zero vector or measuring an
angle against one yields ``nan``/``inf`` components following IEEE-754
float semantics, never an exception.
"""

from __future__ import annotations

import logging
import math
import operator
import random
from collections.abc import Mapping
from numbers import Real
from typing import Callable, Iterator, List, NamedTuple, Optional, Sequence, Union

import numpy as np

from vec3d import config as cfg

logger = logging.getLogger(__name__)

Operand = Union["Vector", float]


class PhiTheta(NamedTuple):
    """Spherical angles of a direction: elevation ``phi``, azimuth ``theta``."""

    phi: float
    theta: float


# ----------------------------------------------------------------------
# IEEE-754 float helpers
# ----------------------------------------------------------------------
def _div(a: float, b: float) -> float:
    """Float division that yields ``inf``/``nan`` on a zero divisor."""
    # numpy scalars would divide by zero outside errstate
    a, b = float(a), float(b)
    try:
        return a / b
    except ZeroDivisionError:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.divide(a, b))


def _acos(value: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(np.arccos(value))


def _asin(value: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(np.arcsin(value))


def _cos(value: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(np.cos(value))


def _sin(value: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(np.sin(value))


def _max(a: float, b: float) -> float:
    """Larger of two floats; ``nan`` if either is ``nan``."""
    return float(np.maximum(a, b))


def _min(a: float, b: float) -> float:
    return float(np.minimum(a, b))


def _or_zero(value) -> float:
    # missing, None and NaN fields all read as 0
    if value is None:
        return 0.0
    value = float(value)
    return 0.0 if math.isnan(value) else value


def _note_degenerate(op_name: str, v: "Vector") -> None:
    if cfg.DEBUG:
        logger.warning("%s: zero-length vector %r, result is not finite", op_name, v)


class Vector:
    """A three-dimensional vector of floats.

    Parameters
    ----------
    x, y, z : float, optional
        The Cartesian components. Omitted or ``None`` components default to
        ``0.0``; everything else is coerced to ``float``.

    Notes
    -----
    * Instances use ``__slots__`` and carry no state besides ``x, y, z``.
    * ``init`` is the only method that mutates its receiver. For this reason
      vectors compare by value but are not hashable.
    """

    __slots__ = ("x", "y", "z")

    # numpy scalars on the left defer to __radd__/__rmul__/__rsub__
    __array_ufunc__ = None

    def __init__(self, x: Optional[float] = None, y: Optional[float] = None,
                 z: Optional[float] = None) -> None:
        self.init(0.0 if x is None else x,
                  0.0 if y is None else y,
                  0.0 if z is None else z)

    def init(self, x: float, y: float, z: float) -> "Vector":
        """Reinitialise this vector in place and return it."""
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def _target(self, out: Optional["Vector"]) -> "Vector":
        return out if out is not None else type(self)()

    def _combine(self, other: Operand, op: Callable[[float, float], float],
                 out: Optional["Vector"]) -> "Vector":
        if isinstance(other, Vector):
            x, y, z = op(self.x, other.x), op(self.y, other.y), op(self.z, other.z)
        else:
            x, y, z = op(self.x, other), op(self.y, other), op(self.z, other)
        return self._target(out).init(x, y, z)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_array(cls, seq: Sequence[float]) -> "Vector":
        """Create a vector from ``[x, y, z]``; missing entries become ``0``."""
        n = len(seq)
        return cls(*(seq[i] if i < n else None for i in range(3)))

    @classmethod
    def from_vector(cls, other) -> "Vector":
        """Create a vector from an ``{x, y, z}`` object or mapping.

        Missing, ``None`` and ``nan`` fields become ``0``.
        """
        if isinstance(other, Mapping):
            fields = [other.get(k) for k in ("x", "y", "z")]
        else:
            fields = [getattr(other, k, None) for k in ("x", "y", "z")]
        return cls(*(_or_zero(f) for f in fields))

    @classmethod
    def from_phi_theta(cls, phi: float, theta: float) -> "Vector":
        """Create a unit vector from spherical angles.

        ``phi`` is the elevation above the x/z plane and ``theta`` the azimuth
        measured from +x towards +z.
        """
        cos_phi = _cos(phi)
        return cls(cos_phi * _cos(theta), _sin(phi), cos_phi * _sin(theta))

    @classmethod
    def random_direction(cls, rng=None) -> "Vector":
        """Return a unit vector with a statistically uniform direction.

        ``rng`` is anything with a ``random()`` method returning floats in
        ``[0, 1)``; the ``random`` module is used when omitted.
        """
        rng = rng if rng is not None else random
        phi = math.asin(rng.random() * 2 - 1)
        theta = rng.random() * cfg.FULL_TURN
        return cls.from_phi_theta(phi, theta)

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Vector":
        """Create a vector from a 3-element array."""
        return cls.from_array(np.asarray(arr, dtype=float).ravel())

    def clone(self) -> "Vector":
        """Independent copy of this vector."""
        return type(self)(self.x, self.y, self.z)

    # ------------------------------------------------------------------
    # Vector operations
    # ------------------------------------------------------------------
    def add(self, other: Operand, out: Optional["Vector"] = None) -> "Vector":
        """Add a vector (elementwise) or a scalar (to every component)."""
        return self._combine(other, operator.add, out)

    def subtract(self, other: Operand, out: Optional["Vector"] = None) -> "Vector":
        """Subtract a vector (elementwise) or a scalar (from every component)."""
        return self._combine(other, operator.sub, out)

    def multiply(self, other: Operand, out: Optional["Vector"] = None) -> "Vector":
        """Multiply by a vector (elementwise) or a scalar."""
        return self._combine(other, operator.mul, out)

    def divide(self, other: Operand, out: Optional["Vector"] = None) -> "Vector":
        """Divide by a vector (elementwise) or a scalar.

        A zero divisor gives ``inf``, ``-inf`` or ``nan`` in that component.
        """
        return self._combine(other, _div, out)

    def cross(self, other: "Vector", out: Optional["Vector"] = None) -> "Vector":
        """Cross product with another vector."""
        return self._target(out).init(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def negative(self, out: Optional["Vector"] = None) -> "Vector":
        """Additive inverse of the vector."""
        return self._target(out).init(-self.x, -self.y, -self.z)

    def unit(self, out: Optional["Vector"] = None) -> "Vector":
        """Return this vector scaled to length 1.

        A zero vector is not special-cased and normalises to ``nan``.
        """
        n = self.length()
        if n == 0:
            _note_degenerate("unit", self)
        return self.divide(n, out)

    def max(self, other: Optional["Vector"] = None,
            out: Optional["Vector"] = None) -> Union["Vector", float]:
        """Largest components.

        With another vector, return the vector of the larger of each pair of
        components. Without one, return this vector's largest component.
        """
        if other is None:
            return _max(_max(self.x, self.y), self.z)
        return self._combine(other, _max, out)

    def min(self, other: Optional["Vector"] = None,
            out: Optional["Vector"] = None) -> Union["Vector", float]:
        """Smallest components; see ``max``."""
        if other is None:
            return _min(_min(self.x, self.y), self.z)
        return self._combine(other, _min, out)

    def lerp(self, other: "Vector", t: float, out: Optional["Vector"] = None) -> "Vector":
        """Linearly interpolate towards ``other``; ``t`` outside [0, 1] extrapolates."""
        return self.multiply(1 - t).add(other.multiply(t), out)

    # ------------------------------------------------------------------
    # Scalar operations
    # ------------------------------------------------------------------
    def dot(self, other: "Vector") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_squared(self) -> float:
        """Squared Euclidean norm, without the square root."""
        return self.dot(self)

    def length(self) -> float:
        """Euclidean norm of the vector."""
        return math.sqrt(self.dot(self))

    magnitude = length

    def angle_to(self, other: "Vector") -> float:
        """Angle in radians between this vector and ``other``.

        ``nan`` when either vector has zero length.
        """
        norms = self.length() * other.length()
        if norms == 0:
            _note_degenerate("angle_to", self if self.length() == 0 else other)
        return _acos(_div(self.dot(other), norms))

    angle_between = angle_to

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def equals(self, other: "Vector") -> bool:
        """Exact component equality, without tolerance."""
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    # mutable through init()
    __hash__ = None

    # ------------------------------------------------------------------
    # Conversion helpers
    # ------------------------------------------------------------------
    def to_phi_theta(self) -> PhiTheta:
        """Spherical angles of this vector; inverse of ``from_phi_theta``."""
        n = self.length()
        if n == 0:
            _note_degenerate("to_phi_theta", self)
        return PhiTheta(_asin(_div(self.y, n)), math.atan2(self.z, self.x))

    def to_array(self, n: Optional[int] = None) -> List[float]:
        """Return the first ``n`` components.

        ``n`` omitted, ``0`` or ``nan`` means all three; fractional ``n`` is truncated.
        """
        if not n or math.isnan(n):
            n = 3
        n = int(max(0, min(3, n)))
        return [self.x, self.y, self.z][:n]

    def to_numpy(self) -> np.ndarray:
        """Return a ``numpy.ndarray`` representation of this vector."""
        return np.array([self.x, self.y, self.z], dtype=float)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------
    def __add__(self, other: Operand) -> "Vector":
        if not isinstance(other, (Vector, Real)):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> "Vector":
        if not isinstance(other, (Vector, Real)):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: float) -> "Vector":
        if not isinstance(other, Real):
            return NotImplemented
        return self.negative().add(other)

    def __mul__(self, other: Operand) -> "Vector":
        if not isinstance(other, (Vector, Real)):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> "Vector":
        if not isinstance(other, (Vector, Real)):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> "Vector":
        return self.negative()

    def __abs__(self) -> float:
        return self.length()

    def __iter__(self) -> Iterator[float]:
        """Yield the components of the vector in order x, y, z."""
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        """Number of components, always 3."""
        return 3

    def __repr__(self) -> str:
        p = cfg.REPR_PRECISION
        return f"{type(self).__name__}({self.x:.{p}f}, {self.y:.{p}f}, {self.z:.{p}f})"
