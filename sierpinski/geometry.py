"""
Immutable 2D value types used by the chaos game.

Points support the handful of vector operations the engine needs (addition,
subtraction and scalar scaling). Triangles are plain triples of points with
an equilateral constructor and barycentric helpers.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from sierpinski.errors import DegenerateGeometryError


# Relative tolerance on |signed area| / (longest edge)^2 below which three
# points count as collinear.
COLLINEAR_RTOL = 1e-12


@dataclass(frozen=True)
class Point:
    """A point (or displacement) in the plane."""
    x: float
    y: float

    @classmethod
    def from_tuple(cls, value: Sequence[float]) -> "Point":
        x, y = value
        return cls(float(x), float(y))

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point":
        return Point(self.x / scalar, self.y / scalar)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


PointLike = Union[Point, Tuple[float, float]]


def _as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    return Point.from_tuple(value)


@dataclass(frozen=True)
class Triangle:
    """
    Three vertices in no particular order.

    Direct construction is unchecked; use :meth:`from_points` to reject
    collinear input or :meth:`equilateral` for the standard fractal frame.
    """
    a: Point
    b: Point
    c: Point

    @classmethod
    def equilateral(cls, side_length: float) -> "Triangle":
        """
        Equilateral triangle with its base on the x axis.

        Args:
            side_length: Edge length, must be strictly positive

        Returns:
            Triangle with vertices (0, 0), (s, 0), (s/2, s*sqrt(3)/2)
        """
        if not math.isfinite(side_length) or side_length <= 0:
            raise DegenerateGeometryError(
                f"Side length must be a positive finite number, got {side_length}"
            )
        s = float(side_length)
        return cls.from_tuples((0.0, 0.0), (s, 0.0), (s / 2.0, s * math.sqrt(3.0) / 2.0))

    @classmethod
    def from_tuples(cls, a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> "Triangle":
        return cls(Point.from_tuple(a), Point.from_tuple(b), Point.from_tuple(c))

    @classmethod
    def from_points(cls, a: PointLike, b: PointLike, c: PointLike) -> "Triangle":
        """Build a triangle from three points, rejecting collinear input."""
        triangle = cls(_as_point(a), _as_point(b), _as_point(c))
        if triangle.is_degenerate():
            raise DegenerateGeometryError(
                f"Points {triangle.a}, {triangle.b}, {triangle.c} are collinear"
            )
        return triangle

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def signed_area(self) -> float:
        ab = self.b - self.a
        ac = self.c - self.a
        return 0.5 * (ab.x * ac.y - ab.y * ac.x)

    def area(self) -> float:
        return abs(self.signed_area())

    def is_degenerate(self) -> bool:
        edges = (self.b - self.a, self.c - self.b, self.a - self.c)
        scale = max(e.x * e.x + e.y * e.y for e in edges)
        if scale == 0.0:
            return True
        return self.area() <= COLLINEAR_RTOL * scale

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """Returns (xmin, ymin, xmax, ymax)."""
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return min(xs), min(ys), max(xs), max(ys)

    def fits_within(self, width: float, height: float) -> bool:
        """Whether the bounding box lies inside [0, width] x [0, height]."""
        xmin, ymin, xmax, ymax = self.bounding_box()
        return xmin >= 0 and ymin >= 0 and xmax <= width and ymax <= height

    def barycentric(self, p: PointLike) -> Tuple[float, float, float]:
        """
        Barycentric weights of ``p`` with respect to (a, b, c).

        The weights sum to one; all are non-negative exactly when ``p`` lies
        in the closed triangle.
        """
        p = _as_point(p)
        total = self.signed_area()
        if total == 0.0:
            raise DegenerateGeometryError("Barycentric coordinates undefined for a degenerate triangle")
        wa = Triangle(p, self.b, self.c).signed_area() / total
        wb = Triangle(self.a, p, self.c).signed_area() / total
        return wa, wb, 1.0 - wa - wb

    def contains(self, p: PointLike, tol: float = 1e-9) -> bool:
        """Whether ``p`` lies in the closed triangle, up to ``tol`` in barycentric weight."""
        return min(self.barycentric(p)) >= -tol
