"""
Directed planar vector between two points.

A Vector2D never has coincident endpoints: any attempt to build or reshape
one with p1 == p2 raises DegenerateVectorError.
"""

import math
from typing import Tuple

from ..errors import DegenerateVectorError
from .point import Point


class Vector2D:
    """
    Directed segment from p1 to p2.

    The vector holds references to its endpoints; it does not copy them.
    """

    __slots__ = ("_p1", "_p2")

    def __init__(self, p1: Point, p2: Point):
        self.set(p1, p2)

    def set(self, p1: Point, p2: Point) -> None:
        """Redefine both endpoints."""
        _check_distinct(p1, p2)
        self._p1 = p1
        self._p2 = p2

    def get(self) -> Tuple[Point, Point]:
        return self._p1, self._p2

    @property
    def p1(self) -> Point:
        return self._p1

    @p1.setter
    def p1(self, point: Point) -> None:
        _check_distinct(point, self._p2)
        self._p1 = point

    @property
    def p2(self) -> Point:
        return self._p2

    @p2.setter
    def p2(self, point: Point) -> None:
        _check_distinct(self._p1, point)
        self._p2 = point

    @property
    def components(self) -> Tuple[float, float]:
        """Direction components (dx, dy) of p2 - p1."""
        return self._p2.x - self._p1.x, self._p2.y - self._p1.y

    def length(self) -> float:
        """Euclidean length, independent of direction."""
        dx, dy = self.components
        return math.sqrt(dx * dx + dy * dy)

    def angle_between(self, other: 'Vector2D') -> float:
        """
        Angle between the directions of this vector and another.

        Args:
            other: second vector

        Returns:
            Angle in radians, in [0, pi]
        """
        x1, y1 = self.components
        x2, y2 = other.components

        cos_angle = (x1 * x2 + y1 * y2) / (math.hypot(x1, y1) * math.hypot(x2, y2))
        # Rounding can push parallel vectors just outside acos' domain
        return math.acos(max(-1.0, min(1.0, cos_angle)))

    def __repr__(self) -> str:
        return f"Vector2D({self._p1}, {self._p2})"


def _check_distinct(p1: Point, p2: Point) -> None:
    if p1 == p2:
        raise DegenerateVectorError(f"Vector endpoints cannot coincide: {p1}")
