"""
Point classes for tie-point registration.

Conventions:
- Coordinates: X (column / easting), Y (row / northing)
- Sigmas: a priori standard deviations of each coordinate, default 1.0
- Equality and ordering use the coordinates only; sigmas are metadata
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    return math.copysign(math.floor(math.fabs(value) + 0.5), value)


@dataclass(order=True, unsafe_hash=True)
class Point:
    """
    A 2D coordinate with an associated precision.

    Points compare exactly on (x, y), lexicographically by x then y, which
    makes them usable as sort and set keys.

    Attributes:
        x: X axis value
        y: Y axis value
        sigma_x: X precision (standard deviation)
        sigma_y: Y precision (standard deviation)
    """

    x: float = 0.0
    y: float = 0.0
    sigma_x: float = field(default=1.0, compare=False)
    sigma_y: float = field(default=1.0, compare=False)

    def __post_init__(self):
        """Ensure all values are floats."""
        self.x = float(self.x)
        self.y = float(self.y)
        self.sigma_x = float(self.sigma_x)
        self.sigma_y = float(self.sigma_y)

    def set(self, x: float = 0.0, y: float = 0.0,
            sigma_x: float = 1.0, sigma_y: float = 1.0) -> None:
        """Replace the whole state of the point."""
        self.swap(Point(x, y, sigma_x, sigma_y))

    def get(self) -> Tuple[float, float, float, float]:
        """Return (x, y, sigma_x, sigma_y)."""
        return self.x, self.y, self.sigma_x, self.sigma_y

    def get_xy(self) -> Tuple[float, float]:
        return self.x, self.y

    def get_sigma_xy(self) -> Tuple[float, float]:
        return self.sigma_x, self.sigma_y

    def swap(self, other: 'Point') -> None:
        """Exchange coordinates and sigmas with another point."""
        self.x, other.x = other.x, self.x
        self.y, other.y = other.y, self.y
        self.sigma_x, other.sigma_x = other.sigma_x, self.sigma_x
        self.sigma_y, other.sigma_y = other.sigma_y, self.sigma_y

    def round(self) -> None:
        """Round both coordinates to the nearest integer, in place."""
        self.x = _round_half_away(self.x)
        self.y = _round_half_away(self.y)

    # Arithmetic combines coordinates only. Results of + and - carry default
    # sigmas; in-place forms keep the sigmas of the left operand.

    def __add__(self, other: 'Point') -> 'Point':
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __iadd__(self, other: 'Point') -> 'Point':
        if not isinstance(other, Point):
            return NotImplemented
        self.x += other.x
        self.y += other.y
        return self

    def __isub__(self, other: 'Point') -> 'Point':
        if not isinstance(other, Point):
            return NotImplemented
        self.x -= other.x
        self.y -= other.y
        return self

    def __neg__(self) -> 'Point':
        return Point(-self.x, -self.y)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize point to dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "x": self.x,
            "y": self.y,
            "sigma_x": self.sigma_x,
            "sigma_y": self.sigma_y,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Point':
        """
        Create a Point from a dictionary.

        Raises:
            KeyError: If a coordinate is missing
            ValueError: If a value is not numeric
        """
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            sigma_x=float(data.get("sigma_x", 1.0)),
            sigma_y=float(data.get("sigma_y", 1.0)),
        )

    def __str__(self) -> str:
        return f"({self.x:.0f},{self.y:.0f})"

    def __repr__(self) -> str:
        return f"Point(x={self.x!r}, y={self.y!r}, sigma_x={self.sigma_x!r}, sigma_y={self.sigma_y!r})"


@dataclass(order=True, unsafe_hash=True)
class Point3D(Point):
    """
    A 3D coordinate with an associated precision.

    Equality and ordering use (x, y, z).
    """

    z: float = 0.0
    sigma_z: float = field(default=1.0, compare=False)

    def __post_init__(self):
        super().__post_init__()
        self.z = float(self.z)
        self.sigma_z = float(self.sigma_z)

    def set(self, x: float = 0.0, y: float = 0.0, z: float = 0.0,
            sigma_x: float = 1.0, sigma_y: float = 1.0, sigma_z: float = 1.0) -> None:
        self.swap(Point3D(x, y, sigma_x, sigma_y, z, sigma_z))

    def get(self) -> Tuple[float, float, float, float, float, float]:
        """Return (x, y, z, sigma_x, sigma_y, sigma_z)."""
        return self.x, self.y, self.z, self.sigma_x, self.sigma_y, self.sigma_z

    def get_xyz(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def get_sigma_xyz(self) -> Tuple[float, float, float]:
        return self.sigma_x, self.sigma_y, self.sigma_z

    def swap(self, other: 'Point') -> None:
        super().swap(other)
        if isinstance(other, Point3D):
            self.z, other.z = other.z, self.z
            self.sigma_z, other.sigma_z = other.sigma_z, self.sigma_z

    def round(self) -> None:
        super().round()
        self.z = _round_half_away(self.z)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["z"] = self.z
        data["sigma_z"] = self.sigma_z
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Point3D':
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            sigma_x=float(data.get("sigma_x", 1.0)),
            sigma_y=float(data.get("sigma_y", 1.0)),
            z=float(data.get("z", 0.0)),
            sigma_z=float(data.get("sigma_z", 1.0)),
        )

    def __str__(self) -> str:
        return f"({self.x:.0f},{self.y:.0f},{self.z:.0f})"

    def __repr__(self) -> str:
        return (
            f"Point3D(x={self.x!r}, y={self.y!r}, z={self.z!r}, "
            f"sigma_x={self.sigma_x!r}, sigma_y={self.sigma_y!r}, sigma_z={self.sigma_z!r})"
        )
