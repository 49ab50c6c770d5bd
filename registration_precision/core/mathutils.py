"""registration_precision.core.mathutils

Scalar math helpers shared by the estimators and interpolation routines.

Includes:
- Sign-aware differences and epsilon equality
- Truncation and non-negative modulus
- Factorial and binomial coefficient (normalization divisors)
- Planar distances and angle conversions
"""

from __future__ import annotations

import math

RADIANS_TO_DEGREES = 180.0 / math.pi


def compute_difference(lhs: float, rhs: float) -> float:
    """Absolute difference between two values.

    Values of opposite sign are separated by the sum of their magnitudes,
    otherwise by the difference of their magnitudes.
    """
    if lhs * rhs < 0:
        return math.fabs(lhs) + math.fabs(rhs)
    return math.fabs(math.fabs(lhs) - math.fabs(rhs))


def is_equal(lhs: float, rhs: float, eps: float = 0.0) -> bool:
    """Check whether two values are equal within ``eps``."""
    if eps < 0:
        raise ValueError("eps cannot be negative")
    if lhs == rhs:
        return True
    return compute_difference(lhs, rhs) <= eps


def truncate(value: float, digits: int) -> float:
    """Truncate ``value`` toward zero keeping ``digits`` decimal places."""
    p = 10.0 ** digits
    return math.trunc(value * p) / p


def modulus(a: float, b: float) -> float:
    """Non-negative remainder of ``a / b``.

    Args:
        a: dividend, must be non-negative
        b: divisor, must be positive

    Returns:
        a - b * floor(a / b)
    """
    if a < 0:
        raise ValueError("a cannot be negative")
    if b <= 0:
        raise ValueError("b must be positive")
    return a - b * math.floor(a / b)


def factorial(n: int) -> int:
    """Factorial of a non-negative integer."""
    if n < 0:
        raise ValueError("n cannot be negative")
    return math.factorial(int(n))


def binomial_number(n: int, k: int) -> int:
    """Binomial coefficient C(n, k), the number of k-subsets of an n-set.

    Args:
        n: set size, n >= 1
        k: subset size, 1 <= k <= n

    Returns:
        C(n, k) as an exact integer

    Raises:
        ValueError: if the arguments are outside the valid range
    """
    if n <= 0:
        raise ValueError("n must be positive")
    if k <= 0:
        raise ValueError("k must be positive")
    if k > n:
        raise ValueError("k cannot be greater than n")
    return factorial(n) // (factorial(k) * factorial(n - k))


def compute_squared_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Squared planar distance between (x1, y1) and (x2, y2)."""
    dx = x1 - x2
    dy = y1 - y2
    return dx * dx + dy * dy


def compute_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Planar distance between (x1, y1) and (x2, y2)."""
    return math.sqrt(compute_squared_distance(x1, y1, x2, y2))


def compute_cartesian_angle(x: float, y: float) -> float:
    """Angle of the vector (x, y) from the +X axis, in degrees (-180, 180]."""
    return math.atan2(y, x) * RADIANS_TO_DEGREES


def radians_to_degrees(rad: float) -> float:
    return rad * RADIANS_TO_DEGREES


def degrees_to_radians(deg: float) -> float:
    return deg / RADIANS_TO_DEGREES
