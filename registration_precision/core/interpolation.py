"""registration_precision.core.interpolation

Interpolation formulas used when resampling registered images.

Implemented:
- linear: straight line through two samples
- bilinear / bilinear_corners: two linear passes in x, one in y
- lagrange: polynomial through all given samples
- cubic / bicubic: cubic convolution with weights tabulated at 0.01 steps
- BilinearInterpolation: precomputed bilinear surface over a cell
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def linear(x0: float, y0: float, x1: float, y1: float, x: float) -> float:
    """Value at x of the line through (x0, y0) and (x1, y1)."""
    if x1 == x0:
        raise ValueError("x0 and x1 cannot be equal")
    delta = (y1 - y0) / (x1 - x0)
    offset = y0 - delta * x0
    return offset + delta * x


def bilinear(dx: Sequence[float], dy: Sequence[float], f: Sequence[float],
             x: float, y: float) -> float:
    """Bilinear interpolation over four samples.

    Samples are ordered lower-left, lower-right, upper-left, upper-right.

    Args:
        dx: x-coordinates of the samples
        dy: y-coordinates of the samples
        f: sample values, f(dx[i], dy[i])
        x: x-coordinate of the desired point
        y: y-coordinate of the desired point

    Returns:
        f(x, y)
    """
    if len(dx) < 4 or len(dy) < 4 or len(f) < 4:
        raise ValueError("bilinear interpolation needs four samples")
    return bilinear_corners(dx[0], dx[1], dy[0], f[0], f[1],
                            dx[2], dx[3], dy[2], f[2], f[3], x, y)


def bilinear_corners(x0: float, x1: float, y0: float, f0: float, f1: float,
                     x2: float, x3: float, y2: float, f2: float, f3: float,
                     x: float, y: float) -> float:
    """Bilinear interpolation with the lower (y0) and upper (y2) rows given explicitly."""
    z0 = linear(x0, f0, x1, f1, x)
    z1 = linear(x2, f2, x3, f3, x)
    return linear(y0, z0, y2, z1, y)


def lagrange(dx: Sequence[float], f: Sequence[float], x: float) -> float:
    """Lagrange polynomial through (dx[i], f[i]) evaluated at x.

    Raises:
        ValueError: If fewer than two samples are given, sizes differ or
            sample abscissas repeat
    """
    nodes = np.asarray(dx, dtype=float)
    values = np.asarray(f, dtype=float)
    if nodes.size < 2:
        raise ValueError("lagrange interpolation needs at least two samples")
    if nodes.shape != values.shape:
        raise ValueError("dx and f must have the same size")
    if np.unique(nodes).size != nodes.size:
        raise ValueError("sample abscissas must be distinct")

    result = 0.0
    for i in range(nodes.size):
        others = np.delete(nodes, i)
        result += values[i] * np.prod((x - others) / (nodes[i] - others))
    return float(result)


def _cubic_weight_table() -> np.ndarray:
    u = np.linspace(0.0, 1.0, 101)
    return np.column_stack((
        -u * (1.0 - u) * (1.0 - u),
        (1.0 - u) * (1.0 + u - u * u),
        u * (1.0 + u - u * u),
        -u * u * (1.0 - u),
    ))


_CUBIC_WEIGHTS = _cubic_weight_table()


def _cubic_at(u: float, f1: float, f2: float, f3: float, f4: float) -> float:
    # u in [0, 1] is the position between f2 and f3
    w = _CUBIC_WEIGHTS[int(math.floor(u * 100.0 + 0.5))]
    return float(w[0] * f1 + w[1] * f2 + w[2] * f3 + w[3] * f4)


def cubic(distance: float, f1: float, f2: float, f3: float, f4: float) -> float:
    """Cubic convolution through four equally spaced samples.

    Args:
        distance: position past f2, in sample spacings; only the fractional
            part is used, quantized to 0.01
        f1, f2, f3, f4: consecutive samples

    Returns:
        Interpolated value between f2 and f3
    """
    return _cubic_at(distance - math.floor(distance), f1, f2, f3, f4)


def bicubic(dx: Sequence[float], dy: Sequence[float], f: Sequence[float],
            x: float, y: float) -> float:
    """Bicubic convolution over a 4x4 neighbourhood.

    Samples are stored row by row (four rows of four), so sample 4*i + c is
    row i, column c. The desired point must lie in the central cell, between
    columns 1 and 2 and rows 1 and 2.

    Raises:
        ValueError: If the sizes are wrong or (x, y) is outside the central cell
    """
    if len(dx) != 16 or len(dy) != 16 or len(f) != 16:
        raise ValueError("bicubic interpolation needs 16 samples")

    horizontal = []
    for i in range(4):
        x1, x2 = dx[4 * i + 1], dx[4 * i + 2]
        if not x1 <= x <= x2:
            raise ValueError(f"x={x} outside the central cell of row {i}")
        u = (x - x1) / (x2 - x1)
        horizontal.append(_cubic_at(u, f[4 * i], f[4 * i + 1], f[4 * i + 2], f[4 * i + 3]))

    y1, y2 = dy[5], dy[9]
    if not y1 <= y <= y2:
        raise ValueError(f"y={y} outside the central cell")
    v = (y - y1) / (y2 - y1)
    return _cubic_at(v, *horizontal)


def bicubic_grid(xo: float, xf: float, yo: float, yf: float,
                 f: Sequence[float], x: float, y: float) -> float:
    """Bicubic convolution over a regular 4x4 grid spanning [xo, xf] x [yo, yf]."""
    if len(f) != 16:
        raise ValueError("bicubic interpolation needs 16 samples")
    delta_x = (xf - xo) / 3.0
    delta_y = (yf - yo) / 3.0
    if not xo + delta_x <= x <= xo + 2.0 * delta_x:
        raise ValueError(f"x={x} outside the central cell")
    if not yo + delta_y <= y <= yo + 2.0 * delta_y:
        raise ValueError(f"y={y} outside the central cell")

    u = (x - (xo + delta_x)) / delta_x
    horizontal = [_cubic_at(u, *f[4 * i:4 * i + 4]) for i in range(4)]
    v = (y - (yo + delta_y)) / delta_y
    return _cubic_at(v, *horizontal)


class BilinearInterpolation:
    """
    Bilinear surface over the cell [x1, x2] x [y1, y2].

    Attributes:
        x1, y1: lower corner
        x2, y2: upper corner
        q11, q12, q21, q22: values at (x1, y1), (x1, y2), (x2, y1), (x2, y2)
    """

    def __init__(self, x1: float, y1: float, x2: float, y2: float,
                 q11: float, q12: float, q21: float, q22: float):
        area = (x2 - x1) * (y2 - y1)
        if area == 0:
            raise ValueError("cell must have a non-zero area")

        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2
        self.q11, self.q12, self.q21, self.q22 = q11, q12, q21, q22

        self._a = q11 / area
        self._b = q21 / area
        self._c = q12 / area
        self._d = q22 / area

    def interpolate_at(self, x: float, y: float) -> float:
        return (
            self._a * (self.x2 - x) * (self.y2 - y)
            + self._b * (x - self.x1) * (self.y2 - y)
            + self._c * (self.x2 - x) * (y - self.y1)
            + self._d * (x - self.x1) * (y - self.y1)
        )
