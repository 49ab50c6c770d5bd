"""Vector helpers for 3-component numeric vectors.

All functions accept any array-like and return numpy arrays or floats.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def _as_vector3(a) -> np.ndarray:
    v = np.asarray(a, dtype=float)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {v.shape}")
    return v


def cross_product(a, b) -> np.ndarray:
    """Cross product a x b of two 3-vectors."""
    return np.cross(_as_vector3(a), _as_vector3(b))


def length(a) -> float:
    """Euclidean norm of a 3-vector."""
    return float(np.linalg.norm(_as_vector3(a)))


def normalize(a) -> np.ndarray:
    """Unit vector in the direction of a.

    Raises:
        ValueError: If a is the null vector
    """
    v = _as_vector3(a)
    norm = np.linalg.norm(v)
    if norm == 0:
        raise ValueError("Cannot normalize a null vector")
    return v / norm


def is_null(a) -> bool:
    return length(a) == 0


def multiply_vector_by_scalar(k: float, a) -> np.ndarray:
    return np.asarray(a, dtype=float) * k


def multiply_vector_by_itself(a) -> float:
    """Dot product of a vector with itself (squared norm)."""
    v = np.asarray(a, dtype=float)
    return float(np.dot(v, v))


def sum_vectors(a, b) -> Optional[np.ndarray]:
    """Component-wise sum of two vectors, None if their sizes differ."""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    if va.shape != vb.shape:
        return None
    return va + vb
