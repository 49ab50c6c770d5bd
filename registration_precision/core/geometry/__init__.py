"""Geometry utilities for tie-point registration."""

from .vector_utils import (
    cross_product,
    length,
    normalize,
    is_null,
    multiply_vector_by_scalar,
    multiply_vector_by_itself,
    sum_vectors,
)
from .normalizer import VectorNormalizer

__all__ = [
    "cross_product",
    "length",
    "normalize",
    "is_null",
    "multiply_vector_by_scalar",
    "multiply_vector_by_itself",
    "sum_vectors",
    "VectorNormalizer",
]
