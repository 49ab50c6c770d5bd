"""Statistics for tie-point registration.

Geometric consistency measurements (length variation, anisomorphism,
similarity) computed over all pairs and triples of a tie-point set.
"""

from .evaluation import (
    EvaluationMeasurements,
    pairwise_length_ratios,
    unique_tie_points,
)

__all__ = [
    "EvaluationMeasurements",
    "pairwise_length_ratios",
    "unique_tie_points",
]
