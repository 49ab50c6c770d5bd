"""
Core module for tie-point registration precision.

This module contains pure Python implementations with no GUI or I/O
dependencies. It can be used standalone or embedded in a registration tool.
"""

from .errors import PrecisionError, DegenerateVectorError, NoControlPointsError

from .models import (
    Point,
    Point3D,
    Vector2D,
    TiePoint,
    TiePointRole,
    EvaluationOptions,
    remove_duplicate_points,
    compute_origins,
    change_origins,
)

from .statistics import EvaluationMeasurements

from .validation import (
    MeasurementStatus,
    ConsistencyReport,
    assess_tie_points,
    format_consistency_message,
)

__all__ = [
    # Errors
    "PrecisionError",
    "DegenerateVectorError",
    "NoControlPointsError",

    # Models
    "Point",
    "Point3D",
    "Vector2D",
    "TiePoint",
    "TiePointRole",
    "EvaluationOptions",

    # Tie point maintenance
    "remove_duplicate_points",
    "compute_origins",
    "change_origins",

    # Measurements
    "EvaluationMeasurements",

    # Assessment
    "MeasurementStatus",
    "ConsistencyReport",
    "assess_tie_points",
    "format_consistency_message",
]
