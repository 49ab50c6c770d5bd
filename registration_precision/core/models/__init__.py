"""
Data models for tie-point registration.

This module provides the core data structures:
- Point / Point3D: coordinates with a priori precision
- Vector2D: directed segment between two distinct points
- TiePoint: work/reference correspondence and set maintenance
- EvaluationOptions: configuration for consistency assessment
"""

from .point import Point, Point3D
from .vector import Vector2D
from .tie_point import (
    TiePoint,
    TiePointRole,
    remove_duplicate_points,
    compute_origins,
    change_origins,
    copy_tie_points,
)
from .options import EvaluationOptions

__all__ = [
    # Points
    "Point",
    "Point3D",
    "Vector2D",

    # Tie points
    "TiePoint",
    "TiePointRole",
    "remove_duplicate_points",
    "compute_origins",
    "change_origins",
    "copy_tie_points",

    # Options
    "EvaluationOptions",
]
