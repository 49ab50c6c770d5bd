"""
Registration Precision - tie-point consistency evaluation

Represents tie points between a work coordinate system and a reference
coordinate system, and measures how geometrically consistent a tie-point
set is before it drives a transformation.

Conventions:
- Work point ("x_y"): coordinate in the image being registered
- Reference point ("u_v"): coordinate in the map or reference image
- Angles: Radians internally
- Sigmas: A priori standard deviations, default 1.0, never compared
- Tie points compare on (work point, reference point); the role is metadata
"""

__version__ = "1.0.0"
__author__ = "Registration Precision"

from .core.errors import PrecisionError, DegenerateVectorError, NoControlPointsError
from .core.models import Point, Point3D, Vector2D, TiePoint, TiePointRole, EvaluationOptions
from .core.statistics import EvaluationMeasurements
from .core.validation import ConsistencyReport, MeasurementStatus, assess_tie_points
from .logging_config import setup_logging

__all__ = [
    # Version
    "__version__",

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

    # Measurements
    "EvaluationMeasurements",

    # Assessment
    "ConsistencyReport",
    "MeasurementStatus",
    "assess_tie_points",

    # Logging
    "setup_logging",
]
