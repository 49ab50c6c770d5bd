"""Consistency assessment for tie-point sets."""

from .consistency import (
    MeasurementStatus,
    ConsistencyReport,
    assess_tie_points,
    format_consistency_message,
)

__all__ = [
    "MeasurementStatus",
    "ConsistencyReport",
    "assess_tie_points",
    "format_consistency_message",
]
