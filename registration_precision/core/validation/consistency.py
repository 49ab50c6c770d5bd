"""Geometric consistency assessment of tie-point sets.

This module turns the raw consistency measurements into a structured
checklist: each measurement gets a status and an actionable message, so a
caller collecting tie points can tell whether the set is ready to drive a
transformation.

No I/O - pure Python for testability.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..errors import DegenerateVectorError, NoControlPointsError
from ..models.options import EvaluationOptions
from ..models.tie_point import TiePoint, change_origins, compute_origins, copy_tie_points, remove_duplicate_points
from ..statistics.evaluation import EvaluationMeasurements, pairwise_length_ratios, unique_tie_points

logger = logging.getLogger(__name__)


class MeasurementStatus(Enum):
    """Status of a consistency measurement."""
    OK = "ok"            # Within tolerance
    WARNING = "warning"  # Computed but outside tolerance
    ERROR = "error"      # Degenerate configuration
    SKIPPED = "skipped"  # Not enough tie points yet


@dataclass
class ConsistencyReport:
    """Structured summary of a tie-point set's geometric consistency."""

    # Tie point bookkeeping
    num_input: int = 0
    num_used: int = 0
    num_removed: int = 0
    recentered: bool = False

    # Length variation (scale consistency)
    length_variation: Optional[float] = None
    scale_spread: Optional[float] = None
    length_status: MeasurementStatus = MeasurementStatus.SKIPPED
    length_message: str = ""

    # Anisomorphism (axis-wise scale consistency)
    anisomorphism: Optional[float] = None
    anisomorphism_status: MeasurementStatus = MeasurementStatus.SKIPPED
    anisomorphism_message: str = ""

    # Similarity (angle preservation)
    similarity: Optional[float] = None
    similarity_status: MeasurementStatus = MeasurementStatus.SKIPPED
    similarity_message: str = ""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def statuses(self) -> List[MeasurementStatus]:
        return [self.length_status, self.anisomorphism_status, self.similarity_status]

    @property
    def is_consistent(self) -> bool:
        """True when at least one measurement passed and none failed."""
        bad = (MeasurementStatus.WARNING, MeasurementStatus.ERROR)
        return (
            any(s == MeasurementStatus.OK for s in self.statuses)
            and not any(s in bad for s in self.statuses)
        )

    def to_dict(self) -> Dict:
        """Serialize to dictionary for JSON output."""
        return {
            "is_consistent": self.is_consistent,
            "num_input": self.num_input,
            "num_used": self.num_used,
            "num_removed": self.num_removed,
            "recentered": self.recentered,
            "length_variation": {
                "value": _json_safe(self.length_variation),
                "scale_spread": _json_safe(self.scale_spread),
                "status": self.length_status.value,
                "message": self.length_message,
            },
            "anisomorphism": {
                "value": _json_safe(self.anisomorphism),
                "status": self.anisomorphism_status.value,
                "message": self.anisomorphism_message,
            },
            "similarity": {
                "value": _json_safe(self.similarity),
                "status": self.similarity_status.value,
                "message": self.similarity_message,
            },
            "errors": self.errors,
            "warnings": self.warnings,
        }


def _json_safe(value: Optional[float]) -> Optional[float]:
    """Convert nan/inf to None."""
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value


def assess_tie_points(
    tie_points: Iterable[TiePoint],
    options: Optional[EvaluationOptions] = None,
) -> ConsistencyReport:
    """Assess the geometric consistency of a tie-point set.

    The caller's tie points are never modified: pruning and origin shifting
    work on a copy.

    Args:
        tie_points: tie points to assess
        options: evaluation options (defaults used if None)

    Returns:
        ConsistencyReport with one status per measurement
    """
    if options is None:
        options = EvaluationOptions()

    points = copy_tie_points(tie_points)
    report = ConsistencyReport(num_input=len(points))

    if options.remove_duplicates:
        report.num_removed = remove_duplicate_points(points, options.duplicate_tolerance)
        if report.num_removed:
            report.warnings.append(
                f"{report.num_removed} tie point(s) removed for sharing a reference point"
            )

    if options.recenter_origins:
        try:
            work_origin, reference_origin = compute_origins(points)
        except NoControlPointsError as exc:
            report.warnings.append(f"Origins not changed: {exc}")
        else:
            change_origins(points, work_origin, reference_origin)
            report.recentered = True

    report.num_used = len(points)
    measurements = EvaluationMeasurements()

    _assess_length_variation(points, measurements, options, report)
    _assess_anisomorphism(points, measurements, options, report)
    _assess_similarity(points, measurements, options, report)

    logger.info(
        "Assessed %d tie points: length=%s anisomorphism=%s similarity=%s",
        report.num_used,
        report.length_status.value,
        report.anisomorphism_status.value,
        report.similarity_status.value,
    )
    return report


def _assess_length_variation(points, measurements, options, report) -> None:
    if measurements.estimate_length_variation(points):
        report.length_variation = measurements.length_variation
        ratios = pairwise_length_ratios(points)
        report.scale_spread = float(np.std(ratios) / np.mean(ratios))

        if report.scale_spread > options.scale_tolerance:
            report.length_status = MeasurementStatus.WARNING
            report.length_message = (
                f"Pairwise scale varies by {report.scale_spread:.2%} "
                f"(tolerance {options.scale_tolerance:.2%}); check for a wrong correspondence"
            )
            report.warnings.append(report.length_message)
        else:
            report.length_status = MeasurementStatus.OK
            report.length_message = f"Mean scale factor {report.length_variation:.6g}"
    elif len(unique_tie_points(points)) < 2:
        report.length_status = MeasurementStatus.SKIPPED
        report.length_message = "At least 2 distinct tie points required"
    else:
        report.length_status = MeasurementStatus.ERROR
        report.length_message = "Tie points share a work or reference point"
        report.errors.append(report.length_message)


def _assess_anisomorphism(points, measurements, options, report) -> None:
    if not measurements.estimate_anisomorphism(points):
        report.anisomorphism_status = MeasurementStatus.SKIPPED
        report.anisomorphism_message = "At least 2 tie points required"
        return

    report.anisomorphism = measurements.anisomorphism
    deviation = abs(report.anisomorphism - 1.0)
    if deviation > options.anisomorphism_tolerance:
        report.anisomorphism_status = MeasurementStatus.WARNING
        report.anisomorphism_message = (
            f"Anisomorphism {report.anisomorphism:.6g} deviates from 1 by {deviation:.6g} "
            f"(tolerance {options.anisomorphism_tolerance:.6g}); axes are scaled differently"
        )
        report.warnings.append(report.anisomorphism_message)
    else:
        report.anisomorphism_status = MeasurementStatus.OK
        report.anisomorphism_message = f"Anisomorphism {report.anisomorphism:.6g}"


def _assess_similarity(points, measurements, options, report) -> None:
    try:
        estimated = measurements.estimate_similarity(points)
    except DegenerateVectorError as exc:
        report.similarity_status = MeasurementStatus.ERROR
        report.similarity_message = f"Coincident tie points: {exc}"
        report.errors.append(report.similarity_message)
        return

    if not estimated:
        report.similarity_status = MeasurementStatus.SKIPPED
        report.similarity_message = "At least 3 tie points required"
        return

    report.similarity = measurements.similarity
    if not math.isfinite(report.similarity):
        report.similarity_status = MeasurementStatus.ERROR
        report.similarity_message = "Collinear reference points make similarity undefined"
        report.errors.append(report.similarity_message)
        return

    deviation = abs(report.similarity - 1.0)
    if deviation > options.similarity_tolerance:
        report.similarity_status = MeasurementStatus.WARNING
        report.similarity_message = (
            f"Similarity {report.similarity:.6g} deviates from 1 by {deviation:.6g} "
            f"(tolerance {options.similarity_tolerance:.6g}); angles are not preserved"
        )
        report.warnings.append(report.similarity_message)
    else:
        report.similarity_status = MeasurementStatus.OK
        report.similarity_message = f"Similarity {report.similarity:.6g}"


def format_consistency_message(report: ConsistencyReport) -> str:
    """Format a consistency report as a human-readable checklist.

    Returns multi-line string suitable for display.
    """
    lines = [
        f"Tie points: {report.num_used} used of {report.num_input}",
        f"  [{report.length_status.value.upper()}] Length variation: {report.length_message}",
        f"  [{report.anisomorphism_status.value.upper()}] Anisomorphism: {report.anisomorphism_message}",
        f"  [{report.similarity_status.value.upper()}] Similarity: {report.similarity_message}",
    ]

    if report.errors:
        lines.append("")
        lines.append("Errors:")
        for err in report.errors:
            lines.append(f"  - {err}")

    if report.warnings:
        lines.append("")
        lines.append("Warnings:")
        for warn in report.warnings:
            lines.append(f"  - {warn}")

    return "\n".join(lines)
