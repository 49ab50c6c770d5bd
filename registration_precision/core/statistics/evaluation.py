"""registration_precision.core.statistics.evaluation

Geometric consistency measurements of a tie-point set.

Three statistics compare the work and reference coordinate systems:
- Length variation: mean ratio of work-space to reference-space distance
  over all point pairs (a consistent set gives a constant scale factor)
- Anisomorphism: mean ratio of the per-axis scale factors over all point
  pairs (1.0 for an isotropic mapping)
- Similarity: mean ratio of work-space to reference-space angles over all
  point triples (1.0 when relative angles are preserved)

Each estimator returns False when there are too few tie points, leaving the
previously stored value untouched, so callers can keep adding tie points and
retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..errors import DegenerateVectorError
from ..mathutils import binomial_number
from ..models.tie_point import TiePoint
from ..models.vector import Vector2D

logger = logging.getLogger(__name__)


def _coordinates(tie_points: Sequence[TiePoint]):
    """Work and reference coordinates as (n, 2) arrays."""
    work = np.array([(tp.work_point.x, tp.work_point.y) for tp in tie_points], dtype=float)
    reference = np.array([(tp.reference_point.x, tp.reference_point.y) for tp in tie_points], dtype=float)
    return work, reference


def _pair_differences(tie_points: Sequence[TiePoint]):
    """Coordinate differences for every pair i < j, in row-major pair order."""
    work, reference = _coordinates(tie_points)
    i, j = np.triu_indices(len(tie_points), k=1)
    return work[i] - work[j], reference[i] - reference[j]


def _length_ratios(unique_points: Sequence[TiePoint]) -> Optional[np.ndarray]:
    """Pairwise work/reference distance ratios, or None if a pair coincides."""
    d_work, d_reference = _pair_differences(unique_points)

    degenerate = np.all(d_work == 0.0, axis=1) | np.all(d_reference == 0.0, axis=1)
    if np.any(degenerate):
        return None

    work_lengths = np.hypot(d_work[:, 0], d_work[:, 1])
    reference_lengths = np.hypot(d_reference[:, 0], d_reference[:, 1])
    return work_lengths / reference_lengths


def unique_tie_points(tie_points: Iterable[TiePoint]) -> List[TiePoint]:
    """Tie points with exact duplicates merged, in canonical (sorted) order."""
    return sorted(set(tie_points))


def pairwise_length_ratios(tie_points: Iterable[TiePoint]) -> np.ndarray:
    """
    Work/reference distance ratio for every pair of distinct tie points.

    Args:
        tie_points: tie points; exact duplicates are merged first

    Returns:
        Array of C(n, 2) ratios in canonical pair order

    Raises:
        DegenerateVectorError: If two tie points share a work or reference point
    """
    unique = unique_tie_points(tie_points)
    if len(unique) < 2:
        return np.empty(0)

    ratios = _length_ratios(unique)
    if ratios is None:
        raise DegenerateVectorError("Tie points share a work or reference point")
    return ratios


@dataclass
class EvaluationMeasurements:
    """
    Consistency measurements of a tie-point set.

    The measurements object does not keep the tie points; each estimator is
    a function of the collection it is given and overwrites only its own
    statistic when it succeeds.

    Attributes:
        length_variation: mean work/reference distance ratio over point pairs
        anisomorphism: mean ratio of per-axis scale factors over point pairs
        similarity: mean work/reference angle ratio over point triples
    """

    length_variation: float = 0.0
    anisomorphism: float = 0.0
    similarity: float = 0.0

    def estimate_length_variation(self, tie_points: Iterable[TiePoint]) -> bool:
        """
        Estimate the length variation measurement.

        Exact duplicate tie points are merged before pairs are formed.

        Args:
            tie_points: tie points to evaluate

        Returns:
            True on success, False if fewer than two distinct tie points
            remain or two of them share a work or reference point
        """
        unique = unique_tie_points(tie_points)
        n = len(unique)
        if n < 2:
            logger.debug("Length variation needs 2 distinct tie points, got %d", n)
            return False

        ratios = _length_ratios(unique)
        if ratios is None:
            logger.debug("Length variation undefined: tie points share a work or reference point")
            return False

        den = binomial_number(n, 2)
        self.length_variation = float(np.sum(ratios / den))
        return True

    def estimate_anisomorphism(self, tie_points: Iterable[TiePoint]) -> bool:
        """
        Estimate the anisomorphism measurement.

        Tie points are taken positionally, duplicates included. A pair whose
        reference x difference or work y difference is zero cannot
        discriminate and is dropped from the normalization count. If no pair
        contributes, the mapping is taken as isomorphic (1.0).

        Args:
            tie_points: tie points to evaluate

        Returns:
            True on success, False if fewer than two tie points are given
        """
        tp = list(tie_points)
        n = len(tp)
        if n < 2:
            logger.debug("Anisomorphism needs 2 tie points, got %d", n)
            return False

        d_work, d_reference = _pair_differences(tp)
        num_x = np.abs(d_work[:, 0])
        num_y = np.abs(d_work[:, 1])
        den_x = np.abs(d_reference[:, 0])
        den_y = np.abs(d_reference[:, 1])

        den = float(binomial_number(n, 2))

        product = den_x * num_y
        contributing = product != 0
        total = float(np.sum((num_x[contributing] * den_y[contributing]) / product[contributing]))

        skipped = int(np.count_nonzero(~contributing))
        if skipped:
            logger.debug("Anisomorphism: %d of %d pairs cannot contribute", skipped, int(den))
        den -= skipped

        self.anisomorphism = total / den if den else 1.0
        return True

    def estimate_similarity(self, tie_points: Iterable[TiePoint]) -> bool:
        """
        Estimate the similarity measurement.

        For every triple i < j < k the angle between (i->j, i->k) in work
        space is divided by the same angle in reference space.

        Args:
            tie_points: tie points to evaluate, without coincident points

        Returns:
            True on success, False if fewer than three tie points are given

        Raises:
            DegenerateVectorError: If two tie points of a triple share a work
                or reference point (prune with remove_duplicate_points first)
        """
        tp = list(tie_points)
        n = len(tp)
        if n < 3:
            logger.debug("Similarity needs 3 tie points, got %d", n)
            return False

        work_angles = []
        reference_angles = []
        for i, j, k in combinations(range(n), 3):
            w_i, r_i = tp[i].get()
            w_j, r_j = tp[j].get()
            w_k, r_k = tp[k].get()

            work_angles.append(Vector2D(w_i, w_j).angle_between(Vector2D(w_i, w_k)))
            reference_angles.append(Vector2D(r_i, r_j).angle_between(Vector2D(r_i, r_k)))

        den = binomial_number(n, 3)
        # Collinear reference triples give a zero angle; the ratio goes to inf/nan
        with np.errstate(divide="ignore", invalid="ignore"):
            ratios = np.asarray(work_angles) / np.asarray(reference_angles)
        if not np.all(np.isfinite(ratios)):
            logger.warning("Similarity: %d triples have a zero reference angle",
                           int(np.count_nonzero(~np.isfinite(ratios))))

        self.similarity = float(np.sum(ratios / den))
        return True

    def estimate_all(self, tie_points: Iterable[TiePoint]) -> Dict[str, bool]:
        """
        Run the three estimators on the same tie points.

        Returns:
            Mapping of measurement name to estimator outcome
        """
        tp = list(tie_points)
        return {
            "length_variation": self.estimate_length_variation(tp),
            "anisomorphism": self.estimate_anisomorphism(tp),
            "similarity": self.estimate_similarity(tp),
        }

    def to_dict(self) -> Dict[str, float]:
        """Serialize measurements to dictionary."""
        return {
            "length_variation": self.length_variation,
            "anisomorphism": self.anisomorphism,
            "similarity": self.similarity,
        }
