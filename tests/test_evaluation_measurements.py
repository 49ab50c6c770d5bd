"""Tests for the tie-point consistency measurements.

Covers length variation, anisomorphism and similarity, including their
failure contracts and the degenerate-pair accommodations.
"""

import math

import numpy as np
import pytest

from registration_precision.core.errors import DegenerateVectorError
from registration_precision.core.models.point import Point
from registration_precision.core.models.tie_point import TiePoint, remove_duplicate_points
from registration_precision.core.statistics.evaluation import (
    EvaluationMeasurements,
    pairwise_length_ratios,
    unique_tie_points,
)


WORK = [(0.0, 0.0), (4.0, 0.0), (1.0, 3.0), (5.0, 6.0), (-2.0, 7.0)]


def make_tie_points(work, mapping):
    return [TiePoint(Point(x, y), Point(*mapping(x, y))) for x, y in work]


def similarity_transform(scale, angle, tx, ty):
    c, s = math.cos(angle), math.sin(angle)
    return lambda x, y: (scale * (c * x - s * y) + tx, scale * (s * x + c * y) + ty)


class TestInitialState:

    def test_all_measurements_start_at_zero(self):
        measurements = EvaluationMeasurements()
        assert measurements.to_dict() == {
            "length_variation": 0.0,
            "anisomorphism": 0.0,
            "similarity": 0.0,
        }


class TestLengthVariation:
    """Tests for estimate_length_variation."""

    def test_identity_mapping_gives_one(self):
        points = make_tie_points(WORK, lambda x, y: (x, y))
        measurements = EvaluationMeasurements()

        assert measurements.estimate_length_variation(points) is True
        assert measurements.length_variation == pytest.approx(1.0)

    def test_uniform_scale_gives_inverse_scale(self):
        points = make_tie_points(WORK, lambda x, y: (2.0 * x + 10.0, 2.0 * y - 3.0))
        measurements = EvaluationMeasurements()

        assert measurements.estimate_length_variation(points)
        assert measurements.length_variation == pytest.approx(0.5)

    def test_mean_of_pair_ratios(self):
        points = [
            TiePoint(Point(0.0, 0.0), Point(0.0, 0.0)),
            TiePoint(Point(3.0, 4.0), Point(6.0, 8.0)),
            TiePoint(Point(0.0, 1.0), Point(0.0, 1.0)),
        ]
        measurements = EvaluationMeasurements()

        assert measurements.estimate_length_variation(points)
        expected = (0.5 + 1.0 + math.sqrt(18.0 / 85.0)) / 3.0
        assert measurements.length_variation == pytest.approx(expected)

    def test_exact_duplicates_are_merged(self):
        a = TiePoint(Point(0.0, 0.0), Point(0.0, 0.0))
        b = TiePoint(Point(3.0, 4.0), Point(6.0, 8.0))
        measurements = EvaluationMeasurements()

        assert measurements.estimate_length_variation([a, a, b, TiePoint(Point(3.0, 4.0), Point(6.0, 8.0))])
        assert measurements.length_variation == pytest.approx(0.5)

    def test_input_order_does_not_matter(self):
        points = make_tie_points(WORK, lambda x, y: (x * x, y + x))
        forward, backward = EvaluationMeasurements(), EvaluationMeasurements()

        forward.estimate_length_variation(points)
        backward.estimate_length_variation(list(reversed(points)))
        assert forward.length_variation == pytest.approx(backward.length_variation)

    @pytest.mark.parametrize("count", [0, 1])
    def test_too_few_points_fails_and_keeps_value(self, count):
        measurements = EvaluationMeasurements(length_variation=0.75)
        points = make_tie_points(WORK[:count], lambda x, y: (x, y))

        assert measurements.estimate_length_variation(points) is False
        assert measurements.length_variation == 0.75

    def test_duplicates_collapsing_to_one_fails(self):
        a = TiePoint(Point(1.0, 1.0), Point(2.0, 2.0))
        measurements = EvaluationMeasurements()
        assert measurements.estimate_length_variation([a, a]) is False

    @pytest.mark.parametrize(
        "second",
        [
            TiePoint(Point(0.0, 0.0), Point(9.0, 9.0)),  # shared work point
            TiePoint(Point(9.0, 9.0), Point(0.0, 0.0)),  # shared reference point
        ],
    )
    def test_shared_point_fails_and_keeps_value(self, second):
        measurements = EvaluationMeasurements()
        valid = make_tie_points(WORK, lambda x, y: (x, y))
        assert measurements.estimate_length_variation(valid)

        points = [TiePoint(Point(0.0, 0.0), Point(0.0, 0.0)), second, TiePoint(Point(5.0, 1.0), Point(2.0, 2.0))]
        assert measurements.estimate_length_variation(points) is False
        assert measurements.length_variation == pytest.approx(1.0)

    def test_only_length_variation_is_written(self):
        measurements = EvaluationMeasurements(anisomorphism=3.0, similarity=4.0)
        measurements.estimate_length_variation(make_tie_points(WORK, lambda x, y: (x, y)))
        assert measurements.anisomorphism == 3.0
        assert measurements.similarity == 4.0

    def test_pairwise_length_ratios(self):
        points = make_tie_points(WORK, lambda x, y: (4.0 * x, 4.0 * y))
        ratios = pairwise_length_ratios(points)

        assert ratios.shape == (10,)
        np.testing.assert_allclose(ratios, 0.25)

    def test_pairwise_length_ratios_shared_point_raises(self):
        points = [
            TiePoint(Point(0.0, 0.0), Point(0.0, 0.0)),
            TiePoint(Point(0.0, 0.0), Point(1.0, 0.0)),
        ]
        with pytest.raises(DegenerateVectorError):
            pairwise_length_ratios(points)

    def test_unique_tie_points_sorted(self):
        b = TiePoint(Point(2.0, 0.0), Point(0.0, 0.0))
        a = TiePoint(Point(1.0, 0.0), Point(0.0, 0.0))
        assert unique_tie_points([b, a, b]) == [a, b]


class TestAnisomorphism:
    """Tests for estimate_anisomorphism."""

    def test_uniform_scale_gives_one(self):
        work = [(0.0, 0.0), (1.0, 2.0), (3.0, 1.0), (4.0, 5.0)]
        points = make_tie_points(work, lambda x, y: (2.0 * x, 2.0 * y))
        measurements = EvaluationMeasurements()

        assert measurements.estimate_anisomorphism(points) is True
        assert measurements.anisomorphism == pytest.approx(1.0)

    def test_axis_scaling_detected(self):
        work = [(0.0, 0.0), (1.0, 2.0), (3.0, 1.0), (4.0, 5.0)]
        points = make_tie_points(work, lambda x, y: (2.0 * x, y))
        measurements = EvaluationMeasurements()

        measurements.estimate_anisomorphism(points)
        assert measurements.anisomorphism == pytest.approx(0.5)

    def test_skipped_pairs_leave_the_denominator(self):
        """Only contributing pairs are averaged."""
        points = make_tie_points([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)], lambda x, y: (2.0 * x, y))
        measurements = EvaluationMeasurements()

        assert measurements.estimate_anisomorphism(points)
        # One of three pairs contributes a ratio of 0.5
        assert measurements.anisomorphism == pytest.approx(0.5)

    def test_no_contributing_pair_gives_one(self):
        points = make_tie_points([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)], lambda x, y: (x, y))
        measurements = EvaluationMeasurements()

        assert measurements.estimate_anisomorphism(points)
        assert measurements.anisomorphism == 1.0

    def test_duplicates_are_not_merged(self):
        """A repeated tie point adds a non-contributing pair, not a merge."""
        a = TiePoint(Point(0.0, 0.0), Point(0.0, 0.0))
        b = TiePoint(Point(1.0, 1.0), Point(3.0, 1.0))
        single, repeated = EvaluationMeasurements(), EvaluationMeasurements()

        single.estimate_anisomorphism([a, b])
        repeated.estimate_anisomorphism([a, a, b])

        assert single.anisomorphism == pytest.approx(1.0 / 3.0)
        # Pairs (a, b) twice contribute, (a, a) is skipped
        assert repeated.anisomorphism == pytest.approx(1.0 / 3.0)

    @pytest.mark.parametrize("count", [0, 1])
    def test_too_few_points_fails_and_keeps_value(self, count):
        measurements = EvaluationMeasurements(anisomorphism=2.5)
        points = make_tie_points(WORK[:count], lambda x, y: (x, y))

        assert measurements.estimate_anisomorphism(points) is False
        assert measurements.anisomorphism == 2.5

    def test_value_is_overwritten_not_accumulated(self):
        work = [(0.0, 0.0), (1.0, 2.0), (3.0, 1.0)]
        points = make_tie_points(work, lambda x, y: (2.0 * x, 2.0 * y))
        measurements = EvaluationMeasurements()

        measurements.estimate_anisomorphism(points)
        measurements.estimate_anisomorphism(points)
        assert measurements.anisomorphism == pytest.approx(1.0)


class TestSimilarity:
    """Tests for estimate_similarity."""

    @pytest.mark.parametrize(
        "transform",
        [
            similarity_transform(1.0, 0.0, 0.0, 0.0),
            similarity_transform(2.5, 0.7, 100.0, -40.0),
            similarity_transform(0.1, -2.0, 3.0, 3.0),
        ],
    )
    def test_similarity_transform_gives_one(self, transform):
        points = make_tie_points(WORK, transform)
        measurements = EvaluationMeasurements()

        assert measurements.estimate_similarity(points) is True
        assert measurements.similarity == pytest.approx(1.0, abs=1e-9)

    def test_shear_breaks_similarity(self):
        points = make_tie_points(WORK, lambda x, y: (x + y, y))
        measurements = EvaluationMeasurements()

        measurements.estimate_similarity(points)
        assert abs(measurements.similarity - 1.0) > 1e-3

    def test_single_triple(self):
        """Right angle in work space, 45 degrees in reference space."""
        points = [
            TiePoint(Point(0.0, 0.0), Point(0.0, 0.0)),
            TiePoint(Point(1.0, 0.0), Point(1.0, 0.0)),
            TiePoint(Point(0.0, 1.0), Point(1.0, 1.0)),
        ]
        measurements = EvaluationMeasurements()

        assert measurements.estimate_similarity(points)
        assert measurements.similarity == pytest.approx(2.0)

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_too_few_points_fails_and_keeps_value(self, count):
        measurements = EvaluationMeasurements(similarity=0.9)
        points = make_tie_points(WORK[:count], lambda x, y: (x, y))

        assert measurements.estimate_similarity(points) is False
        assert measurements.similarity == 0.9

    def test_coincident_points_raise(self):
        points = make_tie_points(WORK[:3], lambda x, y: (x, y))
        points.append(TiePoint(Point(0.0, 0.0), Point(0.0, 0.0)))
        measurements = EvaluationMeasurements(similarity=0.9)

        with pytest.raises(DegenerateVectorError):
            measurements.estimate_similarity(points)
        assert measurements.similarity == 0.9

    def test_pruned_duplicates_can_be_evaluated(self):
        points = make_tie_points(WORK, lambda x, y: (3.0 * x, 3.0 * y))
        points.append(TiePoint(Point(0.0, 0.0), Point(0.0, 0.0)))
        remove_duplicate_points(points, 0.0)

        measurements = EvaluationMeasurements()
        assert measurements.estimate_similarity(points)
        assert measurements.similarity == pytest.approx(1.0)

    def test_collinear_reference_triple_is_not_finite(self):
        points = [
            TiePoint(Point(0.0, 0.0), Point(0.0, 0.0)),
            TiePoint(Point(1.0, 0.0), Point(1.0, 0.0)),
            TiePoint(Point(0.0, 1.0), Point(2.0, 0.0)),
        ]
        measurements = EvaluationMeasurements()

        assert measurements.estimate_similarity(points)
        assert math.isinf(measurements.similarity)


class TestEstimateAll:

    def test_reports_each_outcome(self):
        points = make_tie_points(WORK[:2], lambda x, y: (x, y))
        measurements = EvaluationMeasurements()

        outcome = measurements.estimate_all(points)

        assert outcome == {"length_variation": True, "anisomorphism": True, "similarity": False}
        assert measurements.similarity == 0.0

    def test_accepts_generators(self):
        measurements = EvaluationMeasurements()
        outcome = measurements.estimate_all(tp for tp in make_tie_points(WORK, lambda x, y: (x, y)))
        assert all(outcome.values())
        assert measurements.similarity == pytest.approx(1.0)
