"""Test module for avlin.bezier

The tests are run using pytest.
These tests ensure that the BezierCurve helpers used by the linearization
stay consistent with the analytic curve definitions.
"""

import numpy as np
import pytest

from avlin.bezier import BezierCurve

CUBIC = [(0.0, 0.0), (0.0, 100.0), (100.0, 100.0), (100.0, 0.0)]
QUADRATIC = [(0.0, 0.0), (50.0, 100.0), (100.0, 0.0)]


class TestEvaluation:
    """Test evaluation of quadratic and cubic curves."""

    def test_cubic_end_points(self):
        """B(0) is the start point, B(1) the end point."""
        np.testing.assert_allclose(BezierCurve.evaluate_cubic(CUBIC, 0.0), CUBIC[0])
        np.testing.assert_allclose(BezierCurve.evaluate_cubic(CUBIC, 1.0), CUBIC[3])

    def test_cubic_midpoint(self):
        """B(0.5) = (P0 + 3*P1 + 3*P2 + P3) / 8."""
        np.testing.assert_allclose(BezierCurve.evaluate_cubic(CUBIC, 0.5), (50.0, 75.0))

    def test_cubic_array_parameter(self):
        """An array of parameters gives one row per parameter."""
        result = BezierCurve.evaluate_cubic(CUBIC, np.array([0.0, 0.5, 1.0]))
        assert result.shape == (3, 2)
        np.testing.assert_allclose(result[1], (50.0, 75.0))

    def test_quadratic_midpoint(self):
        """B(0.5) = (P0 + 2*P1 + P2) / 4."""
        np.testing.assert_allclose(BezierCurve.evaluate_quadratic(QUADRATIC, 0.5), (50.0, 50.0))

    def test_wrong_number_of_points(self):
        """Point count is checked."""
        with pytest.raises(ValueError):
            BezierCurve.evaluate_cubic(QUADRATIC, 0.5)
        with pytest.raises(ValueError):
            BezierCurve.evaluate_quadratic(CUBIC, 0.5)


class TestPolygonize:
    """Test uniform polygonization."""

    def test_polygonize_cubic_shape_and_end_points(self):
        """steps+1 points, exact start and end."""
        result = BezierCurve.polygonize_cubic_curve(CUBIC, 10)
        assert result.shape == (11, 2)
        assert tuple(result[0]) == CUBIC[0]
        assert tuple(result[-1]) == CUBIC[3]

    def test_polygonize_cubic_invalid_steps(self):
        """At least one step is required."""
        with pytest.raises(ValueError):
            BezierCurve.polygonize_cubic_curve(CUBIC, 0)


class TestSubdivisionAndElevation:
    """Test de Casteljau midpoints and degree elevation."""

    def test_split_midpoint_lies_on_curve(self):
        """p1234 is the curve point at t=0.5."""
        _, _, _, _, _, p1234 = BezierCurve.split_cubic_midpoints(*CUBIC)
        np.testing.assert_allclose(p1234, BezierCurve.evaluate_cubic(CUBIC, 0.5))

    def test_split_halves_match_curve(self):
        """Both halves reproduce the original curve on their parameter range."""
        p12, _, p34, p123, p234, p1234 = BezierCurve.split_cubic_midpoints(*CUBIC)
        left = [CUBIC[0], p12, p123, p1234]
        right = [p1234, p234, p34, CUBIC[3]]
        t = np.linspace(0.0, 1.0, 7)
        np.testing.assert_allclose(
            BezierCurve.evaluate_cubic(left, t), BezierCurve.evaluate_cubic(CUBIC, t / 2), atol=1e-9
        )
        np.testing.assert_allclose(
            BezierCurve.evaluate_cubic(right, t), BezierCurve.evaluate_cubic(CUBIC, 0.5 + t / 2), atol=1e-9
        )

    def test_exact_elevation_is_same_curve(self):
        """The exact elevation reproduces the quadratic curve."""
        cubic = BezierCurve.elevate_quadratic_exact(QUADRATIC)
        t = np.linspace(0.0, 1.0, 11)
        np.testing.assert_allclose(
            BezierCurve.evaluate_cubic(cubic, t), BezierCurve.evaluate_quadratic(QUADRATIC, t), atol=1e-12
        )

    def test_duplicated_elevation_differs_inside(self):
        """Reusing the control point keeps the end points but changes the shape."""
        cubic = BezierCurve.elevate_quadratic_duplicated(QUADRATIC)
        assert cubic == (QUADRATIC[0], QUADRATIC[1], QUADRATIC[1], QUADRATIC[2])
        # (P0 + 6*P1 + P2) / 8 instead of (P0 + 2*P1 + P2) / 4
        np.testing.assert_allclose(BezierCurve.evaluate_cubic(cubic, 0.5), (50.0, 75.0))
        np.testing.assert_allclose(BezierCurve.evaluate_quadratic(QUADRATIC, 0.5), (50.0, 50.0))

    def test_elevation_wrong_number_of_points(self):
        """Point count is checked."""
        with pytest.raises(ValueError):
            BezierCurve.elevate_quadratic_exact(CUBIC)
        with pytest.raises(ValueError):
            BezierCurve.elevate_quadratic_duplicated(CUBIC[:2])
