"""Bezier curve utilities: evaluation, midpoint subdivision and degree elevation."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from avlin.common import Point

CurvePoints = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve operations.

    Provides evaluation and uniform polygonization with NumPy as well as the
    pure Python helpers used by the adaptive linearization.
    """

    @staticmethod
    def _as_array(points: CurvePoints, count: int) -> NDArray[np.float64]:
        """Convert control points to a (count, 2) float array."""
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.ndim != 2 or points_array.shape[0] != count or points_array.shape[1] < 2:
            raise ValueError(f"Expected {count} control points as (x, y), got shape {points_array.shape}")
        return points_array[:, :2]

    @classmethod
    def evaluate_cubic(
        cls, points: CurvePoints, t: Union[float, NDArray[np.float64]]
    ) -> NDArray[np.float64]:
        """Evaluate a cubic Bezier curve.

        B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3

        Args:
            points: Control points, exactly 4: start, control1, control2, end
            t: Parameter value or array of parameter values in [0, 1]

        Returns:
            Array of shape (2,) for a scalar t, (n, 2) for an array of n values
        """
        points_array = cls._as_array(points, 4)
        t_array = np.asarray(t, dtype=np.float64)

        omt = 1.0 - t_array
        omt2 = omt * omt
        t2 = t_array * t_array

        w0 = omt2 * omt
        w1 = 3.0 * omt2 * t_array
        w2 = 3.0 * omt * t2
        w3 = t2 * t_array

        x = w0 * points_array[0, 0] + w1 * points_array[1, 0] + w2 * points_array[2, 0] + w3 * points_array[3, 0]
        y = w0 * points_array[0, 1] + w1 * points_array[1, 1] + w2 * points_array[2, 1] + w3 * points_array[3, 1]
        return np.stack([x, y], axis=-1)

    @classmethod
    def evaluate_quadratic(
        cls, points: CurvePoints, t: Union[float, NDArray[np.float64]]
    ) -> NDArray[np.float64]:
        """Evaluate a quadratic Bezier curve.

        B(t) = (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2
        """
        points_array = cls._as_array(points, 3)
        t_array = np.asarray(t, dtype=np.float64)

        omt = 1.0 - t_array
        w0 = omt * omt
        w1 = 2.0 * omt * t_array
        w2 = t_array * t_array

        x = w0 * points_array[0, 0] + w1 * points_array[1, 0] + w2 * points_array[2, 0]
        y = w0 * points_array[0, 1] + w1 * points_array[1, 1] + w2 * points_array[2, 1]
        return np.stack([x, y], axis=-1)

    @classmethod
    def polygonize_cubic_curve(cls, points: CurvePoints, steps: int) -> NDArray[np.float64]:
        """
        Polygonize a cubic Bezier curve into uniformly spaced parameter steps.

        Args:
            points: Control points, exactly 4: start, control1, control2, end
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps+1, 2); first and last rows are
            exactly the start and end point
        """
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        points_array = cls._as_array(points, 4)
        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        result = cls.evaluate_cubic(points_array, t)
        # Pin the end points to avoid floating point residue
        result[0] = points_array[0]
        result[-1] = points_array[3]
        return result

    @staticmethod
    def split_cubic_midpoints(
        p1: Point, p2: Point, p3: Point, p4: Point
    ) -> Tuple[Point, Point, Point, Point, Point, Point]:
        """Return the de Casteljau midpoints splitting a cubic curve at t=0.5.

        Returns:
            (p12, p23, p34, p123, p234, p1234). The left half is
            (p1, p12, p123, p1234), the right half (p1234, p234, p34, p4).
        """
        x12 = (p1[0] + p2[0]) / 2
        y12 = (p1[1] + p2[1]) / 2
        x23 = (p2[0] + p3[0]) / 2
        y23 = (p2[1] + p3[1]) / 2
        x34 = (p3[0] + p4[0]) / 2
        y34 = (p3[1] + p4[1]) / 2
        x123 = (x12 + x23) / 2
        y123 = (y12 + y23) / 2
        x234 = (x23 + x34) / 2
        y234 = (y23 + y34) / 2
        x1234 = (x123 + x234) / 2
        y1234 = (y123 + y234) / 2
        return (x12, y12), (x23, y23), (x34, y34), (x123, y123), (x234, y234), (x1234, y1234)

    @staticmethod
    def elevate_quadratic_exact(points: Sequence[Point]) -> Tuple[Point, Point, Point, Point]:
        """Degree-elevate a quadratic curve to the identical cubic curve.

        Each cubic control point lies two thirds of the way from its end point
        towards the quadratic control point.
        """
        if len(points) != 3:
            raise ValueError(f"Quadratic curve needs 3 points, got {len(points)}")
        (x0, y0), (x1, y1), (x2, y2) = points
        ctrl1 = (x0 + 2.0 / 3.0 * (x1 - x0), y0 + 2.0 / 3.0 * (y1 - y0))
        ctrl2 = (x2 + 2.0 / 3.0 * (x1 - x2), y2 + 2.0 / 3.0 * (y1 - y2))
        return (x0, y0), ctrl1, ctrl2, (x2, y2)

    @staticmethod
    def elevate_quadratic_duplicated(points: Sequence[Point]) -> Tuple[Point, Point, Point, Point]:
        """Turn a quadratic curve into a cubic one reusing its control point twice.

        End points are kept, but the resulting shape differs from the
        quadratic curve (it is pulled further towards the control point).
        """
        if len(points) != 3:
            raise ValueError(f"Quadratic curve needs 3 points, got {len(points)}")
        (x0, y0), (x1, y1), (x2, y2) = points
        return (x0, y0), (x1, y1), (x1, y1), (x2, y2)
