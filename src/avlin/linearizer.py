"""Adaptive linearization of cubic Bezier curves by recursive midpoint subdivision.

The flatness decision combines a chordal distance test with a turning angle
test and an optional cusp test, following the adaptive subdivision scheme of
Anti-Grain Geometry (http://antigrain.com/research/adaptive_bezier/).
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence

from avlin.bezier import BezierCurve
from avlin.common import Point
from avlin.config import DEFAULT_OPTIONS, LinearizationOptions
from avlin.segment import AvSegment, SegmentConsumer

logger = logging.getLogger(__name__)

TAU = 2.0 * math.pi


def _distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def _wrap_angle(angle: float) -> float:
    """Reflect an absolute angle difference into [0, pi]."""
    if angle >= math.pi:
        angle = TAU - angle
    return angle


###############################################################################
# AvCurveLinearizer
###############################################################################


class AvCurveLinearizer:
    """Linearizes cubic Bezier curves into line segments.

    Every emitted segment is passed to the consumer as an ``AvSegment`` with
    descriptor ``("L", x, y)``. Segments of one ``linearize`` call are chained:
    each starts where the previous one ended, the first starts at the curve's
    start point and the last ends exactly at the curve's end point.

    An instance keeps the last emitted point as session state, so it must not
    be shared between curves being linearized at the same time.
    """

    def __init__(self, consumer: SegmentConsumer, options: Optional[LinearizationOptions] = None):
        self.consumer = consumer
        self.options = options if options is not None else DEFAULT_OPTIONS
        self.last_point: Point = (0.0, 0.0)
        self.recursion_calls: int = 0
        self.segment_count: int = 0

    def _line_to(self, x: float, y: float, datum: Any) -> None:
        """Emit a line from the last emitted point to (x, y)."""
        x1, y1 = self.last_point
        if x1 == x and y1 == y:
            return
        self.consumer.emit(AvSegment(x1, y1, x, y, datum, ("L", x, y)))
        self.last_point = (x, y)
        self.segment_count += 1

    def linearize(self, points: Sequence[Point], datum: Any = None) -> None:
        """Linearize the given cubic Bezier curve.

        Calls the consumer once for every line segment of the linearized curve.
        A curve that is not a single point emits at least one segment, a closed
        curve collapsing onto its start point emits its zero-length chord.

        Args:
            points: Control points, exactly 4: start, control1, control2, end
            datum: Caller data attached to every emitted segment
        """
        (x1, y1), (x2, y2), (x3, y3), (x4, y4) = ((float(p[0]), float(p[1])) for p in points)

        self.recursion_calls = 0
        self.segment_count = 0
        self.last_point = (x1, y1)
        self._linearize_recursive((x1, y1), (x2, y2), (x3, y3), (x4, y4), datum, 0)

        if self.last_point != (x4, y4):
            logger.debug("Closing gap from %s to curve end point (%s, %s)", self.last_point, x4, y4)
            self._line_to(x4, y4, datum)

        if self.segment_count == 0 and ((x2, y2) != (x1, y1) or (x3, y3) != (x1, y1) or (x4, y4) != (x1, y1)):
            # Closed curve collapsed onto its start point, keep one event for it
            logger.debug("Curve collapsed onto (%s, %s), emitting its chord", x1, y1)
            self.consumer.emit(AvSegment(x1, y1, x4, y4, datum, ("L", x4, y4)))
            self.segment_count = 1

    def linearize_quadratic(self, points: Sequence[Point], datum: Any = None) -> None:
        """Linearize a quadratic Bezier curve after degree elevation to a cubic one.

        The elevation method is taken from ``options.quadratic_elevation``.
        """
        if self.options.quadratic_elevation == "exact":
            cubic = BezierCurve.elevate_quadratic_exact(points)
        else:
            cubic = BezierCurve.elevate_quadratic_duplicated(points)
        self.linearize(cubic, datum)

    def _linearize_recursive(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        # pylint: disable=too-many-locals,too-many-branches,too-many-statements,too-many-return-statements
        self,
        p1: Point,
        p2: Point,
        p3: Point,
        p4: Point,
        datum: Any,
        level: int,
    ) -> None:
        self.recursion_calls += 1

        opts = self.options
        cusp_limit = opts.cusp_limit
        check_cusp = opts.cusp_handling_enabled
        angle_tolerance = opts.angle_tolerance
        skip_angle = angle_tolerance < opts.curve_angle_tolerance_epsilon
        distance_tolerance_squared = opts.distance_tolerance_squared

        x1, y1 = p1
        x2, y2 = p2
        x3, y3 = p3
        x4, y4 = p4

        p12, p23, p34, p123, p234, p1234 = BezierCurve.split_cubic_midpoints(p1, p2, p3, p4)

        # Try to approximate the full cubic curve by a single straight line
        dx = x4 - x1
        dy = y4 - y1

        d2 = abs((x2 - x4) * dy - (y2 - y4) * dx)
        d3 = abs((x3 - x4) * dy - (y3 - y4) * dx)

        significant = (2 if d2 > opts.curve_colinearity_epsilon else 0) + (
            1 if d3 > opts.curve_colinearity_epsilon else 0
        )

        if significant == 0:
            # All collinear OR p1 == p4
            k = dx * dx + dy * dy
            if k == 0:
                d2 = _distance(x1, y1, x2, y2)
                d3 = _distance(x4, y4, x3, y3)
            else:
                k = 1 / k
                d2 = k * ((x2 - x1) * dx + (y2 - y1) * dy)
                d3 = k * ((x3 - x1) * dx + (y3 - y1) * dy)
                if 0 < d2 < 1 and 0 < d3 < 1:
                    # Simple collinear case, 1---2---3---4
                    self._line_to(x4, y4, datum)
                    return

                if d2 <= 0:
                    d2 = _distance(x2, y2, x1, y1)
                elif d2 >= 1:
                    d2 = _distance(x2, y2, x4, y4)
                else:
                    d2 = _distance(x2, y2, x1 + d2 * dx, y1 + d2 * dy)

                if d3 <= 0:
                    d3 = _distance(x3, y3, x1, y1)
                elif d3 >= 1:
                    d3 = _distance(x3, y3, x4, y4)
                else:
                    d3 = _distance(x3, y3, x1 + d3 * dx, y1 + d3 * dy)

            if d2 > d3:
                if d2 < distance_tolerance_squared:
                    self._line_to(x2, y2, datum)
                    return
            elif d3 < distance_tolerance_squared:
                self._line_to(x3, y3, datum)
                return

        elif significant == 1:
            # p1, p2, p4 are collinear, p3 is significant
            if d3 * d3 <= distance_tolerance_squared * (dx * dx + dy * dy):
                if skip_angle:
                    self._line_to(p23[0], p23[1], datum)
                    return

                da1 = _wrap_angle(abs(math.atan2(y4 - y3, x4 - x3) - math.atan2(y3 - y2, x3 - x2)))

                if da1 < angle_tolerance:
                    self._line_to(x2, y2, datum)
                    self._line_to(x3, y3, datum)
                    return

                if check_cusp and da1 > math.pi - cusp_limit:
                    self._line_to(x3, y3, datum)
                    return

        elif significant == 2:
            # p1, p3, p4 are collinear, p2 is significant
            if d2 * d2 <= distance_tolerance_squared * (dx * dx + dy * dy):
                if skip_angle:
                    self._line_to(p23[0], p23[1], datum)
                    return

                da1 = _wrap_angle(abs(math.atan2(y3 - y2, x3 - x2) - math.atan2(y2 - y1, x2 - x1)))

                if da1 < angle_tolerance:
                    self._line_to(x2, y2, datum)
                    self._line_to(x3, y3, datum)
                    return

                if check_cusp and da1 > math.pi - cusp_limit:
                    self._line_to(x2, y2, datum)
                    return

        else:
            # Regular case
            if (d2 + d3) * (d2 + d3) <= distance_tolerance_squared * (dx * dx + dy * dy):
                # The curvature doesn't exceed the distance tolerance, tend to finish subdivisions
                if skip_angle:
                    self._line_to(p23[0], p23[1], datum)
                    return

                k = math.atan2(y3 - y2, x3 - x2)
                da1 = _wrap_angle(abs(k - math.atan2(y2 - y1, x2 - x1)))
                da2 = _wrap_angle(abs(math.atan2(y4 - y3, x4 - x3) - k))

                if da1 + da2 < angle_tolerance:
                    self._line_to(p23[0], p23[1], datum)
                    return

                if check_cusp:
                    if da1 > math.pi - cusp_limit:
                        self._line_to(x2, y2, datum)
                        return
                    if da2 > math.pi - cusp_limit:
                        self._line_to(x3, y3, datum)
                        return

        next_level = level + 1
        if next_level >= opts.recursion_limit:
            logger.debug("Recursion limit %d reached, forcing line to (%s, %s)", opts.recursion_limit, x4, y4)
            self._line_to(x4, y4, datum)
            return

        # Continue subdivision, left half first
        self._linearize_recursive(p1, p12, p123, p1234, datum, next_level)
        self._linearize_recursive(p1234, p234, p34, p4, datum, next_level)
