#!/usr/bin/env python3
# linearize_scale_perf.py
# Segment count and timing of the adaptive linearization for several approximation scales

"""
Performance Test for AvCurveLinearizer

Linearizes a single cubic Bezier curve with increasing approximation scale
and reports the number of emitted segments, recursion calls and run time.
"""

import timeit

from avlin.config import LinearizationOptions
from avlin.linearizer import AvCurveLinearizer
from avlin.segment import SegmentCollector

# Test points for cubic Bezier curve
POINTS = ((0.0, 0.0), (50.0, 200.0), (150.0, -100.0), (200.0, 0.0))

SCALES = [0.01, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 100.0]


def run_performance_tests():
    """Print segment counts and average run time per approximation scale."""
    print("\nResults (average of 200 runs):")
    print("   Scale | Segments | Recursion calls | Time (μs)")
    print("--------------------------------------------------")

    for scale in SCALES:
        collector = SegmentCollector()
        linearizer = AvCurveLinearizer(collector, LinearizationOptions(approximation_scale=scale))
        linearizer.linearize(POINTS)
        num_segments = len(collector)
        num_calls = linearizer.recursion_calls

        def run(linearizer=linearizer, collector=collector):
            collector.clear()
            linearizer.linearize(POINTS)

        time_us = timeit.timeit(run, number=200) / 200 * 1e6
        print(f"{scale:8g} | {num_segments:8d} | {num_calls:15d} | {time_us:9.1f}")


if __name__ == "__main__":
    run_performance_tests()
