"""Tolerance configuration for the adaptive curve linearization."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict, Literal

QuadraticElevation = Literal["duplicate", "exact"]


###############################################################################
# LinearizationOptions
###############################################################################


@dataclass(frozen=True)
class LinearizationOptions:
    """Numeric knobs deciding when the recursive subdivision stops.

    The options are read-only for the lifetime of a linearization session.
    Values are used as given, there is no range check: an unusual
    configuration only changes the density of the emitted segments.

    Attributes:
        approximation_scale: Higher is better quality. The distance tolerance
            is derived as ``0.5 / approximation_scale``.
        curve_distance_epsilon: Limit to disregard the curve distance at.
        curve_colinearity_epsilon: Limit to disregard colinearity at.
        curve_angle_tolerance_epsilon: Below this angle tolerance the angle
            check is skipped.
        angle_tolerance: Angle tolerance in radians, range (0, pi].
        recursion_limit: Hard subdivision recursion limit.
        cusp_limit: Limit for curve cusps in radians, range [0, pi). 0 = off.
        quadratic_elevation: How quadratic curves are turned into cubic ones.
            "duplicate" reuses the quadratic control point for both cubic
            control points, "exact" uses the standard 2/3 interpolation.
    """

    approximation_scale: float = 1.0
    curve_distance_epsilon: float = 1e-30
    curve_colinearity_epsilon: float = 1e-30
    curve_angle_tolerance_epsilon: float = 0.01
    angle_tolerance: float = 0.4
    recursion_limit: int = 32
    cusp_limit: float = 0.0
    quadratic_elevation: QuadraticElevation = "duplicate"

    @property
    def distance_tolerance_squared(self) -> float:
        """Squared distance tolerance derived from the approximation scale.

        A scale of 0 gives an infinite tolerance, the distance test then always passes.
        """
        tolerance = 0.5 / self.approximation_scale if self.approximation_scale else math.inf
        return tolerance * tolerance

    @property
    def cusp_handling_enabled(self) -> bool:
        """True if a cusp limit is configured."""
        return self.cusp_limit != 0.0

    def with_overrides(self, **overrides: Any) -> LinearizationOptions:
        """Return a copy where the given fields are replaced.

        Raises:
            ValueError: If an unknown option name is given.
        """
        self._check_keys(overrides)
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to a dictionary for serialization."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LinearizationOptions:
        """Create LinearizationOptions from a dictionary.

        Missing keys take their default values.

        Raises:
            ValueError: If the dictionary contains an unknown option name.
        """
        cls._check_keys(data)
        return cls(**data)

    @classmethod
    def _check_keys(cls, data: Dict[str, Any]) -> None:
        known = {field.name for field in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown linearization option(s): {', '.join(unknown)}")


DEFAULT_OPTIONS = LinearizationOptions()
