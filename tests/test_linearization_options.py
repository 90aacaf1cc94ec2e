"""Test module for avlin.config

The tests are run using pytest.
"""

import math

import pytest

from avlin.config import DEFAULT_OPTIONS, LinearizationOptions


class TestLinearizationOptionsDefaults:
    """Test the default tolerance configuration."""

    def test_default_values(self):
        """Defaults match the documented configuration surface."""
        opts = LinearizationOptions()
        assert opts.approximation_scale == 1.0
        assert opts.curve_distance_epsilon == 1e-30
        assert opts.curve_colinearity_epsilon == 1e-30
        assert opts.curve_angle_tolerance_epsilon == 0.01
        assert opts.angle_tolerance == 0.4
        assert opts.recursion_limit == 32
        assert opts.cusp_limit == 0.0
        assert opts.quadratic_elevation == "duplicate"
        assert opts == DEFAULT_OPTIONS

    def test_distance_tolerance_squared(self):
        """Distance tolerance is 0.5 / approximation_scale."""
        assert DEFAULT_OPTIONS.distance_tolerance_squared == pytest.approx(0.25)
        opts = LinearizationOptions(approximation_scale=10.0)
        assert opts.distance_tolerance_squared == pytest.approx(0.0025)

    def test_distance_tolerance_squared_scale_zero(self):
        """A scale of 0 gives an infinite tolerance instead of a division error."""
        opts = LinearizationOptions(approximation_scale=0.0)
        assert opts.distance_tolerance_squared == math.inf

    def test_cusp_handling_flag(self):
        """A cusp limit of 0 disables cusp handling."""
        assert not DEFAULT_OPTIONS.cusp_handling_enabled
        assert LinearizationOptions(cusp_limit=math.radians(10)).cusp_handling_enabled

    def test_options_are_read_only(self):
        """Options can not be mutated after construction."""
        with pytest.raises(AttributeError):
            DEFAULT_OPTIONS.angle_tolerance = 0.1  # type: ignore[misc]


class TestLinearizationOptionsOverrides:
    """Test selective overrides and dictionary round trips."""

    def test_with_overrides_keeps_other_fields(self):
        """Only the given fields change."""
        opts = DEFAULT_OPTIONS.with_overrides(approximation_scale=4.0, cusp_limit=0.2)
        assert opts.approximation_scale == 4.0
        assert opts.cusp_limit == 0.2
        assert opts.angle_tolerance == DEFAULT_OPTIONS.angle_tolerance
        assert DEFAULT_OPTIONS.approximation_scale == 1.0

    def test_with_overrides_unknown_field(self):
        """Unknown option names are rejected."""
        with pytest.raises(ValueError, match="approximation"):
            DEFAULT_OPTIONS.with_overrides(approximation=4.0)

    def test_from_dict_partial(self):
        """Missing keys take their defaults."""
        opts = LinearizationOptions.from_dict({"recursion_limit": 8})
        assert opts.recursion_limit == 8
        assert opts.approximation_scale == 1.0

    def test_from_dict_unknown_key(self):
        """Unknown keys raise ValueError naming them."""
        with pytest.raises(ValueError, match="cuspLimit"):
            LinearizationOptions.from_dict({"cuspLimit": 0.1})

    def test_to_dict_from_dict(self):
        """A serialized configuration restores the same options."""
        opts = LinearizationOptions(approximation_scale=3.0, quadratic_elevation="exact")
        data = opts.to_dict()
        assert data["approximation_scale"] == 3.0
        assert data["quadratic_elevation"] == "exact"
        assert LinearizationOptions.from_dict(data) == opts
