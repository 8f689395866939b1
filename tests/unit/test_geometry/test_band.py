"""
Unit tests for narrow band construction and field validation.

Covers the band invariant band = {i : |φ[i]| ≤ bandwidth}, the unbounded
band, and rejection of malformed fields and bandwidths.
"""

import math

import pytest

import numpy as np

from levelset2d import ConfigurationError, create
from levelset2d.geometry import (
    band_mask,
    build_band,
    has_interface,
    restrict_to_band,
    validate_bandwidth,
    validate_field,
)

# =============================================================================
# Band Construction
# =============================================================================


class TestBuildBand:
    """Tests for build_band."""

    def test_unbounded_band_covers_grid(self, circle_phi):
        band = build_band(circle_phi, math.inf)
        assert band.size == 64 * 64
        np.testing.assert_array_equal(band, np.arange(64 * 64))

    def test_finite_band_matches_threshold(self, circle_phi):
        band = build_band(circle_phi, 5.0)
        expected = np.flatnonzero(np.abs(circle_phi) <= 5.0)

        np.testing.assert_array_equal(band, expected)
        assert band.size == np.count_nonzero(np.abs(circle_phi) <= 5.0)

    def test_band_is_sorted_and_unique(self, circle_phi):
        band = build_band(circle_phi, 3.0)
        assert np.all(np.diff(band) > 0)

    def test_boundary_value_is_included(self):
        phi = np.array([[-2.0, -1.0], [1.0, 2.0]])
        np.testing.assert_array_equal(build_band(phi, 1.0), [1, 2])

    def test_zero_bandwidth_keeps_exact_zeros(self):
        phi = np.array([[0.0, 0.5], [-0.5, 0.0]])
        np.testing.assert_array_equal(build_band(phi, 0.0), [0, 3])


class TestLevelSetBand:
    """Band of a level set created through create()."""

    def test_create_with_unbounded_band(self, circle_phi):
        ls = create(circle_phi)
        assert ls.band.size == 4096
        assert not ls.is_narrow_band

    def test_create_with_narrow_band(self, circle_phi):
        ls = create(circle_phi, bandwidth=5)
        assert ls.band.size == np.count_nonzero(np.abs(circle_phi) <= 5)
        assert ls.is_narrow_band

    def test_band_mask_matches_band(self, circle_phi):
        ls = create(circle_phi, bandwidth=2.5)
        np.testing.assert_array_equal(ls.band_mask, np.abs(circle_phi) <= 2.5)


# =============================================================================
# Field Validation
# =============================================================================


class TestValidateField:
    """Tests for validate_field."""

    def test_returns_independent_float_copy(self):
        field = np.arange(12, dtype=np.int32).reshape(3, 4) - 5
        phi = validate_field(field)

        assert phi.dtype == np.float64
        phi[0, 0] = 100.0
        assert field[0, 0] == -5

    def test_three_dimensional_field_rejected(self):
        with pytest.raises(ConfigurationError, match="two-dimensional") as exc_info:
            create(np.zeros((4, 4, 4)))
        assert exc_info.value.parameter_name == "field"

    def test_one_dimensional_field_rejected(self):
        with pytest.raises(ConfigurationError, match="two-dimensional"):
            validate_field(np.zeros(10))

    @pytest.mark.parametrize(
        "field",
        [
            np.array([[True, False], [False, True]]),
            np.array([["a", "b"], ["c", "d"]]),
            np.ones((3, 3), dtype=complex),
            np.zeros((0, 5)),
            np.array([[0.0, np.nan], [1.0, -1.0]]),
        ],
    )
    def test_invalid_fields_rejected(self, field):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_field(field)
        assert exc_info.value.parameter_name == "field"

    @pytest.mark.parametrize("value", [np.nan, np.inf, -np.inf])
    def test_non_finite_values_rejected(self, value):
        phi = np.array([[-1.0, 0.5], [1.0, value]])
        with pytest.raises(ConfigurationError, match="NaN or infinite"):
            validate_field(phi)

    def test_nested_list_accepted(self):
        phi = validate_field([[-1, 0], [1, 2]])
        assert phi.shape == (2, 2)


# =============================================================================
# Bandwidth Validation
# =============================================================================


class TestValidateBandwidth:
    """Tests for validate_bandwidth."""

    def test_none_is_unbounded(self):
        assert validate_bandwidth(None) == math.inf

    def test_numpy_scalar_accepted(self):
        assert validate_bandwidth(np.float32(2.5)) == 2.5
        assert validate_bandwidth(np.array(3)) == 3.0

    @pytest.mark.parametrize("bandwidth", [-1.0, float("nan"), True, "5", [1.0, 2.0]])
    def test_invalid_bandwidth_rejected(self, bandwidth):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_bandwidth(bandwidth)
        assert exc_info.value.parameter_name == "bandwidth"


# =============================================================================
# Helpers
# =============================================================================


def test_band_mask_and_restriction():
    band = np.array([1, 4])
    mask = band_mask((2, 3), band)
    assert mask.sum() == 2
    assert mask[0, 1] and mask[1, 1]

    values = np.arange(6, dtype=float).reshape(2, 3)
    restricted = restrict_to_band(values, band)
    np.testing.assert_array_equal(restricted, [[0.0, 1.0, 0.0], [0.0, 4.0, 0.0]])
    assert restrict_to_band(values, None) is values


def test_has_interface():
    assert has_interface(np.array([[-1.0, 1.0]]))
    assert has_interface(np.array([[-1.0, 0.0]]))
    assert not has_interface(np.ones((3, 3)))
    assert not has_interface(-np.ones((3, 3)))
