"""
Unit tests for the forward Euler integrator and the CFL bound.
"""

import math

import pytest

import numpy as np

from levelset2d import DimensionMismatchError, StabilityError, VelocityField, create
from levelset2d.alg.integrators import EulerIntegrator, compute_rate, max_time_step
from levelset2d.geometry import grid_coordinates

# =============================================================================
# Time Step Bound
# =============================================================================


class TestMaxTimeStep:
    """Tests for max_time_step."""

    def test_advection_bound(self, circle_phi):
        ls = create(circle_phi, cfl=0.5)
        assert ls.max_time_step(VelocityField(vx=1.0, vy=1.0)) == pytest.approx(0.25)

    def test_normal_speed_and_spacing(self, circle_phi):
        ls = create(circle_phi, spacing=0.5, cfl=0.4)
        assert ls.max_time_step(VelocityField(normal=-2.0)) == pytest.approx(0.1)

    def test_curvature_bound(self, circle_phi):
        ls = create(circle_phi, cfl=0.5)
        assert ls.max_time_step(VelocityField(curvature=1.0)) == pytest.approx(0.125)

    def test_zero_velocity_is_unbounded(self, circle_phi):
        ls = create(circle_phi)
        assert math.isinf(ls.max_time_step(VelocityField(vx=0.0)))

    def test_maximum_taken_over_band_only(self, circle_phi):
        speed = np.ones_like(circle_phi)
        speed[0, 0] = 100.0
        band = create(circle_phi, bandwidth=5).band

        assert max_time_step(VelocityField(normal=speed), circle_phi.shape, band, 1.0, 0.5) == pytest.approx(0.5)


# =============================================================================
# Euler Step
# =============================================================================


class TestEulerStep:
    """Tests for EulerIntegrator.step through LevelSet.step."""

    def test_cfl_violation_leaves_phi_unchanged(self, circle_phi):
        ls = create(circle_phi, bandwidth=5)
        velocity = VelocityField(normal=1.0)
        before = ls.phi.copy()

        with pytest.raises(StabilityError) as exc_info:
            ls.step(velocity, dt=2 * ls.max_time_step(velocity))

        np.testing.assert_array_equal(ls.phi, before)
        assert exc_info.value.max_dt == pytest.approx(0.5)

    @pytest.mark.parametrize("dt", [0.0, -0.1, float("nan"), float("inf"), True])
    def test_invalid_dt_rejected(self, circle_phi, dt):
        ls = create(circle_phi)
        with pytest.raises(ValueError, match="dt"):
            ls.step(VelocityField(normal=1.0), dt)

    def test_max_time_step_is_accepted(self, circle_phi):
        ls = create(circle_phi)
        velocity = VelocityField(vx=0.3, vy=-0.7)
        ls.step(velocity, ls.max_time_step(velocity))

    def test_empty_band_is_noop(self):
        phi = np.full((16, 16), 10.0)
        phi[0, 0] = -10.0
        ls = create(phi, bandwidth=1.0)
        assert ls.band.size == 0

        before = ls.phi.copy()
        ls.step(VelocityField(normal=1.0), dt=100.0)
        np.testing.assert_array_equal(ls.phi, before)

    def test_translation_of_plane(self, plane_phi):
        ls = create(plane_phi)
        ls.step(VelocityField(vx=1.0), dt=0.5)
        np.testing.assert_allclose(ls.phi, plane_phi - 0.5, atol=1e-12)

    def test_only_band_points_change(self, circle_phi):
        ls = create(circle_phi, bandwidth=3)
        outside = ~ls.band_mask
        band_before = ls.band.copy()

        ls.step(VelocityField(normal=1.0), dt=0.5)

        np.testing.assert_array_equal(ls.phi[outside], circle_phi[outside])
        np.testing.assert_array_equal(ls.band, band_before)

    def test_normal_motion_expands_circle(self, circle_phi):
        ls = create(circle_phi, bandwidth=5)
        ls.step(VelocityField(normal=1.0), dt=0.5)
        # φ decreases by F·dt near the interface where |∇φ| = 1
        assert ls.phi[48, 32] == pytest.approx(-0.5, abs=1e-9)

    def test_velocity_shape_mismatch(self, circle_phi):
        ls = create(circle_phi)
        with pytest.raises(DimensionMismatchError):
            ls.step(VelocityField(vx=np.ones((10, 10))), dt=0.1)


def test_rotation_rate_is_zero_on_circle(circle_phi):
    X, Y = grid_coordinates(circle_phi.shape)
    velocity = VelocityField(vx=-(Y - 32.0), vy=X - 32.0)
    ls = create(circle_phi, bandwidth=4)

    rate = compute_rate(ls.phi, ls.band, ls.differencer, velocity)
    near = np.abs(circle_phi) < 1.0
    assert np.abs(rate[near]).max() < 1.0


def test_integrator_repr():
    assert repr(EulerIntegrator(spacing=0.5, cfl=0.3)) == "EulerIntegrator(spacing=0.5, cfl=0.3)"
