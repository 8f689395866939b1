"""
Unit tests for PDE, Fast Marching and Fast Sweeping reinitialization.

Mathematical properties checked:
- A plane signed distance field is a fixed point of every scheme
- The zero crossing moves by less than one grid cell
- The result has |∇φ| ≈ 1 and the sign of the input
- Fast Marching and Fast Sweeping solve the same discrete eikonal equation
"""

import math

import pytest

import numpy as np

from levelset2d import ReinitializationBudgetExceeded, create
from levelset2d.alg.reinitialization import (
    FastMarchingReinitializer,
    FastSweepingReinitializer,
    PDEReinitializer,
    interface_seeds,
    solve_eikonal,
)
from levelset2d.geometry import grid_coordinates
from levelset2d.operators import FirstOrderDifferencer, WENODifferencer

SCHEMES = ["pde", "fastmarching", "fastsweeping"]
SPATIAL_SCHEMES = ["firstorder", "weno"]


def _distorted_circle(shape=(48, 48), center=(23.7, 24.2), radius=11.0):
    """Field with the zero set of a circle but |∇φ| far from one."""
    X, Y = grid_coordinates(shape)
    r2 = (X - center[0]) ** 2 + (Y - center[1]) ** 2
    return (r2 - radius**2) / 40.0


def _crossing_positions(phi, row):
    """Sub-grid x-positions of the sign changes along one grid line."""
    line = phi[:, row]
    positions = []
    for i in range(line.size - 1):
        if (line[i] < 0) != (line[i + 1] < 0):
            positions.append(i + line[i] / (line[i] - line[i + 1]))
    return np.array(positions)


# =============================================================================
# Eikonal Building Blocks
# =============================================================================


class TestEikonalHelpers:
    """Tests for interface_seeds and solve_eikonal."""

    def test_seed_distance_along_one_axis(self):
        X, _ = grid_coordinates((8, 5))
        seeds, distance = interface_seeds(X - 3.25, h=1.0)

        np.testing.assert_array_equal(np.flatnonzero(seeds[:, 0]), [3, 4])
        assert distance[3, 2] == pytest.approx(0.25)
        assert distance[4, 2] == pytest.approx(0.75)
        assert np.all(np.isinf(distance[~seeds]))

    def test_seed_distance_diagonal_crossings(self):
        phi = np.array([[-1.0, 1.0], [1.0, 1.0]])
        seeds, distance = interface_seeds(phi, h=1.0)

        assert seeds[0, 0] and seeds[0, 1] and seeds[1, 0]
        assert not seeds[1, 1]
        # Crossings at 0.5 along both axes: distance to the line through them
        assert distance[0, 0] == pytest.approx(0.5 / math.sqrt(2))

    def test_solve_eikonal(self):
        a = np.array([1.0, 1.0, np.inf, np.inf, 2.0])
        b = np.array([1.0, 5.0, 3.0, np.inf, 2.5])
        d = solve_eikonal(a, b, 1.0)

        assert d[0] == pytest.approx(1.0 + math.sqrt(2) / 2)
        assert d[1] == pytest.approx(2.0)
        assert d[2] == pytest.approx(4.0)
        assert np.isinf(d[3])
        assert d[4] == pytest.approx(0.5 * (4.5 + math.sqrt(2 - 0.25)))


# =============================================================================
# Properties Shared by All Schemes
# =============================================================================


class TestCommonProperties:
    """Properties every reinitialization scheme satisfies."""

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_plane_is_fixed_point(self, plane_phi, scheme, spatial_scheme):
        ls = create(plane_phi, reinit_scheme=scheme, spatial_scheme=spatial_scheme)
        ls.reinitialize()
        np.testing.assert_allclose(ls.phi, plane_phi, atol=1e-9)

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_no_sign_change_is_noop(self, scheme, spatial_scheme):
        phi = np.linspace(1.0, 5.0, 36).reshape(6, 6) ** 2
        ls = create(phi, bandwidth=20.0, reinit_scheme=scheme, spatial_scheme=spatial_scheme)
        ls.reinitialize()
        np.testing.assert_array_equal(ls.phi, phi)

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_interface_moves_less_than_one_cell(self, scheme, spatial_scheme):
        phi0 = _distorted_circle()
        ls = create(phi0, reinit_scheme=scheme, spatial_scheme=spatial_scheme)
        ls.reinitialize()

        for row in (16, 24, 30):
            before = _crossing_positions(phi0, row)
            after = _crossing_positions(ls.phi, row)
            assert before.shape == after.shape
            assert np.abs(after - before).max() < 1.0

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_sign_is_preserved(self, scheme, spatial_scheme):
        phi0 = _distorted_circle()
        ls = create(phi0, reinit_scheme=scheme, spatial_scheme=spatial_scheme)
        ls.reinitialize()
        np.testing.assert_array_equal(ls.phi < 0, phi0 < 0)

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_restores_distance_near_interface(self, scheme, spatial_scheme):
        phi0 = _distorted_circle()
        X, Y = grid_coordinates(phi0.shape)
        exact = np.sqrt((X - 23.7) ** 2 + (Y - 24.2) ** 2) - 11.0

        ls = create(phi0, bandwidth=4.0, reinit_scheme=scheme, spatial_scheme=spatial_scheme)
        ls.reinitialize()

        near = np.abs(exact) < 3.0
        assert np.abs(ls.phi[near] - exact[near]).max() < 0.5

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_band_rebuilt_after_reinitialization(self, scheme, spatial_scheme):
        phi0 = _distorted_circle()
        ls = create(phi0, bandwidth=3.0, reinit_scheme=scheme, spatial_scheme=spatial_scheme)
        ls.reinitialize()
        np.testing.assert_array_equal(ls.band, np.flatnonzero(np.abs(ls.phi) <= 3.0))


# =============================================================================
# PDE Reinitialization
# =============================================================================


class TestPDEReinitializer:
    """Tests specific to the PDE scheme."""

    @pytest.mark.parametrize("spatial_scheme", ["firstorder", "weno"])
    def test_plane_converges_immediately(self, plane_phi, spatial_scheme):
        ls = create(plane_phi, spatial_scheme=spatial_scheme, reinit_max_iterations=1)
        ls.reinitialize()
        np.testing.assert_allclose(ls.phi, plane_phi, atol=1e-12)

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    def test_budget_exceeded_keeps_last_iterate(self, spatial_scheme):
        phi0 = _distorted_circle()
        ls = create(phi0, bandwidth=6.0, spatial_scheme=spatial_scheme, reinit_max_iterations=2)

        with pytest.raises(ReinitializationBudgetExceeded) as exc_info:
            ls.reinitialize()

        assert exc_info.value.iterations == 2
        np.testing.assert_array_equal(ls.phi, exc_info.value.phi)
        assert not np.array_equal(ls.phi, phi0)
        np.testing.assert_array_equal(ls.band, np.flatnonzero(np.abs(ls.phi) <= 6.0))

    @pytest.mark.parametrize("spatial_scheme", SPATIAL_SCHEMES)
    def test_updates_restricted_to_band(self, spatial_scheme):
        phi0 = _distorted_circle()
        ls = create(phi0, bandwidth=2.0, spatial_scheme=spatial_scheme)
        outside = ~ls.band_mask
        ls.reinitialize()
        np.testing.assert_array_equal(ls.phi[outside], phi0[outside])

    @pytest.mark.parametrize(("spatial_scheme", "tolerance"), [("firstorder", 0.15), ("weno", 0.05)])
    @pytest.mark.parametrize("bandwidth", [5.0, None])
    def test_signed_distance_circle_barely_changes(self, circle_phi, spatial_scheme, tolerance, bandwidth):
        ls = create(circle_phi, bandwidth=bandwidth, spatial_scheme=spatial_scheme)
        ls.reinitialize()

        near = np.abs(circle_phi) < 3.0
        assert np.abs(ls.phi[near] - circle_phi[near]).max() < tolerance

    def test_weno_steps_with_runge_kutta(self):
        assert PDEReinitializer(WENODifferencer()).uses_runge_kutta
        assert not PDEReinitializer(FirstOrderDifferencer()).uses_runge_kutta

    def test_repr(self):
        reinit = PDEReinitializer(FirstOrderDifferencer(), max_iterations=7)
        assert "max_iterations=7" in repr(reinit)


# =============================================================================
# Eikonal Solvers
# =============================================================================


class TestEikonalSolvers:
    """Tests for Fast Marching and Fast Sweeping."""

    def test_fast_marching_matches_fast_sweeping(self, circle_phi):
        phi0 = 2.0 * circle_phi
        band = np.arange(phi0.size)

        marched = FastMarchingReinitializer().reinitialize(phi0, band)
        swept = FastSweepingReinitializer(max_cycles=50).reinitialize(phi0, band)

        np.testing.assert_allclose(marched, swept, atol=1e-8)

    def test_distance_of_circle(self, circle_phi):
        phi = FastMarchingReinitializer().reinitialize(2.0 * circle_phi, np.arange(circle_phi.size))

        near = np.abs(circle_phi) < 8.0
        assert np.abs(phi[near] - circle_phi[near]).max() < 1.0

    def test_fast_marching_stops_at_bandwidth(self, circle_phi):
        reinit = FastMarchingReinitializer(bandwidth=3.0)
        phi = reinit.reinitialize(2.0 * circle_phi, np.arange(circle_phi.size))

        assert np.all(np.isfinite(phi))
        far = np.abs(circle_phi) > 6.0
        assert np.all(np.abs(phi[far]) > 3.0)

    def test_fast_marching_result_independent_of_band(self, circle_phi):
        ls_narrow = create(2.0 * circle_phi, bandwidth=4.0, reinit_scheme="fastmarching")
        ls_wide = create(2.0 * circle_phi, reinit_scheme="fastmarching")
        ls_narrow.reinitialize()
        ls_wide.reinitialize()

        np.testing.assert_array_equal(ls_narrow.band, ls_wide.band[np.abs(ls_wide.phi.ravel()) <= 4.0])
        np.testing.assert_array_equal(ls_narrow.phi.flat[ls_narrow.band], ls_wide.phi.flat[ls_narrow.band])

    def test_sweeping_respects_cycle_cap(self, circle_phi):
        reinit = FastSweepingReinitializer(max_cycles=1)
        phi = reinit.reinitialize(circle_phi, np.arange(circle_phi.size))
        assert np.all(np.isfinite(phi))

    def test_spacing_scales_distance(self):
        X, _ = grid_coordinates((20, 6), spacing=0.1)
        phi0 = 3.0 * (X - 0.95)

        for reinit in (FastMarchingReinitializer(spacing=0.1), FastSweepingReinitializer(spacing=0.1)):
            phi = reinit.reinitialize(phi0, np.arange(phi0.size))
            np.testing.assert_allclose(phi, X - 0.95, atol=1e-9)
