"""
Fast Sweeping reinitialization.

Solves the eikonal equation |∇d| = 1 by Gauss-Seidel iteration with the
first-order upwind update, sweeping the grid in the four diagonal orders

    (+x, +y), (-x, +y), (-x, -y), (+x, -y)

Every characteristic direction is followed by one of the four sweeps, so a
small, grid-independent number of cycles converges on convex geometries.

Each sweep proceeds anti-diagonal by anti-diagonal: points with equal i + j
never depend on each other within a sweep, so one anti-diagonal is updated
as a single vectorized operation while the sweep stays sequential across
anti-diagonals.

References:
- Zhao (2005): A fast sweeping method for Eikonal equations
- Tsai, Cheng, Osher & Zhao (2003): Fast sweeping algorithms for a class of
  Hamilton-Jacobi equations
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from levelset2d.alg.reinitialization.base import Reinitializer
from levelset2d.alg.reinitialization.eikonal import interface_seeds, solve_eikonal
from levelset2d.types.schemes import ReinitScheme
from levelset2d.utils.ls_logging import get_logger, log_solver_completion

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)

SWEEP_ORDERS = ((1, 1), (-1, 1), (-1, -1), (1, -1))


def _anti_diagonals(nx: int, ny: int) -> list[tuple[NDArray[np.intp], NDArray[np.intp]]]:
    """Index arrays of the anti-diagonals i + j = k, for k ascending."""
    diagonals = []
    for k in range(nx + ny - 1):
        i = np.arange(max(0, k - ny + 1), min(k, nx - 1) + 1)
        diagonals.append((i, k - i))
    return diagonals


class FastSweepingReinitializer(Reinitializer):
    """
    Gauss-Seidel eikonal solver with alternating sweep orders.

    Attributes:
        max_cycles: Cap on full four-direction cycles
        tolerance: Convergence threshold on max|Δd| over one cycle

    Example:
        >>> reinit = FastSweepingReinitializer(spacing=1.0)
        >>> phi_sdf = reinit.reinitialize(phi, band)
    """

    scheme = ReinitScheme.FAST_SWEEPING

    def __init__(self, spacing: float = 1.0, max_cycles: int = 20, tolerance: float = 1e-9):
        super().__init__(spacing)
        self.max_cycles = max_cycles
        self.tolerance = tolerance

    def _sweep(
        self,
        padded: NDArray[np.float64],
        fixed: NDArray[np.bool_],
        order: tuple[int, int],
        diagonals: list[tuple[NDArray[np.intp], NDArray[np.intp]]],
    ) -> None:
        """One sweep over the grid, updating the inf-padded distance in place."""
        sx, sy = order
        # Flipped views turn every order into an ascending sweep
        view = padded[::sx, ::sy]
        frozen = fixed[::sx, ::sy]
        h = self.spacing

        for i, j in diagonals:
            a = np.minimum(view[i, j + 1], view[i + 2, j + 1])
            b = np.minimum(view[i + 1, j], view[i + 1, j + 2])
            current = view[i + 1, j + 1]
            candidate = np.minimum(current, solve_eikonal(a, b, h))
            view[i + 1, j + 1] = np.where(frozen[i, j], current, candidate)

    def _solve(self, phi: NDArray[np.float64], band: NDArray[np.intp]) -> NDArray[np.float64]:
        nx, ny = phi.shape
        seeds, seed_distance = interface_seeds(phi, self.spacing)

        padded = np.full((nx + 2, ny + 2), np.inf)
        padded[1:-1, 1:-1] = np.where(seeds, seed_distance, np.inf)
        diagonals = _anti_diagonals(nx, ny)

        change = np.inf
        converged = False
        cycle = 0
        for cycle in range(1, self.max_cycles + 1):
            previous = padded[1:-1, 1:-1].copy()
            for order in SWEEP_ORDERS:
                self._sweep(padded, seeds, order, diagonals)
            current = padded[1:-1, 1:-1]

            if np.any(np.isinf(previous) & np.isfinite(current)):
                change = np.inf
            else:
                finite = np.isfinite(current)
                change = float(np.max(np.abs(current[finite] - previous[finite]), initial=0.0))

            if change < self.tolerance:
                converged = True
                break

        log_solver_completion(logger, "Fast sweeping", cycle, change, converged)

        distance = padded[1:-1, 1:-1]
        return np.where(phi < 0, -distance, distance)

    def __repr__(self) -> str:
        return (
            f"FastSweepingReinitializer(spacing={self.spacing}, max_cycles={self.max_cycles}, "
            f"tolerance={self.tolerance})"
        )
