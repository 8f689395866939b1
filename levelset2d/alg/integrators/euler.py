"""
Forward Euler time integration.

    φⁿ⁺¹ = φⁿ + Δt · dφ/dt(φⁿ)

First order in time. Combined with monotone first-order upwinding it is
stable for Δt below the CFL bound; the bound is checked before every step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from levelset2d.alg.integrators.base import TimeIntegrator, compute_rate
from levelset2d.types.schemes import IntegratorKind
from levelset2d.utils.ls_logging import get_logger

if TYPE_CHECKING:
    from levelset2d.core.level_set import LevelSetState
    from levelset2d.core.velocity import VelocityField
    from levelset2d.operators.differential.differencer import SpatialDifferencer

logger = get_logger(__name__)


class EulerIntegrator(TimeIntegrator):
    """
    Explicit forward Euler step restricted to the narrow band.

    Example:
        >>> integrator = EulerIntegrator(spacing=1.0, cfl=0.5)
        >>> integrator.step(state, FirstOrderDifferencer(), VelocityField(normal=1.0), dt=0.5)
    """

    kind = IntegratorKind.EULER

    def step(
        self,
        state: LevelSetState,
        differencer: SpatialDifferencer,
        velocity: VelocityField,
        dt: float,
    ) -> None:
        """
        Advance state.phi by one Euler step.

        Points outside the band keep their values. An empty band is a no-op.

        Args:
            state: Level set state, modified in place
            differencer: Spatial differencing strategy
            velocity: Velocity terms
            dt: Time step

        Raises:
            ValueError: If dt is not positive
            StabilityError: If dt exceeds the CFL bound (φ unchanged)
            DimensionMismatchError: If a velocity array does not match the grid
        """
        if state.band.size == 0:
            logger.debug("Empty band, Euler step skipped")
            return

        self.check_stability(state, velocity, dt)

        # Read phase: rate from the current snapshot
        rate = compute_rate(state.phi, state.band, differencer, velocity)

        # Write phase: commit on band points only
        state.phi.flat[state.band] += dt * rate.flat[state.band]
