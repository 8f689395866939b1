"""
Time integration interface for level set evolution.

An integrator advances φ by Δt using the rate dφ/dt assembled from a
velocity field and a spatial differencer:

    dφ/dt = -(vx φx + vy φy) - F |∇φ| + b κ |∇φ|

Advection uses the differencer's upwind gradient, normal motion its Godunov
|∇φ|, and the curvature term central and second differences.

Stability:
    Explicit schemes require the CFL bound
        Δt ≤ C·Δx / max(|vx| + |vy| + |F|)
    and, with curvature motion, the parabolic bound
        Δt ≤ C·Δx² / (4·max|b|)
    Both maxima are taken over the band.

Steps are split into a read phase (rate from a frozen snapshot of φ) and a
write phase (commit on band points), so the rate evaluation can be
parallelized without further synchronization.
"""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from levelset2d.geometry.band import restrict_to_band
from levelset2d.geometry.curvature import compute_curvature
from levelset2d.types.schemes import IntegratorKind
from levelset2d.utils.exceptions import StabilityError
from levelset2d.utils.ls_logging import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset2d.core.level_set import LevelSetState
    from levelset2d.core.velocity import VelocityField
    from levelset2d.operators.differential.differencer import SpatialDifferencer

logger = get_logger(__name__)


def compute_rate(
    phi: NDArray[np.float64],
    band: NDArray[np.intp],
    differencer: SpatialDifferencer,
    velocity: VelocityField,
) -> NDArray[np.float64]:
    """
    Assemble dφ/dt on the band.

    Args:
        phi: Level set field (not modified)
        band: Flat band indices
        differencer: Spatial differencing strategy
        velocity: Velocity terms

    Returns:
        Rate field with the shape of φ, zero outside the band
    """
    terms = velocity.resolve(phi.shape)
    rate = np.zeros_like(phi)

    if velocity.has_advection:
        vx = terms.get("vx", 0.0)
        vy = terms.get("vy", 0.0)
        phi_x, phi_y = differencer.upwind(phi, vx, vy, band)
        rate -= vx * phi_x + vy * phi_y

    if velocity.has_normal:
        speed = terms["normal"]
        rate -= speed * differencer.godunov_norm(phi, speed, band)

    if velocity.has_curvature:
        kappa = compute_curvature(phi, differencer, band)
        phi_x, phi_y = differencer.central(phi, band)
        rate += terms["curvature"] * kappa * np.sqrt(phi_x**2 + phi_y**2)

    return restrict_to_band(rate, band)


def max_time_step(
    velocity: VelocityField,
    shape: tuple[int, int],
    band: NDArray[np.intp],
    spacing: float,
    cfl: float,
) -> float:
    """
    Largest stable time step for the given velocity.

    Args:
        velocity: Velocity terms
        shape: Grid shape
        band: Flat band indices over which the speed maximum is taken
        spacing: Grid spacing Δx
        cfl: Courant number C

    Returns:
        Maximum Δt (inf when the velocity vanishes on the band)
    """
    if band.size == 0:
        return math.inf

    terms = velocity.resolve(shape)

    speed = np.zeros(band.size)
    for name in ("vx", "vy", "normal"):
        if name in terms:
            speed += np.abs(terms[name].flat[band])

    max_dt = math.inf
    max_speed = float(speed.max())
    if max_speed > 0:
        max_dt = cfl * spacing / max_speed

    if "curvature" in terms:
        max_b = float(np.abs(terms["curvature"].flat[band]).max())
        if max_b > 0:
            max_dt = min(max_dt, cfl * spacing**2 / (4 * max_b))

    return max_dt


class TimeIntegrator(ABC):
    """
    Base class of time integration schemes.

    Subclasses implement step(); multi-stage schemes call compute_rate() once
    per stage and need no change to the differencer or the band manager.

    Attributes:
        cfl: Courant number C of the stability bound
        spacing: Grid spacing Δx
    """

    kind: IntegratorKind

    def __init__(self, spacing: float = 1.0, cfl: float = 0.5):
        self.spacing = spacing
        self.cfl = cfl

    def max_time_step(self, state: LevelSetState, velocity: VelocityField) -> float:
        """Largest Δt this integrator accepts for the state and velocity."""
        return max_time_step(velocity, state.phi.shape, state.band, self.spacing, self.cfl)

    def check_stability(self, state: LevelSetState, velocity: VelocityField, dt: float) -> None:
        """
        Reject a time step before any state is touched.

        Raises:
            ValueError: If dt is not a positive finite number
            StabilityError: If dt exceeds the CFL bound
        """
        if isinstance(dt, bool) or not isinstance(dt, numbers.Real) or not (math.isfinite(dt) and dt > 0):
            raise ValueError(f"dt must be a positive finite number, got {dt!r}")

        max_dt = self.max_time_step(state, velocity)
        # Relative slack so that stepping with max_time_step() itself is accepted
        if dt > max_dt * (1 + 1e-12):
            raise StabilityError(dt=float(dt), max_dt=max_dt, cfl=self.cfl, component=type(self).__name__)

    @abstractmethod
    def step(
        self,
        state: LevelSetState,
        differencer: SpatialDifferencer,
        velocity: VelocityField,
        dt: float,
    ) -> None:
        """Advance state.phi by dt in place on the band."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(spacing={self.spacing}, cfl={self.cfl})"
