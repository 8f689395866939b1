"""Time integration schemes for level set evolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from levelset2d.alg.integrators.base import TimeIntegrator, compute_rate, max_time_step
from levelset2d.alg.integrators.euler import EulerIntegrator

if TYPE_CHECKING:
    from levelset2d.config.level_set_config import LevelSetConfig


def create_integrator(config: LevelSetConfig) -> TimeIntegrator:
    """Resolve the configured integrator kind into an integrator."""
    # IntegratorKind currently has the single variant EULER
    return EulerIntegrator(spacing=config.spacing, cfl=config.cfl)


__all__ = [
    "EulerIntegrator",
    "TimeIntegrator",
    "compute_rate",
    "create_integrator",
    "max_time_step",
]
