"""Numerical algorithms: time integration and reinitialization."""

from levelset2d.alg.integrators import EulerIntegrator, TimeIntegrator, create_integrator
from levelset2d.alg.reinitialization import (
    FastMarchingReinitializer,
    FastSweepingReinitializer,
    PDEReinitializer,
    Reinitializer,
    create_reinitializer,
)

__all__ = [
    "EulerIntegrator",
    "FastMarchingReinitializer",
    "FastSweepingReinitializer",
    "PDEReinitializer",
    "Reinitializer",
    "TimeIntegrator",
    "create_integrator",
    "create_reinitializer",
]
