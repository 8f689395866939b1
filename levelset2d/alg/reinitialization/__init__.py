"""Reinitialization strategies restoring the signed distance property of φ."""

from __future__ import annotations

from typing import TYPE_CHECKING

from levelset2d.alg.reinitialization.base import Reinitializer
from levelset2d.alg.reinitialization.eikonal import interface_seeds, solve_eikonal
from levelset2d.alg.reinitialization.fast_marching import FastMarchingReinitializer
from levelset2d.alg.reinitialization.fast_sweeping import FastSweepingReinitializer
from levelset2d.alg.reinitialization.pde import PDEReinitializer
from levelset2d.types.schemes import ReinitScheme

if TYPE_CHECKING:
    from levelset2d.config.level_set_config import LevelSetConfig
    from levelset2d.operators.differential.differencer import SpatialDifferencer


def create_reinitializer(config: LevelSetConfig, differencer: SpatialDifferencer) -> Reinitializer:
    """
    Resolve the configured reinitialization scheme into a reinitializer.

    Args:
        config: Level set configuration
        differencer: Spatial differencer (used by the PDE scheme)

    Returns:
        Reinitializer instance
    """
    if config.reinit_scheme is ReinitScheme.FAST_MARCHING:
        return FastMarchingReinitializer(spacing=config.spacing, bandwidth=config.bandwidth)
    if config.reinit_scheme is ReinitScheme.FAST_SWEEPING:
        return FastSweepingReinitializer(
            spacing=config.spacing,
            max_cycles=config.sweep_max_cycles,
            tolerance=config.sweep_tolerance,
        )
    return PDEReinitializer(
        differencer,
        max_iterations=config.reinit_max_iterations,
        tolerance=config.reinit_tolerance,
        cfl=config.reinit_cfl,
    )


__all__ = [
    "FastMarchingReinitializer",
    "FastSweepingReinitializer",
    "PDEReinitializer",
    "Reinitializer",
    "create_reinitializer",
    "interface_seeds",
    "solve_eikonal",
]
