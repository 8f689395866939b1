"""
Immutable configuration record for a level set.

The configuration holds everything chosen at construction time: scheme
selections, the narrow band width, grid spacing and solver tolerances. The
evolving state (φ and the band) lives separately in LevelSetState, so a
config can be shared freely between level sets and threads.

Example:
    >>> config = LevelSetConfig(bandwidth=5.0, spatial_scheme="WENO", reinit_scheme="fastmarching")
    >>> config.spatial_scheme
    <SpatialScheme.WENO: 'weno'>
    >>> config.is_narrow_band
    True
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from levelset2d.types.schemes import IntegratorKind, ReinitScheme, SpatialScheme


class LevelSetConfig(BaseModel):
    """
    Scheme selection and numerical parameters of a level set.

    Attributes:
        bandwidth: Narrow band half-width in φ units; inf means every grid point
        integrator: Time integration scheme
        spatial_scheme: Upwind spatial differencing scheme
        reinit_scheme: Reinitialization strategy
        spacing: Grid spacing Δx, identical on both axes
        cfl: Courant number C in Δt ≤ C·Δx / max|V|
        reinit_max_iterations: Iteration cap of PDE reinitialization
        reinit_tolerance: PDE reinitialization stops once max|Δφ| < tolerance·Δx
        reinit_cfl: Pseudo-time step of PDE reinitialization as a fraction of Δx
        sweep_max_cycles: Cap on full four-direction sweep cycles
        sweep_tolerance: Fast sweeping stops once max|Δφ| over a cycle < tolerance
        weno_epsilon: Relative regularization of the WENO smoothness weights
    """

    bandwidth: float = Field(math.inf, ge=0.0, description="Narrow band half-width (inf = unbounded)")
    integrator: IntegratorKind = Field(IntegratorKind.EULER, description="Time integration scheme")
    spatial_scheme: SpatialScheme = Field(SpatialScheme.FIRST_ORDER, description="Upwind spatial scheme")
    reinit_scheme: ReinitScheme = Field(ReinitScheme.PDE, description="Reinitialization strategy")

    spacing: float = Field(1.0, gt=0.0, allow_inf_nan=False, description="Grid spacing Δx")
    cfl: float = Field(0.5, gt=0.0, lt=1.0, description="Courant number for time integration")

    reinit_max_iterations: int = Field(500, ge=1, le=100_000, description="PDE reinitialization iteration cap")
    reinit_tolerance: float = Field(1e-4, gt=0.0, le=1.0, description="PDE reinitialization tolerance (× Δx)")
    reinit_cfl: float = Field(0.45, gt=0.0, le=0.5, description="Pseudo-time step Δτ as a fraction of Δx")

    sweep_max_cycles: int = Field(20, ge=1, le=10_000, description="Fast sweeping cycle cap")
    sweep_tolerance: float = Field(1e-9, gt=0.0, description="Fast sweeping tolerance")

    weno_epsilon: float = Field(1e-6, gt=0.0, le=1.0, description="WENO smoothness regularization")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("bandwidth", mode="before")
    @classmethod
    def validate_bandwidth(cls, v: Any) -> Any:
        """Map None to an unbounded band and reject booleans and NaN."""
        if v is None:
            return math.inf
        if isinstance(v, bool):
            raise ValueError("bandwidth must be a number, not a boolean")
        if isinstance(v, float) and math.isnan(v):
            raise ValueError("bandwidth must not be NaN")
        return v

    @field_validator("integrator", mode="before")
    @classmethod
    def parse_integrator(cls, v: Any) -> IntegratorKind:
        """Accept integrator names case-insensitively."""
        return IntegratorKind.parse(v)

    @field_validator("spatial_scheme", mode="before")
    @classmethod
    def parse_spatial_scheme(cls, v: Any) -> SpatialScheme:
        """Accept spatial scheme names case-insensitively."""
        return SpatialScheme.parse(v)

    @field_validator("reinit_scheme", mode="before")
    @classmethod
    def parse_reinit_scheme(cls, v: Any) -> ReinitScheme:
        """Accept reinitialization names case-insensitively."""
        return ReinitScheme.parse(v)

    @property
    def is_narrow_band(self) -> bool:
        """Whether computation is restricted to a finite band."""
        return math.isfinite(self.bandwidth)
