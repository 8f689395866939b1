"""
Level Set Core Infrastructure.

A LevelSet represents a 2-D interface implicitly as the zero level set of a
scalar field φ on a dense uniform grid:

    Interface:  Γ = {x : φ(x) = 0}
    Interior:   Ω = {x : φ(x) < 0}
    Exterior:   {x : φ(x) ≥ 0}

It couples three pieces chosen once at construction:
    - a spatial differencer (first order or WENO5)
    - a time integrator (forward Euler)
    - a reinitializer (PDE, Fast Marching or Fast Sweeping)

and keeps the narrow band invariant

    band = {i : |φ[i]| ≤ bandwidth}

after construction and after every reinitialization. Time steps update φ on
the band only and leave the band itself untouched.

Example:
    >>> from levelset2d import VelocityField, circle_sdf, create
    >>> ls = create(circle_sdf((64, 64), center=(32, 32), radius=16), bandwidth=5, spatial_scheme="weno")
    >>> velocity = VelocityField(normal=1.0)
    >>> ls.step(velocity, ls.max_time_step(velocity))
    >>> ls.reinitialize()

References:
- Osher & Sethian (1988): Fronts propagating with curvature-dependent speed
- Osher & Fedkiw (2003): Level Set Methods and Dynamic Implicit Surfaces
"""

from __future__ import annotations

import copy as _copy
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
from pydantic import ValidationError

from levelset2d.alg.integrators import create_integrator
from levelset2d.alg.reinitialization import create_reinitializer
from levelset2d.config.level_set_config import LevelSetConfig
from levelset2d.geometry.band import band_mask, build_band, rebuild_band, validate_bandwidth, validate_field
from levelset2d.geometry.curvature import compute_curvature, compute_normal
from levelset2d.operators.differential import create_differencer
from levelset2d.types.schemes import IntegratorKind, ReinitScheme, SpatialScheme
from levelset2d.utils.exceptions import ConfigurationError, ReinitializationBudgetExceeded
from levelset2d.utils.ls_logging import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset2d.core.velocity import VelocityField

logger = get_logger(__name__)


@dataclass
class LevelSetState:
    """
    Mutable evolving state of a level set.

    Attributes:
        phi: Level set field, float64, shape fixed for the life of the level set
        band: Ascending flat indices of the narrow band
    """

    phi: NDArray[np.float64]
    band: NDArray[np.intp]

    def copy(self) -> LevelSetState:
        return LevelSetState(phi=self.phi.copy(), band=self.band.copy())


class LevelSet:
    """
    Narrow band level set on a uniform 2-D grid.

    Construct through create() for string scheme names, or from_config() with
    a LevelSetConfig.

    Attributes:
        config: Immutable configuration
        state: Field and band
        differencer: Spatial differencing strategy
        integrator: Time integration strategy
        reinitializer: Reinitialization strategy
    """

    def __init__(self, field: Any, config: LevelSetConfig | None = None):
        self.config = config if config is not None else LevelSetConfig()

        phi = validate_field(field)
        self.state = LevelSetState(phi=phi, band=build_band(phi, self.config.bandwidth))

        self.differencer = create_differencer(self.config)
        self.integrator = create_integrator(self.config)
        self.reinitializer = create_reinitializer(self.config, self.differencer)

        logger.debug(f"Created {self!r}")

    @classmethod
    def from_config(cls, field: Any, config: LevelSetConfig) -> LevelSet:
        """Create a level set from a field and a validated configuration."""
        return cls(field, config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def phi(self) -> NDArray[np.float64]:
        """Current field φ."""
        return self.state.phi

    @property
    def band(self) -> NDArray[np.intp]:
        """Ascending flat indices of the narrow band."""
        return self.state.band

    @property
    def bandwidth(self) -> float:
        return self.config.bandwidth

    @property
    def shape(self) -> tuple[int, int]:
        return self.state.phi.shape

    @property
    def spacing(self) -> float:
        return self.config.spacing

    @property
    def is_narrow_band(self) -> bool:
        return self.config.is_narrow_band

    @property
    def band_mask(self) -> NDArray[np.bool_]:
        """Boolean grid mask of the band."""
        return band_mask(self.shape, self.state.band)

    # ------------------------------------------------------------------
    # Evolution
    # ------------------------------------------------------------------

    def max_time_step(self, velocity: VelocityField) -> float:
        """Largest time step accepted by step() for this velocity (inf if it vanishes)."""
        return self.integrator.max_time_step(self.state, velocity)

    def step(self, velocity: VelocityField, dt: float) -> None:
        """
        Advance φ by one time step on the band.

        Args:
            velocity: Velocity terms driving the interface
            dt: Time step, at most max_time_step(velocity)

        Raises:
            ValueError: If dt is not positive
            StabilityError: If dt violates the CFL bound (φ is left unchanged)
            DimensionMismatchError: If a velocity array does not match the grid
        """
        self.integrator.step(self.state, self.differencer, velocity, dt)

    def reinitialize(self) -> None:
        """
        Restore the signed distance property of φ and rebuild the band.

        A field without sign change is left unchanged.

        Raises:
            ReinitializationBudgetExceeded: If PDE reinitialization hits its
                iteration cap. φ then holds the last iterate and the band is
                rebuilt from it.
        """
        try:
            phi = self.reinitializer.reinitialize(self.state.phi, self.state.band)
        except ReinitializationBudgetExceeded as exc:
            if exc.phi is not None:
                self.state.phi[...] = exc.phi
            self.rebuild_band()
            raise

        self.state.phi[...] = phi
        self.rebuild_band()

    def rebuild_band(self) -> None:
        """Recompute the band from the current φ."""
        rebuild_band(self.state, self.config.bandwidth)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def gradient(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Central gradient (φx, φy) on the full grid."""
        return self.differencer.central(self.state.phi)

    def normal(self) -> NDArray[np.float64]:
        """Unit normal field of shape (2, Nx, Ny), pointing toward φ > 0."""
        return compute_normal(self.state.phi, self.differencer)

    def curvature(self) -> NDArray[np.float64]:
        """Mean curvature κ = ∇·(∇φ/|∇φ|) on the full grid."""
        return compute_curvature(self.state.phi, self.differencer)

    def interface_mask(self) -> NDArray[np.bool_]:
        """Grid points with a 4-neighbour on the other side of the interface."""
        inside = self.state.phi < 0
        mask = np.zeros_like(inside)
        crossing_x = inside[1:, :] != inside[:-1, :]
        crossing_y = inside[:, 1:] != inside[:, :-1]
        mask[1:, :] |= crossing_x
        mask[:-1, :] |= crossing_x
        mask[:, 1:] |= crossing_y
        mask[:, :-1] |= crossing_y
        return mask

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def copy(self) -> LevelSet:
        """Independent level set with the same config and a copied state."""
        duplicate = _copy.copy(self)
        duplicate.state = self.state.copy()
        return duplicate

    def __repr__(self) -> str:
        bandwidth = "inf" if math.isinf(self.bandwidth) else f"{self.bandwidth:g}"
        return (
            f"LevelSet(shape={self.shape}, bandwidth={bandwidth}, band_size={self.state.band.size}, "
            f"integrator={self.config.integrator.value}, spatial_scheme={self.config.spatial_scheme.value}, "
            f"reinit_scheme={self.config.reinit_scheme.value})"
        )


def _parse_scheme(parameter_name: str, value: Any, scheme_type: type) -> Any:
    try:
        return scheme_type.parse(value)
    except ValueError as exc:
        raise ConfigurationError(
            parameter_name,
            value,
            "is not a recognized scheme name",
            valid_values=[member.value for member in scheme_type],
        ) from exc


def create(
    field: Any,
    bandwidth: float | None = None,
    integrator: str | IntegratorKind = "euler",
    spatial_scheme: str | SpatialScheme = "firstorder",
    reinit_scheme: str | ReinitScheme = "pde",
    **options: Any,
) -> LevelSet:
    """
    Create a level set from an initial field and scheme names.

    Arguments are validated left to right; the first invalid one raises.
    Nothing is constructed unless every argument is valid.

    Args:
        field: 2-D real array, ideally a signed distance function (φ < 0 inside)
        bandwidth: Narrow band half-width; None or inf for every grid point
        integrator: "euler"
        spatial_scheme: "firstorder" or "weno"
        reinit_scheme: "pde", "fastmarching" or "fastsweeping"
        **options: Further LevelSetConfig fields (spacing, cfl, tolerances)

    Returns:
        New LevelSet with the band built from the field

    Raises:
        ConfigurationError: Naming the first invalid argument

    Example:
        >>> ls = create(phi0, bandwidth=5, spatial_scheme="WENO", reinit_scheme="fastmarching")
    """
    phi = validate_field(field)
    bandwidth = validate_bandwidth(bandwidth)
    schemes = {
        "integrator": _parse_scheme("integrator", integrator, IntegratorKind),
        "spatial_scheme": _parse_scheme("spatial_scheme", spatial_scheme, SpatialScheme),
        "reinit_scheme": _parse_scheme("reinit_scheme", reinit_scheme, ReinitScheme),
    }

    try:
        config = LevelSetConfig(bandwidth=bandwidth, **schemes, **options)
    except ValidationError as exc:
        error = exc.errors()[0]
        parameter_name = str(error["loc"][0]) if error["loc"] else "options"
        raise ConfigurationError(parameter_name, options.get(parameter_name), error["msg"]) from exc

    return LevelSet.from_config(phi, config)
