"""
levelset2d: narrow band level set methods on uniform 2-D grids.

Quick start:
    >>> from levelset2d import VelocityField, circle_sdf, create
    >>> ls = create(circle_sdf((64, 64), center=(32, 32), radius=16), bandwidth=5)
    >>> velocity = VelocityField(normal=1.0)
    >>> ls.step(velocity, ls.max_time_step(velocity))
    >>> ls.reinitialize()
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("levelset2d")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .config import LevelSetConfig
from .core import LevelSet, LevelSetState, VelocityField, create
from .geometry import circle_sdf, signed_distance_from_mask
from .types import IntegratorKind, ReinitScheme, SpatialScheme
from .utils.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    LevelSetError,
    ReinitializationBudgetExceeded,
    StabilityError,
)
from .utils.ls_logging import configure_logging, get_logger
from .workflow import PropagationResult, propagate

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
    "IntegratorKind",
    "LevelSet",
    "LevelSetConfig",
    "LevelSetError",
    "LevelSetState",
    "PropagationResult",
    "ReinitScheme",
    "ReinitializationBudgetExceeded",
    "SpatialScheme",
    "StabilityError",
    "VelocityField",
    "__version__",
    "circle_sdf",
    "configure_logging",
    "create",
    "get_logger",
    "propagate",
    "signed_distance_from_mask",
]
