"""Shared utilities: exceptions and logging."""

from levelset2d.utils.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    LevelSetError,
    ReinitializationBudgetExceeded,
    StabilityError,
)

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
    "LevelSetError",
    "ReinitializationBudgetExceeded",
    "StabilityError",
]
