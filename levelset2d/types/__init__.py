"""Enumerations naming the pluggable schemes of a level set."""

from levelset2d.types.schemes import IntegratorKind, ReinitScheme, SpatialScheme

__all__ = [
    "IntegratorKind",
    "ReinitScheme",
    "SpatialScheme",
]
