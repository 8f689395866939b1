"""
Core level set objects.

- LevelSet: field, narrow band and the strategies evolving them
- LevelSetState: mutable field and band
- VelocityField: advection, normal and curvature terms
- create: construction from scheme names
"""

from levelset2d.core.level_set import LevelSet, LevelSetState, create
from levelset2d.core.velocity import VelocityField

__all__ = [
    "LevelSet",
    "LevelSetState",
    "VelocityField",
    "create",
]
