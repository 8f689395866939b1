"""
Discrete operators for levelset2d.

Conceptual Hierarchy:
    Stencils (operators/stencils/)
        ↓ (fixed coefficients)
    Reconstruction (operators/reconstruction/)
        ↓ (adaptive weighting)
    Differencers (operators/differential/)
        ↓ (strategy objects)
    Integrators and reinitializers (alg/)
"""

from levelset2d.operators.differential import (
    FirstOrderDifferencer,
    SpatialDifferencer,
    WENODifferencer,
    create_differencer,
)

__all__ = [
    "FirstOrderDifferencer",
    "SpatialDifferencer",
    "WENODifferencer",
    "create_differencer",
]
