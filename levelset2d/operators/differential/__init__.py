"""Spatial differencing strategies."""

from levelset2d.operators.differential.differencer import (
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
