"""
Adaptive reconstruction schemes.

WENO combines several fixed stencils with smoothness-dependent weights,
giving high order on smooth data without oscillations at kinks.
"""

from levelset2d.operators.reconstruction.weno import MIN_WENO_POINTS, weno5_combine, weno5_one_sided

__all__ = [
    "MIN_WENO_POINTS",
    "weno5_combine",
    "weno5_one_sided",
]
