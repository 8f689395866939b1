"""
Finite Difference Stencils for levelset2d.

Conceptual Distinction:
    - **Stencils** (this module): Fixed coefficient formulas
        e.g., central diff = [-1, 0, 1] / (2h)
    - **Reconstruction** (operators/reconstruction/): Adaptive strategies
        e.g., WENO combines multiple stencils based on smoothness
"""

from levelset2d.operators.stencils.finite_difference import (
    godunov_norm,
    gradient_backward,
    gradient_central,
    gradient_forward,
    mixed_difference,
    pad_linear,
    second_difference,
    select_upwind,
)

__all__ = [
    # First-order derivatives
    "gradient_backward",
    "gradient_central",
    "gradient_forward",
    "select_upwind",
    "godunov_norm",
    # Second-order derivatives
    "second_difference",
    "mixed_difference",
    # Boundary handling
    "pad_linear",
]
