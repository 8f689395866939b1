"""
Hamilton-Jacobi WENO5 one-sided derivatives.

For the backward-biased derivative φₓ⁻ at node i the five first differences

    v₁ = D⁻φ[i-2], v₂ = D⁻φ[i-1], v₃ = D⁻φ[i], v₄ = D⁺φ[i], v₅ = D⁺φ[i+1]

feed three third-order candidates

    p₁ = v₁/3 - 7v₂/6 + 11v₃/6
    p₂ = -v₂/6 + 5v₃/6 + v₄/3
    p₃ = v₃/3 + 5v₄/6 - v₅/6

combined with nonlinear weights ωₖ ∝ dₖ / (ε + Sₖ)², ideal weights
(d₁, d₂, d₃) = (0.1, 0.6, 0.3) and smoothness indicators Sₖ. On smooth data
the weights approach the ideal ones and the result is fifth order; near a
kink the weight of any stencil crossing it collapses and the scheme falls
back toward the smooth one-sided candidate. The forward-biased φₓ⁺ uses the
mirrored differences (v₁ = D⁺φ[i+2], ..., v₅ = D⁻φ[i-1]).

The six-point stencil does not fit within three cells of a boundary; those
nodes keep first-order one-sided differences.

References:
- Jiang & Peng (2000): Weighted ENO schemes for Hamilton-Jacobi equations
- Osher & Fedkiw (2003): Level Set Methods, Chapter 3.4
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from levelset2d.operators.stencils.finite_difference import gradient_backward, gradient_forward

if TYPE_CHECKING:
    from numpy.typing import NDArray

# Smallest axis length that admits a full WENO5 stencil somewhere
MIN_WENO_POINTS = 6


def weno5_combine(
    v1: NDArray[np.float64],
    v2: NDArray[np.float64],
    v3: NDArray[np.float64],
    v4: NDArray[np.float64],
    v5: NDArray[np.float64],
    epsilon: float = 1e-6,
) -> NDArray[np.float64]:
    """
    Weighted combination of the three WENO5 candidate derivatives.

    Args:
        v1, v2, v3, v4, v5: Consecutive first differences, ordered upwind to downwind
        epsilon: Regularization relative to max(vₖ²)

    Returns:
        WENO5 derivative approximation
    """
    p1 = v1 / 3 - 7 * v2 / 6 + 11 * v3 / 6
    p2 = -v2 / 6 + 5 * v3 / 6 + v4 / 3
    p3 = v3 / 3 + 5 * v4 / 6 - v5 / 6

    s1 = (13 / 12) * (v1 - 2 * v2 + v3) ** 2 + (1 / 4) * (v1 - 4 * v2 + 3 * v3) ** 2
    s2 = (13 / 12) * (v2 - 2 * v3 + v4) ** 2 + (1 / 4) * (v2 - v4) ** 2
    s3 = (13 / 12) * (v3 - 2 * v4 + v5) ** 2 + (1 / 4) * (3 * v3 - 4 * v4 + v5) ** 2

    scale = np.maximum.reduce([v1**2, v2**2, v3**2, v4**2, v5**2])
    eps = epsilon * scale + 1e-99

    alpha1 = 0.1 / (s1 + eps) ** 2
    alpha2 = 0.6 / (s2 + eps) ** 2
    alpha3 = 0.3 / (s3 + eps) ** 2
    alpha_sum = alpha1 + alpha2 + alpha3

    return (alpha1 * p1 + alpha2 * p2 + alpha3 * p3) / alpha_sum


def weno5_one_sided(
    u: NDArray[np.float64],
    axis: int,
    h: float,
    epsilon: float = 1e-6,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Backward- and forward-biased WENO5 derivatives along one axis.

    Args:
        u: Field to differentiate
        axis: Axis of differentiation
        h: Grid spacing
        epsilon: Smoothness indicator regularization

    Returns:
        (du_minus, du_plus), each with the shape of u. Nodes without a full
        stencil carry the first-order one-sided differences.

    Example:
        >>> x = np.linspace(0, 1, 50)
        >>> u = np.tile(x**2, (3, 1))
        >>> du_minus, du_plus = weno5_one_sided(u, axis=1, h=x[1] - x[0])
    """
    du_minus = gradient_backward(u, axis, h)
    du_plus = gradient_forward(u, axis, h)

    n = u.shape[axis]
    if n < MIN_WENO_POINTS:
        return du_minus, du_plus

    # d[k] = (u[k+1] - u[k]) / h = D⁺u[k] = D⁻u[k+1]
    d = np.moveaxis(np.diff(u, axis=axis) / h, axis, 0)
    window = [d[k : n - 5 + k] for k in range(5)]

    minus_view = np.moveaxis(du_minus, axis, 0)
    plus_view = np.moveaxis(du_plus, axis, 0)

    # φ⁻ at nodes 3..n-3 and φ⁺ at nodes 2..n-4 share the same five differences
    minus_view[3 : n - 2] = weno5_combine(*window, epsilon=epsilon)
    plus_view[2 : n - 3] = weno5_combine(*reversed(window), epsilon=epsilon)

    return du_minus, du_plus
