"""
Normal and Curvature Computation for Level Set Methods.

Mean curvature of the level set interface in 2-D:

    κ = ∇·(∇φ/|∇φ|) = (φxx φy² - 2 φx φy φxy + φyy φx²) / (φx² + φy²)^{3/2}

- κ > 0: convex interface (bulging outward)
- κ < 0: concave interface
- κ = 1/R: circle of radius R with φ < 0 inside

Derivatives come from the central and second differences of a differencer.

References:
- Osher & Fedkiw (2003): Level Set Methods, Chapter 1.4
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset2d.operators.differential.differencer import SpatialDifferencer


def compute_normal(
    phi: NDArray[np.float64],
    differencer: SpatialDifferencer,
    band: NDArray[np.intp] | None = None,
    epsilon: float = 1e-10,
) -> NDArray[np.float64]:
    """
    Unit normal field n = ∇φ/|∇φ|, pointing from negative to positive φ.

    Args:
        phi: Level set field
        differencer: Source of central differences
        band: Optional flat band indices
        epsilon: Regularization of |∇φ| at critical points

    Returns:
        Normal field of shape (2, Nx, Ny); zero outside the band
    """
    phi_x, phi_y = differencer.central(phi, band)
    grad_mag = np.sqrt(phi_x**2 + phi_y**2) + epsilon
    return np.stack([phi_x / grad_mag, phi_y / grad_mag])


def compute_curvature(
    phi: NDArray[np.float64],
    differencer: SpatialDifferencer,
    band: NDArray[np.intp] | None = None,
    epsilon: float = 1e-10,
) -> NDArray[np.float64]:
    """
    Compute mean curvature κ = ∇·(∇φ/|∇φ|).

    Args:
        phi: Level set field, ideally a signed distance function
        differencer: Source of central and second differences
        band: Optional flat band indices
        epsilon: Regularization of |∇φ|³ at critical points

    Returns:
        Curvature field with the shape of φ; zero outside the band

    Example:
        >>> kappa = compute_curvature(circle_sdf((64, 64), (32, 32), 16), FirstOrderDifferencer())
        >>> # On the interface: κ ≈ 1/16
    """
    phi_x, phi_y = differencer.central(phi, band)
    phi_xx, phi_yy, phi_xy = differencer.second(phi, band)

    numerator = phi_xx * phi_y**2 - 2 * phi_x * phi_y * phi_xy + phi_yy * phi_x**2
    denominator = (phi_x**2 + phi_y**2) ** 1.5 + epsilon

    return numerator / denominator
