"""
Finite Difference Stencils for levelset2d.

Low-level stencils with fixed coefficients on a uniform 2-D grid. Axis 0 is
x and axis 1 is y (meshgrid indexing="ij").

Stencil Types:
    - BACKWARD: 1st-order, D⁻u = (u[i] - u[i-1]) / h
    - FORWARD: 1st-order, D⁺u = (u[i+1] - u[i]) / h
    - CENTRAL: 2nd-order, D⁰u = (u[i+1] - u[i-1]) / (2h)
    - SECOND: 2nd-order, D²u = (u[i+1] - 2u[i] + u[i-1]) / h²

Boundary Handling:
    The field is extended by one ghost cell of linear extrapolation,
    u[-1] = 2u[0] - u[1]. Every stencil is therefore exact on linear data,
    including at the grid boundary, and second differences vanish there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


def pad_linear(u: NDArray, axis: int, width: int = 1) -> NDArray:
    """
    Extend u along axis by linear extrapolation.

    Args:
        u: Input array
        axis: Axis to extend
        width: Number of ghost cells on each side

    Returns:
        Array with shape[axis] increased by 2·width
    """
    pad_width = [(0, 0)] * u.ndim
    pad_width[axis] = (width, width)
    if u.shape[axis] < 2:
        return np.pad(u, pad_width, mode="edge")
    return np.pad(u, pad_width, mode="reflect", reflect_type="odd")


def _shifted(padded: NDArray, axis: int, offset: int, n: int) -> NDArray:
    """View of a one-cell padded array shifted by offset ∈ {-1, 0, 1}."""
    index = [slice(None)] * padded.ndim
    index[axis] = slice(1 + offset, 1 + offset + n)
    return padded[tuple(index)]


def gradient_backward(u: NDArray, axis: int, h: float) -> NDArray:
    """
    Backward difference D⁻u = (u[i] - u[i-1]) / h.

    Upwind for advection with positive velocity.
    """
    n = u.shape[axis]
    p = pad_linear(u, axis)
    return (_shifted(p, axis, 0, n) - _shifted(p, axis, -1, n)) / h


def gradient_forward(u: NDArray, axis: int, h: float) -> NDArray:
    """
    Forward difference D⁺u = (u[i+1] - u[i]) / h.

    Upwind for advection with negative velocity.
    """
    n = u.shape[axis]
    p = pad_linear(u, axis)
    return (_shifted(p, axis, 1, n) - _shifted(p, axis, 0, n)) / h


def gradient_central(u: NDArray, axis: int, h: float) -> NDArray:
    """Central difference D⁰u = (u[i+1] - u[i-1]) / (2h), second order."""
    n = u.shape[axis]
    p = pad_linear(u, axis)
    return (_shifted(p, axis, 1, n) - _shifted(p, axis, -1, n)) / (2 * h)


def second_difference(u: NDArray, axis: int, h: float) -> NDArray:
    """Second difference D²u = (u[i+1] - 2u[i] + u[i-1]) / h², second order."""
    n = u.shape[axis]
    p = pad_linear(u, axis)
    return (_shifted(p, axis, 1, n) - 2 * _shifted(p, axis, 0, n) + _shifted(p, axis, -1, n)) / h**2


def mixed_difference(u: NDArray, h: float) -> NDArray:
    """Cross derivative ∂²u/∂x∂y as the composition of central differences."""
    return gradient_central(gradient_central(u, axis=0, h=h), axis=1, h=h)


def select_upwind(
    backward: NDArray[np.float64],
    forward: NDArray[np.float64],
    velocity: float | NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Choose the upwind one-sided difference per grid point.

    D⁻ where velocity > 0, D⁺ where velocity < 0 and their average where
    velocity is exactly zero.
    """
    velocity = np.broadcast_to(velocity, backward.shape)
    return np.where(velocity > 0, backward, np.where(velocity < 0, forward, 0.5 * (backward + forward)))


def godunov_norm(
    backward_x: NDArray[np.float64],
    forward_x: NDArray[np.float64],
    backward_y: NDArray[np.float64],
    forward_y: NDArray[np.float64],
    speed: float | NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Godunov upwind approximation of |∇φ| for motion with normal speed F.

    For F > 0:
        |∇φ| = √( max(D⁻ₓ,0)² + min(D⁺ₓ,0)² + max(D⁻ᵧ,0)² + min(D⁺ᵧ,0)² )
    For F < 0:
        |∇φ| = √( min(D⁻ₓ,0)² + max(D⁺ₓ,0)² + min(D⁻ᵧ,0)² + max(D⁺ᵧ,0)² )

    Reference:
        Osher & Fedkiw (2003), Chapter 6.4
    """
    speed = np.broadcast_to(speed, backward_x.shape)

    grad_pos = np.sqrt(
        np.maximum(backward_x, 0) ** 2
        + np.minimum(forward_x, 0) ** 2
        + np.maximum(backward_y, 0) ** 2
        + np.minimum(forward_y, 0) ** 2
    )
    grad_neg = np.sqrt(
        np.minimum(backward_x, 0) ** 2
        + np.maximum(forward_x, 0) ** 2
        + np.minimum(backward_y, 0) ** 2
        + np.maximum(forward_y, 0) ** 2
    )
    return np.where(speed >= 0, grad_pos, grad_neg)
