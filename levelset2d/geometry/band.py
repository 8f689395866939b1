"""
Grid and Narrow Band Management.

A level set stores φ on the full dense grid but restricts computation to the
"narrow band" of points near the interface:

    band = { i : |φ[i]| ≤ bandwidth }

The band is stored as an ascending array of unique flat (C-order) indices.
It is always recomputed wholesale from φ; incremental patching would let the
band drift from the invariant above.

References:
- Adalsteinsson & Sethian (1995): A fast level set method for propagating interfaces
- Peng et al. (1999): A PDE-based fast local level set method
"""

from __future__ import annotations

import math
import numbers
from typing import TYPE_CHECKING, Any

import numpy as np

from levelset2d.utils.exceptions import ConfigurationError

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset2d.core.level_set import LevelSetState


def validate_field(field: Any) -> NDArray[np.float64]:
    """
    Validate an initial level set field and return a float64 copy.

    Args:
        field: Array-like scalar field, ideally a signed distance function

    Returns:
        Independent float64 copy of the field

    Raises:
        ConfigurationError: If the field is not a real numeric 2-D array of
            finite values
    """
    try:
        array = np.asarray(field)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("field", field, f"cannot be converted to an array ({exc})") from exc

    if array.dtype == np.bool_ or not np.issubdtype(array.dtype, np.number):
        raise ConfigurationError("field", field, f"is not numeric (dtype {array.dtype})")
    if np.issubdtype(array.dtype, np.complexfloating):
        raise ConfigurationError("field", field, "is complex; a real-valued field is required")
    if array.ndim != 2:
        raise ConfigurationError("field", field, f"is not two-dimensional (got {array.ndim} dimensions)")
    if array.size == 0:
        raise ConfigurationError("field", field, f"is empty (shape {array.shape})")

    phi = np.array(array, dtype=np.float64, copy=True)
    if not np.isfinite(phi).all():
        raise ConfigurationError("field", field, "contains NaN or infinite values")

    return phi


def validate_bandwidth(bandwidth: Any) -> float:
    """
    Validate a narrow band width.

    Args:
        bandwidth: Non-negative real scalar; None or inf for an unbounded band

    Returns:
        Bandwidth as float (math.inf when unbounded)

    Raises:
        ConfigurationError: If bandwidth is not a non-negative scalar
    """
    if bandwidth is None:
        return math.inf

    if isinstance(bandwidth, np.ndarray) and bandwidth.ndim == 0:
        bandwidth = bandwidth.item()

    if isinstance(bandwidth, bool) or not isinstance(bandwidth, numbers.Real):
        raise ConfigurationError("bandwidth", bandwidth, "is not a real scalar")

    value = float(bandwidth)
    if math.isnan(value):
        raise ConfigurationError("bandwidth", bandwidth, "is NaN")
    if value < 0:
        raise ConfigurationError("bandwidth", bandwidth, "is negative")

    return value


def build_band(phi: NDArray[np.float64], bandwidth: float) -> NDArray[np.intp]:
    """
    Compute the narrow band of a field.

    Args:
        phi: Level set field
        bandwidth: Band half-width (inf selects every grid point)

    Returns:
        Ascending flat indices i with |φ[i]| ≤ bandwidth

    Example:
        >>> phi = np.array([[-2.0, -0.5], [0.5, 2.0]])
        >>> build_band(phi, 1.0)
        array([1, 2])
    """
    if math.isinf(bandwidth):
        return np.arange(phi.size, dtype=np.intp)
    return np.flatnonzero(np.abs(phi) <= bandwidth).astype(np.intp, copy=False)


def rebuild_band(state: LevelSetState, bandwidth: float) -> None:
    """Recompute state.band from state.phi in place."""
    state.band = build_band(state.phi, bandwidth)


def band_mask(shape: tuple[int, ...], band: NDArray[np.intp]) -> NDArray[np.bool_]:
    """Boolean grid mask that is True on band points."""
    mask = np.zeros(shape, dtype=bool)
    mask.flat[band] = True
    return mask


def restrict_to_band(values: NDArray[np.float64], band: NDArray[np.intp] | None) -> NDArray[np.float64]:
    """
    Zero a field outside the band.

    Args:
        values: Full-grid field
        band: Flat band indices, or None for no restriction

    Returns:
        Field equal to values on the band and 0 elsewhere (values itself if band is None)
    """
    if band is None:
        return values
    restricted = np.zeros_like(values)
    restricted.flat[band] = values.flat[band]
    return restricted


def has_interface(phi: NDArray[np.float64]) -> bool:
    """Whether φ changes sign somewhere (φ < 0 is inside, φ ≥ 0 outside)."""
    inside = phi < 0
    return bool(inside.any()) and not bool(inside.all())
