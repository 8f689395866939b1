"""
Grid-level geometry for levelset2d.

- band: narrow band construction and field validation
- implicit: initial signed distance fields
- curvature: normals and mean curvature of the level sets
"""

from levelset2d.geometry.band import (
    band_mask,
    build_band,
    has_interface,
    rebuild_band,
    restrict_to_band,
    validate_bandwidth,
    validate_field,
)
from levelset2d.geometry.curvature import compute_curvature, compute_normal
from levelset2d.geometry.implicit import circle_sdf, grid_coordinates, signed_distance_from_mask

__all__ = [
    # Narrow band
    "band_mask",
    "build_band",
    "has_interface",
    "rebuild_band",
    "restrict_to_band",
    "validate_bandwidth",
    "validate_field",
    # Geometry computations
    "compute_curvature",
    "compute_normal",
    # Initial fields
    "circle_sdf",
    "grid_coordinates",
    "signed_distance_from_mask",
]
