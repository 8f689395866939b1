"""
Velocity fields driving level set motion.

A VelocityField combines up to three terms of the level set equation

    φ_t + V·∇φ + F|∇φ| = b κ |∇φ|

- (vx, vy): external advection velocity V
- normal: speed F in the normal direction (F > 0 expands the φ < 0 region)
- curvature: coefficient b of curvature-driven motion (b > 0 smooths)

Each term is a scalar or an array of the grid shape; omitted terms are zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import numpy as np

from levelset2d.utils.exceptions import DimensionMismatchError

if TYPE_CHECKING:
    from numpy.typing import NDArray

FieldLike = Union[float, "NDArray[np.float64]", None]


@dataclass(frozen=True)
class VelocityField:
    """
    Velocity terms of the level set equation.

    Attributes:
        vx: Advection velocity along axis 0
        vy: Advection velocity along axis 1
        normal: Normal speed F
        curvature: Curvature coefficient b

    Example:
        >>> shrink = VelocityField(normal=-1.0)
        >>> rotate = VelocityField(vx=-(Y - 32), vy=X - 32)
    """

    vx: FieldLike = None
    vy: FieldLike = None
    normal: FieldLike = None
    curvature: FieldLike = None

    @property
    def has_advection(self) -> bool:
        return self.vx is not None or self.vy is not None

    @property
    def has_normal(self) -> bool:
        return self.normal is not None

    @property
    def has_curvature(self) -> bool:
        return self.curvature is not None

    def resolve(self, shape: tuple[int, int]) -> dict[str, NDArray[np.float64]]:
        """
        Broadcast every present term to the grid shape.

        Args:
            shape: Grid shape

        Returns:
            Mapping from term name to float64 array of the grid shape

        Raises:
            DimensionMismatchError: If an array term does not match the grid
        """
        resolved = {}
        for name in ("vx", "vy", "normal", "curvature"):
            value = getattr(self, name)
            if value is None:
                continue
            array = np.asarray(value, dtype=np.float64)
            if array.ndim == 0:
                array = np.full(shape, float(array))
            elif array.shape != shape:
                raise DimensionMismatchError(
                    array_name=f"velocity.{name}",
                    provided_shape=array.shape,
                    expected_shape=shape,
                    component="VelocityField",
                )
            resolved[name] = array
        return resolved
