"""
Reinitialization interface.

Reinitialization replaces φ by the signed distance to its zero level set
while keeping the interface in place:

    |∇φ| = 1,   sign(φ) = sign(φ₀),   {φ = 0} = {φ₀ = 0}

Level sets drift away from a signed distance function during evolution;
periodic reinitialization restores accurate normals, curvature and a
meaningful narrow band.

A field with no sign change has no interface and is returned unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from levelset2d.geometry.band import has_interface
from levelset2d.utils.ls_logging import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset2d.types.schemes import ReinitScheme

logger = get_logger(__name__)


class Reinitializer(ABC):
    """
    Base class of the reinitialization strategies.

    Attributes:
        spacing: Grid spacing Δx
    """

    scheme: ReinitScheme

    def __init__(self, spacing: float = 1.0):
        self.spacing = float(spacing)

    def reinitialize(self, phi: NDArray[np.float64], band: NDArray[np.intp]) -> NDArray[np.float64]:
        """
        Reinitialize φ to a signed distance function.

        Args:
            phi: Level set field (not modified)
            band: Flat band indices at call time

        Returns:
            New field with the sign of φ and |∇φ| ≈ 1

        Raises:
            ReinitializationBudgetExceeded: If an iterative solver hits its cap
        """
        if not has_interface(phi):
            logger.debug(f"{type(self).__name__}: no sign change in φ, field left unchanged")
            return phi.copy()
        return self._solve(phi, band)

    @abstractmethod
    def _solve(self, phi: NDArray[np.float64], band: NDArray[np.intp]) -> NDArray[np.float64]:
        """Reinitialize a field known to contain an interface."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(spacing={self.spacing})"
