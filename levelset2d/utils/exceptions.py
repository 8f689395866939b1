"""
Exception classes for levelset2d with helpful error messages.

Three disjoint failure kinds are distinguished:

- ConfigurationError: invalid construction input (field, bandwidth, scheme name).
  Raised before any state exists, so construction is atomic.
- StabilityError: a time step violates the CFL bound. Raised before φ is touched.
- ReinitializationBudgetExceeded: PDE reinitialization hit its iteration cap.
  The last completed iterate is attached and kept by the level set.

DimensionMismatchError covers velocity arrays that do not match the grid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray


class LevelSetError(Exception):
    """
    Base exception for level set errors with context and suggestions.

    The message is assembled from:
    - Component that raised the error
    - Clear error description
    - Suggested action for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "LevelSet"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   • {key}: {value}"

        super().__init__(full_message)


class ConfigurationError(LevelSetError):
    """Exception raised when a level set is constructed from invalid input."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        reason: str,
        valid_values: list[str] | None = None,
        component: str | None = None,
    ):
        self.parameter_name = parameter_name
        self.reason = reason

        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": _summarize_value(provided_value),
            "provided_type": type(provided_value).__name__,
        }
        if valid_values:
            diagnostic_data["valid_values"] = ", ".join(valid_values)

        suggested_action = _generate_configuration_suggestions(parameter_name, valid_values)

        super().__init__(
            message=f"Invalid argument '{parameter_name}': {reason}",
            component=component or "create",
            suggested_action=suggested_action,
            error_code="INVALID_CONFIGURATION",
            diagnostic_data=diagnostic_data,
        )


class StabilityError(LevelSetError):
    """Exception raised when a time step exceeds the CFL stability bound."""

    def __init__(
        self,
        dt: float,
        max_dt: float,
        cfl: float,
        component: str | None = None,
    ):
        self.dt = dt
        self.max_dt = max_dt
        self.cfl = cfl

        diagnostic_data = {
            "requested_dt": f"{dt:.3e}",
            "max_stable_dt": f"{max_dt:.3e}",
            "cfl_number": cfl,
        }

        super().__init__(
            message=f"Time step dt={dt:.3e} violates the CFL bound dt <= {max_dt:.3e}",
            component=component or "EulerIntegrator",
            suggested_action="Reduce dt, or call max_time_step() and step with that value",
            error_code="CFL_VIOLATION",
            diagnostic_data=diagnostic_data,
        )


class ReinitializationBudgetExceeded(LevelSetError):
    """Exception raised when PDE reinitialization does not converge within its iteration cap."""

    def __init__(
        self,
        iterations: int,
        final_update: float,
        tolerance: float,
        phi: NDArray[np.float64] | None = None,
        component: str | None = None,
    ):
        self.iterations = iterations
        self.final_update = final_update
        self.tolerance = tolerance
        self.phi = phi

        diagnostic_data = {
            "iterations_used": iterations,
            "final_update": f"{final_update:.2e}",
            "required_tolerance": f"{tolerance:.2e}",
        }

        super().__init__(
            message=f"Reinitialization did not converge after {iterations} iterations",
            component=component or "PDEReinitializer",
            suggested_action=(
                "Increase reinit_max_iterations, relax reinit_tolerance, or use a narrower bandwidth"
            ),
            error_code="REINIT_BUDGET_EXCEEDED",
            diagnostic_data=diagnostic_data,
        )


class DimensionMismatchError(LevelSetError):
    """Exception raised when an array does not match the grid shape."""

    def __init__(
        self,
        array_name: str,
        provided_shape: tuple,
        expected_shape: tuple,
        component: str | None = None,
    ):
        self.array_name = array_name

        diagnostic_data = {
            "array_name": array_name,
            "provided_shape": str(provided_shape),
            "expected_shape": str(expected_shape),
        }

        super().__init__(
            message=f"Dimension mismatch for {array_name}",
            component=component,
            suggested_action=f"Pass a scalar or an array of shape {expected_shape} for {array_name}",
            error_code="DIMENSION_MISMATCH",
            diagnostic_data=diagnostic_data,
        )


def _summarize_value(value: Any) -> str:
    """Short description of a value; arrays are summarized by shape."""
    shape = getattr(value, "shape", None)
    if shape is not None:
        return f"array(shape={tuple(shape)}, dtype={getattr(value, 'dtype', '?')})"
    text = repr(value)
    return text if len(text) <= 60 else text[:57] + "..."


def _generate_configuration_suggestions(parameter_name: str, valid_values: list[str] | None) -> str:
    """Generate specific suggestions for configuration errors."""
    if valid_values:
        return f"Use one of: {', '.join(valid_values)} (case-insensitive)"
    if parameter_name == "field":
        return "Pass a real-valued numeric 2-D array, ideally a signed distance function"
    if parameter_name == "bandwidth":
        return "Pass a non-negative scalar, or None/inf for an unbounded band"
    return f"Check {parameter_name} value and try again"
