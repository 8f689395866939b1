"""Drivers running level set evolution loops."""

from levelset2d.workflow.propagation import PropagationResult, propagate

__all__ = ["PropagationResult", "propagate"]
