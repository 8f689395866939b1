"""
Logging utilities for levelset2d.

Usage:
    >>> from levelset2d.utils.ls_logging import get_logger, configure_logging
    >>> logger = get_logger(__name__)
    >>> configure_logging(level="DEBUG")
    >>> logger.info("Starting propagation...")
"""

from __future__ import annotations

from .logger import (
    LevelSetFormatter,
    LevelSetLogger,
    configure_logging,
    get_logger,
    log_solver_completion,
    log_solver_progress,
    log_solver_start,
)

__all__ = [
    "LevelSetFormatter",
    "LevelSetLogger",
    "configure_logging",
    "get_logger",
    "log_solver_completion",
    "log_solver_progress",
    "log_solver_start",
]
