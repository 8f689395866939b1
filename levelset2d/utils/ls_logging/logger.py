#!/usr/bin/env python3
"""
Logging Infrastructure for levelset2d

Provides structured logging with configurable levels, formatting, and colored
console output for debugging long propagation runs.
"""

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar

import colorlog


class LevelSetFormatter(logging.Formatter):
    """Formatter for levelset2d logging, optionally colored."""

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        self.use_colors = use_colors
        self.include_location = include_location

        format_str = "%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s"
        if self.include_location:
            format_str += " [%(filename)s:%(lineno)d]"

        if self.use_colors:
            self.colored_formatter = colorlog.ColoredFormatter(
                "%(log_color)s" + format_str,
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            )

        super().__init__(format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record):
        if self.use_colors:
            return self.colored_formatter.format(record)
        else:
            return super().format(record)


class LevelSetLogger:
    """
    Central logging manager for levelset2d.

    Thread Safety:
        Logger creation uses double-check locking, so concurrent get_logger()
        calls never attach duplicate handlers.

    Singleton Pattern:
        Uses __new__ to ensure only one instance manages global configuration.
    """

    _instance = None
    _lock: ClassVar[threading.Lock] = threading.Lock()
    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _log_level = logging.INFO
    _log_to_file = False
    _log_file_path: Path | None = None
    _use_colors = True
    _include_location = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def configure(
        cls,
        level: str | int = "INFO",
        log_to_file: bool = False,
        log_file_path: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
    ):
        """
        Configure global logging settings for levelset2d.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Whether to log to file
            log_file_path: Path to log file (optional)
            use_colors: Use colored terminal output
            include_location: Include file location in log messages
        """
        with cls._lock:
            if isinstance(level, str):
                cls._log_level = getattr(logging, level.upper())
            else:
                cls._log_level = level

            cls._log_to_file = log_to_file
            cls._use_colors = use_colors
            cls._include_location = include_location

            if log_to_file:
                if log_file_path is None:
                    log_dir = Path.cwd() / "logs"
                    log_dir.mkdir(exist_ok=True)
                    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                    cls._log_file_path = log_dir / f"levelset2d_{timestamp}.log"
                else:
                    cls._log_file_path = Path(log_file_path)
                    cls._log_file_path.parent.mkdir(parents=True, exist_ok=True)
            else:
                cls._log_file_path = None

            for logger in cls._loggers.values():
                cls._setup_logger(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get or create a logger for the specified module.

        Args:
            name: Logger name (typically __name__ from calling module)

        Returns:
            Configured logger instance
        """
        if name in cls._loggers:
            return cls._loggers[name]

        with cls._lock:
            if name not in cls._loggers:
                logger = logging.getLogger(name)

                # Logger may already be configured externally
                if not logger.handlers:
                    cls._setup_logger(logger)

                cls._loggers[name] = logger

        return cls._loggers[name]

    @classmethod
    def _setup_logger(cls, logger: logging.Logger):
        """Configure individual logger with current settings."""
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(cls._log_level)

        formatter = LevelSetFormatter(use_colors=cls._use_colors, include_location=cls._include_location)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(cls._log_level)
        logger.addHandler(console_handler)

        if cls._log_to_file and cls._log_file_path:
            file_handler = logging.FileHandler(cls._log_file_path)
            # Files never get color codes
            file_handler.setFormatter(LevelSetFormatter(use_colors=False, include_location=cls._include_location))
            file_handler.setLevel(cls._log_level)
            logger.addHandler(file_handler)

        logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger for the current module.

    Args:
        name: Logger name (if None, uses calling module name)

    Returns:
        Configured logger instance
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "levelset2d")
        else:
            name = "levelset2d"

    return LevelSetLogger.get_logger(name)


def configure_logging(**kwargs):
    """
    Configure global logging settings.

    Keyword Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to file
        log_file_path: Path to log file
        use_colors: Use colored terminal output
        include_location: Include file location in messages
    """
    LevelSetLogger.configure(**kwargs)


def log_solver_start(logger: logging.Logger, solver_name: str, config: dict[str, Any]):
    """Log solver initialization with configuration."""
    logger.info(f"Initializing {solver_name}")
    logger.debug(f"Solver configuration: {config}")


def log_solver_progress(
    logger: logging.Logger,
    iteration: int,
    error: float,
    max_iterations: int,
):
    """Log solver iteration progress."""
    progress_pct = (iteration / max_iterations) * 100
    msg = f"Iteration {iteration}/{max_iterations} ({progress_pct:.1f}%) - Error: {error:.2e}"
    logger.debug(msg)


def log_solver_completion(
    logger: logging.Logger,
    solver_name: str,
    iterations: int,
    final_error: float,
    converged: bool,
):
    """Log solver completion with summary."""
    status = "CONVERGED" if converged else "MAX_ITERATIONS_REACHED"
    message = f"{solver_name} completed - Status: {status}, {iterations} iterations, error: {final_error:.2e}"
    if converged:
        logger.debug(message)
    else:
        logger.warning(message)
