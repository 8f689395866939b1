"""
Pytest configuration and shared fixtures for the levelset2d test suite.

This module provides common fixtures, test configuration, and utilities
used across the entire test suite.
"""

import pytest

import numpy as np

from levelset2d import circle_sdf
from levelset2d.geometry import grid_coordinates

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (slower, cross-component)")
    config.addinivalue_line("markers", "mathematical: Mathematical property validation tests")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)

        if "large" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


# =============================================================================
# Field Fixtures
# =============================================================================


@pytest.fixture
def circle_phi():
    """Signed distance to a radius-16 circle centred at (32, 32) on a 64x64 grid."""
    return circle_sdf((64, 64), center=(32.0, 32.0), radius=16.0)


@pytest.fixture
def small_circle_phi():
    """Signed distance to a radius-6 circle on a 24x24 grid."""
    return circle_sdf((24, 24), center=(11.5, 11.5), radius=6.0)


@pytest.fixture
def kinked_phi():
    """φ = |x - 31.5| on a 64x64 grid: a kink midway between two nodes."""
    X, _ = grid_coordinates((64, 64))
    return np.abs(X - 31.5)


@pytest.fixture
def plane_phi():
    """Signed distance to the line x = 20.3 on a 48x40 grid."""
    X, _ = grid_coordinates((48, 40))
    return X - 20.3
