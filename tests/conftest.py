"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the sigmon test suite.
"""

import sys

import pytest

# =============================================================================
# Plugin Registration
# =============================================================================

pytest_plugins = [
    "tests.fixtures.logging",
    "tests.fixtures.signals",
]


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no OS signals delivered)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (deliver real OS signals)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line("markers", "slow: Tests that take >1 second to run")
    config.addinivalue_line(
        "markers", "posix: Tests that need POSIX signals (USR1/USR2, os.kill)"
    )


# =============================================================================
# Test Collection Hooks
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to add markers and skip conditions.

    Args:
        config: Pytest config object
        items: List of collected test items
    """
    skip_posix = pytest.mark.skip(reason="POSIX signals not available")
    for item in items:
        # Add 'unit' marker to tests without other markers
        if not any(
            mark.name in ["integration", "property"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
        if sys.platform == "win32" and "posix" in item.keywords:
            item.add_marker(skip_posix)
