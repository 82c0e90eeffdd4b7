"""
Pytest configuration and shared fixtures for board commitment tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

# Import fixture modules
_common = importlib.import_module("fixtures.common")

# Extract factory functions
make_grid = _common.make_grid
make_fleet_grid = _common.make_fleet_grid
make_geometry = _common.make_geometry
make_board = _common.make_board
make_committed = _common.make_committed


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def geometry():
    """Provide the default 10x10 geometry with 20 ship cells."""
    return make_geometry()


@pytest.fixture
def fleet_grid():
    """Provide the classic 10x10 fleet grid."""
    return make_fleet_grid()


@pytest.fixture
def fleet_board():
    """Provide the classic fleet as a validated Board."""
    return make_board()


@pytest.fixture
def committed_fleet():
    """Provide (tree, index, commitment) for the classic fleet."""
    return make_committed()


@pytest.fixture
def fleet_commitment(committed_fleet):
    """Provide just the BoardCommitment for the classic fleet."""
    _, _, commitment = committed_fleet
    return commitment


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep FLEETPROOF_* variables from the developer's shell out of tests."""
    import os
    for key in list(os.environ):
        if key.startswith("FLEETPROOF_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a specific check failed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert not checks[0].ok, f"Check '{check_id}' unexpectedly passed"
    return _assert
