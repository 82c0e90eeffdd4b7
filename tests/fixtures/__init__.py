"""
Test fixtures package for board commitment tests.

This package provides factory functions for creating test objects:
- common.py: grids, boards, geometries and committed artifacts

Usage:
    from tests.fixtures import make_grid, make_fleet_grid

    def test_something():
        grid = make_grid([(1, "A"), (1, "B")], rows=3, columns=3)
"""

from .common import (
    FLEET_HITS,
    FLEET_CLAIM_ORDER,
    make_board,
    make_committed,
    make_fleet_grid,
    make_geometry,
    make_grid,
)

__all__ = [
    "FLEET_HITS",
    "FLEET_CLAIM_ORDER",
    "make_board",
    "make_committed",
    "make_fleet_grid",
    "make_geometry",
    "make_grid",
]
