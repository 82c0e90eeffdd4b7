"""
Common test fixtures shared by all modules.

Provides factory functions for core board data structures:
- Raw grids (lists of lists of booleans)
- BoardGeometry / Board
- Committed artifacts (commitment + proof index)

These are the foundational building blocks used by the unit tests.
"""

from typing import Iterable, Optional

from core.board import commit_board
from core.board.proof_index import ProofIndex
from core.merkle.standard_tree import StandardMerkleTree
from core.schemas.board import Board, BoardGeometry, column_index
from core.schemas.commitment import BoardCommitment


# =============================================================================
# Classic 10x10 fleet
# =============================================================================

# One 4-ship, two 3-ships (one vertical), three 2-ships, four 1-ships;
# no two ships touch.
FLEET_HITS: tuple[tuple[int, str], ...] = (
    (1, "A"), (1, "B"), (1, "C"), (1, "D"),
    (1, "J"), (2, "J"), (3, "J"),
    (3, "A"), (3, "B"), (3, "C"),
    (5, "A"), (5, "B"),
    (5, "E"), (5, "F"),
    (5, "I"), (5, "J"),
    (7, "A"), (7, "D"), (7, "G"),
    (9, "J"),
)

# Canonical claim order for FLEET_HITS: row-major scan, each ship
# emitted whole from its top-left cell.
FLEET_CLAIM_ORDER: tuple[tuple[int, str], ...] = (
    (1, "A"), (1, "B"), (1, "C"), (1, "D"),
    (1, "J"), (2, "J"), (3, "J"),
    (3, "A"), (3, "B"), (3, "C"),
    (5, "A"), (5, "B"),
    (5, "E"), (5, "F"),
    (5, "I"), (5, "J"),
    (7, "A"),
    (7, "D"),
    (7, "G"),
    (9, "J"),
)


# =============================================================================
# Grid / Board Factories
# =============================================================================

def make_grid(
    hits: Iterable[tuple[int, str]],
    rows: int = 10,
    columns: int = 10,
) -> list[list[bool]]:
    """
    Create a raw grid with the given (1-based row, column label) hits.

    Args:
        hits: Coordinates to mark as ship cells
        rows: Number of rows
        columns: Number of columns

    Returns:
        rows x columns nested list indexed [row][column]
    """
    grid = [[False] * columns for _ in range(rows)]
    for row, label in hits:
        grid[row - 1][column_index(label)] = True
    return grid


def make_fleet_grid() -> list[list[bool]]:
    """Create the classic 10x10 grid with 20 ship cells."""
    return make_grid(FLEET_HITS)


def make_geometry(
    rows: int = 10,
    columns: int = 10,
    ship_cells: int = 20,
) -> BoardGeometry:
    """Create a BoardGeometry for testing."""
    return BoardGeometry(rows=rows, columns=columns, ship_cells=ship_cells)


def make_board(
    hits: Optional[Iterable[tuple[int, str]]] = None,
    rows: int = 10,
    columns: int = 10,
    ship_cells: Optional[int] = None,
) -> Board:
    """
    Create a validated Board.

    ship_cells defaults to the number of hits given.
    """
    hits = list(FLEET_HITS if hits is None else hits)
    geometry = make_geometry(
        rows=rows,
        columns=columns,
        ship_cells=len(hits) if ship_cells is None else ship_cells,
    )
    return Board.from_matrix(make_grid(hits, rows, columns), geometry)


def make_committed(
    hits: Optional[Iterable[tuple[int, str]]] = None,
    rows: int = 10,
    columns: int = 10,
) -> tuple[StandardMerkleTree, ProofIndex, BoardCommitment]:
    """Commit a board and return (tree, index, commitment)."""
    return commit_board(make_board(hits, rows, columns))
