"""
Board Commitment - Commit Phase

Builds the Merkle commitment over every cell of a validated board.
Both hit and miss cells are committed, so a revealed miss is provably
a miss rather than merely absent.
"""

from __future__ import annotations

import logging
from typing import Sequence

from core.board.proof_index import ProofIndex
from core.merkle.standard_tree import Digest, StandardMerkleTree
from core.schemas.board import Board, Cell
from core.schemas.commitment import BoardCommitment
from core.schemas.versioning import LEAF_ENCODING


logger = logging.getLogger(__name__)


def build_board_tree(board: Board) -> StandardMerkleTree:
    """
    Commit to a board.

    Leaves are inserted row-major; the root does not depend on that order.

    Raises:
        HitCountMismatchException: If the board does not hold exactly K hits
        MerkleTreeException: If the board has no cells
    """
    board.require_hit_count()
    tree = StandardMerkleTree.of(
        [cell.as_leaf_value() for cell in board.cells()],
        LEAF_ENCODING,
    )
    logger.info(f"Board Root: {tree.root_hex}")
    return tree


def commit_board(board: Board) -> tuple[StandardMerkleTree, ProofIndex, BoardCommitment]:
    """Build the tree, index every proof and assemble the published commitment."""
    tree = build_board_tree(board)
    index = ProofIndex.from_tree(tree, board.geometry)
    return tree, index, index.to_commitment(tree.root_hex)


def verify_cell(cell: Cell, proof: Sequence[Digest], root: Digest) -> bool:
    """Check that a cell, exactly as revealed, is committed under root."""
    return StandardMerkleTree.verify(root, LEAF_ENCODING, cell.as_leaf_value(), proof)
