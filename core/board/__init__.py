"""
Board Commitment - Commit and Claim Phases

Provides pure functions to commit to a hidden board, index its proofs,
order revealed hits into ship segments, and self-check the artifacts.
"""

from .commitment import build_board_tree, commit_board, verify_cell
from .proof_index import ProofIndex
from .canonicalizer import Segment, ShipSegmentCanonicalizer, canonicalize_claims
from .verification import verify_claim, verify_commitment

__all__ = [
    "build_board_tree",
    "commit_board",
    "verify_cell",
    "ProofIndex",
    "Segment",
    "ShipSegmentCanonicalizer",
    "canonicalize_claims",
    "verify_claim",
    "verify_commitment",
]
