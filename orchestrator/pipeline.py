"""
Board Pipeline

Deterministic, in-process runner composing the commit phase, the claim
phase and the self-check into one flow.

Key features:
- Commit and claim can run separately (the claim phase starts from a
  published commitment, possibly reloaded from disk)
- Optional self-check of every produced artifact
- Precondition failures propagate as FleetproofException; bad proofs are
  reported through VerificationResult
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from core.board import (
    ProofIndex,
    canonicalize_claims,
    commit_board,
    verify_claim,
    verify_commitment,
)
from core.merkle.standard_tree import StandardMerkleTree
from core.schemas.board import Board, BoardGeometry
from core.schemas.commitment import BoardCommitment, ClaimBundle
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class PipelineConfig:
    """Configuration for pipeline execution."""

    geometry: BoardGeometry = field(default_factory=BoardGeometry)

    # Re-verify every artifact after producing it
    self_check: bool = True

    # Keep the full tree on the result so callers can dump it
    keep_tree: bool = False


# =============================================================================
# Results
# =============================================================================

@dataclass
class CommitResult:
    """Output of the commit phase."""
    commitment: BoardCommitment
    index: ProofIndex
    tree: Optional[StandardMerkleTree] = None
    verification: Optional[VerificationResult] = None

    @property
    def root(self) -> str:
        return self.commitment.root


@dataclass
class RunResult:
    """Complete result of a commit + claim run."""
    commitment: Optional[BoardCommitment] = None
    claim: Optional[ClaimBundle] = None
    tree: Optional[StandardMerkleTree] = None
    ok: bool = False
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def root(self) -> Optional[str]:
        return self.commitment.root if self.commitment else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "root": self.root,
            "claim_count": len(self.claim) if self.claim else 0,
            "check_count": len(self.checks),
            "failed_checks": [c.check_id for c in self.checks if not c.ok],
        }


# =============================================================================
# Pipeline Class
# =============================================================================

class BoardPipeline:
    """
    Runs the commit phase, the claim phase and the self-check.

    The pipeline holds no state between calls; every method is a pure
    function of its inputs and the configured geometry.
    """

    def __init__(self, *, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()

    @property
    def geometry(self) -> BoardGeometry:
        return self.config.geometry

    def load_board(self, grid: Board | Sequence[Sequence[Any]]) -> Board:
        """Accept a Board or a raw R x C matrix and shape-check it."""
        if isinstance(grid, Board):
            if grid.geometry != self.geometry:
                return Board.from_matrix(grid.grid, self.geometry)
            return grid
        return Board.from_matrix(grid, self.geometry)

    def commit(self, grid: Board | Sequence[Sequence[Any]]) -> CommitResult:
        """
        Commit phase: grid -> tree -> proof index -> {root, proofs}.

        Raises:
            BoardPreconditionException: If the grid has the wrong shape
            HitCountMismatchException: If the grid does not hold exactly K hits
        """
        board = self.load_board(grid)
        tree, index, commitment = commit_board(board)
        logger.info(
            f"Committed {board.geometry.cell_count} cells "
            f"({board.hit_count} hits) under root {commitment.root}"
        )

        verification = None
        if self.config.self_check:
            verification = verify_commitment(commitment, self.geometry)
            if not verification.ok:
                logger.error(
                    f"Self-check failed for commitment: "
                    f"{[c.check_id for c in verification.get_failed_checks()]}"
                )

        return CommitResult(
            commitment=commitment,
            index=index,
            tree=tree if self.config.keep_tree else None,
            verification=verification,
        )

    def claim(self, commitment: BoardCommitment) -> ClaimBundle:
        """
        Claim phase: commitment -> proof index -> canonical claim bundle.

        Raises:
            SchemaValidationException: If the commitment does not cover the board
            SegmentShapeException: If a hit cluster is bent or touches another
            SegmentCountException: If the hits do not add up to K
        """
        index = ProofIndex.from_commitment(commitment, self.geometry)
        bundle = canonicalize_claims(index)
        logger.info(f"Emitted {len(bundle)} claim entries")
        return bundle

    def verify(
        self,
        commitment: BoardCommitment,
        claim: Optional[ClaimBundle] = None,
    ) -> VerificationResult:
        """
        Self-check a commitment and, if given, a claim bundle derived from it.

        Never raises for a bad proof; failures are reported as checks.
        """
        result = verify_commitment(commitment, self.geometry)
        if claim is None:
            return result

        claim_result = verify_claim(claim, commitment, self.geometry)
        ok = result.ok and claim_result.ok
        return VerificationResult(
            ok=ok,
            checks=result.checks + claim_result.checks,
            challenge=None if ok else (result.challenge or claim_result.challenge),
        )

    def run(self, grid: Board | Sequence[Sequence[Any]]) -> RunResult:
        """Execute commit and claim back to back."""
        committed = self.commit(grid)
        bundle = self.claim(committed.commitment)

        checks: list[CheckResult] = []
        ok = True
        if self.config.self_check:
            verification = self.verify(committed.commitment, bundle)
            checks = verification.checks
            ok = verification.ok

        return RunResult(
            commitment=committed.commitment,
            claim=bundle,
            tree=committed.tree,
            ok=ok,
            checks=checks,
        )


# =============================================================================
# Factory Functions
# =============================================================================

def create_pipeline(
    *,
    geometry: Optional[BoardGeometry] = None,
    self_check: bool = True,
    keep_tree: bool = False,
) -> BoardPipeline:
    """
    Convenience function to create a pipeline with common configuration.

    Args:
        geometry: Board geometry (defaults to 10 x 10 with 20 ship cells)
        self_check: Re-verify produced artifacts
        keep_tree: Keep the full Merkle tree on commit results

    Returns:
        Configured BoardPipeline instance
    """
    config = PipelineConfig(
        geometry=geometry or BoardGeometry(),
        self_check=self_check,
        keep_tree=keep_tree,
    )
    return BoardPipeline(config=config)
