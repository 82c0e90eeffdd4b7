"""
Board Commitment - Self-Check Verification

Re-verifies published artifacts the way an independent verifier would:
every leaf is rebuilt from its coordinate key and hit flag and folded
through its proof into the root.

Returns VerificationResult objects; bad proofs never raise.
"""

from __future__ import annotations

import logging

from core.board.canonicalizer import canonicalize_claims
from core.board.commitment import verify_cell
from core.board.proof_index import ProofIndex
from core.schemas.board import BoardGeometry, Cell, coordinate_key, parse_coordinate_key
from core.schemas.commitment import BoardCommitment, ClaimBundle
from core.schemas.errors import FleetproofException
from core.schemas.verification import ChallengeRef, CheckResult, VerificationResult


logger = logging.getLogger(__name__)


def verify_commitment(
    commitment: BoardCommitment,
    geometry: BoardGeometry,
) -> VerificationResult:
    """
    Check coverage, hit count and every proof of a commitment.
    """
    checks: list[CheckResult] = []
    challenge: ChallengeRef | None = None

    expected_keys = set(geometry.keys())
    actual_keys = set(commitment.proofs)
    if expected_keys == actual_keys:
        checks.append(CheckResult.passed(
            "coverage",
            f"Commitment covers all {geometry.cell_count} coordinates",
        ))
    else:
        checks.append(CheckResult.failed(
            "coverage",
            "Commitment does not cover the board exactly",
            details={
                "missing": sorted(expected_keys - actual_keys)[:10],
                "unexpected": sorted(actual_keys - expected_keys)[:10],
            },
        ))

    if commitment.hit_count == geometry.ship_cells:
        checks.append(CheckResult.passed(
            "hit_count",
            f"Commitment holds {geometry.ship_cells} ship cells",
        ))
    else:
        checks.append(CheckResult.failed(
            "hit_count",
            f"Expected {geometry.ship_cells} ship cells, found {commitment.hit_count}",
            details={"expected": geometry.ship_cells, "actual": commitment.hit_count},
        ))

    invalid: list[str] = []
    for key, entry in commitment.proofs.items():
        row, label = parse_coordinate_key(key)
        cell = Cell(hit=entry.hit, row=row, column=label)
        if not verify_cell(cell, entry.proof, commitment.root):
            invalid.append(key)

    if invalid:
        checks.append(CheckResult.failed(
            "proofs",
            f"{len(invalid)} proof(s) do not verify against the root",
            details={"invalid": invalid[:10]},
        ))
        challenge = ChallengeRef(kind="cell_leaf", key=invalid[0], reason="proof_invalid")
    else:
        checks.append(CheckResult.passed(
            "proofs",
            f"All {len(commitment.proofs)} proofs verify against the root",
        ))

    ok = all(c.ok for c in checks)
    if not ok and challenge is None:
        challenge = ChallengeRef(kind="board_root", reason="commitment_malformed")
    logger.info(f"Commitment verification: {'ok' if ok else 'failed'}")
    return VerificationResult(ok=ok, checks=checks, challenge=challenge)


def verify_claim(
    claim: ClaimBundle,
    commitment: BoardCommitment,
    geometry: BoardGeometry,
) -> VerificationResult:
    """
    Check a claim bundle against the commitment it was derived from.

    Each claimed coordinate must be a committed hit whose proof verifies,
    every hit must be claimed once, and the order must be canonical.
    """
    checks: list[CheckResult] = []
    challenge: ChallengeRef | None = None

    if len(claim) == geometry.ship_cells:
        checks.append(CheckResult.passed("claim_length", f"Claim holds {len(claim)} entries"))
    else:
        checks.append(CheckResult.failed(
            "claim_length",
            f"Expected {geometry.ship_cells} claim entries, found {len(claim)}",
        ))

    seen: set[str] = set()
    for position, (proof, row, label) in enumerate(claim.entries()):
        key = coordinate_key(row, label)
        entry = commitment.proofs.get(key)
        reason: str | None = None
        if key in seen:
            reason = "duplicate_coordinate"
        elif entry is None:
            reason = "coordinate_not_committed"
        elif not entry.hit:
            reason = "coordinate_is_miss"
        elif not verify_cell(Cell(hit=True, row=row, column=label), proof, commitment.root):
            reason = "proof_invalid"
        seen.add(key)
        if reason is not None:
            checks.append(CheckResult.failed(
                "claim_entries",
                f"Claim entry {position} ({key}) is invalid: {reason}",
                details={"position": position, "key": key, "reason": reason},
            ))
            challenge = ChallengeRef(
                kind="claim_entry", key=key, claim_index=position, reason=reason,
            )
            break
    else:
        checks.append(CheckResult.passed("claim_entries", "Every claimed cell is a committed hit"))

    hits = {key for key, entry in commitment.proofs.items() if entry.hit}
    if seen == hits:
        checks.append(CheckResult.passed("claim_coverage", "Every committed hit is claimed"))
    else:
        checks.append(CheckResult.failed(
            "claim_coverage",
            "Claimed coordinates differ from committed hits",
            details={
                "unclaimed": sorted(hits - seen)[:10],
                "extra": sorted(seen - hits)[:10],
            },
        ))

    try:
        canonical = canonicalize_claims(ProofIndex.from_commitment(commitment, geometry))
    except FleetproofException as e:
        checks.append(CheckResult.failed(
            "claim_order",
            f"Cannot derive canonical order: {e.message}",
            details={"code": e.code},
        ))
    else:
        if (
            canonical.coordinate_numbers == claim.coordinate_numbers
            and canonical.coordinate_literals == claim.coordinate_literals
        ):
            checks.append(CheckResult.passed("claim_order", "Claim order is canonical"))
        else:
            checks.append(CheckResult.failed("claim_order", "Claim order is not canonical"))

    ok = all(c.ok for c in checks)
    logger.info(f"Claim verification: {'ok' if ok else 'failed'}")
    return VerificationResult(ok=ok, checks=checks, challenge=challenge if not ok else None)
