"""
CLI Verify Command

Verify published artifacts offline:
- Recompute every leaf from its coordinate key and hit flag
- Fold each proof into the root
- Optionally check a claim bundle against the commitment

Usage:
    fleetproof verify data/output.json [--claim data/output_claim.json] [--json] [--debug]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from core.config import RuntimeConfig
from core.schemas.verification import VerificationResult
from orchestrator.artifacts.io import load_claim, load_commitment
from orchestrator.pipeline import create_pipeline


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of artifact verification for CLI output."""
    commitment_path: str = ""
    claim_path: str | None = None
    root: str = ""
    ok: bool = False
    checks: list[dict[str, Any]] = field(default_factory=list)
    challenge: dict[str, Any] | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["claim_path"] is None:
            del d["claim_path"]
        if not d["checks"]:
            del d["checks"]
        if d["challenge"] is None:
            del d["challenge"]
        if not d["errors"]:
            del d["errors"]
        return d


def build_summary(
    commitment_path: str,
    claim_path: str | None,
    root: str,
    result: VerificationResult,
    debug: bool = False,
) -> VerifySummary:
    """Build a VerifySummary from a verification result."""
    summary = VerifySummary(
        commitment_path=commitment_path,
        claim_path=claim_path,
        root=root,
        ok=result.ok,
        errors=[c.message for c in result.get_failed_checks()],
    )
    if result.challenge is not None:
        summary.challenge = result.challenge.model_dump(exclude_none=True)
    if debug:
        summary.checks = [
            {"check_id": c.check_id, "ok": c.ok, "message": c.message}
            for c in result.checks
        ]
    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"commitment: {summary.commitment_path}")
    if summary.claim_path:
        print(f"claim: {summary.claim_path}")
    print(f"root: {summary.root}")
    print(f"ok: {str(summary.ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors[:10]:
            print(f"  ✗ {err}")

    if summary.challenge:
        print(f"\nchallenge: {summary.challenge.get('kind')} "
              f"{summary.challenge.get('key', '')} ({summary.challenge.get('reason', '')})")

    if summary.checks:
        passed = sum(1 for c in summary.checks if c["ok"])
        print(f"\nchecks: {passed} passed, {len(summary.checks) - passed} failed")
        for check in summary.checks:
            status = "✓" if check["ok"] else "✗"
            print(f"  {status} {check['check_id']}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = args.cli_config

    commitment_path = Path(args.commitment)
    claim_path = Path(args.claim) if args.claim else None

    commitment = load_commitment(commitment_path)
    claim = load_claim(claim_path) if claim_path else None

    pipeline = create_pipeline(geometry=config.geometry)
    result = pipeline.verify(commitment, claim)

    summary = build_summary(
        commitment_path=str(commitment_path),
        claim_path=str(claim_path) if claim_path else None,
        root=commitment.root,
        result=result,
        debug=args.debug,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
