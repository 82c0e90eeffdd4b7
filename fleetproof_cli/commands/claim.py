"""
CLI Claim Command

Produce the canonical claim bundle from a published commitment.

Usage:
    fleetproof claim [--commitment data/output.json] [--out data/output_claim.json] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from core.config import RuntimeConfig
from orchestrator.artifacts.io import load_commitment, save_claim
from orchestrator.pipeline import create_pipeline


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def claim_cmd(args: Namespace) -> int:
    """
    Execute the claim command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = args.cli_config

    commitment_path = (
        Path(args.commitment) if args.commitment
        else config.paths.resolve("commitment_file")
    )
    out_path = Path(args.out) if args.out else config.paths.resolve("claim_file")

    pipeline = create_pipeline(geometry=config.geometry, self_check=config.self_check)

    commitment = load_commitment(commitment_path)
    bundle = pipeline.claim(commitment)
    saved = save_claim(bundle, out_path)

    verification_ok = None
    if config.self_check:
        verification_ok = pipeline.verify(commitment, bundle).ok

    if args.json:
        data = {
            "claimed": len(bundle),
            "saved_to": str(saved),
            "coordinates": [
                f"{row}-{label}"
                for row, label in zip(bundle.coordinate_numbers, bundle.coordinate_literals)
            ],
        }
        if verification_ok is not None:
            data["verification_ok"] = verification_ok
        print(json.dumps(data, indent=2))
    else:
        print(f"claimed: {len(bundle)}")
        print(f"claim: {saved}")
        if verification_ok is not None:
            print(f"self_check: {'ok' if verification_ok else 'FAILED'}")

    if verification_ok is False:
        logger.warning("Claim self-check failed")
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS
