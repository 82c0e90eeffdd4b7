"""
CLI Commit Command

Commit to a hidden board: read the grid, build the Merkle tree over every
cell and write the {root, proofs} commitment.

Usage:
    fleetproof commit data/input.json --out data [--dump-tree] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from core.config import RuntimeConfig
from orchestrator.artifacts.io import load_board, save_commitment, save_tree
from orchestrator.pipeline import create_pipeline


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class CommitSummary:
    """Summary of a commit run for CLI output."""
    root: str = ""
    cells: int = 0
    hits: int = 0
    saved_to: str = ""
    tree_saved_to: str | None = None
    verification_ok: bool | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["tree_saved_to"] is None:
            del d["tree_saved_to"]
        if d["verification_ok"] is None:
            del d["verification_ok"]
        if not d["errors"]:
            del d["errors"]
        return d


def print_summary_human(summary: CommitSummary) -> None:
    print(f"Board Root: {summary.root}")
    print(f"cells: {summary.cells} ({summary.hits} hits)")
    print(f"commitment: {summary.saved_to}")
    if summary.tree_saved_to:
        print(f"tree: {summary.tree_saved_to}")
    if summary.verification_ok is not None:
        print(f"self_check: {'ok' if summary.verification_ok else 'FAILED'}")
    for err in summary.errors[:10]:
        print(f"  ✗ {err}")


def commit_cmd(args: Namespace) -> int:
    """
    Execute the commit command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = args.cli_config

    input_path = Path(args.input) if args.input else config.paths.resolve("input_file")
    out_dir = Path(args.out) if args.out else Path(config.paths.data_dir)

    pipeline = create_pipeline(
        geometry=config.geometry,
        self_check=config.self_check,
        keep_tree=args.dump_tree,
    )

    logger.info(f"Committing board from {input_path}")
    board = load_board(input_path, config.geometry)
    result = pipeline.commit(board)

    saved = save_commitment(result.commitment, out_dir / config.paths.commitment_file)
    summary = CommitSummary(
        root=result.root,
        cells=len(result.index),
        hits=result.index.hit_count,
        saved_to=str(saved),
    )

    if args.dump_tree and result.tree is not None:
        summary.tree_saved_to = str(save_tree(result.tree, out_dir / config.paths.tree_file))

    if result.verification is not None:
        summary.verification_ok = result.verification.ok
        summary.errors = [c.message for c in result.verification.get_failed_checks()]

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.verification_ok is False:
        logger.warning("Commitment self-check failed")
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS
