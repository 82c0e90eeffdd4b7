"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m fleetproof_cli commit [<input>] [--out DIR] [--dump-tree] [--json]
    python -m fleetproof_cli claim [--commitment PATH] [--out PATH] [--json]
    python -m fleetproof_cli verify <commitment> [--claim PATH] [--json] [--debug]
    python -m fleetproof_cli config --init|--show

Environment Variables:
    FLEETPROOF_ROWS             Board rows (default: 10)
    FLEETPROOF_COLUMNS          Board columns, at most 26 (default: 10)
    FLEETPROOF_SHIP_CELLS       Required ship cells (default: 20)
    FLEETPROOF_DATA_DIR         Artifact directory (default: data)
    FLEETPROOF_LOG_LEVEL        Log level (default: INFO)
    FLEETPROOF_LOG_FILE         Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.schemas.errors import FleetproofException
from fleetproof_cli import __version__
from fleetproof_cli.commands import claim, commit, verify
from fleetproof_cli.config import (
    DEFAULT_CONFIG_FILENAME,
    get_default_config_template,
    load_config,
)
from orchestrator.artifacts.io import ArtifactIOError


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="fleetproof",
        description="Fleetproof CLI - Commit to a hidden board and prove ship segments.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./fleetproof.json or ~/.config/fleetproof/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- commit command ---
    commit_parser = subparsers.add_parser(
        "commit",
        help="Commit to a board grid",
        description="Build the Merkle commitment over every cell and write {root, proofs}.",
    )
    commit_parser.add_argument(
        "input",
        type=str,
        nargs="?",
        default=None,
        help="Input grid JSON (default: <data_dir>/input.json)",
    )
    commit_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output directory (default: data_dir from config)",
    )
    commit_parser.add_argument(
        "--dump-tree",
        action="store_true",
        default=False,
        help="Also write the full standard-v1 tree dump",
    )
    commit_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    commit_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on error",
    )
    commit_parser.set_defaults(func=commit.commit_cmd)

    # --- claim command ---
    claim_parser = subparsers.add_parser(
        "claim",
        help="Produce the canonical claim bundle",
        description="Order every committed hit into ship segments and write the claim bundle.",
    )
    claim_parser.add_argument(
        "--commitment",
        type=str,
        default=None,
        help="Commitment JSON (default: <data_dir>/output.json)",
    )
    claim_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Claim output path (default: <data_dir>/output_claim.json)",
    )
    claim_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    claim_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on error",
    )
    claim_parser.set_defaults(func=claim.claim_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a commitment and optional claim bundle offline",
        description="Recompute every leaf, fold every proof into the root and check claims.",
    )
    verify_parser.add_argument(
        "commitment",
        type=str,
        help="Commitment JSON",
    )
    verify_parser.add_argument(
        "--claim",
        type=str,
        default=None,
        help="Claim bundle JSON to check against the commitment",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include detailed checks",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_FILENAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (FLEETPROOF_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: fleetproof config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except FleetproofException as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ArtifactIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
