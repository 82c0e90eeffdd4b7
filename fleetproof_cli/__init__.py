"""
Fleetproof CLI

Command-line interface for committing to a hidden board and producing
canonical ship-segment claims.

Usage:
    python -m fleetproof_cli commit data/input.json --out data
    python -m fleetproof_cli claim --commitment data/output.json
    python -m fleetproof_cli verify data/output.json --claim data/output_claim.json
    python -m fleetproof_cli config --init
"""

__version__ = "0.1.0"
