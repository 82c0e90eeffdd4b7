"""
CLI command modules.
"""

from fleetproof_cli.commands import claim, commit, verify

__all__ = ["commit", "claim", "verify"]
