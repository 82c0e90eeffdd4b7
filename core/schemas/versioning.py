"""
Board Commitment - Schemas
File: versioning.py

Purpose: Centralize wire-format version constants.
This file must remain tiny and have no imports from other schema files
to avoid circular dependencies.

The leaf encoding and tree format are a compatibility contract with
whatever verifier consumes the root and proofs. Changing either one
requires a new format identifier.
"""

from typing import Literal

# Tree dump format (OpenZeppelin StandardMerkleTree compatible)
TREE_FORMAT: str = "standard-v1"

# ABI types of a committed cell: (hit, row, column label)
LEAF_ENCODING: tuple[str, ...] = ("bool", "uint256", "string")

# Type alias for the tree format
TreeFormat = Literal["standard-v1"]

SUPPORTED_TREE_FORMATS: frozenset[str] = frozenset({"standard-v1"})


def is_supported_tree_format(fmt: str) -> bool:
    """Check if a tree dump format is supported without raising."""
    return fmt in SUPPORTED_TREE_FORMATS
