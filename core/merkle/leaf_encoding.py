"""
Board Commitment - Leaf Encoding
Canonical byte encoding and hashing of committed values.

Encoding Rules (Hard Contracts):
1. A value is ABI-encoded against its type list, e.g. a cell
   (hit, row, column) against ("bool", "uint256", "string")
2. Leaf hash: keccak256(keccak256(abi_encode(types, value)))

The double hash keeps a 64-byte internal-node preimage from ever
decoding as a leaf. Both rules must match the on-chain verifier.
"""
from __future__ import annotations

from typing import Any, Sequence

from eth_abi import encode

from core.crypto.hashing import keccak256
from core.schemas.board import Cell
from core.schemas.versioning import LEAF_ENCODING


def encode_leaf(leaf_encoding: Sequence[str], value: Sequence[Any]) -> bytes:
    """
    ABI-encode a value against its type list.

    Raises:
        ValueError: If the value does not match the type list in length
    """
    if len(leaf_encoding) != len(value):
        raise ValueError(
            f"Value has {len(value)} fields, leaf encoding expects {len(leaf_encoding)}"
        )
    return encode(list(leaf_encoding), list(value))


def standard_leaf_hash(leaf_encoding: Sequence[str], value: Sequence[Any]) -> bytes:
    """Double keccak of the ABI encoding."""
    return keccak256(keccak256(encode_leaf(leaf_encoding, value)))


def encode_cell(cell: Cell) -> bytes:
    """
    Canonical bytes of a cell: abi.encode(bool hit, uint256 row, string column).

    Row is the 1-based row number; column is the letter label.
    """
    return encode_leaf(LEAF_ENCODING, cell.as_leaf_value())


def cell_leaf_hash(cell: Cell) -> bytes:
    """Leaf hash committed to the tree for a cell."""
    return standard_leaf_hash(LEAF_ENCODING, cell.as_leaf_value())


__all__ = [
    "encode_leaf",
    "standard_leaf_hash",
    "encode_cell",
    "cell_leaf_hash",
]
