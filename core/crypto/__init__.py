"""
Core cryptographic utilities.

Keccak-256 hashing and sorted-pair node hashing for board commitments.
"""
from .hashing import (
    keccak256,
    compare_bytes,
    hash_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "keccak256",
    "compare_bytes",
    "hash_pair",
    "to_hex",
    "from_hex",
]
