"""
Board Commitment - Hashing Utilities
Keccak-256 hashing and hex helpers for Merkle commitments.

This module provides:
- Keccak-256 hashing for raw bytes (EVM-compatible)
- Sorted-pair hashing for Merkle internal nodes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair hashing sorts its inputs bytewise, so a proof never carries left/right flags
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    This is the EVM hash function, not NIST SHA3-256.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def compare_bytes(a: bytes, b: bytes) -> int:
    """
    Bytewise comparison of two digests.

    Returns:
        negative if a < b, zero if equal, positive if a > b
    """
    if len(a) != len(b):
        return len(a) - len(b)
    return (a > b) - (a < b)


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two child digests into their parent.

    The pair is sorted before concatenation:
    parent = keccak256(min(a, b) + max(a, b))

    Args:
        a: One child digest (32 bytes)
        b: The other child digest (32 bytes)

    Returns:
        32-byte parent digest
    """
    if compare_bytes(a, b) <= 0:
        return keccak256(a + b)
    return keccak256(b + a)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Args:
        data: Raw bytes

    Returns:
        Hex string with 0x prefix (e.g., "0x1234abcd")

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "keccak256",
    "compare_bytes",
    "hash_pair",
    "to_hex",
    "from_hex",
]
