"""
Board Commitment - Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleProof: Dataclass representing a Merkle inclusion proof
- make_merkle_tree / get_proof / process_proof: array-level primitives
- StandardMerkleTree: value-level tree (OpenZeppelin "standard-v1" compatible)
- encode_cell / cell_leaf_hash: canonical leaf encoding of a board cell

Canonical Commitment Rules:
1. Leaf hashing: keccak256(keccak256(abi.encode(bool, uint256, string)))
2. Parent hashing: keccak256 over the sorted pair of children
3. Leaves sorted by hash before building; root is order independent
4. Empty tree: construction fails

Usage:
    from core.merkle import StandardMerkleTree

    tree = StandardMerkleTree.of([(True, 1, "A"), (False, 1, "B")])
    proof = tree.get_proof(0)
    assert StandardMerkleTree.verify(tree.root, tree.leaf_encoding, (True, 1, "A"), proof)
"""
from .merkle_tree import (
    MerkleProof,
    make_merkle_tree,
    get_proof,
    process_proof,
    verify_merkle_proof,
    is_valid_merkle_tree,
    compute_tree_depth,
)

from .leaf_encoding import (
    encode_leaf,
    standard_leaf_hash,
    encode_cell,
    cell_leaf_hash,
)

from .standard_tree import (
    IndexedValue,
    StandardMerkleTree,
)


__all__ = [
    # Core types
    "MerkleProof",
    "IndexedValue",
    "StandardMerkleTree",
    # Core functions
    "make_merkle_tree",
    "get_proof",
    "process_proof",
    "verify_merkle_proof",
    "is_valid_merkle_tree",
    "compute_tree_depth",
    # Leaf encoding
    "encode_leaf",
    "standard_leaf_hash",
    "encode_cell",
    "cell_leaf_hash",
]
