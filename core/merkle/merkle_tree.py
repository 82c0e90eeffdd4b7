"""
Board Commitment - Merkle Tree Implementation
Array-backed complete binary Merkle tree with sorted-pair hashing.

This module provides:
- Tree construction from leaf hashes
- Proof generation for any leaf position
- Proof processing and verification
- Whole-tree integrity validation

Canonical Commitment Rules (Hard Contracts):
1. Parent hashing: parent = keccak256(sorted(left, right) concatenated)
   - Implemented via core.crypto.hashing.hash_pair()
2. Layout: a tree over n leaves is an array of 2n - 1 nodes.
   Node i has children 2i + 1 and 2i + 2; the root is node 0.
3. Leaves occupy the last n slots, leaf 0 at the very end.
4. A proof is the list of sibling hashes from the leaf up to, not
   including, the root. No left/right flags are needed.
5. Empty leaves: construction fails. There is no empty-tree root.

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves; callers that need order independence
  sort the leaf hashes before building (see standard_tree.py)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import hash_pair
from core.schemas.errors import ErrorCodes, MerkleTreeException


NODE_SIZE = 32


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven
        siblings: Sibling hashes from bottom to top of the tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    siblings: list[bytes]
    root: bytes


# =============================================================================
# Index arithmetic
# =============================================================================

def is_tree_node(tree: Sequence[bytes], i: int) -> bool:
    return 0 <= i < len(tree)


def is_internal_node(tree: Sequence[bytes], i: int) -> bool:
    return is_tree_node(tree, left_child_index(i))


def is_leaf_node(tree: Sequence[bytes], i: int) -> bool:
    return is_tree_node(tree, i) and not is_internal_node(tree, i)


def left_child_index(i: int) -> int:
    return 2 * i + 1


def right_child_index(i: int) -> int:
    return 2 * i + 2


def parent_index(i: int) -> int:
    if i <= 0:
        raise MerkleTreeException("Root has no parent", details={"index": i})
    return (i - 1) // 2


def sibling_index(i: int) -> int:
    """Odd indices are left children, even indices right children."""
    if i <= 0:
        raise MerkleTreeException("Root has no siblings", details={"index": i})
    return i + 1 if i % 2 == 1 else i - 1


def _check_node(node: bytes) -> None:
    if not isinstance(node, (bytes, bytearray)) or len(node) != NODE_SIZE:
        raise MerkleTreeException(
            f"Merkle tree nodes must be {NODE_SIZE}-byte digests",
            details={"node": repr(node)},
        )


def _check_leaf_node(tree: Sequence[bytes], i: int) -> None:
    if not is_leaf_node(tree, i):
        raise MerkleTreeException(
            f"Index {i} is not a leaf",
            details={"index": i, "tree_size": len(tree)},
        )


# =============================================================================
# Construction, proofs, verification
# =============================================================================

def make_merkle_tree(leaves: Sequence[bytes]) -> list[bytes]:
    """
    Build the node array for a sequence of leaf hashes.

    Example: leaves [a, b, c] -> [root, x, c, b, a] where x = pair(b, a)
    and root = pair(x, c).

    Args:
        leaves: Leaf hashes, each 32 bytes. Order is preserved.

    Returns:
        Node array of length 2n - 1; node 0 is the root

    Raises:
        MerkleTreeException: If leaves is empty or a leaf is malformed
    """
    if len(leaves) == 0:
        raise MerkleTreeException(
            "Expected non-zero number of leaves",
            code=ErrorCodes.EMPTY_TREE,
        )
    for leaf in leaves:
        _check_node(leaf)

    tree: list[bytes] = [b""] * (2 * len(leaves) - 1)

    for i, leaf in enumerate(leaves):
        tree[len(tree) - 1 - i] = bytes(leaf)

    for i in range(len(tree) - 1 - len(leaves), -1, -1):
        tree[i] = hash_pair(tree[left_child_index(i)], tree[right_child_index(i)])

    return tree


def get_proof(tree: Sequence[bytes], index: int) -> list[bytes]:
    """
    Collect the sibling path from the leaf at tree position `index` to the root.

    Raises:
        MerkleTreeException: If index is not a leaf position
    """
    _check_leaf_node(tree, index)

    proof: list[bytes] = []
    while index > 0:
        proof.append(tree[sibling_index(index)])
        index = parent_index(index)
    return proof


def process_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    """Fold the proof into the leaf, returning the implied root."""
    _check_node(leaf)
    computed = bytes(leaf)
    for sibling in proof:
        _check_node(sibling)
        computed = hash_pair(computed, sibling)
    return computed


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof against its claimed root.

    Returns:
        True if the proof is valid, False otherwise
    """
    try:
        return process_proof(proof.leaf, proof.siblings) == proof.root
    except MerkleTreeException:
        return False


def is_valid_merkle_tree(tree: Sequence[bytes]) -> bool:
    """Recompute every internal node and compare."""
    if len(tree) == 0:
        return False
    for i, node in enumerate(tree):
        if not isinstance(node, (bytes, bytearray)) or len(node) != NODE_SIZE:
            return False
        left = left_child_index(i)
        right = right_child_index(i)
        if right >= len(tree):
            if left < len(tree):
                # Complete-tree layout never leaves a node with a single child
                return False
        elif node != hash_pair(tree[left], tree[right]):
            return False
    return True


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels from the deepest leaf to the root, inclusive.

    A single leaf has depth 1, two leaves depth 2, three leaves depth 3.
    """
    if num_leaves <= 0:
        return 0
    return (2 * num_leaves - 1).bit_length()


__all__ = [
    "MerkleProof",
    "is_tree_node",
    "is_internal_node",
    "is_leaf_node",
    "left_child_index",
    "right_child_index",
    "parent_index",
    "sibling_index",
    "make_merkle_tree",
    "get_proof",
    "process_proof",
    "verify_merkle_proof",
    "is_valid_merkle_tree",
    "compute_tree_depth",
]
