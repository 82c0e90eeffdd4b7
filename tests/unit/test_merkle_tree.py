"""
Merkle Tree Unit Tests
Tests for core/merkle/merkle_tree.py

Tests:
1. Layout - leaves at the end of a 2n - 1 node array, root at node 0
2. Proof verification - every leaf position proves against the root
3. Tamper detection - tampered sibling/leaf/root fails verification
4. Empty leaves - construction raises EMPTY_TREE
5. Single leaf - root equals leaf, proof is empty
"""
import pytest

from core.crypto.hashing import hash_pair, keccak256
from core.merkle.merkle_tree import (
    MerkleProof,
    compute_tree_depth,
    get_proof,
    is_valid_merkle_tree,
    left_child_index,
    make_merkle_tree,
    parent_index,
    process_proof,
    right_child_index,
    sibling_index,
    verify_merkle_proof,
)
from core.schemas.errors import ErrorCodes, MerkleTreeException


def _leaves(n: int) -> list[bytes]:
    return [keccak256(f"leaf{i}".encode()) for i in range(n)]


class TestIndexArithmetic:
    """Tests for node index helpers."""

    def test_children(self):
        assert left_child_index(0) == 1
        assert right_child_index(0) == 2
        assert left_child_index(2) == 5

    def test_parent(self):
        assert parent_index(1) == 0
        assert parent_index(2) == 0
        assert parent_index(6) == 2

    def test_sibling(self):
        assert sibling_index(1) == 2
        assert sibling_index(2) == 1
        assert sibling_index(5) == 6

    def test_root_has_no_parent_or_sibling(self):
        with pytest.raises(MerkleTreeException):
            parent_index(0)
        with pytest.raises(MerkleTreeException):
            sibling_index(0)


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_empty_leaves_raises(self):
        with pytest.raises(MerkleTreeException) as exc_info:
            make_merkle_tree([])
        assert exc_info.value.code == ErrorCodes.EMPTY_TREE

    def test_malformed_leaf_raises(self):
        with pytest.raises(MerkleTreeException):
            make_merkle_tree([b"short"])


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        leaf = keccak256(b"single leaf")
        tree = make_merkle_tree([leaf])
        assert tree == [leaf]

    def test_single_leaf_proof_no_siblings(self):
        leaf = keccak256(b"single leaf")
        tree = make_merkle_tree([leaf])
        assert get_proof(tree, 0) == []
        assert process_proof(leaf, []) == leaf


class TestLayout:
    """Tests for the array layout."""

    def test_three_leaves(self):
        a, b, c = _leaves(3)
        tree = make_merkle_tree([a, b, c])

        assert len(tree) == 5
        assert tree[4] == a
        assert tree[3] == b
        assert tree[2] == c
        assert tree[1] == hash_pair(b, a)
        assert tree[0] == hash_pair(tree[1], c)

    def test_node_count(self):
        for n in (1, 2, 5, 8, 100):
            assert len(make_merkle_tree(_leaves(n))) == 2 * n - 1

    def test_valid_tree(self):
        assert is_valid_merkle_tree(make_merkle_tree(_leaves(7)))

    def test_tampered_tree_invalid(self):
        tree = make_merkle_tree(_leaves(7))
        tree[3] = keccak256(b"tampered")
        assert not is_valid_merkle_tree(tree)

    def test_empty_tree_invalid(self):
        assert not is_valid_merkle_tree([])


class TestProofs:
    """Tests for proof generation and verification."""

    @pytest.mark.parametrize("n", [2, 3, 4, 7, 100])
    def test_every_leaf_verifies(self, n):
        leaves = _leaves(n)
        tree = make_merkle_tree(leaves)
        for i in range(n):
            position = len(tree) - 1 - i
            proof = get_proof(tree, position)
            assert process_proof(leaves[i], proof) == tree[0]

    def test_proof_of_internal_node_rejected(self):
        tree = make_merkle_tree(_leaves(4))
        with pytest.raises(MerkleTreeException):
            get_proof(tree, 0)

    def test_tampered_sibling_fails(self):
        leaves = _leaves(4)
        tree = make_merkle_tree(leaves)
        siblings = get_proof(tree, len(tree) - 1)
        siblings[0] = keccak256(b"forged")
        proof = MerkleProof(leaf=leaves[0], siblings=siblings, root=tree[0])
        assert verify_merkle_proof(proof) is False

    def test_tampered_leaf_fails(self):
        leaves = _leaves(4)
        tree = make_merkle_tree(leaves)
        proof = MerkleProof(
            leaf=keccak256(b"forged"),
            siblings=get_proof(tree, len(tree) - 1),
            root=tree[0],
        )
        assert verify_merkle_proof(proof) is False

    def test_tampered_root_fails(self):
        leaves = _leaves(4)
        tree = make_merkle_tree(leaves)
        proof = MerkleProof(
            leaf=leaves[0],
            siblings=get_proof(tree, len(tree) - 1),
            root=keccak256(b"forged"),
        )
        assert verify_merkle_proof(proof) is False

    def test_malformed_sibling_returns_false(self):
        leaves = _leaves(2)
        tree = make_merkle_tree(leaves)
        proof = MerkleProof(leaf=leaves[0], siblings=[b"bad"], root=tree[0])
        assert verify_merkle_proof(proof) is False


class TestTreeDepth:
    """Tests for compute_tree_depth()."""

    def test_depths(self):
        assert compute_tree_depth(0) == 0
        assert compute_tree_depth(1) == 1
        assert compute_tree_depth(2) == 2
        assert compute_tree_depth(3) == 3
        assert compute_tree_depth(4) == 3
        assert compute_tree_depth(100) == 8

    def test_proof_length_bounded_by_depth(self):
        tree = make_merkle_tree(_leaves(100))
        depth = compute_tree_depth(100)
        for position in range(99, len(tree)):
            assert len(get_proof(tree, position)) <= depth - 1
