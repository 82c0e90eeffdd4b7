"""
Standard Merkle Tree Unit Tests
Tests for core/merkle/standard_tree.py

Tests:
1. Root is independent of value insertion order
2. Every value proves against the root (by index and by value)
3. Static verification rejects tampered values, proofs and roots
4. dump/load in the "standard-v1" format, with validation on load
"""
import pytest

from core.crypto.hashing import keccak256, to_hex
from core.merkle.merkle_tree import compute_tree_depth, verify_merkle_proof
from core.merkle.standard_tree import StandardMerkleTree
from core.schemas.errors import (
    ErrorCodes,
    LeafNotFoundException,
    MerkleTreeException,
    UnsupportedFormatException,
)
from core.schemas.versioning import LEAF_ENCODING, TREE_FORMAT


VALUES = [
    (True, 1, "A"),
    (False, 1, "B"),
    (True, 2, "A"),
    (False, 2, "B"),
    (False, 3, "A"),
]


@pytest.fixture
def tree():
    return StandardMerkleTree.of(VALUES)


class TestConstruction:
    """Tests for StandardMerkleTree.of()."""

    def test_empty_values_raise(self):
        with pytest.raises(MerkleTreeException) as exc_info:
            StandardMerkleTree.of([])
        assert exc_info.value.code == ErrorCodes.EMPTY_TREE

    def test_root_independent_of_insertion_order(self, tree):
        reordered = StandardMerkleTree.of(list(reversed(VALUES)))
        assert reordered.root == tree.root

    def test_root_changes_with_any_flag(self, tree):
        flipped = [(not VALUES[0][0],) + VALUES[0][1:]] + VALUES[1:]
        assert StandardMerkleTree.of(flipped).root != tree.root

    def test_value_indices_follow_input_order(self, tree):
        assert [value for _, value in tree.entries()] == VALUES
        assert tree.at(2) == (True, 2, "A")
        assert len(tree) == len(VALUES)

    def test_root_hex(self, tree):
        assert tree.root_hex == to_hex(tree.root)
        assert len(tree.root) == 32


class TestProofs:
    """Tests for proof generation."""

    def test_every_value_verifies(self, tree):
        for i, value in tree.entries():
            proof = tree.get_proof(i)
            assert StandardMerkleTree.verify(tree.root, LEAF_ENCODING, value, proof)

    def test_proof_by_value_equals_proof_by_index(self, tree):
        assert tree.get_proof((True, 2, "A")) == tree.get_proof(2)

    def test_hex_inputs_accepted(self, tree):
        proof = [to_hex(p) for p in tree.get_proof(0)]
        assert StandardMerkleTree.verify(tree.root_hex, LEAF_ENCODING, VALUES[0], proof)

    def test_proof_length_bounded(self, tree):
        depth = compute_tree_depth(len(VALUES))
        for i, _ in tree.entries():
            assert len(tree.get_proof(i)) <= depth - 1

    def test_prove_bundles_leaf_and_root(self, tree):
        merkle_proof = tree.prove(1)
        assert merkle_proof.root == tree.root
        assert merkle_proof.leaf == tree.leaf_hash(VALUES[1])
        assert verify_merkle_proof(merkle_proof)

    def test_unknown_value_raises(self, tree):
        with pytest.raises(LeafNotFoundException):
            tree.get_proof((True, 9, "Z"))

    def test_out_of_range_index_raises(self, tree):
        with pytest.raises(LeafNotFoundException):
            tree.get_proof(len(VALUES))

    def test_bool_is_not_an_index(self, tree):
        with pytest.raises(TypeError):
            tree.get_proof(True)

    def test_leaf_lookup(self, tree):
        assert tree.leaf_lookup((False, 2, "B")) == 3


class TestStaticVerify:
    """Tests for StandardMerkleTree.verify()."""

    def test_flipped_hit_fails(self, tree):
        proof = tree.get_proof(0)
        assert not StandardMerkleTree.verify(tree.root, LEAF_ENCODING, (False, 1, "A"), proof)

    def test_wrong_coordinate_fails(self, tree):
        proof = tree.get_proof(0)
        assert not StandardMerkleTree.verify(tree.root, LEAF_ENCODING, (True, 1, "B"), proof)

    def test_tampered_sibling_fails(self, tree):
        proof = tree.get_proof(0)
        proof[0] = keccak256(b"forged")
        assert not StandardMerkleTree.verify(tree.root, LEAF_ENCODING, VALUES[0], proof)

    def test_wrong_root_fails(self, tree):
        proof = tree.get_proof(0)
        assert not StandardMerkleTree.verify(keccak256(b"x"), LEAF_ENCODING, VALUES[0], proof)

    def test_malformed_proof_returns_false(self, tree):
        assert not StandardMerkleTree.verify(tree.root, LEAF_ENCODING, VALUES[0], ["nothex"])

    def test_value_not_matching_encoding_returns_false(self, tree):
        proof = tree.get_proof(0)
        assert not StandardMerkleTree.verify(tree.root, LEAF_ENCODING, (True, -1, "A"), proof)


class TestDumpLoad:
    """Tests for the standard-v1 dump format."""

    def test_dump_shape(self, tree):
        data = tree.dump()
        assert data["format"] == TREE_FORMAT == "standard-v1"
        assert data["leafEncoding"] == ["bool", "uint256", "string"]
        assert len(data["tree"]) == 2 * len(VALUES) - 1
        assert data["tree"][0] == tree.root_hex
        assert data["values"][0]["value"] == [True, 1, "A"]

    def test_leaves_occupy_tail(self, tree):
        data = tree.dump()
        indices = sorted(v["treeIndex"] for v in data["values"])
        assert indices == list(range(len(VALUES) - 1, 2 * len(VALUES) - 1))

    def test_load_restores_root_and_proofs(self, tree):
        loaded = StandardMerkleTree.load(tree.dump())
        assert loaded.root == tree.root
        assert loaded.get_proof(3) == tree.get_proof(3)

    def test_unsupported_format(self, tree):
        data = tree.dump()
        data["format"] = "simple-v1"
        with pytest.raises(UnsupportedFormatException):
            StandardMerkleTree.load(data)

    def test_missing_field(self, tree):
        data = tree.dump()
        del data["values"]
        with pytest.raises(MerkleTreeException):
            StandardMerkleTree.load(data)

    def test_tampered_value_rejected(self, tree):
        data = tree.dump()
        data["values"][0]["value"] = [False, 1, "A"]
        with pytest.raises(MerkleTreeException) as exc_info:
            StandardMerkleTree.load(data)
        assert exc_info.value.code == ErrorCodes.LEAF_HASH_MISMATCH

    def test_tampered_internal_node_rejected(self, tree):
        data = tree.dump()
        data["tree"][0] = to_hex(keccak256(b"forged"))
        with pytest.raises(MerkleTreeException) as exc_info:
            StandardMerkleTree.load(data)
        assert exc_info.value.code == ErrorCodes.INVALID_TREE


class TestKnownVectors:
    """
    Fixed outputs of OpenZeppelin's StandardMerkleTree.of(values, ["bool", "uint256", "string"])
    for a 2x2 board; an on-chain verifier recomputes exactly these digests.
    """

    BOARD = [(True, 1, "A"), (False, 1, "B"), (False, 2, "A"), (True, 2, "B")]
    ROOT = "0xc8575ee3d3d16646e06ab8608a93529a19a93ab4872411920c67f7c3b75d610f"
    LEAF_1A = "0x9ed5def60ed9f6558fd206777ae51eb216c49f59ac1ef5c6c56a4030b1ef1df0"
    PROOF_1A = [
        "0xb5c1efac43d01dd362a2446af7f3eb678cbd95246865c8078f8ad5b28c74e23f",
        "0x122596564d00207c1804daf0040030ec7bb44eeff4f4754846d3e82127fa88f7",
    ]
    PROOF_2B = [
        "0x00aa7f35d10a637b7cc8017885e754d6b9d18a761517ff98bda1d2f5f996a7bb",
        "0x88ac02114698d7297b6cba3553ab226b788e7965c088077432b4cfab6dc8bff2",
    ]

    def test_root(self):
        assert StandardMerkleTree.of(self.BOARD).root_hex == self.ROOT

    def test_leaf_hash(self):
        tree = StandardMerkleTree.of(self.BOARD)
        assert to_hex(tree.leaf_hash(self.BOARD[0])) == self.LEAF_1A

    def test_proofs(self):
        tree = StandardMerkleTree.of(self.BOARD)
        assert [to_hex(p) for p in tree.get_proof(0)] == self.PROOF_1A
        assert [to_hex(p) for p in tree.get_proof(3)] == self.PROOF_2B

    def test_tree_indices(self):
        data = StandardMerkleTree.of(self.BOARD).dump()
        assert [v["treeIndex"] for v in data["values"]] == [4, 3, 6, 5]

    def test_three_leaf_root(self):
        tree = StandardMerkleTree.of(self.BOARD[:2] + [(True, 2, "A")])
        assert tree.root_hex == "0x72b214f65919e56777360611f36f4ca7ea8e339da860641d36b48f1968d22bd0"
        assert [to_hex(p) for p in tree.get_proof(2)] == [
            "0x88ac02114698d7297b6cba3553ab226b788e7965c088077432b4cfab6dc8bff2",
        ]
