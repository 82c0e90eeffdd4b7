"""
Leaf Encoding Unit Tests
Tests for core/merkle/leaf_encoding.py

The byte layout must match Solidity's abi.encode(bool, uint256, string)
so that an on-chain verifier recomputes the same leaf.
"""
import pytest

from core.crypto.hashing import keccak256
from core.merkle.leaf_encoding import (
    cell_leaf_hash,
    encode_cell,
    encode_leaf,
    standard_leaf_hash,
)
from core.schemas.board import Cell
from core.schemas.versioning import LEAF_ENCODING


def _word(n: int) -> bytes:
    return n.to_bytes(32, "big")


class TestEncodeCell:
    """Tests for the ABI layout of a cell."""

    def test_hit_cell_layout(self):
        encoded = encode_cell(Cell(hit=True, row=1, column="A"))

        assert len(encoded) == 160
        assert encoded[0:32] == _word(1)          # hit
        assert encoded[32:64] == _word(1)         # row
        assert encoded[64:96] == _word(96)        # string offset
        assert encoded[96:128] == _word(1)        # string length
        assert encoded[128:160] == b"A" + b"\x00" * 31

    def test_miss_cell_layout(self):
        encoded = encode_cell(Cell(hit=False, row=10, column="J"))

        assert encoded[0:32] == _word(0)
        assert encoded[32:64] == _word(10)
        assert encoded[128:129] == b"J"

    def test_matches_generic_encoder(self):
        cell = Cell(hit=True, row=3, column="C")
        assert encode_cell(cell) == encode_leaf(LEAF_ENCODING, (True, 3, "C"))


class TestLeafHash:
    """Tests for the double-keccak leaf hash."""

    def test_double_keccak(self):
        cell = Cell(hit=True, row=2, column="B")
        assert cell_leaf_hash(cell) == keccak256(keccak256(encode_cell(cell)))

    def test_hit_flag_changes_leaf(self):
        hit = cell_leaf_hash(Cell(hit=True, row=2, column="B"))
        miss = cell_leaf_hash(Cell(hit=False, row=2, column="B"))
        assert hit != miss

    def test_coordinates_change_leaf(self):
        a = cell_leaf_hash(Cell(hit=True, row=1, column="B"))
        b = cell_leaf_hash(Cell(hit=True, row=2, column="A"))
        assert a != b

    def test_generic_hash_matches_cell_hash(self):
        cell = Cell(hit=False, row=4, column="D")
        assert standard_leaf_hash(LEAF_ENCODING, cell.as_leaf_value()) == cell_leaf_hash(cell)


class TestEncodeLeafValidation:
    """Tests for type-list mismatches."""

    def test_wrong_field_count(self):
        with pytest.raises(ValueError, match="fields"):
            encode_leaf(LEAF_ENCODING, (True, 1))


class TestKnownLeafHash:
    """Leaf digest an on-chain verifier computes for abi.encode(true, 1, "A")."""

    def test_hit_1a(self):
        leaf = cell_leaf_hash(Cell(hit=True, row=1, column="A"))
        assert leaf.hex() == "9ed5def60ed9f6558fd206777ae51eb216c49f59ac1ef5c6c56a4030b1ef1df0"

    def test_keccak_reference(self):
        assert keccak256(b"abc").hex() == (
            "4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45"
        )
