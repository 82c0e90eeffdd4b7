"""
Board Commitment - Standard Merkle Tree
Value-level tree compatible with OpenZeppelin's StandardMerkleTree.

Owner: Protocol/Crypto Engineer

This module provides:
- StandardMerkleTree: build from typed values, query root and proofs
- Static proof verification that needs no tree instance
- dump/load in the "standard-v1" JSON format

Ordering Rules:
- Leaf hashes are sorted ascending before the tree is built, so the root
  depends only on the set of committed values, not on their input order
- Value indices (used by get_proof) follow input order
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Sequence, Union

from eth_abi.exceptions import EncodingError

from core.crypto.hashing import from_hex, to_hex
from core.merkle.leaf_encoding import standard_leaf_hash
from core.merkle.merkle_tree import (
    MerkleProof,
    get_proof,
    is_valid_merkle_tree,
    make_merkle_tree,
    process_proof,
)
from core.schemas.errors import (
    ErrorCodes,
    LeafNotFoundException,
    MerkleTreeException,
    MerkleVerificationException,
    UnsupportedFormatException,
)
from core.schemas.versioning import (
    LEAF_ENCODING,
    SUPPORTED_TREE_FORMATS,
    TREE_FORMAT,
    is_supported_tree_format,
)


logger = logging.getLogger(__name__)

Digest = Union[bytes, str]


def _as_bytes(node: Digest) -> bytes:
    if isinstance(node, str):
        return from_hex(node)
    return bytes(node)


@dataclass(frozen=True)
class IndexedValue:
    """A committed value and the position of its leaf in the node array."""
    value: tuple[Any, ...]
    tree_index: int


class StandardMerkleTree:
    """
    Merkle tree over ABI-typed values.

    Example:
        >>> tree = StandardMerkleTree.of([(True, 1, "A"), (False, 1, "B")])
        >>> proof = tree.get_proof(0)
        >>> StandardMerkleTree.verify(tree.root, tree.leaf_encoding, (True, 1, "A"), proof)
        True
    """

    def __init__(
        self,
        tree: Sequence[bytes],
        values: Sequence[IndexedValue],
        leaf_encoding: Sequence[str] = LEAF_ENCODING,
    ) -> None:
        self._tree: list[bytes] = [bytes(node) for node in tree]
        self._values: list[IndexedValue] = list(values)
        self.leaf_encoding: tuple[str, ...] = tuple(leaf_encoding)
        self._hash_lookup: dict[bytes, int] = {
            self.leaf_hash(iv.value): i for i, iv in enumerate(self._values)
        }

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def of(
        cls,
        values: Sequence[Sequence[Any]],
        leaf_encoding: Sequence[str] = LEAF_ENCODING,
        sort_leaves: bool = True,
    ) -> "StandardMerkleTree":
        """
        Build a tree over the given values.

        Raises:
            MerkleTreeException: If values is empty
        """
        hashed = [
            (standard_leaf_hash(leaf_encoding, value), value_index, tuple(value))
            for value_index, value in enumerate(values)
        ]
        if sort_leaves:
            hashed.sort(key=lambda item: item[0])

        tree = make_merkle_tree([leaf for leaf, _, _ in hashed])

        indexed: list[IndexedValue | None] = [None] * len(hashed)
        for leaf_index, (_, value_index, value) in enumerate(hashed):
            indexed[value_index] = IndexedValue(value, len(tree) - leaf_index - 1)

        logger.debug(f"Built Merkle tree over {len(hashed)} leaves")
        return cls(tree, indexed, leaf_encoding)  # type: ignore[arg-type]

    @classmethod
    def load(cls, data: dict[str, Any]) -> "StandardMerkleTree":
        """
        Restore a tree from its "standard-v1" dump and validate it.

        Raises:
            UnsupportedFormatException: If the dump format is unknown
            MerkleTreeException: If the restored tree is inconsistent
        """
        fmt = data.get("format")
        if not isinstance(fmt, str) or not is_supported_tree_format(fmt):
            raise UnsupportedFormatException(str(fmt), sorted(SUPPORTED_TREE_FORMATS))

        try:
            tree = [from_hex(node) for node in data["tree"]]
            values = [
                IndexedValue(tuple(entry["value"]), int(entry["treeIndex"]))
                for entry in data["values"]
            ]
            leaf_encoding = data["leafEncoding"]
        except (KeyError, TypeError, ValueError) as e:
            raise MerkleTreeException(
                f"Malformed tree dump: {e}",
                details={"error": str(e)},
            ) from e

        try:
            loaded = cls(tree, values, leaf_encoding)
        except EncodingError as e:
            raise MerkleTreeException(
                f"Tree dump holds a value that does not match its leaf encoding: {e}",
                code=ErrorCodes.LEAF_HASH_MISMATCH,
            ) from e
        loaded.validate()
        return loaded

    def dump(self) -> dict[str, Any]:
        """Serialize to the "standard-v1" JSON shape."""
        return {
            "format": TREE_FORMAT,
            "leafEncoding": list(self.leaf_encoding),
            "tree": [to_hex(node) for node in self._tree],
            "values": [
                {"value": list(iv.value), "treeIndex": iv.tree_index}
                for iv in self._values
            ],
        }

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def root(self) -> bytes:
        return self._tree[0]

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    def __len__(self) -> int:
        return len(self._values)

    def entries(self) -> Iterator[tuple[int, tuple[Any, ...]]]:
        """Iterate (value index, value) in input order."""
        for i, iv in enumerate(self._values):
            yield i, iv.value

    def at(self, index: int) -> tuple[Any, ...]:
        return self._values[index].value

    def leaf_hash(self, value: Sequence[Any]) -> bytes:
        return standard_leaf_hash(self.leaf_encoding, value)

    def leaf_lookup(self, value: Sequence[Any]) -> int:
        """
        Value index of a committed value.

        Raises:
            LeafNotFoundException: If the value was never committed
        """
        index = self._hash_lookup.get(self.leaf_hash(value))
        if index is None:
            raise LeafNotFoundException(tuple(value))
        return index

    def get_proof(self, leaf: Union[int, Sequence[Any]]) -> list[bytes]:
        """
        Sibling path for a value, given by value index or by the value itself.

        Raises:
            TypeError: If leaf is a bool (neither an index nor a value)
            LeafNotFoundException: If the value or index is not in the tree
            MerkleTreeException: If the stored leaf does not match its value
            MerkleVerificationException: If the proof does not reproduce the root
        """
        if isinstance(leaf, bool):
            raise TypeError("get_proof takes a value index or a value, not a bool")
        index = leaf if isinstance(leaf, int) else self.leaf_lookup(leaf)
        self._validate_value(index)
        proof = get_proof(self._tree, self._values[index].tree_index)

        # Sanity check: the proof must reproduce the root
        if not self.verify(self.root, self.leaf_encoding, self._values[index].value, proof):
            raise MerkleVerificationException(
                "Unable to prove value",
                details={"index": index},
            )
        return proof

    def prove(self, index: int) -> MerkleProof:
        """Bundle leaf, siblings and root for a value index."""
        siblings = self.get_proof(index)
        return MerkleProof(
            leaf=self.leaf_hash(self._values[index].value),
            siblings=siblings,
            root=self.root,
        )

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    @staticmethod
    def verify(
        root: Digest,
        leaf_encoding: Sequence[str],
        value: Sequence[Any],
        proof: Sequence[Digest],
    ) -> bool:
        """
        Check a value's inclusion under a root, with no tree at hand.

        Returns:
            True if the proof folds the value's leaf hash into the root
        """
        try:
            leaf = standard_leaf_hash(leaf_encoding, value)
            return process_proof(leaf, [_as_bytes(p) for p in proof]) == _as_bytes(root)
        except (MerkleTreeException, EncodingError, ValueError):
            return False

    def validate(self) -> None:
        """
        Check every value's leaf and every internal node.

        Raises:
            MerkleTreeException: On the first inconsistency
        """
        for i in range(len(self._values)):
            self._validate_value(i)
        if not is_valid_merkle_tree(self._tree):
            raise MerkleTreeException(
                "Merkle tree is invalid",
                code=ErrorCodes.INVALID_TREE,
            )

    def _validate_value(self, index: int) -> bytes:
        if index < 0 or index >= len(self._values):
            raise LeafNotFoundException(index)
        iv = self._values[index]
        tree_index = iv.tree_index
        if tree_index < 0 or tree_index >= len(self._tree):
            raise MerkleTreeException(
                f"Tree index {tree_index} out of range",
                details={"index": index, "tree_index": tree_index},
            )
        leaf = self.leaf_hash(iv.value)
        if leaf != self._tree[tree_index]:
            raise MerkleTreeException(
                "Merkle tree does not contain the expected value",
                code=ErrorCodes.LEAF_HASH_MISMATCH,
                details={"index": index, "tree_index": tree_index},
            )
        return leaf


__all__ = [
    "IndexedValue",
    "StandardMerkleTree",
]
