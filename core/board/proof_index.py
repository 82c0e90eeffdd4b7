"""
Board Commitment - Proof Index

Read-only lookup of hit flag and inclusion proof per coordinate key.
Built once, either from a freshly built tree (commit phase) or from a
published BoardCommitment (claim phase).
"""

from __future__ import annotations

import logging
from typing import Iterator, Mapping

from core.crypto.hashing import to_hex
from core.merkle.standard_tree import StandardMerkleTree
from core.schemas.board import BoardGeometry, Cell, coordinate_key
from core.schemas.commitment import BoardCommitment, ProofEntry
from core.schemas.errors import (
    CoordinateCollisionException,
    CoordinateLookupException,
    SchemaValidationException,
)


logger = logging.getLogger(__name__)


class ProofIndex:
    """
    Mapping "{row}-{label}" -> ProofEntry covering every cell of the board.

    Entries are never overwritten; a repeated coordinate is fatal.
    """

    def __init__(self, geometry: BoardGeometry, entries: Mapping[str, ProofEntry]) -> None:
        self.geometry = geometry
        self._entries: dict[str, ProofEntry] = dict(entries)
        self._require_complete()

    @classmethod
    def from_tree(cls, tree: StandardMerkleTree, geometry: BoardGeometry) -> "ProofIndex":
        """
        Record every committed leaf under its coordinate key.

        Raises:
            CoordinateCollisionException: If two leaves share a coordinate
            SchemaValidationException: If the tree does not cover the board exactly
        """
        entries: dict[str, ProofEntry] = {}
        for i, value in tree.entries():
            cell = Cell.from_leaf_value(value)
            if cell.key in entries:
                raise CoordinateCollisionException(cell.key)
            entries[cell.key] = ProofEntry(
                hit=cell.hit,
                proof=[to_hex(node) for node in tree.get_proof(i)],
            )
        logger.debug(f"Indexed {len(entries)} proofs")
        return cls(geometry, entries)

    @classmethod
    def from_commitment(
        cls,
        commitment: BoardCommitment,
        geometry: BoardGeometry,
    ) -> "ProofIndex":
        """Index a published commitment for the claim phase."""
        return cls(geometry, commitment.proofs)

    def _require_complete(self) -> None:
        expected = set(self.geometry.keys())
        actual = set(self._entries)
        missing = sorted(expected - actual)
        unexpected = sorted(actual - expected)
        if missing or unexpected:
            raise SchemaValidationException(
                f"Proof index must hold exactly {self.geometry.cell_count} coordinates "
                f"({len(missing)} missing, {len(unexpected)} unexpected)",
                field_path="proofs",
                details={"missing": missing[:10], "unexpected": unexpected[:10]},
            )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def lookup(self, row: int, label: str) -> ProofEntry:
        """
        Raises:
            CoordinateLookupException: If (row, label) was never committed
        """
        key = coordinate_key(row, label)
        entry = self._entries.get(key)
        if entry is None:
            raise CoordinateLookupException(key)
        return entry

    def entry_at(self, row: int, col: int) -> ProofEntry:
        """Lookup by 1-based row and 0-based column index."""
        if not self.geometry.contains(row, col):
            raise CoordinateLookupException(f"{row}-#{col}")
        return self.lookup(row, self.geometry.label_for(col))

    def is_hit(self, row: int, label: str) -> bool:
        return self.lookup(row, label).hit

    @property
    def hit_count(self) -> int:
        return sum(1 for entry in self._entries.values() if entry.hit)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> Iterator[str]:
        """Coordinate keys in row-major order."""
        return self.geometry.keys()

    def items(self) -> Iterator[tuple[str, ProofEntry]]:
        for key in self.keys():
            yield key, self._entries[key]

    def to_commitment(self, root: str) -> BoardCommitment:
        return BoardCommitment(root=root, proofs=dict(self.items()))
