"""
Board Commitment - Schemas
File: commitment.py

Purpose: Published artifacts of the two phases.

- BoardCommitment: {root, proofs: {"{row}-{label}": {hit, proof}}}
- ClaimBundle: {sortedProofs, coordinateNumbers, coordinateLiterals}

Digests are 0x-prefixed, lowercase, 32-byte hex strings.
"""

import re
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .board import parse_coordinate_key


_DIGEST_RE = re.compile(r"^0x[0-9a-f]{64}$")


def _check_digest(value: str) -> str:
    if not _DIGEST_RE.match(value):
        raise ValueError(f"Expected 0x-prefixed 32-byte hex digest, got {value!r}")
    return value


class ProofEntry(BaseModel):
    """Hit flag and inclusion proof for one committed coordinate."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hit: bool = Field(..., description="Whether the committed cell is a ship cell")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests from the leaf up to the root",
    )

    @field_validator("proof")
    @classmethod
    def _valid_digests(cls, v: list[str]) -> list[str]:
        return [_check_digest(d) for d in v]


class BoardCommitment(BaseModel):
    """
    The published commitment to a hidden board.

    Consumers query proofs by coordinate key.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., description="Merkle root over every cell of the board")
    proofs: dict[str, ProofEntry] = Field(
        ...,
        description="Proof entry per coordinate key",
    )

    @field_validator("root")
    @classmethod
    def _valid_root(cls, v: str) -> str:
        return _check_digest(v)

    @field_validator("proofs")
    @classmethod
    def _valid_keys(cls, v: dict[str, ProofEntry]) -> dict[str, ProofEntry]:
        for key in v:
            parse_coordinate_key(key)
        return v

    @property
    def hit_count(self) -> int:
        return sum(1 for entry in self.proofs.values() if entry.hit)


class ClaimBundle(BaseModel):
    """
    Hit coordinates and their proofs in canonical claim order.

    The three sequences are index-aligned.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    sorted_proofs: list[list[str]] = Field(
        default_factory=list,
        alias="sortedProofs",
        description="Inclusion proof per claimed coordinate",
    )
    coordinate_numbers: list[int] = Field(
        default_factory=list,
        alias="coordinateNumbers",
        description="Row number per claimed coordinate",
    )
    coordinate_literals: list[str] = Field(
        default_factory=list,
        alias="coordinateLiterals",
        description="Column label per claimed coordinate",
    )

    @field_validator("sorted_proofs")
    @classmethod
    def _valid_proofs(cls, v: list[list[str]]) -> list[list[str]]:
        return [[_check_digest(d) for d in proof] for proof in v]

    @model_validator(mode="after")
    def _aligned(self) -> "ClaimBundle":
        lengths = {
            len(self.sorted_proofs),
            len(self.coordinate_numbers),
            len(self.coordinate_literals),
        }
        if len(lengths) != 1:
            raise ValueError(
                "sortedProofs, coordinateNumbers and coordinateLiterals "
                "must have the same length"
            )
        return self

    def __len__(self) -> int:
        return len(self.coordinate_numbers)

    def entries(self) -> Iterator[tuple[list[str], int, str]]:
        """Iterate (proof, row, column label) triples in claim order."""
        return zip(self.sorted_proofs, self.coordinate_numbers, self.coordinate_literals)
