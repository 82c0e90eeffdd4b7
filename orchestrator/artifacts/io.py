"""
Artifact IO

Purpose: Load the input grid and save/load the commitment, claim and
tree-dump artifacts to/from disk.

Files (conventional names, see core.config.runtime.PathsConfig):
- input.json         R x C grid of booleans (or 0/1), indexed [row][column]
- output.json        {root, proofs}
- output_claim.json  {sortedProofs, coordinateNumbers, coordinateLiterals}
- tree.json          full "standard-v1" tree dump (optional)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.merkle.standard_tree import StandardMerkleTree
from core.schemas.board import Board, BoardGeometry
from core.schemas.canonical import dumps_canonical
from core.schemas.commitment import BoardCommitment, ClaimBundle


logger = logging.getLogger(__name__)


class ArtifactIOError(Exception):
    """Error during artifact IO operations."""
    pass


class ArtifactMissingFileError(ArtifactIOError):
    """Required artifact file does not exist."""
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Artifact file not found: {path}")


class DuplicateKeyError(ArtifactIOError):
    """A JSON object repeats a key."""
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Duplicate key in JSON object: {key}")


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    # json.loads silently keeps the last value for a repeated key; a repeated
    # coordinate must not overwrite an earlier proof entry
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise DuplicateKeyError(key)
        result[key] = value
    return result


def parse_json(text: str) -> Any:
    """Parse JSON, rejecting objects with repeated keys."""
    return json.loads(text, object_pairs_hook=_reject_duplicate_keys)


def dump_json(obj: Any) -> str:
    """Serialize object to canonical JSON string."""
    return dumps_canonical(obj)


def _read_json_file(path: str | Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise ArtifactMissingFileError(path)
    try:
        return parse_json(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ArtifactIOError(f"Invalid JSON in {path}: {e}") from e


def _write_json_file(path: str | Path, obj: Any) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(obj), encoding="utf-8")
    logger.debug(f"Wrote {path}")
    return path


# =============================================================================
# Input grid
# =============================================================================

def load_board(path: str | Path, geometry: BoardGeometry | None = None) -> Board:
    """
    Load and shape-check the input grid.

    Raises:
        ArtifactIOError: If the file is missing or not a JSON list
        BoardPreconditionException: If the grid has the wrong shape
    """
    data = _read_json_file(path)
    if not isinstance(data, list):
        raise ArtifactIOError(f"Input grid must be a JSON array of rows: {path}")
    return Board.from_matrix(data, geometry)


def save_board(board: Board, path: str | Path) -> Path:
    return _write_json_file(path, [list(line) for line in board.grid])


# =============================================================================
# Commitment / claim / tree
# =============================================================================

def save_commitment(commitment: BoardCommitment, path: str | Path) -> Path:
    return _write_json_file(path, commitment)


def load_commitment(path: str | Path) -> BoardCommitment:
    data = _read_json_file(path)
    try:
        return BoardCommitment.model_validate(data)
    except ValidationError as e:
        raise ArtifactIOError(f"Invalid commitment in {path}: {e}") from e


def save_claim(claim: ClaimBundle, path: str | Path) -> Path:
    return _write_json_file(path, claim)


def load_claim(path: str | Path) -> ClaimBundle:
    data = _read_json_file(path)
    try:
        return ClaimBundle.model_validate(data)
    except ValidationError as e:
        raise ArtifactIOError(f"Invalid claim bundle in {path}: {e}") from e


def save_tree(tree: StandardMerkleTree, path: str | Path) -> Path:
    return _write_json_file(path, tree.dump())


def load_tree(path: str | Path) -> StandardMerkleTree:
    data = _read_json_file(path)
    if not isinstance(data, dict):
        raise ArtifactIOError(f"Tree dump must be a JSON object: {path}")
    return StandardMerkleTree.load(data)
