"""
Artifact IO

Provides functionality for loading the input grid and saving/loading
commitment, claim and tree-dump artifacts.
"""

from orchestrator.artifacts.io import (
    ArtifactIOError,
    ArtifactMissingFileError,
    DuplicateKeyError,
    dump_json,
    parse_json,
    load_board,
    save_board,
    save_commitment,
    load_commitment,
    save_claim,
    load_claim,
    save_tree,
    load_tree,
)

__all__ = [
    "ArtifactIOError",
    "ArtifactMissingFileError",
    "DuplicateKeyError",
    "dump_json",
    "parse_json",
    "load_board",
    "save_board",
    "save_commitment",
    "load_commitment",
    "save_claim",
    "load_claim",
    "save_tree",
    "load_tree",
]
