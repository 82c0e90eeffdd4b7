"""
Board Commitment - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Version constants
from .versioning import (
    LEAF_ENCODING,
    SUPPORTED_TREE_FORMATS,
    TREE_FORMAT,
    TreeFormat,
    is_supported_tree_format,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    BoardPreconditionException,
    CanonicalizationException,
    CoordinateCollisionException,
    CoordinateLookupException,
    ErrorCodes,
    FleetproofError,
    FleetproofException,
    HitCountMismatchException,
    LeafNotFoundException,
    MerkleTreeException,
    MerkleVerificationException,
    SchemaValidationException,
    SegmentCountException,
    SegmentShapeException,
    UnsupportedFormatException,
)

# Board geometry and cells
from .board import (
    Board,
    BoardGeometry,
    Cell,
    column_index,
    column_label,
    coordinate_key,
    parse_coordinate_key,
)

# Published artifacts
from .commitment import (
    BoardCommitment,
    ClaimBundle,
    ProofEntry,
)

# Verification results
from .verification import (
    ChallengeRef,
    CheckResult,
    VerificationResult,
)

__all__ = [
    # Versioning
    "LEAF_ENCODING",
    "SUPPORTED_TREE_FORMATS",
    "TREE_FORMAT",
    "TreeFormat",
    "is_supported_tree_format",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "BoardPreconditionException",
    "CanonicalizationException",
    "CoordinateCollisionException",
    "CoordinateLookupException",
    "ErrorCodes",
    "FleetproofError",
    "FleetproofException",
    "HitCountMismatchException",
    "LeafNotFoundException",
    "MerkleTreeException",
    "MerkleVerificationException",
    "SchemaValidationException",
    "SegmentCountException",
    "SegmentShapeException",
    "UnsupportedFormatException",
    # Board
    "Board",
    "BoardGeometry",
    "Cell",
    "column_index",
    "column_label",
    "coordinate_key",
    "parse_coordinate_key",
    # Artifacts
    "BoardCommitment",
    "ClaimBundle",
    "ProofEntry",
    # Verification
    "ChallengeRef",
    "CheckResult",
    "VerificationResult",
]
