"""
Board Commitment - Schemas
File: errors.py

Purpose: Standard error taxonomy across the commitment and claim phases.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every failure here is a data or invariant problem over in-memory,
deterministic input. None of them is retryable.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the pipeline."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # Board Precondition Errors
    GRID_SHAPE_INVALID = "GRID_SHAPE_INVALID"
    HIT_COUNT_MISMATCH = "HIT_COUNT_MISMATCH"
    COORDINATE_COLLISION = "COORDINATE_COLLISION"

    # Lookup Errors
    COORDINATE_NOT_FOUND = "COORDINATE_NOT_FOUND"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Canonicalization Errors
    SEGMENT_COUNT_MISMATCH = "SEGMENT_COUNT_MISMATCH"
    SEGMENT_SHAPE_INVALID = "SEGMENT_SHAPE_INVALID"

    # Merkle & Commitment Errors
    EMPTY_TREE = "EMPTY_TREE"
    INVALID_TREE = "INVALID_TREE"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    LEAF_HASH_MISMATCH = "LEAF_HASH_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class FleetproofError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors between modules without exceptions,
    and as the body of API error responses.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.HIT_COUNT_MISMATCH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "FleetproofException":
        """Convert this error model to a raised exception."""
        return FleetproofException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class FleetproofException(Exception):
    """
    Base exception for all board commitment errors.

    Carries structured error information and can be converted
    to/from FleetproofError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "FLEETPROOF_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> FleetproofError:
        """Convert this exception to a FleetproofError model."""
        return FleetproofError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(FleetproofException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class SchemaValidationException(FleetproofException):
    """Exception raised when an artifact fails schema validation."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
        )


class UnsupportedFormatException(FleetproofException):
    """Exception raised when a tree dump uses an unknown format."""

    def __init__(self, fmt: str, supported: list[str]) -> None:
        super().__init__(
            message=f"Unsupported tree format: '{fmt}'. Supported formats: {supported}",
            code=ErrorCodes.UNSUPPORTED_FORMAT,
            details={"format": fmt, "supported": supported},
        )


class BoardPreconditionException(FleetproofException):
    """
    Exception raised when the input grid violates a board invariant.

    Raised before any tree is built: wrong dimensions, wrong hit count.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.GRID_SHAPE_INVALID,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
        )


class HitCountMismatchException(BoardPreconditionException):
    """Exception raised when the number of hit cells differs from the required count."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            message=f"Board must contain exactly {expected} ship cells, got {actual}",
            code=ErrorCodes.HIT_COUNT_MISMATCH,
            details={"expected": expected, "actual": actual},
        )


class CoordinateCollisionException(FleetproofException):
    """Exception raised when two committed leaves map to the same coordinate key."""

    def __init__(self, key: str) -> None:
        super().__init__(
            message=f"Duplicate coordinate in committed grid: {key}",
            code=ErrorCodes.COORDINATE_COLLISION,
            details={"key": key},
        )


class CoordinateLookupException(FleetproofException):
    """Exception raised when a coordinate is not part of the committed grid."""

    def __init__(self, key: str) -> None:
        super().__init__(
            message=f"Coordinate not found in proof index: {key}",
            code=ErrorCodes.COORDINATE_NOT_FOUND,
            details={"key": key},
        )


class SegmentCountException(FleetproofException):
    """Exception raised when canonicalization does not emit every hit cell."""

    def __init__(
        self,
        expected: int,
        proofs: int,
        numbers: int,
        literals: int,
    ) -> None:
        super().__init__(
            message=(
                f"Claim bundle must contain exactly {expected} entries, got "
                f"{proofs} proofs, {numbers} row numbers, {literals} column labels"
            ),
            code=ErrorCodes.SEGMENT_COUNT_MISMATCH,
            details={
                "expected": expected,
                "proofs": proofs,
                "coordinate_numbers": numbers,
                "coordinate_literals": literals,
            },
        )


class SegmentShapeException(SegmentCountException):
    """
    Exception raised when hit cells do not form straight, separate segments.

    An L-shaped or touching cluster cannot be split into straight runs, so
    no bundle of exactly K correctly ordered entries exists for it.
    """

    def __init__(self, origin: str, key: str, reason: str) -> None:
        FleetproofException.__init__(
            self,
            message=f"Hit cell {key} breaks the segment started at {origin}: {reason}",
            code=ErrorCodes.SEGMENT_SHAPE_INVALID,
            details={"origin": origin, "key": key, "reason": reason},
        )


class MerkleTreeException(FleetproofException):
    """Exception raised when a Merkle tree cannot be built or fails validation."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.INVALID_TREE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
        )


class LeafNotFoundException(FleetproofException):
    """Exception raised when a value is not among the tree's committed leaves."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            message=f"Leaf is not in tree: {value!r}",
            code=ErrorCodes.LEAF_NOT_FOUND,
            details={"value": repr(value)},
        )


class MerkleVerificationException(FleetproofException):
    """Exception raised when Merkle proof verification fails."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key is not None:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )
