"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.commitment import BoardCommitment, ClaimBundle
from core.schemas.verification import ChallengeRef


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "fleetproof-api"
    version: str = "v1"


class CheckInfo(BaseModel):
    """One self-check result."""

    check_id: str
    ok: bool
    message: str


class VerificationInfo(BaseModel):
    """Aggregated self-check results."""

    ok: bool = Field(..., description="Whether every check passed")
    total_checks: int = Field(default=0)
    passed_checks: int = Field(default=0)
    failed_checks: int = Field(default=0)
    checks: list[CheckInfo] = Field(default_factory=list)
    challenge: ChallengeRef | None = Field(default=None)


class CommitResponse(BaseModel):
    """Response for POST /commit endpoint."""

    ok: bool = Field(..., description="Whether the commitment was built and self-checked")
    root: str = Field(..., description="Board root")
    commitment: BoardCommitment
    tree: dict[str, Any] | None = Field(
        default=None,
        description="Full standard-v1 tree dump (if requested)",
    )
    verification: VerificationInfo | None = None


class ClaimResponse(BaseModel):
    """Response for POST /claim endpoint."""

    ok: bool = True
    claimed: int = Field(..., description="Number of claim entries")
    claim: ClaimBundle


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = Field(..., description="Whether every verification check passed")
    root: str
    verification: VerificationInfo


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
