"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field

from core.schemas.board import MAX_COLUMNS
from core.schemas.commitment import BoardCommitment, ClaimBundle


class GeometryOverride(BaseModel):
    """Optional per-request board shape; unset fields fall back to server config."""

    rows: int | None = Field(default=None, ge=1, description="Number of rows (R)")
    columns: int | None = Field(
        default=None,
        ge=1,
        le=MAX_COLUMNS,
        description="Number of columns (C)",
    )
    ship_cells: int | None = Field(default=None, ge=0, description="Required ship cells (K)")


class CommitRequest(BaseModel):
    """Request body for POST /commit endpoint."""

    grid: list[list[bool | int]] = Field(
        ...,
        min_length=1,
        description="R x C grid of hit flags (booleans or 0/1), indexed [row][column]",
    )
    geometry: GeometryOverride = Field(default_factory=GeometryOverride)
    include_tree: bool = Field(
        default=False,
        description="Include the full standard-v1 tree dump in the response",
    )
    include_checks: bool = Field(
        default=False,
        description="Include detailed self-check results in the response",
    )


class ClaimRequest(BaseModel):
    """Request body for POST /claim endpoint."""

    commitment: BoardCommitment = Field(..., description="Published {root, proofs} commitment")
    geometry: GeometryOverride = Field(default_factory=GeometryOverride)


class VerifyRequest(BaseModel):
    """Request body for POST /verify endpoint."""

    commitment: BoardCommitment = Field(..., description="Published {root, proofs} commitment")
    claim: ClaimBundle | None = Field(
        default=None,
        description="Claim bundle to check against the commitment",
    )
    geometry: GeometryOverride = Field(default_factory=GeometryOverride)
    include_checks: bool = Field(
        default=True,
        description="Include detailed verification checks in response",
    )
