"""
Board Commitment - Schemas
File: verification.py

Purpose: Standard result format for self-check verification of
commitment and claim artifacts.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import FleetproofError


# Severity levels for checks
CheckSeverity = Literal["info", "warn", "error"]

# Types of challengeable artifacts
ChallengeKind = Literal["cell_leaf", "board_root", "claim_entry"]


class CheckResult(BaseModel):
    """
    Result of a single verification check.

    Checks are atomic verification steps that can pass or fail.
    """

    model_config = ConfigDict(extra="forbid")

    check_id: str = Field(
        ...,
        description="Unique identifier for this check",
        min_length=1,
    )
    ok: bool = Field(
        ...,
        description="Whether the check passed",
    )
    severity: CheckSeverity = Field(
        ...,
        description="Severity level of this check",
    )
    message: str = Field(
        ...,
        description="Human-readable message describing the result",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional details about the check",
    )

    @property
    def is_error(self) -> bool:
        """Check if this is an error-level failure."""
        return not self.ok and self.severity == "error"

    @classmethod
    def passed(
        cls,
        check_id: str,
        message: str = "Check passed",
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        """Create a passed check result."""
        return cls(
            check_id=check_id,
            ok=True,
            severity="info",
            message=message,
            details=details or {},
        )

    @classmethod
    def failed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        """Create a failed check result."""
        return cls(
            check_id=check_id,
            ok=False,
            severity="error",
            message=message,
            details=details or {},
        )


class ChallengeRef(BaseModel):
    """
    Reference to a challengeable artifact.

    Points at the first committed cell or claim entry that failed to verify.
    """

    model_config = ConfigDict(extra="forbid")

    kind: ChallengeKind = Field(
        ...,
        description="Type of artifact being challenged",
    )
    key: str | None = Field(
        default=None,
        description="Coordinate key of the challenged cell (e.g. '3-C')",
    )
    claim_index: int | None = Field(
        default=None,
        description="Position in the claim bundle (for claim_entry challenges)",
    )
    reason: str | None = Field(
        default=None,
        description="Reason for the challenge",
    )


class VerificationResult(BaseModel):
    """
    Complete result of a verification process.

    Communicates verification outcomes without using exceptions.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(
        ...,
        description="Overall verification success",
    )
    checks: list[CheckResult] = Field(
        default_factory=list,
        description="Individual check results",
    )
    challenge: ChallengeRef | None = Field(
        default=None,
        description="Reference to challengeable artifact if verification failed",
    )
    error: FleetproofError | None = Field(
        default=None,
        description="Error details if verification encountered an exception",
    )

    @property
    def error_count(self) -> int:
        """Count of error-level failures."""
        return sum(1 for check in self.checks if check.is_error)

    @property
    def passed_count(self) -> int:
        """Count of passed checks."""
        return sum(1 for check in self.checks if check.ok)

    def get_failed_checks(self) -> list[CheckResult]:
        """Get all failed checks."""
        return [check for check in self.checks if not check.ok]

    @classmethod
    def success(cls, checks: list[CheckResult] | None = None) -> "VerificationResult":
        """Create a successful verification result."""
        return cls(ok=True, checks=checks or [])

    @classmethod
    def failure(
        cls,
        checks: list[CheckResult] | None = None,
        challenge: ChallengeRef | None = None,
        error: FleetproofError | None = None,
    ) -> "VerificationResult":
        """Create a failed verification result."""
        return cls(ok=False, checks=checks or [], challenge=challenge, error=error)
