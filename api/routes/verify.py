"""
Verify Route

Self-check a published commitment and, optionally, a claim bundle.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_pipeline, resolve_geometry
from api.models.requests import VerifyRequest
from api.models.responses import CheckInfo, VerificationInfo, VerifyResponse
from core.schemas.verification import VerificationResult


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


def to_verification_info(
    result: VerificationResult,
    include_checks: bool = True,
) -> VerificationInfo:
    """Flatten a VerificationResult for the response body."""
    return VerificationInfo(
        ok=result.ok,
        total_checks=len(result.checks),
        passed_checks=result.passed_count,
        failed_checks=len(result.checks) - result.passed_count,
        checks=[
            CheckInfo(check_id=c.check_id, ok=c.ok, message=c.message)
            for c in result.checks
        ] if include_checks else [],
        challenge=result.challenge,
    )


@router.post("/verify", response_model=VerifyResponse)
async def verify_artifacts(request: VerifyRequest) -> VerifyResponse:
    """
    Verify a commitment (and claim bundle).

    A failed proof is reported in the body with ok=false, not as an error status.
    """
    geometry = resolve_geometry(request.geometry)
    pipeline = get_pipeline(geometry=geometry)

    result = pipeline.verify(request.commitment, request.claim)
    logger.info(f"Verified commitment {request.commitment.root}: ok={result.ok}")

    return VerifyResponse(
        ok=result.ok,
        root=request.commitment.root,
        verification=to_verification_info(result, request.include_checks),
    )
