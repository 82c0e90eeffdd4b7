"""
Claim Route

Produce the canonical claim bundle from a published commitment.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_pipeline, resolve_geometry
from api.models.requests import ClaimRequest
from api.models.responses import ClaimResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["claim"])


@router.post("/claim", response_model=ClaimResponse)
async def claim_segments(request: ClaimRequest) -> ClaimResponse:
    """Order every committed hit into ship segments."""
    geometry = resolve_geometry(request.geometry)
    pipeline = get_pipeline(geometry=geometry)

    bundle = pipeline.claim(request.commitment)

    return ClaimResponse(ok=True, claimed=len(bundle), claim=bundle)
