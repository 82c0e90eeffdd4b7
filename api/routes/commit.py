"""
Commit Route

Commit to a board grid and return the {root, proofs} commitment.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_pipeline, resolve_geometry
from api.models.requests import CommitRequest
from api.models.responses import CommitResponse
from api.routes.verify import to_verification_info


logger = logging.getLogger(__name__)

router = APIRouter(tags=["commit"])


@router.post("/commit", response_model=CommitResponse)
async def commit_board(request: CommitRequest) -> CommitResponse:
    """
    Build the Merkle commitment over every cell of the submitted grid.

    Shape and hit-count failures are returned as 400 ErrorResponse bodies.
    """
    geometry = resolve_geometry(request.geometry)
    pipeline = get_pipeline(geometry=geometry, keep_tree=request.include_tree)

    result = pipeline.commit(request.grid)

    verification = None
    ok = True
    if result.verification is not None:
        ok = result.verification.ok
        verification = to_verification_info(result.verification, request.include_checks)

    return CommitResponse(
        ok=ok,
        root=result.root,
        commitment=result.commitment,
        tree=result.tree.dump() if result.tree is not None else None,
        verification=verification,
    )
