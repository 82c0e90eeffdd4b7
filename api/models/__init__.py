"""API request and response models."""

from api.models.requests import ClaimRequest, CommitRequest, GeometryOverride, VerifyRequest
from api.models.responses import (
    CheckInfo,
    ClaimResponse,
    CommitResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    VerificationInfo,
    VerifyResponse,
)

__all__ = [
    "GeometryOverride",
    "CommitRequest",
    "ClaimRequest",
    "VerifyRequest",
    "HealthResponse",
    "CheckInfo",
    "VerificationInfo",
    "CommitResponse",
    "ClaimResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
