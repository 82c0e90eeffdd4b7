"""
API Dependencies

Provides factories for the runtime config and the board pipeline.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from api.errors import InvalidRequestError
from api.models.requests import GeometryOverride
from core.config import RuntimeConfig, load_runtime_config
from core.schemas.board import BoardGeometry
from orchestrator.pipeline import BoardPipeline, create_pipeline

logger = logging.getLogger(__name__)


def get_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from the default config search path plus env overrides."""
    return load_runtime_config()


def resolve_geometry(override: GeometryOverride | None = None) -> BoardGeometry:
    """
    Merge a per-request geometry override onto the server-wide board config.

    Raises:
        InvalidRequestError: If the merged geometry is inconsistent
    """
    base = get_runtime_config().board
    data = {
        "rows": base.rows,
        "columns": base.columns,
        "ship_cells": base.ship_cells,
    }
    if override is not None:
        data.update(override.model_dump(exclude_none=True))
    try:
        return BoardGeometry(**data)
    except ValidationError as e:
        raise InvalidRequestError(
            "Invalid board geometry",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def get_pipeline(
    *,
    geometry: BoardGeometry,
    keep_tree: bool = False,
) -> BoardPipeline:
    """
    Create a BoardPipeline for one request.

    Self-check follows the server config.
    """
    config = get_runtime_config()
    return create_pipeline(
        geometry=geometry,
        self_check=config.self_check,
        keep_tree=keep_tree,
    )
