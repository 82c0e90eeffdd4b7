"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import (
    APIError,
    api_error_handler,
    fleetproof_error_handler,
    generic_error_handler,
)
from api.routes import claim, commit, health, verify
from core.config import load_runtime_config
from core.schemas.errors import FleetproofException


# Configure logging from FLEETPROOF_LOG_LEVEL or the log_level config key
def _resolve_log_level() -> int:
    """Resolve log level from config file and env, defaulting to INFO."""
    try:
        raw = load_runtime_config().log_level
    except (OSError, ValueError, TypeError) as e:
        logging.getLogger(__name__).warning(f"Ignoring unreadable config: {e}")
        raw = "INFO"
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Fleetproof API",
        description="""
HTTP API for committing to a hidden battleship board and proving ship segments.

## Endpoints

- **POST /commit** - Commit to an R x C grid, returns {root, proofs}
- **POST /claim** - Order committed hits into ship segments, returns the claim bundle
- **POST /verify** - Self-check a commitment and optional claim bundle
- **GET /health** - Health check
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(FleetproofException, fleetproof_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(commit.router)
    app.include_router(claim.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
