"""
Minimal API (FastAPI)

HTTP API for board commitments:
- POST /commit - Commit to a grid
- POST /claim - Produce the canonical claim bundle
- POST /verify - Self-check a commitment and claim bundle
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
