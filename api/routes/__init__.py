"""API route handlers."""

from api.routes import claim, commit, health, verify

__all__ = ["health", "commit", "claim", "verify"]
