"""
Runtime Configuration Module

Provides configuration loading and management for board commitments.
"""

from .runtime import (
    BoardConfig,
    PathsConfig,
    RuntimeConfig,
    load_runtime_config,
)

__all__ = [
    "BoardConfig",
    "PathsConfig",
    "RuntimeConfig",
    "load_runtime_config",
]
