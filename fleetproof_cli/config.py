"""
CLI Configuration

Thin layer over core.config.runtime: resolves the config file the user
points at (or the default search path) and renders a starter template.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config import RuntimeConfig, load_runtime_config


DEFAULT_CONFIG_FILENAME = "fleetproof.json"


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    return load_runtime_config(config_path)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
