"""
Runtime Configuration

Central configuration for board geometry, artifact locations and logging.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.schemas.board import (
    DEFAULT_COLUMNS,
    DEFAULT_ROWS,
    DEFAULT_SHIP_CELLS,
    BoardGeometry,
)

load_dotenv()

logger = logging.getLogger(__name__)


# Environment variable prefix
ENV_PREFIX = "FLEETPROOF_"

# Config file search order when no explicit path is given
DEFAULT_CONFIG_PATHS = (
    Path("fleetproof.json"),
    Path(".fleetproof.json"),
    Path.home() / ".config" / "fleetproof" / "config.json",
)


@dataclass
class BoardConfig:
    """Board dimensions and the required number of ship cells."""
    rows: int = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    ship_cells: int = DEFAULT_SHIP_CELLS

    def to_geometry(self) -> BoardGeometry:
        return BoardGeometry(
            rows=self.rows,
            columns=self.columns,
            ship_cells=self.ship_cells,
        )


@dataclass
class PathsConfig:
    """Conventional artifact locations, relative to data_dir."""
    data_dir: str = "data"
    input_file: str = "input.json"
    commitment_file: str = "output.json"
    claim_file: str = "output_claim.json"
    tree_file: str = "tree.json"

    def resolve(self, name: str) -> Path:
        return Path(self.data_dir) / getattr(self, name)


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    board: BoardConfig = field(default_factory=BoardConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    self_check: bool = True

    @property
    def geometry(self) -> BoardGeometry:
        return self.board.to_geometry()

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - FLEETPROOF_ROWS / FLEETPROOF_COLUMNS / FLEETPROOF_SHIP_CELLS
        - FLEETPROOF_DATA_DIR: directory holding input and output artifacts
        - FLEETPROOF_LOG_LEVEL / FLEETPROOF_LOG_FILE
        - FLEETPROOF_SELF_CHECK: verify artifacts after producing them (true/false)
        """
        overrides: dict[str, Any] = {}

        for key in ("rows", "columns", "ship_cells"):
            raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if raw:
                overrides.setdefault("board", {})[key] = int(raw)

        if os.getenv(f"{ENV_PREFIX}DATA_DIR"):
            overrides.setdefault("paths", {})["data_dir"] = os.getenv(f"{ENV_PREFIX}DATA_DIR")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}SELF_CHECK"):
            overrides["self_check"] = (
                os.getenv(f"{ENV_PREFIX}SELF_CHECK", "true").lower() == "true"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from YAML or JSON depending on the file extension."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        board_data = data.get("board", {})
        paths_data = data.get("paths", {})

        board = BoardConfig(**board_data) if board_data else BoardConfig()
        paths = PathsConfig(**paths_data) if paths_data else PathsConfig()

        return cls(
            board=board,
            paths=paths,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            self_check=data.get("self_check", True),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("board", {}).items():
            setattr(new_config.board, key, value)
        for key, value in overrides.get("paths", {}).items():
            setattr(new_config.paths, key, value)
        for key in ("log_level", "log_file", "self_check"):
            if key in overrides:
                setattr(new_config, key, overrides[key])

        return new_config

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": {
                "rows": self.board.rows,
                "columns": self.board.columns,
                "ship_cells": self.board.ship_cells,
            },
            "paths": {
                "data_dir": self.paths.data_dir,
                "input_file": self.paths.input_file,
                "commitment_file": self.paths.commitment_file,
                "claim_file": self.paths.claim_file,
                "tree_file": self.paths.tree_file,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "self_check": self.self_check,
        }


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file, then overlay environment variables.

    Search order when config_path is None:
      1. ./fleetproof.json
      2. ./.fleetproof.json
      3. ~/.config/fleetproof/config.json

    Environment variables ALWAYS override config file values.
    """
    config: RuntimeConfig | None = None

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                config = RuntimeConfig.from_file(path)
                logger.debug(f"Loaded config from {path}")
                break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()
