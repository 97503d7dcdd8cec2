"""
Runtime Configuration

Central configuration for tree construction, reference stores and logging.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from sparse_merkle.constants import MAX_DEPTH, MIN_DEPTH
from sparse_merkle.schemas.errors import ConfigurationException

load_dotenv()


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class TreeConfig:
    """
    Runtime configuration for sparse Merkle trees.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    default_depth: int = MAX_DEPTH
    store_path: str = "merkleTree"
    log_level: str = "INFO"

    def validate(self) -> "TreeConfig":
        """Raise ConfigurationException if any field is out of range."""
        depth = self.default_depth
        if (
            isinstance(depth, bool)
            or not isinstance(depth, int)
            or not MIN_DEPTH <= depth <= MAX_DEPTH
        ):
            raise ConfigurationException(
                f"default_depth must be in [{MIN_DEPTH}, {MAX_DEPTH}], got {self.default_depth!r}",
                field_path="default_depth",
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.log_level!r}",
                field_path="log_level",
            )
        return self

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - SPARSE_MERKLE_DEFAULT_DEPTH: depth used when open_tree gets none
        - SPARSE_MERKLE_STORE_PATH: directory for FileStore blobs
        - SPARSE_MERKLE_LOG_LEVEL: root log level for configure_logging
        """
        overrides: dict[str, Any] = {}

        raw_depth = os.getenv("SPARSE_MERKLE_DEFAULT_DEPTH")
        if raw_depth:
            try:
                overrides["default_depth"] = int(raw_depth)
            except ValueError as e:
                raise ConfigurationException(
                    f"SPARSE_MERKLE_DEFAULT_DEPTH is not an integer: {raw_depth!r}",
                    field_path="default_depth",
                ) from e
        if os.getenv("SPARSE_MERKLE_STORE_PATH"):
            overrides["store_path"] = os.getenv("SPARSE_MERKLE_STORE_PATH")
        if os.getenv("SPARSE_MERKLE_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("SPARSE_MERKLE_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        unknown = set(data) - {"default_depth", "store_path", "log_level"}
        if unknown:
            raise ConfigurationException(
                f"Unknown configuration keys: {sorted(unknown)}",
                details={"keys": sorted(unknown)},
            )
        return cls(**data).validate()

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self
        return TreeConfig(**{**self.to_dict(), **overrides}).validate()

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "default_depth": self.default_depth,
            "store_path": self.store_path,
            "log_level": self.log_level,
        }


def configure_logging(config: Optional[TreeConfig] = None) -> int:
    """
    Configure root logging for applications embedding the tree.

    Level comes from SPARSE_MERKLE_LOG_LEVEL, then the config, then INFO.
    Returns the numeric level applied.
    """
    raw = os.getenv("SPARSE_MERKLE_LOG_LEVEL")
    if raw is None and config is not None:
        raw = config.log_level
    level = getattr(logging, (raw or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level


# Global default configuration
_default_config: Optional[TreeConfig] = None


def get_default_config() -> TreeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = TreeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[TreeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
