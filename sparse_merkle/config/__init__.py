"""
Runtime Configuration Module

Provides configuration loading and logging setup for sparse Merkle trees.
"""

from .runtime import (
    LOG_FORMAT,
    TreeConfig,
    configure_logging,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LOG_FORMAT",
    "TreeConfig",
    "configure_logging",
    "get_default_config",
    "set_default_config",
]
