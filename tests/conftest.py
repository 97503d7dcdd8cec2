"""
Pytest configuration and shared fixtures for sparse Merkle tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import asyncio
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_reference = importlib.import_module("fixtures.reference")
_stores = importlib.import_module("fixtures.stores")

FlakyStore = _stores.FlakyStore

from sparse_merkle.config.runtime import TreeConfig, set_default_config
from sparse_merkle.merkle import open_tree
from sparse_merkle.storage import InMemoryStore


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def default_config():
    """Pin the global config so SPARSE_MERKLE_* env vars cannot leak into tests."""
    config = TreeConfig()
    set_default_config(config)
    yield config
    set_default_config(None)


@pytest.fixture
def store():
    """Provide an empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def flaky_store():
    """Provide a store whose reads/writes can be made to fail."""
    return FlakyStore()


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run


@pytest.fixture
def make_tree(store):
    """Factory opening a tree on the shared store: make_tree(name, depth)."""
    def _make(name: str = "tree", depth: int = 4, target_store=None):
        return asyncio.run(open_tree(target_store or store, name, depth))
    return _make


@pytest.fixture
def leaf_value():
    return _reference.leaf_value


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
