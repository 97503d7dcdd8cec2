"""
Key-Value Store Interface

The tree persists one blob per tree name through this interface and
never looks at anything else the store holds.

Contract:
- get(key) returns the stored blob, or None when the key was never written
- get(key) raises StoreReadException when the store itself failed
- put(key, blob) returns once the blob is durable, or raises StoreWriteException

A missing key and a failed read are different outcomes: the first means
"new tree", the second must never be mistaken for it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Async get/put of string blobs keyed by tree name."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent."""

    @abstractmethod
    async def put(self, key: str, blob: str) -> None:
        """Store blob under key, replacing any previous value."""

    async def close(self) -> None:
        """Release store resources. No-op by default."""
