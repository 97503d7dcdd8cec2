"""
In-memory KeyValueStore, for tests and short-lived trees.
"""

from __future__ import annotations

import logging
from typing import Optional

from .base import KeyValueStore

logger = logging.getLogger(__name__)


class InMemoryStore(KeyValueStore):
    """Dict-backed store. Blobs are str, so nothing needs copying."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, blob: str) -> None:
        logger.debug(f"put {key!r} ({len(blob)} chars)")
        self._data[key] = blob

    def keys(self) -> list[str]:
        return sorted(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
