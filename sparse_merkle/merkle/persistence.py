"""
Module 04 - Node Cache Persistence
Codec and store adapter for the one-blob-per-tree persisted form.

Blob layout (canonical JSON, sorted keys, no whitespace):
    {
      "0": {"<leaf index>": "0x<32-byte digest hex>", ...},
      "1": {...},
      ...
      "<depth>": {"0": "0x<root hex>"}     (or {} for an empty tree)
    }

Rules:
1. Every level 0..depth is present, empty levels included
2. depth is never stored; it is the number of levels minus one
3. Only digests are stored, never leaf values
4. Keys are decimal integers written exactly as str(int) writes them, each
   appearing once per object
5. Restore validates the document and raises RestoreException on any defect
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from sparse_merkle.constants import MAX_DEPTH, MIN_DEPTH
from sparse_merkle.crypto.hashing import DIGEST_SIZE, from_hex
from sparse_merkle.schemas.canonical import dumps_canonical
from sparse_merkle.schemas.errors import (
    RestoreException,
    SparseMerkleException,
    StoreReadException,
)
from sparse_merkle.storage.base import KeyValueStore

from .node_cache import NodeCache

logger = logging.getLogger(__name__)

# Keys stay strings here; _parse_key turns them into ints only if canonical
_BLOB_ADAPTER: TypeAdapter[dict[str, dict[str, str]]] = TypeAdapter(dict[str, dict[str, str]])


def encode_node_cache(nodes: NodeCache) -> str:
    """Serialize every level of the cache to canonical JSON."""
    return dumps_canonical(dict(enumerate(nodes.to_levels())))


def _unique_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"duplicate key {key!r}")
        obj[key] = value
    return obj


def _parse_key(key: str, tree_name: Optional[str], **where: int) -> int:
    """Decimal integer key in the exact form encode_node_cache writes it."""
    try:
        number = int(key)
    except ValueError:
        number = None
    if number is None or str(number) != key:
        raise RestoreException(
            f"Persisted key {key!r} is not a canonical integer",
            tree_name=tree_name,
            details={"key": key, **where},
        )
    return number


def decode_node_cache(blob: str | bytes, tree_name: Optional[str] = None) -> NodeCache:
    """
    Rebuild a NodeCache from a persisted blob.

    Args:
        blob: Canonical JSON produced by encode_node_cache
        tree_name: Used only in error details

    Returns:
        NodeCache whose depth is derived from the level count

    Raises:
        RestoreException: If the blob is not a well-formed node cache
    """
    try:
        document = json.loads(blob, object_pairs_hook=_unique_object)
    except ValueError as e:
        raise RestoreException(
            f"Persisted blob is not valid JSON: {e}",
            tree_name=tree_name,
        ) from e

    try:
        validated = _BLOB_ADAPTER.validate_python(document)
    except ValidationError as e:
        raise RestoreException(
            f"Persisted blob is not a level -> index -> digest document: {e.error_count()} error(s)",
            tree_name=tree_name,
            details={"errors": [err["msg"] for err in e.errors()[:5]]},
        ) from e

    raw: dict[int, dict[int, str]] = {}
    for level_key, entries in validated.items():
        level = _parse_key(level_key, tree_name)
        raw[level] = {
            _parse_key(index_key, tree_name, level=level): digest_hex
            for index_key, digest_hex in entries.items()
        }

    if sorted(raw) != list(range(len(raw))):
        raise RestoreException(
            "Persisted levels must be contiguous from 0",
            tree_name=tree_name,
            details={"levels": sorted(raw)},
        )

    depth = len(raw) - 1
    if not (MIN_DEPTH <= depth <= MAX_DEPTH):
        raise RestoreException(
            f"Persisted blob implies depth {depth}, outside [{MIN_DEPTH}, {MAX_DEPTH}]",
            tree_name=tree_name,
            details={"depth": depth},
        )

    levels: list[dict[int, bytes]] = []
    for level in range(depth + 1):
        width = 1 << (depth - level)
        entries: dict[int, bytes] = {}
        for index, digest_hex in raw[level].items():
            if not 0 <= index < width:
                raise RestoreException(
                    f"Index {index} out of range at level {level}",
                    tree_name=tree_name,
                    details={"level": level, "index": index},
                )
            try:
                digest = from_hex(digest_hex)
            except ValueError as e:
                raise RestoreException(
                    f"Bad digest at level {level}, index {index}: {e}",
                    tree_name=tree_name,
                    details={"level": level, "index": index},
                ) from e
            if len(digest) != DIGEST_SIZE:
                raise RestoreException(
                    f"Digest at level {level}, index {index} is {len(digest)} bytes",
                    tree_name=tree_name,
                    details={"level": level, "index": index},
                )
            entries[index] = digest
        levels.append(entries)

    return NodeCache(levels)


class PersistenceAdapter:
    """Reads and writes one tree's node cache through a KeyValueStore."""

    def __init__(self, store: KeyValueStore, name: str) -> None:
        self.store = store
        self.name = name

    async def load(self) -> Optional[NodeCache]:
        """
        Load the persisted cache.

        Returns:
            The restored NodeCache, or None if nothing was ever persisted

        Raises:
            StoreReadException: If the store failed to read
            RestoreException: If the stored blob is malformed
        """
        try:
            blob = await self.store.get(self.name)
        except SparseMerkleException:
            raise
        except Exception as e:
            raise StoreReadException(
                f"Store failed to read tree {self.name!r}: {e}",
                key=self.name,
            ) from e

        if blob is None:
            return None
        nodes = decode_node_cache(blob, self.name)
        logger.debug(f"restored {self.name!r}: depth {nodes.depth}, {nodes.node_count()} nodes")
        return nodes

    async def save(self, nodes: NodeCache) -> None:
        """Serialize and write the cache; store errors propagate."""
        blob = encode_node_cache(nodes)
        await self.store.put(self.name, blob)
        logger.debug(f"persisted {self.name!r}: {nodes.node_count()} nodes, {len(blob)} chars")


__all__ = [
    "encode_node_cache",
    "decode_node_cache",
    "PersistenceAdapter",
]
