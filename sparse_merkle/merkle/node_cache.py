"""
Module 03 - Node Cache
Sparse per-level digest storage and the full rebuild algorithm.

Layout:
    levels[0]      leaf digests, index -> hash(value)
    levels[i]      index -> compress(child 2p, child 2p+1)
    levels[depth]  at most one entry, index 0: the root

An index missing from levels[i] means its digest is Z[i]. Memory stays
proportional to the populated leaves; nothing is ever sized 2^depth.

Rebuild Rules (Hard Contracts):
1. Level 0 is exactly the given leaf digests
2. A populated index and its sibling (index ^ 1) produce one parent, computed once
3. Parent = compress(lower-index digest, higher-index digest)
4. A missing sibling resolves to Z[level - 1]
5. The result depends on index values only, never on iteration order
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from sparse_merkle.crypto.hashing import Hasher

logger = logging.getLogger(__name__)


class NodeCache:
    """
    Sparse node digests for levels 0..depth.

    Instances are treated as immutable once built: the tree swaps in a
    freshly rebuilt cache instead of editing the current one.
    """

    def __init__(self, levels: Sequence[Mapping[int, bytes]]) -> None:
        if len(levels) < 2:
            raise ValueError(f"NodeCache needs at least 2 levels, got {len(levels)}")
        self._levels: list[dict[int, bytes]] = [dict(level) for level in levels]

    @classmethod
    def empty(cls, depth: int) -> "NodeCache":
        return cls([{} for _ in range(depth + 1)])

    @property
    def depth(self) -> int:
        return len(self._levels) - 1

    def level(self, level: int) -> Mapping[int, bytes]:
        """Read-only view of one level's populated entries."""
        return self._levels[level]

    def get(self, level: int, index: int) -> Optional[bytes]:
        return self._levels[level].get(index)

    def resolve(self, level: int, index: int, zero_hashes: Sequence[bytes]) -> bytes:
        """Digest at (level, index), falling back to the level's zero hash."""
        return self._levels[level].get(index, zero_hashes[level])

    def root(self, zero_hashes: Sequence[bytes]) -> bytes:
        return self.resolve(self.depth, 0, zero_hashes)

    def node_count(self) -> int:
        return sum(len(level) for level in self._levels)

    def to_levels(self) -> list[dict[int, bytes]]:
        """Copy of every level, for serialization."""
        return [dict(level) for level in self._levels]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeCache):
            return NotImplemented
        return self._levels == other._levels

    def __repr__(self) -> str:
        return f"NodeCache(depth={self.depth}, nodes={self.node_count()})"


def rebuild_node_cache(
    leaf_digests: Mapping[int, bytes],
    depth: int,
    zero_hashes: Sequence[bytes],
    hasher: Hasher,
) -> NodeCache:
    """
    Recompute every level from the leaf digests.

    Args:
        leaf_digests: Populated level-0 digests, index -> digest
        depth: Tree depth
        zero_hashes: Zero hash table for this depth (depth + 1 entries)
        hasher: Hash primitive pair

    Returns:
        A new NodeCache with depth + 1 levels
    """
    levels: list[dict[int, bytes]] = [dict(leaf_digests)]

    for level in range(1, depth + 1):
        below = levels[level - 1]
        zero_below = zero_hashes[level - 1]
        current: dict[int, bytes] = {}
        processed: set[int] = set()

        for index in below:
            if index in processed:
                continue
            sibling = index ^ 1
            left_index = min(index, sibling)
            left = below.get(left_index, zero_below)
            right = below.get(left_index + 1, zero_below)
            current[left_index // 2] = hasher.compress(left, right)
            processed.add(index)
            processed.add(sibling)

        levels.append(current)

    cache = NodeCache(levels)
    logger.debug(f"rebuilt node cache: {len(leaf_digests)} leaves, {cache.node_count()} nodes")
    return cache


__all__ = [
    "NodeCache",
    "rebuild_node_cache",
]
