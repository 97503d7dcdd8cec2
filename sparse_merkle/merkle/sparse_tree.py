"""
Module 05 - Sparse Merkle Tree
Fixed-depth tree over 2^depth 64-byte leaf slots, persisted as one blob.

The tree can produce a succinct proof (HashPath) that a given value exists
at a given index under a given root, without revealing any other leaf.

Lifecycle:
1. open_tree(store, name, depth) restores the node cache for `name`, or
   initializes an empty tree and writes it once
2. update_element(index, value) writes the leaf, rebuilds every level,
   persists, and returns the new root
3. get_root() / get_hash_path(index) read the last completed rebuild

Restore Rules:
- The persisted depth always wins over the depth argument
- A store read failure raises; only a missing blob means "new tree"
- Leaf digests from a restored blob are kept as level-0 seeds, since the
  leaf values themselves are never persisted

Concurrency:
- One asyncio.Lock per tree serializes updates
- A rebuild produces a new NodeCache that replaces the old one in a single
  assignment, so reads never see a half-built cache
- The root advances before persistence completes; if the write fails the
  caller gets PersistenceException and memory is ahead of the store
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sparse_merkle.config.runtime import TreeConfig, get_default_config
from sparse_merkle.crypto.hashing import Hasher, Sha256Hasher, to_hex
from sparse_merkle.schemas.errors import (
    IndexOutOfRangeException,
    PersistenceException,
)
from sparse_merkle.storage.base import KeyValueStore

from .data_blocks import DataBlockStore
from .hash_path import HashPath, build_hash_path
from .node_cache import NodeCache, rebuild_node_cache
from .persistence import PersistenceAdapter
from .zero_hashes import build_zero_hashes, validate_depth

logger = logging.getLogger(__name__)


class MerkleTree:
    """
    A sparse Merkle tree of fixed depth.

    Use the async MerkleTree.open (or open_tree) to construct; the
    constructor itself performs no I/O.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        depth: int,
        hasher: Optional[Hasher] = None,
        nodes: Optional[NodeCache] = None,
    ) -> None:
        validate_depth(depth)
        self._adapter = adapter
        self._depth = depth
        self._hasher: Hasher = hasher or Sha256Hasher()
        self._zero_hashes = build_zero_hashes(depth, self._hasher)
        self._data_blocks = DataBlockStore()
        self._write_lock = asyncio.Lock()

        if nodes is not None:
            if nodes.depth != depth:
                raise ValueError(
                    f"Restored node cache has depth {nodes.depth}, tree has {depth}"
                )
            self._restored_leaves: dict[int, bytes] = dict(nodes.level(0))
            self._nodes = nodes
        else:
            self._restored_leaves = {}
            self._nodes = self._rebuild()

    @classmethod
    async def open(
        cls,
        store: KeyValueStore,
        name: str,
        depth: Optional[int] = None,
        *,
        hasher: Optional[Hasher] = None,
        config: Optional[TreeConfig] = None,
    ) -> "MerkleTree":
        """
        Restore the tree called `name` from store, or create it.

        Args:
            store: Key-value store holding one blob per tree
            name: Tree name, used as the store key
            depth: Depth for a new tree; defaults to config.default_depth
            hasher: Hash primitive pair; defaults to Sha256Hasher
            config: Runtime configuration; defaults to the global config

        Returns:
            A ready MerkleTree

        Raises:
            ConfigurationException: If depth is outside [1, 32]
            StoreReadException: If the store failed to read
            RestoreException: If the persisted blob is malformed
            PersistenceException: If the initial write of a new tree failed
        """
        if depth is None:
            depth = (config or get_default_config()).default_depth
        validate_depth(depth)

        adapter = PersistenceAdapter(store, name)
        nodes = await adapter.load()

        if nodes is None:
            tree = cls(adapter, depth, hasher)
            logger.info(f"creating tree {name!r} with depth {depth}")
            await tree._persist()
            return tree

        if nodes.depth != depth:
            logger.warning(
                f"tree {name!r} was persisted with depth {nodes.depth}, "
                f"ignoring requested depth {depth}"
            )
        tree = cls(adapter, nodes.depth, hasher, nodes)
        logger.info(f"restored tree {name!r}: depth {nodes.depth}, root {to_hex(tree.get_root())}")
        return tree

    @property
    def name(self) -> str:
        return self._adapter.name

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def zero_hashes(self) -> tuple[bytes, ...]:
        return self._zero_hashes

    @property
    def capacity(self) -> int:
        """Number of leaf slots, 2^depth."""
        return 1 << self._depth

    def get_root(self) -> bytes:
        return self._nodes.root(self._zero_hashes)

    async def get_hash_path(self, index: int) -> HashPath:
        """
        Returns the hash path for `index`.

        Raises:
            IndexOutOfRangeException: If index is outside [0, 2^depth)
        """
        self._check_index(index)
        return build_hash_path(self._nodes, self._zero_hashes, index)

    async def update_element(self, index: int, value: bytes) -> bytes:
        """
        Updates the tree with `value` at `index`. Returns the new tree root.

        Raises:
            IndexOutOfRangeException: If index is outside [0, 2^depth)
            LeafValueException: If value is not exactly 64 bytes
            PersistenceException: If the new state could not be written;
                the in-memory root has already advanced
        """
        self._check_index(index)
        async with self._write_lock:
            self._data_blocks.set(index, value)
            self._nodes = self._rebuild()
            await self._persist()
            return self.get_root()

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < self.capacity:
            raise IndexOutOfRangeException(
                f"Leaf index {index!r} out of range for depth {self._depth}",
                index=index if isinstance(index, int) else None,
                depth=self._depth,
            )

    def _rebuild(self) -> NodeCache:
        leaf_digests = dict(self._restored_leaves)
        for index, value in self._data_blocks.items():
            leaf_digests[index] = self._hasher.hash(value)
        return rebuild_node_cache(leaf_digests, self._depth, self._zero_hashes, self._hasher)

    async def _persist(self) -> None:
        try:
            await self._adapter.save(self._nodes)
        except Exception as e:
            logger.exception(f"failed to persist tree {self.name!r}")
            raise PersistenceException(
                f"Failed to persist tree {self.name!r}: {e}",
                tree_name=self.name,
                details={
                    "root": to_hex(self.get_root()),
                    "cause": getattr(e, "code", type(e).__name__),
                },
            ) from e

    def __repr__(self) -> str:
        return f"MerkleTree(name={self.name!r}, depth={self._depth}, root={to_hex(self.get_root())})"


async def open_tree(
    store: KeyValueStore,
    name: str,
    depth: Optional[int] = None,
    *,
    hasher: Optional[Hasher] = None,
    config: Optional[TreeConfig] = None,
) -> MerkleTree:
    """Constructs or restores a MerkleTree with the given `name` and `depth`."""
    return await MerkleTree.open(store, name, depth, hasher=hasher, config=config)


__all__ = [
    "MerkleTree",
    "open_tree",
]
