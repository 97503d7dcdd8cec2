"""
Sparse Merkle Tree

Fixed-depth sparse Merkle tree with zero-default leaves, hash-path
production and single-blob persistence.

This package provides:
- MerkleTree / open_tree: the tree engine
- HashPath / build_hash_path: inclusion paths
- NodeCache / rebuild_node_cache: sparse per-level digests
- build_zero_hashes: empty-subtree digests per level
- encode_node_cache / decode_node_cache / PersistenceAdapter: the persisted form

Usage:
    from sparse_merkle.merkle import open_tree
    from sparse_merkle.storage import InMemoryStore

    tree = await open_tree(InMemoryStore(), "balances", depth=16)
    root = await tree.update_element(5, bytes(63) + b"\\x01")
    path = await tree.get_hash_path(5)
"""
from .data_blocks import DataBlockStore
from .hash_path import HashPath, build_hash_path
from .node_cache import NodeCache, rebuild_node_cache
from .persistence import PersistenceAdapter, decode_node_cache, encode_node_cache
from .sparse_tree import MerkleTree, open_tree
from .zero_hashes import build_zero_hashes, validate_depth


__all__ = [
    # Tree
    "MerkleTree",
    "open_tree",
    # Paths
    "HashPath",
    "build_hash_path",
    # Internals
    "DataBlockStore",
    "NodeCache",
    "rebuild_node_cache",
    "build_zero_hashes",
    "validate_depth",
    # Persistence
    "PersistenceAdapter",
    "encode_node_cache",
    "decode_node_cache",
]
