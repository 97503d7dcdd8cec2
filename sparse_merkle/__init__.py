"""
Sparse Merkle tree with hash paths and key-value persistence.
"""
from .constants import LEAF_BYTES, MAX_DEPTH, MIN_DEPTH, ZERO_LEAF
from .crypto import Hasher, Sha256Hasher
from .merkle import HashPath, MerkleTree, open_tree
from .schemas import SparseMerkleException
from .storage import FileStore, InMemoryStore, KeyValueStore

__version__ = "0.1.0"

__all__ = [
    "LEAF_BYTES",
    "MAX_DEPTH",
    "MIN_DEPTH",
    "ZERO_LEAF",
    "Hasher",
    "Sha256Hasher",
    "HashPath",
    "MerkleTree",
    "open_tree",
    "SparseMerkleException",
    "FileStore",
    "InMemoryStore",
    "KeyValueStore",
]
