"""
Hash primitives for the sparse Merkle tree.
"""
from .hashing import (
    DIGEST_SIZE,
    sha256,
    hash_concat,
    to_hex,
    from_hex,
    Hasher,
    Sha256Hasher,
)

__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "Hasher",
    "Sha256Hasher",
]
