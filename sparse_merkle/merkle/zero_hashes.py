"""
Module 03 - Zero Hash Table
Default digests for empty subtrees, one per level.

Recurrence:
    Z[0] = hash(64 zero bytes)
    Z[i] = compress(Z[i-1], Z[i-1])   for i in 1..depth

Z[depth] is the root of a tree with no leaves written. Z[i] stands in for
any node at level i that the node cache does not hold.
"""
from __future__ import annotations

from sparse_merkle.constants import MAX_DEPTH, MIN_DEPTH, ZERO_LEAF
from sparse_merkle.crypto.hashing import Hasher
from sparse_merkle.schemas.errors import ConfigurationException


def validate_depth(depth: int) -> int:
    """
    Check that depth is an integer in [MIN_DEPTH, MAX_DEPTH].

    Raises:
        ConfigurationException: If depth is out of range or not an int
    """
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise ConfigurationException(
            f"Tree depth must be an integer, got {type(depth).__name__}",
            field_path="depth",
        )
    if not (MIN_DEPTH <= depth <= MAX_DEPTH):
        raise ConfigurationException(
            f"Tree depth must be in [{MIN_DEPTH}, {MAX_DEPTH}], got {depth}",
            field_path="depth",
            details={"depth": depth},
        )
    return depth


def build_zero_hashes(depth: int, hasher: Hasher) -> tuple[bytes, ...]:
    """
    Build the zero hash table for a tree of the given depth.

    Args:
        depth: Tree depth, in [1, 32]
        hasher: Hash primitive pair

    Returns:
        Tuple of depth + 1 digests, index = level

    Raises:
        ConfigurationException: If depth is out of range
    """
    validate_depth(depth)
    zero_hashes = [hasher.hash(ZERO_LEAF)]
    for _ in range(depth):
        below = zero_hashes[-1]
        zero_hashes.append(hasher.compress(below, below))
    return tuple(zero_hashes)


__all__ = [
    "validate_depth",
    "build_zero_hashes",
]
