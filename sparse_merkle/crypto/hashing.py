"""
Module 01 - Hashing Utilities
Hash primitives consumed by the sparse Merkle tree.

This module provides:
- SHA-256 hashing for raw bytes
- The Hasher protocol (hash + compress) the tree is written against
- Sha256Hasher, the reference Hasher
- Hex encoding/decoding with 0x prefix (used by the persisted blob)

Hasher Rules (Hard Contracts):
1. hash(data) returns a 32-byte digest of arbitrary bytes
2. compress(left, right) returns a 32-byte digest of two digests
3. Argument order of compress is significant: compress(a, b) != compress(b, a)
"""
from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable


# Every digest produced by a Hasher is this many bytes
DIGEST_SIZE: int = 32


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    parent = sha256(left + right)

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte SHA-256 digest of concatenation
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


@runtime_checkable
class Hasher(Protocol):
    """Hash primitive pair the tree computes every node digest with."""

    def hash(self, data: bytes) -> bytes:
        ...

    def compress(self, left: bytes, right: bytes) -> bytes:
        ...


class Sha256Hasher:
    """
    Reference Hasher backed by SHA-256.

    - hash(data) = sha256(data)
    - compress(left, right) = sha256(left + right)
    """

    def hash(self, data: bytes) -> bytes:
        return sha256(data)

    def compress(self, left: bytes, right: bytes) -> bytes:
        return hash_concat(left, right)

    def __repr__(self) -> str:
        return "Sha256Hasher()"


__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "Hasher",
    "Sha256Hasher",
]
