"""
Sparse leaf value storage.

Holds the 64-byte values written to this tree instance, keyed by leaf index.
An index that was never written stands for 64 zero bytes. Values live only in
memory; the persisted blob carries digests, never these values.
"""
from __future__ import annotations

from typing import Iterator

from sparse_merkle.constants import LEAF_BYTES
from sparse_merkle.schemas.errors import LeafValueException


class DataBlockStore:
    """Sparse index -> 64-byte value mapping."""

    def __init__(self) -> None:
        self._blocks: dict[int, bytes] = {}

    def set(self, index: int, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise LeafValueException(
                f"Leaf value must be bytes, got {type(value).__name__}",
                index=index,
            )
        value = bytes(value)
        if len(value) != LEAF_BYTES:
            raise LeafValueException(
                f"Leaf value must be exactly {LEAF_BYTES} bytes, got {len(value)}",
                index=index,
                details={"length": len(value)},
            )
        self._blocks[index] = value

    def items(self) -> Iterator[tuple[int, bytes]]:
        return iter(self._blocks.items())

