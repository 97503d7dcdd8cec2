"""
Module 03 - Hash Paths
Inclusion paths from a leaf up to (but excluding) the root.

A hash path for a tree of depth d is d (left, right) digest pairs, leaf
level first. At each level the pair is the node on the path and its
sibling, ordered by index: the even index is always on the left.

To recompute the root, a verifier hashes the leaf value, checks it sits on
the correct side of pair 0, then folds upward with compress. That folding
is left to the verifier; this module only produces paths.

Example (depth 3, index 2, nodes marked * are returned):
    level 3:                 [ root ]
    level 2:         [*]                  [*]
    level 1:    [*]       [*]        [ ]       [ ]
    level 0:  [ ] [ ]   [*] [*]    [ ] [ ]   [ ] [ ]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from sparse_merkle.crypto.hashing import DIGEST_SIZE, from_hex, to_hex

from .node_cache import NodeCache


@dataclass(frozen=True)
class HashPath:
    """
    Ordered (left, right) digest pairs from the leaf level upward.

    Attributes:
        pairs: One (left, right) tuple per level, level 0 first
    """
    pairs: tuple[tuple[bytes, bytes], ...]

    def __post_init__(self) -> None:
        for level, pair in enumerate(self.pairs):
            if len(pair) != 2:
                raise ValueError(f"Hash path level {level} must be a (left, right) pair")
            for digest in pair:
                if len(digest) != DIGEST_SIZE:
                    raise ValueError(
                        f"Hash path level {level} holds a {len(digest)}-byte digest, "
                        f"expected {DIGEST_SIZE}"
                    )

    @property
    def depth(self) -> int:
        return len(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[tuple[bytes, bytes]]:
        return iter(self.pairs)

    def __getitem__(self, level: int) -> tuple[bytes, bytes]:
        return self.pairs[level]

    def to_dict(self) -> dict[str, Any]:
        """Hex-encoded form for JSON transport."""
        return {"pairs": [[to_hex(left), to_hex(right)] for left, right in self.pairs]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HashPath":
        return cls(
            pairs=tuple(
                (from_hex(left), from_hex(right)) for left, right in data["pairs"]
            )
        )


def build_hash_path(
    nodes: NodeCache,
    zero_hashes: Sequence[bytes],
    index: int,
) -> HashPath:
    """
    Collect the sibling pairs for the leaf at index.

    The caller guarantees 0 <= index < 2^depth.
    """
    pairs: list[tuple[bytes, bytes]] = []
    for level in range(nodes.depth):
        sibling = index ^ 1
        node = nodes.resolve(level, index, zero_hashes)
        other = nodes.resolve(level, sibling, zero_hashes)
        pairs.append((node, other) if index < sibling else (other, node))
        index //= 2
    return HashPath(pairs=tuple(pairs))


__all__ = [
    "HashPath",
    "build_hash_path",
]
