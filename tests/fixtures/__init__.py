"""
Test fixtures package for sparse Merkle tree tests.

Organized into layers:
- reference.py: hashlib-only reference computations (zero hashes, roots, path folding)
- stores.py: store doubles with injectable read/write failures

Usage:
    from fixtures.reference import dense_root, leaf_value

    def test_something(make_tree, run):
        tree = make_tree("t", 3)
        assert run(tree.update_element(1, leaf_value(1))) == dense_root(3, {1: leaf_value(1)})
"""

from .reference import (
    ZERO64,
    dense_root,
    fold_hash_path,
    leaf_value,
    ref_compress,
    ref_hash,
    ref_zero_hashes,
    sparse_reference_root,
)

from .stores import FlakyStore

__all__ = [
    # Reference
    "ZERO64",
    "dense_root",
    "fold_hash_path",
    "leaf_value",
    "ref_compress",
    "ref_hash",
    "ref_zero_hashes",
    "sparse_reference_root",
    # Stores
    "FlakyStore",
]
