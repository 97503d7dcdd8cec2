"""
Tree-wide constants.
"""

# Deepest supported tree: 2^32 leaf slots
MAX_DEPTH: int = 32

# Shallowest supported tree: a root over two leaves
MIN_DEPTH: int = 1

# Every leaf value is exactly this many bytes
LEAF_BYTES: int = 64

# The value of a leaf that was never written
ZERO_LEAF: bytes = bytes(LEAF_BYTES)
