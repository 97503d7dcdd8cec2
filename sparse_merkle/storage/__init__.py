"""
Key-value stores the tree persists through.
"""
from .base import KeyValueStore
from .file import FileStore
from .memory import InMemoryStore

__all__ = [
    "KeyValueStore",
    "FileStore",
    "InMemoryStore",
]
