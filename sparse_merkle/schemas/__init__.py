"""
Module 02 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the error taxonomy and canonical JSON helpers.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    ErrorCodes,
    IndexOutOfRangeException,
    LeafValueException,
    PersistenceException,
    RestoreException,
    SparseMerkleError,
    SparseMerkleException,
    StoreReadException,
    StoreWriteException,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationException",
    "ErrorCodes",
    "IndexOutOfRangeException",
    "LeafValueException",
    "PersistenceException",
    "RestoreException",
    "SparseMerkleError",
    "SparseMerkleException",
    "StoreReadException",
    "StoreWriteException",
]
