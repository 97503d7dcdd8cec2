"""
Module 02 - Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic JSON serialization for persisted tree blobs.

CRITICAL: All outputs from this module MUST be deterministic across runs.
Two trees holding the same node digests serialize to the same string.
"""

import json
from typing import Any

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, bytes):
        return "0x" + value.hex()

    if isinstance(value, dict):
        # JSON object keys are strings; integer level/index keys become "3"
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to canonical JSON string.

    Returns:
        A canonical JSON string with:
            - Sorted keys
            - No extra whitespace
            - None fields excluded
            - Bytes as 0x-prefixed lowercase hex

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({1: {0: b"\\x01"}, 0: {}})
        '{"0":{},"1":{"0":"0x01"}}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except Exception as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e
