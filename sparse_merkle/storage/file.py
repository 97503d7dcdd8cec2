"""
File-backed KeyValueStore

One `<key>.json` file per tree under a root directory.

- Reads and writes run in a worker thread (asyncio.to_thread)
- Writes go to a temp file in the same directory, then os.replace
- A missing file means "absent"; any other OSError is a typed store failure
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from sparse_merkle.config.runtime import TreeConfig, get_default_config
from sparse_merkle.schemas.errors import (
    ConfigurationException,
    StoreReadException,
    StoreWriteException,
)

from .base import KeyValueStore

logger = logging.getLogger(__name__)

# Keys become file names, so keep them to a safe alphabet
_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")

BLOB_SUFFIX = ".json"


class FileStore(KeyValueStore):
    """Stores each blob as a UTF-8 JSON file named after its key."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_config(cls, config: Optional[TreeConfig] = None) -> "FileStore":
        """Store rooted at config.store_path (SPARSE_MERKLE_STORE_PATH)."""
        return cls((config or get_default_config()).store_path)

    def path_for(self, key: str) -> Path:
        """File path holding key's blob."""
        if not _KEY_PATTERN.match(key) or ".." in key:
            raise ConfigurationException(
                f"Store key is not a safe file name: {key!r}",
                field_path="name",
            )
        return self.root / f"{key}{BLOB_SUFFIX}"

    async def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        return await asyncio.to_thread(self._read, key, path)

    async def put(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        await asyncio.to_thread(self._write, key, path, blob)

    def _read(self, key: str, path: Path) -> Optional[str]:
        try:
            data = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"no blob for {key!r} at {path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StoreReadException(
                f"Failed to read blob for {key!r}: {e}",
                key=key,
                details={"path": str(path)},
            ) from e
        logger.debug(f"read {key!r} from {path} ({len(data)} chars)")
        return data

    def _write(self, key: str, path: Path, blob: str) -> None:
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self.root
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StoreWriteException(
                f"Failed to write blob for {key!r}: {e}",
                key=key,
                details={"path": str(path)},
            ) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug(f"wrote {key!r} to {path} ({len(blob)} chars)")
