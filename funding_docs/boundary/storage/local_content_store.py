"""
Filesystem content store for local development and tests.

Dependencies: pathlib
System role: Development content store
"""

import asyncio
import logging
from pathlib import Path

from funding_docs.boundary.storage.base import ContentStore
from funding_docs.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalContentStore(ContentStore):
    """Content store writing blobs below a local root directory."""

    def __init__(self, root: str | Path, prefix: str = "documents") -> None:
        self._root = Path(root).resolve()
        self._prefix = prefix

    async def put(self, data: bytes, fingerprint: str, content_type: str) -> str:
        path = self._root / self.object_key(fingerprint, self._prefix)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise StorageError(f"Local write failed: {e}", str(path)) from e

        logger.info(
            f"{__name__}:put - Stored document",
            extra={"path": str(path), "size_bytes": len(data)},
        )
        return f"file://{path}"

    async def get(self, locator: str) -> bytes:
        if not locator.startswith("file://"):
            raise StorageError(f"Not a file locator: {locator}", locator)
        path = Path(locator[len("file://"):])

        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise StorageError(f"File not found: {path}", locator) from e
        except OSError as e:
            raise StorageError(f"Local read failed: {e}", locator) from e
