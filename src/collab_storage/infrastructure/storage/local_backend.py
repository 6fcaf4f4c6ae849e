"""Local filesystem storage backend.

ONLY local disk storage - implements the storage backend protocol over the
local filesystem with aiofiles, so file I/O never blocks the event loop.
"""

import asyncio
import errno
import logging
import os
from typing import AsyncIterator

import aiofiles
import aiofiles.os

from ...core.exceptions import StorageError
from ...core.protocols.storage_backend import ContentSource
from ...utils import generate_uuid_v7

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


def _temp_sibling(path: str) -> str:
    """Temporary file next to ``path`` so the final rename stays on one device."""
    directory, name = os.path.split(path)
    return os.path.join(directory, f".{name}.{generate_uuid_v7()}.part")


async def _discard(path: str) -> None:
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        pass


class LocalStorageBackend:
    """Local disk implementation of ``StorageBackendProtocol``.

    Writes and copies land in a temporary sibling first and are renamed
    onto the destination with ``aiofiles.os.replace``, so a failed or
    cancelled operation never leaves a truncated object at the destination.
    """

    def __init__(self, create_parents: bool = True):
        """Initialize local storage backend.

        Args:
            create_parents: Create missing parent directories on write/move/copy
        """
        self._create_parents = create_parents

    async def exists(self, path: str) -> bool:
        return await aiofiles.os.path.isfile(path)

    async def write(self, path: str, content: ContentSource) -> int:
        temp_path = _temp_sibling(path)
        try:
            await self._prepare_parent(path)
            written = 0
            async with aiofiles.open(temp_path, "wb") as fh:
                if isinstance(content, (bytes, bytearray, memoryview)):
                    written = await fh.write(bytes(content))
                else:
                    async for chunk in content:
                        await fh.write(chunk)
                        written += len(chunk)
            await aiofiles.os.replace(temp_path, path)
        except OSError as e:
            await _discard(temp_path)
            raise StorageError(
                f"Failed to write {path}: {e.strerror or e}",
                operation="write",
                path=path
            ) from e
        except BaseException:
            # Cancellation or a failing content iterator
            await asyncio.shield(_discard(temp_path))
            raise

        logger.debug(f"Wrote {written} bytes to {path}")
        return written

    async def move(self, source: str, destination: str) -> None:
        try:
            await self._prepare_parent(destination)
            try:
                await aiofiles.os.replace(source, destination)
            except OSError as e:
                if e.errno != errno.EXDEV:
                    raise
                # Archive root on another device: copy, then drop the source
                await self._copy_via_temp(source, destination)
                await aiofiles.os.remove(source)
        except OSError as e:
            raise StorageError(
                f"Failed to move {source} to {destination}: {e.strerror or e}",
                operation="move",
                path=source,
                details={"destination": destination}
            ) from e
        logger.debug(f"Moved {source} to {destination}")

    async def copy(self, source: str, destination: str) -> None:
        try:
            await self._prepare_parent(destination)
            await self._copy_via_temp(source, destination)
        except OSError as e:
            raise StorageError(
                f"Failed to copy {source} to {destination}: {e.strerror or e}",
                operation="copy",
                path=source,
                details={"destination": destination}
            ) from e
        logger.debug(f"Copied {source} to {destination}")

    async def remove(self, path: str) -> bool:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(
                f"Failed to remove {path}: {e.strerror or e}",
                operation="remove",
                path=path
            ) from e
        logger.debug(f"Removed {path}")
        return True

    async def open_for_read(self, path: str, chunk_size: int = 64 * 1024) -> AsyncIterator[bytes]:
        try:
            handle = await aiofiles.open(path, "rb")
        except OSError as e:
            raise StorageError(
                f"Failed to open {path}: {e.strerror or e}",
                operation="read",
                path=path
            ) from e
        try:
            while True:
                chunk = await handle.read(chunk_size)
                if not chunk:
                    break
                yield chunk
        except OSError as e:
            raise StorageError(
                f"Failed to read {path}: {e.strerror or e}",
                operation="read",
                path=path
            ) from e
        finally:
            await handle.close()

    async def ensure_container(self, path: str) -> None:
        try:
            await aiofiles.os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Failed to create directory {path}: {e.strerror or e}",
                operation="mkdir",
                path=path
            ) from e

    async def ping(self) -> bool:
        return True

    # Helpers

    async def _prepare_parent(self, path: str) -> None:
        parent = os.path.dirname(path)
        if self._create_parents and parent:
            await aiofiles.os.makedirs(parent, exist_ok=True)

    async def _copy_via_temp(self, source: str, destination: str) -> None:
        temp_path = _temp_sibling(destination)
        try:
            async with aiofiles.open(source, "rb") as src, aiofiles.open(temp_path, "wb") as dst:
                while True:
                    chunk = await src.read(COPY_CHUNK_SIZE)
                    if not chunk:
                        break
                    await dst.write(chunk)
            await aiofiles.os.replace(temp_path, destination)
        except BaseException:
            await asyncio.shield(_discard(temp_path))
            raise


def create_local_storage_backend(create_parents: bool = True) -> LocalStorageBackend:
    """Create local storage backend."""
    return LocalStorageBackend(create_parents=create_parents)
