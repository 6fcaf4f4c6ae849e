"""In-memory storage backend.

ONLY in-process object storage - a dict-backed implementation of the
storage backend protocol for tests and ephemeral deployments.
"""

import logging
from typing import AsyncIterator, Dict, List, Optional

from ...core.exceptions import StorageError
from ...core.protocols.storage_backend import ContentSource

logger = logging.getLogger(__name__)


class InMemoryStorageBackend:
    """Dict-backed implementation of ``StorageBackendProtocol``.
    
    Every mutation replaces a whole dict entry, so objects are never
    observed half-written.
    """
    
    def __init__(self, objects: Optional[Dict[str, bytes]] = None):
        self._objects: Dict[str, bytes] = dict(objects or {})
    
    async def exists(self, path: str) -> bool:
        return path in self._objects
    
    async def write(self, path: str, content: ContentSource) -> int:
        if isinstance(content, (bytes, bytearray, memoryview)):
            data = bytes(content)
        else:
            chunks: List[bytes] = []
            async for chunk in content:
                chunks.append(chunk)
            data = b"".join(chunks)
        self._objects[path] = data
        return len(data)
    
    async def move(self, source: str, destination: str) -> None:
        if source not in self._objects:
            raise StorageError(f"No object at {source}", operation="move", path=source)
        self._objects[destination] = self._objects.pop(source)
    
    async def copy(self, source: str, destination: str) -> None:
        if source not in self._objects:
            raise StorageError(f"No object at {source}", operation="copy", path=source)
        self._objects[destination] = self._objects[source]
    
    async def remove(self, path: str) -> bool:
        return self._objects.pop(path, None) is not None
    
    async def open_for_read(self, path: str, chunk_size: int = 64 * 1024) -> AsyncIterator[bytes]:
        if path not in self._objects:
            raise StorageError(f"No object at {path}", operation="read", path=path)
        data = self._objects[path]
        for offset in range(0, len(data), chunk_size):
            yield data[offset:offset + chunk_size]
    
    async def ensure_container(self, path: str) -> None:
        return None
    
    async def ping(self) -> bool:
        return True
    
    # Inspection helpers for tests and diagnostics
    
    def get_bytes(self, path: str) -> Optional[bytes]:
        """Return the raw bytes stored at ``path``."""
        return self._objects.get(path)
    
    @property
    def paths(self) -> List[str]:
        return sorted(self._objects)
