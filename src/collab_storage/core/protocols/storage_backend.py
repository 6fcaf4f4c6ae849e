"""Storage backend protocol.

ONLY storage backend contract - byte-addressable object storage keyed by
path string. Local disk is the default implementation; object stores and
the in-memory fake are substitutable.
"""

from typing import AsyncIterator, Protocol, Union, runtime_checkable


ContentSource = Union[bytes, AsyncIterator[bytes]]


@runtime_checkable
class StorageBackendProtocol(Protocol):
    """Storage backend protocol.
    
    Implementations translate their own I/O failures into ``StorageError``.
    ``write``, ``move`` and ``copy`` must never leave a half-written object
    at the destination path.
    """
    
    async def exists(self, path: str) -> bool:
        """Check if an object exists at ``path``."""
        ...
    
    async def write(self, path: str, content: ContentSource) -> int:
        """Write content to ``path``, replacing any existing object.
        
        Args:
            path: Destination path
            content: Bytes or an async iterator of byte chunks
        
        Returns:
            Number of bytes written
        """
        ...
    
    async def move(self, source: str, destination: str) -> None:
        """Move an object, atomically where the backend supports it."""
        ...
    
    async def copy(self, source: str, destination: str) -> None:
        """Copy an object onto ``destination``, replacing any existing object."""
        ...
    
    async def remove(self, path: str) -> bool:
        """Remove an object.
        
        Returns:
            True if the object existed and was removed, False if not found
        """
        ...
    
    def open_for_read(self, path: str, chunk_size: int = 64 * 1024) -> AsyncIterator[bytes]:
        """Stream an object's bytes in chunks.
        
        Raises ``StorageError`` when the object cannot be read.
        """
        ...
    
    async def ensure_container(self, path: str) -> None:
        """Make sure a directory-like container exists. Idempotent."""
        ...
    
    async def ping(self) -> bool:
        """Health check - verify storage is responsive."""
        ...
