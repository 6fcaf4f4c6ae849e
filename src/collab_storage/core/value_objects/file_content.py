"""Downloaded file content value object.

ONLY download payload - an async byte stream of the active object together
with the display name and MIME type the route layer needs to serve it.
"""

from dataclasses import dataclass
from typing import AsyncIterator

from .file_id import FileId


@dataclass(frozen=True)
class FileContent:
    """Readable content of a file record's active object."""
    
    file_id: FileId
    filename: str
    mimetype: str
    size: int
    stream: AsyncIterator[bytes]
    
    async def read_all(self) -> bytes:
        """Drain the stream into memory. Meant for small files and tests."""
        chunks = []
        async for chunk in self.stream:
            chunks.append(chunk)
        return b"".join(chunks)
