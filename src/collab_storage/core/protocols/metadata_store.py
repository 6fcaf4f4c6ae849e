"""Metadata store protocol.

ONLY document store contract - create, find, update and delete FileRecord
documents (with their embedded version arrays) by id.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class MetadataStoreProtocol(Protocol):
    """Document store for file records.
    
    Documents are plain dicts as produced by ``FileRecord.to_document``.
    Implementations raise ``MetadataError`` on store failures and
    ``ConcurrentModificationError`` when an update's expected revision does
    not match the stored one.
    """
    
    async def insert(self, document: Dict[str, Any]) -> None:
        """Insert a new document."""
        ...
    
    async def get(self, file_id: str) -> Optional[Dict[str, Any]]:
        """Find a document by id, or None."""
        ...
    
    async def update(self, document: Dict[str, Any], expected_revision: int) -> Dict[str, Any]:
        """Replace a document if its stored revision equals ``expected_revision``.
        
        Returns:
            The stored document, with ``revision`` incremented by one
        """
        ...
    
    async def delete(self, file_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        ...
    
    async def list_all(self) -> List[Dict[str, Any]]:
        """List every document ordered by creation time."""
        ...
    
    async def ping(self) -> bool:
        """Health check - verify the store is responsive."""
        ...
