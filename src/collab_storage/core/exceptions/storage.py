"""Storage and metadata failure exceptions.

ONLY operation failures - backend I/O errors, document store errors, and
lock acquisition failures. These abort the running operation and reach the
caller unmodified.
"""

from typing import Any, Dict, Optional

from .base import CollabStorageError


class StorageError(CollabStorageError):
    """Raised when a storage backend operation fails.
    
    Covers permission errors, missing directories, full disks and any
    other I/O failure. The underlying exception is chained as ``__cause__``.
    """
    
    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        path: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if operation:
            enhanced_details["operation"] = operation
        if path:
            enhanced_details["path"] = path
        
        super().__init__(
            message=message,
            error_code=error_code or "STORAGE_ERROR",
            details=enhanced_details
        )
        
        self.operation = operation
        self.path = path


class LockTimeoutError(StorageError):
    """Raised when the per-record lock cannot be acquired in time."""
    
    def __init__(self, message: str, file_id: Optional[str] = None):
        super().__init__(
            message=message,
            operation="lock",
            error_code="LOCK_TIMEOUT",
            details={"file_id": str(file_id)} if file_id else None
        )
        self.file_id = file_id


class MetadataError(CollabStorageError):
    """Raised when the metadata document store fails."""
    
    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        operation: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if file_id:
            enhanced_details["file_id"] = str(file_id)
        if operation:
            enhanced_details["operation"] = operation
        
        super().__init__(
            message=message,
            error_code=error_code or "METADATA_ERROR",
            details=enhanced_details
        )
        
        self.file_id = file_id
        self.operation = operation


class ConcurrentModificationError(MetadataError):
    """Raised when a record changed since it was loaded.
    
    The metadata store only applies an update when the stored revision
    matches the revision the writer loaded.
    """
    
    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        expected_revision: Optional[int] = None
    ):
        super().__init__(
            message=message,
            file_id=file_id,
            operation="update",
            error_code="CONCURRENT_MODIFICATION",
            details={"expected_revision": expected_revision}
        )
        self.expected_revision = expected_revision
