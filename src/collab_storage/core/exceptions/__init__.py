"""Exceptions for collab-storage.

NotFound covers missing records and versions. InvalidFileMetadata rejects
input before anything is written. StorageError and MetadataError abort an
operation. DriftWarning is only ever logged.
"""

from .base import CollabStorageError, create_error_response
from .not_found import NotFound, FileNotFound, VersionNotFound
from .validation import InvalidFileMetadata
from .storage import (
    StorageError,
    LockTimeoutError,
    MetadataError,
    ConcurrentModificationError,
)
from .drift import DriftWarning, report_drift
from .http_mapping import HTTP_STATUS_MAP, get_http_status_code

__all__ = [
    # Base Exception
    "CollabStorageError",
    
    # Not Found
    "NotFound",
    "FileNotFound",
    "VersionNotFound",
    
    # Rejected input
    "InvalidFileMetadata",
    
    # Operation failures
    "StorageError",
    "LockTimeoutError",
    "MetadataError",
    "ConcurrentModificationError",
    
    # Drift
    "DriftWarning",
    "report_drift",
    
    # Utility Functions
    "HTTP_STATUS_MAP",
    "get_http_status_code",
    "create_error_response",
]
