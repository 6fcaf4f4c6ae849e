"""File storage protocols."""

from .storage_backend import StorageBackendProtocol, ContentSource
from .metadata_store import MetadataStoreProtocol
from .record_lock import RecordLockProvider

__all__ = [
    "StorageBackendProtocol",
    "ContentSource",
    "MetadataStoreProtocol",
    "RecordLockProvider",
]
