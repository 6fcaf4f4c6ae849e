"""File storage core domain layer.

Clean core containing only entities, value objects, exceptions, and
protocols. No orchestration logic or external dependencies.
"""

from .entities import *
from .value_objects import *
from .exceptions import *
from .protocols import *

__all__ = [
    # Entities
    "FileRecord",
    "VersionEntry",
    
    # Value Objects
    "FileId",
    "FileContent",
    
    # Exceptions
    "CollabStorageError",
    "NotFound",
    "FileNotFound",
    "VersionNotFound",
    "StorageError",
    "LockTimeoutError",
    "MetadataError",
    "ConcurrentModificationError",
    "DriftWarning",
    
    # Protocols
    "StorageBackendProtocol",
    "MetadataStoreProtocol",
    "RecordLockProvider",
]
