"""
collab-storage: versioned file storage for collaborative document editing.

Stores uploaded files under an active root, archives every replaced
revision under an archive root, and tracks both in one metadata document
per file.
"""

from .__version__ import __version__
from .config import setup_logging

# Configure logging once at package import
setup_logging()

from .config import StorageSettings, LockBackend, get_settings
from .core.entities import FileRecord, VersionEntry
from .core.value_objects import FileId, FileContent
from .core.exceptions import (
    CollabStorageError,
    NotFound,
    FileNotFound,
    VersionNotFound,
    InvalidFileMetadata,
    StorageError,
    LockTimeoutError,
    MetadataError,
    ConcurrentModificationError,
    DriftWarning,
    get_http_status_code,
)
from .application.services import FileStorageEngine, create_file_storage_engine
from .application.commands import DeleteFileResult

__all__ = [
    "__version__",

    # Configuration
    "StorageSettings",
    "LockBackend",
    "get_settings",

    # Engine
    "FileStorageEngine",
    "create_file_storage_engine",
    "DeleteFileResult",

    # Domain
    "FileRecord",
    "VersionEntry",
    "FileId",
    "FileContent",

    # Exceptions
    "CollabStorageError",
    "NotFound",
    "FileNotFound",
    "VersionNotFound",
    "InvalidFileMetadata",
    "StorageError",
    "LockTimeoutError",
    "MetadataError",
    "ConcurrentModificationError",
    "DriftWarning",
    "get_http_status_code",
]
