"""File storage services.

Orchestration services that coordinate commands, queries, and the
storage, metadata and lock components.
"""

from .path_resolver import PathResolver, sanitize_filename
from .version_chain import VersionChainManager
from .metadata_manager import MetadataManager
from .file_storage_engine import FileStorageEngine, create_file_storage_engine

__all__ = [
    "PathResolver",
    "sanitize_filename",
    "VersionChainManager",
    "MetadataManager",
    "FileStorageEngine",
    "create_file_storage_engine",
]
