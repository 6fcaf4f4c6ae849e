"""Storage backend implementations."""

from .local_backend import LocalStorageBackend, create_local_storage_backend
from .memory_backend import InMemoryStorageBackend

__all__ = [
    "LocalStorageBackend",
    "create_local_storage_backend",
    "InMemoryStorageBackend",
]
