"""File storage infrastructure layer.

Concrete storage backends, metadata stores, and record lock providers.
"""

from .storage import *
from .repositories import *
from .locks import *

__all__ = [
    # Storage backends
    "LocalStorageBackend",
    "create_local_storage_backend",
    "InMemoryStorageBackend",
    
    # Metadata stores
    "InMemoryMetadataStore",
    "AsyncPGMetadataStore",
    "create_asyncpg_metadata_store",
    
    # Record locks
    "InMemoryRecordLocks",
    "RedisRecordLocks",
    "create_redis_record_locks",
]
