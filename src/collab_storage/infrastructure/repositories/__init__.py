"""Metadata store implementations."""

from .memory_metadata_store import InMemoryMetadataStore
from .asyncpg_metadata_store import AsyncPGMetadataStore, create_asyncpg_metadata_store

__all__ = [
    "InMemoryMetadataStore",
    "AsyncPGMetadataStore",
    "create_asyncpg_metadata_store",
]
