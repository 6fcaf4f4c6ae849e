"""Pytest configuration and fixtures for collab-storage tests."""

import pytest

from collab_storage.application.services import (
    FileStorageEngine,
    MetadataManager,
    PathResolver,
    VersionChainManager,
)
from collab_storage.config import StorageSettings
from collab_storage.core.entities import FileRecord
from collab_storage.infrastructure import (
    InMemoryMetadataStore,
    InMemoryRecordLocks,
    InMemoryStorageBackend,
    LocalStorageBackend,
)


@pytest.fixture
def storage_settings(tmp_path):
    """Settings rooted in a per-test temporary directory."""
    return StorageSettings(active_root=tmp_path / "uploads", _env_file=None)


@pytest.fixture
def memory_backend():
    """Empty in-memory storage backend."""
    return InMemoryStorageBackend()


@pytest.fixture
def metadata_store():
    """Empty in-memory metadata store."""
    return InMemoryMetadataStore()


@pytest.fixture
def record_locks():
    """In-process record locks."""
    return InMemoryRecordLocks(blocking_timeout=5.0)


@pytest.fixture
def path_resolver(storage_settings, memory_backend):
    return PathResolver(
        active_root=storage_settings.active_root,
        archive_root=storage_settings.archive_root,
        storage_backend=memory_backend
    )


@pytest.fixture
def version_chain(memory_backend, path_resolver):
    return VersionChainManager(memory_backend, path_resolver)


@pytest.fixture
def metadata_manager(metadata_store):
    return MetadataManager(metadata_store)


@pytest.fixture
def memory_engine(storage_settings, memory_backend, metadata_store, record_locks):
    """Engine wired entirely to in-memory components."""
    return FileStorageEngine(
        settings=storage_settings,
        storage_backend=memory_backend,
        metadata_store=metadata_store,
        lock_provider=record_locks
    )


@pytest.fixture
def local_engine(storage_settings, metadata_store, record_locks):
    """Engine storing objects on the local filesystem under tmp_path."""
    return FileStorageEngine(
        settings=storage_settings,
        storage_backend=LocalStorageBackend(),
        metadata_store=metadata_store,
        lock_provider=record_locks
    )


@pytest.fixture
def sample_record(storage_settings):
    """File record whose active object has not been written."""
    return FileRecord(
        filename="report.pdf",
        filepath=str(storage_settings.active_root / "0001-report.pdf"),
        mimetype="application/pdf",
        size=11
    )


@pytest.fixture
def sample_content():
    """Small PDF-looking payload."""
    return b"%PDF-1.4 v1"
