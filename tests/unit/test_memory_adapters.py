"""Tests for the in-memory storage backend, metadata store and locks."""

import asyncio

import pytest

from collab_storage.core.exceptions import (
    ConcurrentModificationError,
    LockTimeoutError,
    MetadataError,
    StorageError,
)
from collab_storage.infrastructure import (
    InMemoryMetadataStore,
    InMemoryRecordLocks,
    InMemoryStorageBackend,
)


async def _chunks(*parts):
    for part in parts:
        yield part


class TestInMemoryStorageBackend:
    """Test the dict-backed storage backend."""

    @pytest.mark.asyncio
    async def test_write_accepts_bytes_and_streams(self):
        backend = InMemoryStorageBackend()

        assert await backend.write("a", b"abc") == 3
        assert await backend.write("b", _chunks(b"ab", b"cd")) == 4
        assert backend.get_bytes("b") == b"abcd"

    @pytest.mark.asyncio
    async def test_move_copy_remove(self):
        backend = InMemoryStorageBackend({"src": b"data"})

        await backend.copy("src", "copy")
        await backend.move("src", "moved")

        assert backend.paths == ["copy", "moved"]
        assert await backend.remove("copy") is True
        assert await backend.remove("copy") is False

    @pytest.mark.asyncio
    async def test_missing_source_raises(self):
        backend = InMemoryStorageBackend()

        with pytest.raises(StorageError):
            await backend.move("missing", "dest")
        with pytest.raises(StorageError):
            await backend.copy("missing", "dest")

    @pytest.mark.asyncio
    async def test_open_for_read_chunks(self):
        backend = InMemoryStorageBackend({"obj": b"0123456789"})

        chunks = [chunk async for chunk in backend.open_for_read("obj", chunk_size=4)]

        assert chunks == [b"0123", b"4567", b"89"]


class TestInMemoryMetadataStore:
    """Test revision semantics of the dict-backed metadata store."""

    @pytest.mark.asyncio
    async def test_duplicate_insert_rejected(self, sample_record):
        store = InMemoryMetadataStore()
        await store.insert(sample_record.to_document())

        with pytest.raises(MetadataError) as exc_info:
            await store.insert(sample_record.to_document())
        assert exc_info.value.error_code == "DUPLICATE_RECORD"

    @pytest.mark.asyncio
    async def test_update_is_compare_and_swap(self, sample_record):
        store = InMemoryMetadataStore()
        await store.insert(sample_record.to_document())

        updated = await store.update(sample_record.to_document(), expected_revision=0)
        assert updated["revision"] == 1

        with pytest.raises(ConcurrentModificationError):
            await store.update(sample_record.to_document(), expected_revision=0)

    @pytest.mark.asyncio
    async def test_documents_are_isolated_from_callers(self, sample_record):
        store = InMemoryMetadataStore()
        document = sample_record.to_document()
        await store.insert(document)

        document["filename"] = "mutated.pdf"
        fetched = await store.get(str(sample_record.id))
        fetched["size"] = 999

        assert (await store.get(str(sample_record.id)))["filename"] == "report.pdf"
        assert (await store.get(str(sample_record.id)))["size"] == sample_record.size


class TestInMemoryRecordLocks:
    """Test per-record locking."""

    @pytest.mark.asyncio
    async def test_same_id_is_serialized(self):
        locks = InMemoryRecordLocks()
        events = []

        async def worker(name):
            async with locks.lock("file-1"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )
        assert locks.active_keys == 0

    @pytest.mark.asyncio
    async def test_different_ids_do_not_block(self):
        locks = InMemoryRecordLocks(blocking_timeout=0.5)

        async with locks.lock("file-1"):
            async with locks.lock("file-2"):
                assert locks.is_locked("file-1")
                assert locks.is_locked("file-2")

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        locks = InMemoryRecordLocks(blocking_timeout=0.05)

        async with locks.lock("file-1"):
            with pytest.raises(LockTimeoutError) as exc_info:
                async with locks.lock("file-1"):
                    pass

        assert exc_info.value.file_id == "file-1"
        assert not locks.is_locked("file-1")
        assert locks.active_keys == 0
