"""File storage engine service.

ONLY file storage orchestration - the public entry point that wires the
storage backend, metadata store and record locks together and runs every
mutating operation under the record's lock.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from ...config import LockBackend, StorageSettings, get_settings
from ...core.entities import FileRecord, VersionEntry
from ...core.exceptions import FileNotFound
from ...core.protocols import MetadataStoreProtocol, RecordLockProvider, StorageBackendProtocol
from ...core.protocols.storage_backend import ContentSource
from ...core.value_objects import FileContent, FileId
from ...infrastructure.locks import InMemoryRecordLocks, create_redis_record_locks
from ...infrastructure.repositories import InMemoryMetadataStore, create_asyncpg_metadata_store
from ...infrastructure.storage import create_local_storage_backend
from ..commands.delete_file import DeleteFileCommand, DeleteFileData, DeleteFileResult
from ..commands.replace_file import ReplaceFileCommand, ReplaceFileData
from ..commands.restore_version import RestoreVersionCommand, RestoreVersionData
from ..commands.store_file import StoreFileCommand, StoreFileData
from ..queries.download_file import DownloadFileData, DownloadFileQuery
from ..queries.list_files import ListFilesQuery
from ..queries.list_versions import ListVersionsData, ListVersionsQuery
from .metadata_manager import MetadataManager
from .path_resolver import PathResolver
from .version_chain import VersionChainManager

logger = logging.getLogger(__name__)

FileIdLike = Union[FileId, UUID, str]


class FileStorageEngine:
    """Versioned file storage engine.

    Orchestrates:
    - Store, replace, delete and restore under a per-record lock
    - Version listing and content download
    - Health checks across the backend and the metadata store

    Operations on different records never wait on each other. Reads do not
    take the lock; they see either the state before or after a concurrent
    mutation.
    """

    def __init__(
        self,
        settings: StorageSettings,
        storage_backend: StorageBackendProtocol,
        metadata_store: MetadataStoreProtocol,
        lock_provider: RecordLockProvider
    ):
        """Initialize file storage engine.

        Args:
            settings: Storage settings (roots and policies)
            storage_backend: Backend holding active and archived objects
            metadata_store: Document store holding file records
            lock_provider: Per-record lock provider
        """
        self._settings = settings
        self._storage_backend = storage_backend
        self._metadata_store = metadata_store
        self._locks = lock_provider

        self._path_resolver = PathResolver(
            active_root=settings.active_root,
            archive_root=settings.archive_root,
            storage_backend=storage_backend
        )
        self._metadata_manager = MetadataManager(metadata_store)
        self._version_chain = VersionChainManager(storage_backend, self._path_resolver)

        # Initialize commands
        self._store_command = StoreFileCommand(
            storage_backend=storage_backend,
            path_resolver=self._path_resolver,
            metadata_manager=self._metadata_manager
        )
        self._replace_command = ReplaceFileCommand(
            storage_backend=storage_backend,
            path_resolver=self._path_resolver,
            version_chain=self._version_chain,
            metadata_manager=self._metadata_manager
        )
        self._delete_command = DeleteFileCommand(
            storage_backend=storage_backend,
            version_chain=self._version_chain,
            metadata_manager=self._metadata_manager,
            cascade_versions=settings.cascade_delete_versions
        )
        self._restore_command = RestoreVersionCommand(
            storage_backend=storage_backend,
            version_chain=self._version_chain,
            metadata_manager=self._metadata_manager,
            archive_on_restore=settings.archive_on_restore
        )

        # Initialize queries
        self._list_versions_query = ListVersionsQuery(self._metadata_manager, self._version_chain)
        self._download_query = DownloadFileQuery(
            storage_backend=storage_backend,
            metadata_manager=self._metadata_manager,
            chunk_size=settings.read_chunk_size
        )
        self._list_files_query = ListFilesQuery(self._metadata_manager)

    @property
    def settings(self) -> StorageSettings:
        return self._settings

    @property
    def path_resolver(self) -> PathResolver:
        return self._path_resolver

    async def initialize(self) -> None:
        """Create the active and archive roots."""
        await self._path_resolver.ensure_layout()

    # Mutating operations

    async def store(
        self,
        content: ContentSource,
        filename: str,
        mimetype: str,
        size: Optional[int] = None
    ) -> FileRecord:
        """Store a new file and return its record.

        The new record has an empty version chain. No lock is taken since
        nothing else can know the new id yet.
        """
        return await self._store_command.execute(StoreFileData(
            content=content,
            filename=filename,
            mimetype=mimetype,
            size=size
        ))

    async def replace(
        self,
        file_id: FileIdLike,
        content: ContentSource,
        filename: str,
        mimetype: str,
        size: Optional[int] = None
    ) -> FileRecord:
        """Replace a file's content, archiving the current content first.

        Raises:
            FileNotFound: If the record does not exist
            LockTimeoutError: If the record stays locked too long
            StorageError: If the content cannot be written or archived
            MetadataError: If the record cannot be updated
        """
        record_id = self._coerce_id(file_id)
        async with self._locks.lock(str(record_id)):
            return await self._replace_command.execute(ReplaceFileData(
                file_id=record_id,
                content=content,
                filename=filename,
                mimetype=mimetype,
                size=size
            ))

    async def delete(self, file_id: FileIdLike, delete_versions: Optional[bool] = None) -> DeleteFileResult:
        """Delete a file.

        Archived versions follow ``settings.cascade_delete_versions`` unless
        ``delete_versions`` overrides it.
        """
        record_id = self._coerce_id(file_id)
        async with self._locks.lock(str(record_id)):
            return await self._delete_command.execute(DeleteFileData(
                file_id=record_id,
                delete_versions=delete_versions
            ))

    async def restore_version(self, file_id: FileIdLike, version_number: int) -> FileRecord:
        """Make archived version ``version_number`` the active content again.

        Raises:
            FileNotFound: If the record does not exist
            VersionNotFound: If the version does not exist
            StorageError: If the archived object is missing or cannot be copied
        """
        record_id = self._coerce_id(file_id)
        async with self._locks.lock(str(record_id)):
            return await self._restore_command.execute(RestoreVersionData(
                file_id=record_id,
                version_number=version_number
            ))

    # Read operations

    async def list_versions(self, file_id: FileIdLike) -> List[VersionEntry]:
        """Version chain of a file in ascending order."""
        return await self._list_versions_query.execute(ListVersionsData(file_id=self._coerce_id(file_id)))

    async def download(self, file_id: FileIdLike) -> FileContent:
        """Open the active content of a file for streaming."""
        return await self._download_query.execute(DownloadFileData(file_id=self._coerce_id(file_id)))

    async def get_file(self, file_id: FileIdLike) -> FileRecord:
        """Load a file record."""
        return await self._metadata_manager.get(self._coerce_id(file_id))

    async def list_files(self) -> List[FileRecord]:
        """All file records, oldest first."""
        return await self._list_files_query.execute()

    # Lifecycle

    async def health_check(self) -> Dict[str, Any]:
        """Check backend and metadata store health."""
        storage_ok = await self._storage_backend.ping()
        metadata_ok = await self._metadata_store.ping()
        return {
            "healthy": storage_ok and metadata_ok,
            "storage": storage_ok,
            "metadata": metadata_ok,
            "active_root": str(self._settings.active_root),
            "archive_root": str(self._settings.archive_root),
        }

    async def close(self) -> None:
        """Release connections held by the metadata store and lock provider."""
        for resource in (self._metadata_store, self._locks):
            close = getattr(resource, "close", None)
            if close is not None:
                await close()

    @staticmethod
    def _coerce_id(file_id: FileIdLike) -> FileId:
        try:
            return FileId.coerce(file_id)
        except ValueError as e:
            raise FileNotFound(f"File {file_id} not found", file_id=str(file_id)) from e


async def create_file_storage_engine(
    settings: Optional[StorageSettings] = None,
    storage_backend: Optional[StorageBackendProtocol] = None,
    metadata_store: Optional[MetadataStoreProtocol] = None,
    lock_provider: Optional[RecordLockProvider] = None
) -> FileStorageEngine:
    """Create a file storage engine from settings.

    Components not passed in are built from ``settings``: local disk
    storage, PostgreSQL metadata when ``database_url`` is set (in-memory
    otherwise), and in-memory or Redis locks per ``lock_backend``.
    """
    settings = settings or get_settings()

    if storage_backend is None:
        storage_backend = create_local_storage_backend()

    if metadata_store is None:
        if settings.database_url:
            metadata_store = await create_asyncpg_metadata_store(
                settings.database_url,
                table=settings.metadata_table_name
            )
        else:
            logger.warning("No database_url configured, file records are kept in memory only")
            metadata_store = InMemoryMetadataStore()

    if lock_provider is None:
        if settings.lock_backend == LockBackend.REDIS:
            lock_provider = create_redis_record_locks(
                settings.redis_url,
                key_prefix=settings.lock_key_prefix,
                timeout=settings.lock_timeout_seconds,
                blocking_timeout=settings.lock_blocking_timeout_seconds
            )
        else:
            lock_provider = InMemoryRecordLocks(blocking_timeout=settings.lock_blocking_timeout_seconds)

    engine = FileStorageEngine(
        settings=settings,
        storage_backend=storage_backend,
        metadata_store=metadata_store,
        lock_provider=lock_provider
    )
    await engine.initialize()
    logger.info(f"File storage engine ready at {settings.active_root}")
    return engine
