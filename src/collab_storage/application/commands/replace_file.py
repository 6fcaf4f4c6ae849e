"""Replace file command.

ONLY content replacement - archives the current active content as a new
version and makes the uploaded content active.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ...core.entities import FileRecord, VersionEntry
from ...core.protocols import StorageBackendProtocol
from ...core.protocols.storage_backend import ContentSource
from ...core.value_objects import FileId
from ...utils import utc_now
from ..services.metadata_manager import MetadataManager
from ..services.path_resolver import PathResolver
from ..services.version_chain import VersionChainManager

logger = logging.getLogger(__name__)


@dataclass
class ReplaceFileData:
    """Data required to replace a file's content."""

    file_id: FileId
    content: ContentSource
    filename: str
    mimetype: str

    # Defaults to the number of bytes written
    size: Optional[int] = None


class ReplaceFileCommand:
    """Command to replace the active content of an existing file.

    Steps, in order:

    1. write the new content to a fresh active path
    2. archive the current active content as version ``n + 1``
    3. persist the new active fields and the new version in one update

    Rejected input fails before step 1. A failure in step 1 changes
    nothing. A failure in step 2 or 3 undoes the earlier steps: the
    archived object is moved back and the new object is removed. The
    caller must hold the record's lock.
    """

    def __init__(
        self,
        storage_backend: StorageBackendProtocol,
        path_resolver: PathResolver,
        version_chain: VersionChainManager,
        metadata_manager: MetadataManager
    ):
        self._storage_backend = storage_backend
        self._path_resolver = path_resolver
        self._version_chain = version_chain
        self._metadata_manager = metadata_manager

    async def execute(self, data: ReplaceFileData) -> FileRecord:
        """Execute the replace operation.

        Raises:
            FileNotFound: If the record does not exist
            InvalidFileMetadata: If the new filename or size is rejected
            StorageError: If writing or archiving fails
            MetadataError: If the record update fails
        """
        record = await self._metadata_manager.get(data.file_id)

        new_path = await self._path_resolver.resolve_active_path(data.filename)
        FileRecord.validate_active_fields(data.filename, new_path, data.size)

        written = await self._storage_backend.write(new_path, data.content)

        try:
            archived = await self._version_chain.archive_current(record)
        except BaseException:
            await asyncio.shield(self._discard(new_path))
            raise

        try:
            await self._metadata_manager.update_active(
                record,
                new_filename=data.filename,
                new_path=new_path,
                new_mimetype=data.mimetype,
                new_size=data.size if data.size is not None else written,
                new_upload_date=utc_now()
            )
        except BaseException:
            await asyncio.shield(self._rollback(record, archived, new_path))
            raise

        logger.info(
            f"Replaced {record.id} with {record.filename}, "
            f"previous content archived as version {archived.version_number}"
        )
        return record

    async def _rollback(self, record: FileRecord, archived: VersionEntry, new_path: str) -> None:
        logger.warning(f"Rolling back replace of {record.id}")
        try:
            await self._version_chain.unarchive(record, archived)
        except Exception as e:
            logger.error(f"Failed to restore archived content of {record.id}: {e}")
        await self._discard(new_path)

    async def _discard(self, path: str) -> None:
        try:
            await self._storage_backend.remove(path)
        except Exception as e:
            logger.error(f"Failed to remove orphaned object {path}: {e}")


def create_replace_file_command(
    storage_backend: StorageBackendProtocol,
    path_resolver: PathResolver,
    version_chain: VersionChainManager,
    metadata_manager: MetadataManager
) -> ReplaceFileCommand:
    """Create replace file command."""
    return ReplaceFileCommand(
        storage_backend=storage_backend,
        path_resolver=path_resolver,
        version_chain=version_chain,
        metadata_manager=metadata_manager
    )
