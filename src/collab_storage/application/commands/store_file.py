"""Store file command.

ONLY first upload - writes new content to the active root and creates its
file record.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ...core.entities import FileRecord
from ...core.protocols import StorageBackendProtocol
from ...core.protocols.storage_backend import ContentSource
from ...utils import utc_now
from ..services.metadata_manager import MetadataManager
from ..services.path_resolver import PathResolver

logger = logging.getLogger(__name__)


@dataclass
class StoreFileData:
    """Data required to store a new file."""

    content: ContentSource
    filename: str
    mimetype: str

    # Defaults to the number of bytes written
    size: Optional[int] = None


class StoreFileCommand:
    """Command to store a brand new file.

    The content is written before the record is created. If the record
    cannot be created the written object is removed again, so a failed
    store leaves nothing behind.
    """

    def __init__(
        self,
        storage_backend: StorageBackendProtocol,
        path_resolver: PathResolver,
        metadata_manager: MetadataManager
    ):
        self._storage_backend = storage_backend
        self._path_resolver = path_resolver
        self._metadata_manager = metadata_manager

    async def execute(self, data: StoreFileData) -> FileRecord:
        """Execute the store operation.

        Args:
            data: Content and descriptive metadata

        Returns:
            The persisted file record

        Raises:
            InvalidFileMetadata: If the filename or size is rejected
            StorageError: If the content cannot be written
            MetadataError: If the record cannot be created
        """
        active_path = await self._path_resolver.resolve_active_path(data.filename)
        FileRecord.validate_active_fields(data.filename, active_path, data.size)

        written = await self._storage_backend.write(active_path, data.content)

        try:
            now = utc_now()
            record = FileRecord(
                filename=data.filename,
                filepath=active_path,
                mimetype=data.mimetype,
                size=data.size if data.size is not None else written,
                created_at=now,
                updated_at=now,
                upload_date=now,
            )
            await self._metadata_manager.create(record)
        except BaseException:
            await asyncio.shield(self._discard(active_path))
            raise

        logger.info(f"Stored {record.filename} as {record.id} ({record.size} bytes)")
        return record

    async def _discard(self, path: str) -> None:
        try:
            await self._storage_backend.remove(path)
        except Exception as e:
            logger.error(f"Failed to remove orphaned object {path}: {e}")


def create_store_file_command(
    storage_backend: StorageBackendProtocol,
    path_resolver: PathResolver,
    metadata_manager: MetadataManager
) -> StoreFileCommand:
    """Create store file command."""
    return StoreFileCommand(
        storage_backend=storage_backend,
        path_resolver=path_resolver,
        metadata_manager=metadata_manager
    )
