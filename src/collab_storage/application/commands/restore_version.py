"""Restore version command.

ONLY version restore - makes an archived version the active content of
its file record again.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Optional

from ...core.entities import FileRecord, VersionEntry
from ...core.exceptions import StorageError, report_drift
from ...core.protocols import StorageBackendProtocol
from ...core.value_objects import FileId
from ...utils import generate_uuid_v7, utc_now
from ..services.metadata_manager import MetadataManager
from ..services.version_chain import VersionChainManager

logger = logging.getLogger(__name__)


@dataclass
class RestoreVersionData:
    """Data required to restore a version."""

    file_id: FileId
    version_number: int


class RestoreVersionCommand:
    """Command to restore an archived version.

    The archived object is copied onto the record's current active path,
    so the version stays in the archive and can be restored again. The
    version chain itself is not modified.

    By default the content being overwritten is discarded. With
    ``archive_on_restore`` it is archived first as a new version. Either
    way it is set aside before the copy and put back if the copy or the
    record update fails.
    """

    def __init__(
        self,
        storage_backend: StorageBackendProtocol,
        version_chain: VersionChainManager,
        metadata_manager: MetadataManager,
        archive_on_restore: bool = False
    ):
        self._storage_backend = storage_backend
        self._version_chain = version_chain
        self._metadata_manager = metadata_manager
        self._archive_on_restore = archive_on_restore

    async def execute(self, data: RestoreVersionData) -> FileRecord:
        """Execute the restore operation.

        Raises:
            FileNotFound: If the record does not exist
            VersionNotFound: If the version does not exist
            StorageError: If the archived object is missing or cannot be copied
            MetadataError: If the record update fails
        """
        record = await self._metadata_manager.get(data.file_id)
        version = self._version_chain.find_version(record, data.version_number)

        if not await self._storage_backend.exists(version.filepath):
            raise StorageError(
                f"Archived object for version {version.version_number} of {record.id} is missing",
                operation="restore",
                path=version.filepath,
                error_code="ARCHIVE_MISSING"
            )

        archived: Optional[VersionEntry] = None
        stash_path: Optional[str] = None
        if self._archive_on_restore:
            archived = await self._version_chain.archive_current(record)
        else:
            stash_path = await self._stash_active(record)

        try:
            await self._storage_backend.copy(version.filepath, record.filepath)
            await self._metadata_manager.update_active(
                record,
                new_filename=version.filename,
                new_path=record.filepath,
                new_mimetype=version.mimetype,
                new_size=version.size,
                new_upload_date=utc_now()
            )
        except BaseException:
            await asyncio.shield(self._rollback(record, archived, stash_path))
            raise

        if stash_path is not None:
            await self._discard(stash_path)

        logger.info(f"Restored version {version.version_number} of {record.id}")
        return record

    async def _stash_active(self, record: FileRecord) -> Optional[str]:
        if not await self._storage_backend.exists(record.filepath):
            report_drift(
                logger,
                "Active object missing before restore",
                file_id=str(record.id),
                path=record.filepath,
                operation="restore"
            )
            return None
        directory, name = os.path.split(record.filepath)
        stash_path = os.path.join(directory, f".{name}.{generate_uuid_v7()}.restore")
        await self._storage_backend.move(record.filepath, stash_path)
        return stash_path

    async def _rollback(
        self,
        record: FileRecord,
        archived: Optional[VersionEntry],
        stash_path: Optional[str]
    ) -> None:
        logger.warning(f"Rolling back restore of {record.id}")
        try:
            if archived is not None:
                await self._version_chain.unarchive(record, archived)
            elif stash_path is not None:
                await self._storage_backend.move(stash_path, record.filepath)
            else:
                await self._storage_backend.remove(record.filepath)
        except Exception as e:
            logger.error(f"Failed to put back active content of {record.id}: {e}")

    async def _discard(self, path: str) -> None:
        try:
            await self._storage_backend.remove(path)
        except Exception as e:
            logger.error(f"Failed to remove stashed object {path}: {e}")


def create_restore_version_command(
    storage_backend: StorageBackendProtocol,
    version_chain: VersionChainManager,
    metadata_manager: MetadataManager,
    archive_on_restore: bool = False
) -> RestoreVersionCommand:
    """Create restore version command."""
    return RestoreVersionCommand(
        storage_backend=storage_backend,
        version_chain=version_chain,
        metadata_manager=metadata_manager,
        archive_on_restore=archive_on_restore
    )
