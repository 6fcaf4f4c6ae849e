"""Delete file command.

ONLY file deletion - deletes the file record, then its active object and,
optionally, every archived version.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ...core.exceptions import StorageError, report_drift
from ...core.protocols import StorageBackendProtocol
from ...core.value_objects import FileId
from ..services.metadata_manager import MetadataManager
from ..services.version_chain import VersionChainManager

logger = logging.getLogger(__name__)


@dataclass
class DeleteFileData:
    """Data required to delete a file."""

    file_id: FileId

    # None falls back to the command's default policy
    delete_versions: Optional[bool] = None


@dataclass
class DeleteFileResult:
    """Result of file deletion operation."""

    file_id: str
    filename: str = ""
    active_removed: bool = False
    versions_removed: int = 0


class DeleteFileCommand:
    """Command to delete a file.

    The record is deleted first. If that fails nothing else is touched and
    the file stays fully readable. Objects are removed afterwards: a
    missing active object is reported as drift, and an object that cannot
    be removed is logged and left behind, since the record that pointed at
    it is already gone. Archived versions stay on disk unless cascading is
    requested.
    """

    def __init__(
        self,
        storage_backend: StorageBackendProtocol,
        version_chain: VersionChainManager,
        metadata_manager: MetadataManager,
        cascade_versions: bool = False
    ):
        """Initialize delete file command.

        Args:
            storage_backend: Storage backend for content removal
            version_chain: Version chain manager used for cascading
            metadata_manager: Metadata manager for the file record
            cascade_versions: Default for ``DeleteFileData.delete_versions``
        """
        self._storage_backend = storage_backend
        self._version_chain = version_chain
        self._metadata_manager = metadata_manager
        self._cascade_versions = cascade_versions

    async def execute(self, data: DeleteFileData) -> DeleteFileResult:
        """Execute file deletion.

        Raises:
            FileNotFound: If the record does not exist
            MetadataError: If the record cannot be deleted
        """
        record = await self._metadata_manager.get(data.file_id)

        await self._metadata_manager.delete(record)

        try:
            active_removed = await self._storage_backend.remove(record.filepath)
        except StorageError as e:
            logger.error(f"File record {record.id} deleted but {record.filepath} could not be removed: {e}")
            active_removed = False
        else:
            if not active_removed:
                report_drift(
                    logger,
                    "Active object already missing on delete",
                    file_id=str(record.id),
                    path=record.filepath,
                    operation="delete"
                )

        cascade = self._cascade_versions if data.delete_versions is None else data.delete_versions
        versions_removed = 0
        if cascade:
            versions_removed = await self._version_chain.purge_versions(record)

        logger.info(
            f"Deleted {record.filename} ({record.id}), "
            f"{versions_removed} archived versions removed"
        )
        return DeleteFileResult(
            file_id=str(record.id),
            filename=record.filename,
            active_removed=active_removed,
            versions_removed=versions_removed
        )


def create_delete_file_command(
    storage_backend: StorageBackendProtocol,
    version_chain: VersionChainManager,
    metadata_manager: MetadataManager,
    cascade_versions: bool = False
) -> DeleteFileCommand:
    """Create delete file command."""
    return DeleteFileCommand(
        storage_backend=storage_backend,
        version_chain=version_chain,
        metadata_manager=metadata_manager,
        cascade_versions=cascade_versions
    )
