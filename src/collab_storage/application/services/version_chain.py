"""Version chain manager service.

ONLY version history - archives a record's active content as a numbered
snapshot and exposes the append-only chain of snapshots.
"""

import logging
from typing import List

from ...core.entities import FileRecord, VersionEntry
from ...core.exceptions import StorageError, VersionNotFound, report_drift
from ...core.protocols import StorageBackendProtocol
from ...utils import utc_now
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


class VersionChainManager:
    """Owns the version chain of every file record.

    Callers must hold the record's lock: numbering is
    ``len(record.versions) + 1`` and is only unique if no other writer
    appends at the same time.
    """

    def __init__(self, storage_backend: StorageBackendProtocol, path_resolver: PathResolver):
        self._storage_backend = storage_backend
        self._path_resolver = path_resolver

    async def archive_current(self, record: FileRecord) -> VersionEntry:
        """Move the active content into the archive and append a version entry.

        If the active object is already missing the move is skipped with a
        drift warning and the entry is still appended.

        Args:
            record: Record whose current active content is archived

        Returns:
            The new version entry

        Raises:
            StorageError: If the move fails
        """
        archive_path = await self._path_resolver.resolve_archive_path(record, record.filename)
        entry = VersionEntry(
            version_number=record.next_version_number,
            filename=record.filename,
            filepath=archive_path,
            mimetype=record.mimetype,
            size=record.size,
            upload_date=record.upload_date,
            archived_at=utc_now(),
        )

        if await self._storage_backend.exists(record.filepath):
            await self._storage_backend.move(record.filepath, archive_path)
        else:
            report_drift(
                logger,
                "Active object missing, skipping archive move",
                file_id=str(record.id),
                path=record.filepath,
                operation="archive"
            )

        record.append_version(entry)
        logger.debug(f"Archived {record.filename} of {record.id} as version {entry.version_number}")
        return entry

    async def unarchive(self, record: FileRecord, entry: VersionEntry) -> None:
        """Undo the most recent ``archive_current`` call.

        Moves the archived object back to the record's active path and
        drops the entry. Only the newest entry can be undone.
        """
        if not record.versions or record.versions[-1] != entry:
            raise ValueError(f"Version {entry.version_number} is not the newest version of {record.id}")

        if await self._storage_backend.exists(entry.filepath):
            await self._storage_backend.move(entry.filepath, record.filepath)
        record.versions.pop()
        logger.debug(f"Rolled back version {entry.version_number} of {record.id}")

    def list_versions(self, record: FileRecord) -> List[VersionEntry]:
        """Version chain in ascending version order. Read-only."""
        return sorted(record.versions, key=lambda v: v.version_number)

    def find_version(self, record: FileRecord, version_number: int) -> VersionEntry:
        """Locate a version entry.

        Raises:
            VersionNotFound: If the record has no such version
        """
        entry = record.get_version(version_number)
        if entry is None:
            raise VersionNotFound(
                f"Version {version_number} of file {record.id} not found",
                file_id=str(record.id),
                version_number=version_number
            )
        return entry

    async def purge_versions(self, record: FileRecord) -> int:
        """Remove every archived object of a record.

        Missing objects are reported as drift. Paths outside the archive
        root are never removed. An object that cannot be removed is logged
        and skipped, so one failure does not strand the rest. The entries
        themselves are left alone; the record is already deleted.

        Returns:
            Number of archived objects removed
        """
        removed = 0
        for entry in record.versions:
            if not self._path_resolver.is_archive_path(entry.filepath):
                logger.error(
                    f"Version {entry.version_number} of {record.id} points outside the archive root, "
                    f"leaving {entry.filepath} in place"
                )
                continue
            try:
                deleted = await self._storage_backend.remove(entry.filepath)
            except StorageError as e:
                logger.error(f"Failed to remove version {entry.version_number} of {record.id}: {e}")
                continue
            if deleted:
                removed += 1
            else:
                report_drift(
                    logger,
                    f"Archived object for version {entry.version_number} missing",
                    file_id=str(record.id),
                    path=entry.filepath,
                    operation="purge"
                )
        return removed
