"""Metadata manager service.

ONLY file record persistence - every create, read, update and delete of a
FileRecord document goes through here.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ...core.entities import FileRecord
from ...core.exceptions import MetadataError, FileNotFound
from ...core.protocols import MetadataStoreProtocol
from ...core.value_objects import FileId
from ...utils import utc_now

logger = logging.getLogger(__name__)


class MetadataManager:
    """Sole writer of FileRecord documents.

    Updates are compare-and-swap on ``FileRecord.revision``. When a write
    fails the in-memory record is put back the way it was, so callers can
    keep using it.
    """

    def __init__(self, metadata_store: MetadataStoreProtocol):
        self._store = metadata_store

    async def create(self, record: FileRecord) -> FileRecord:
        """Persist a new record."""
        await self._call("insert", record.id, self._store.insert, record.to_document())
        logger.debug(f"Created file record {record.id}")
        return record

    async def find(self, file_id: Union[FileId, str]) -> Optional[FileRecord]:
        """Load a record, or None if it does not exist."""
        document = await self._call("get", file_id, self._store.get, str(file_id))
        if document is None:
            return None
        try:
            return FileRecord.from_document(document)
        except (KeyError, TypeError, ValueError) as e:
            raise MetadataError(
                f"File record {file_id} is malformed: {e}",
                file_id=str(file_id),
                operation="get",
                error_code="MALFORMED_RECORD"
            ) from e

    async def get(self, file_id: Union[FileId, str]) -> FileRecord:
        """Load a record.

        Raises:
            FileNotFound: If the record does not exist
        """
        record = await self.find(file_id)
        if record is None:
            raise FileNotFound(f"File {file_id} not found", file_id=str(file_id))
        return record

    async def save(self, record: FileRecord) -> FileRecord:
        """Persist the record as it currently is, including its version chain."""
        return await self._persist(record, {})

    async def update_active(
        self,
        record: FileRecord,
        new_filename: str,
        new_path: str,
        new_mimetype: str,
        new_size: int,
        new_upload_date: datetime
    ) -> FileRecord:
        """Point the record at new active content and persist it.

        This is the only way the active-content fields change. Pending
        changes to the version chain are persisted in the same write.

        Raises:
            InvalidFileMetadata: If the new values could not be loaded back;
                nothing is written and ``record`` is left unchanged
        """
        FileRecord.validate_active_fields(new_filename, new_path, new_size)
        return await self._persist(record, {
            "filename": new_filename,
            "filepath": new_path,
            "mimetype": new_mimetype,
            "size": new_size,
            "upload_date": new_upload_date,
        })

    async def delete(self, record: FileRecord) -> bool:
        """Delete a record. Returns False if it was already gone."""
        deleted = await self._call("delete", record.id, self._store.delete, str(record.id))
        logger.debug(f"Deleted file record {record.id}")
        return deleted

    async def list_records(self) -> List[FileRecord]:
        """All records, oldest first."""
        documents = await self._call("list", None, self._store.list_all)
        return [FileRecord.from_document(document) for document in documents]

    async def _persist(self, record: FileRecord, changes: Dict[str, Any]) -> FileRecord:
        previous = {name: getattr(record, name) for name in changes}
        previous_updated_at = record.updated_at
        for name, value in changes.items():
            setattr(record, name, value)
        record.updated_at = utc_now()

        try:
            document = await self._call(
                "update", record.id, self._store.update, record.to_document(), record.revision
            )
        except BaseException:
            for name, value in previous.items():
                setattr(record, name, value)
            record.updated_at = previous_updated_at
            raise

        record.revision = int(document["revision"])
        return record

    async def _call(self, operation: str, file_id: Optional[Union[FileId, str]], func, *args):
        try:
            return await func(*args)
        except MetadataError:
            raise
        except Exception as e:
            raise MetadataError(
                f"Metadata store {operation} failed: {e}",
                file_id=str(file_id) if file_id else None,
                operation=operation
            ) from e
