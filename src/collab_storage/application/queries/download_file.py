"""Download file query.

ONLY content retrieval - opens the active object of a file record as an
async byte stream.
"""

import logging
from dataclasses import dataclass

from ...core.exceptions import FileNotFound, report_drift
from ...core.protocols import StorageBackendProtocol
from ...core.value_objects import FileContent, FileId
from ..services.metadata_manager import MetadataManager

logger = logging.getLogger(__name__)


@dataclass
class DownloadFileData:
    """Data required to download a file."""

    file_id: FileId


class DownloadFileQuery:
    """Query for the active content of a file.

    The stream is opened lazily: bytes are read when the caller iterates
    ``FileContent.stream``.
    """

    def __init__(
        self,
        storage_backend: StorageBackendProtocol,
        metadata_manager: MetadataManager,
        chunk_size: int = 64 * 1024
    ):
        self._storage_backend = storage_backend
        self._metadata_manager = metadata_manager
        self._chunk_size = chunk_size

    async def execute(self, data: DownloadFileData) -> FileContent:
        """Execute the download query.

        Raises:
            FileNotFound: If the record or its active object does not exist
        """
        record = await self._metadata_manager.get(data.file_id)

        if not await self._storage_backend.exists(record.filepath):
            report_drift(
                logger,
                "Active object missing on download",
                file_id=str(record.id),
                path=record.filepath,
                operation="download"
            )
            raise FileNotFound(
                f"Content of file {record.id} not found",
                file_id=str(record.id),
                filepath=record.filepath
            )

        return FileContent(
            file_id=record.id,
            filename=record.filename,
            mimetype=record.mimetype,
            size=record.size,
            stream=self._storage_backend.open_for_read(record.filepath, self._chunk_size)
        )


def create_download_file_query(
    storage_backend: StorageBackendProtocol,
    metadata_manager: MetadataManager,
    chunk_size: int = 64 * 1024
) -> DownloadFileQuery:
    """Create download file query."""
    return DownloadFileQuery(
        storage_backend=storage_backend,
        metadata_manager=metadata_manager,
        chunk_size=chunk_size
    )
