"""List files query.

ONLY record listing - returns every file record, oldest first.
"""

from typing import List

from ...core.entities import FileRecord
from ..services.metadata_manager import MetadataManager


class ListFilesQuery:
    """Query for all file records."""

    def __init__(self, metadata_manager: MetadataManager):
        self._metadata_manager = metadata_manager

    async def execute(self) -> List[FileRecord]:
        return await self._metadata_manager.list_records()


def create_list_files_query(metadata_manager: MetadataManager) -> ListFilesQuery:
    """Create list files query."""
    return ListFilesQuery(metadata_manager=metadata_manager)
