"""List versions query.

ONLY version listing - returns the version chain of one file record.
"""

from dataclasses import dataclass
from typing import List

from ...core.entities import VersionEntry
from ...core.value_objects import FileId
from ..services.metadata_manager import MetadataManager
from ..services.version_chain import VersionChainManager


@dataclass
class ListVersionsData:
    """Data required to list versions."""

    file_id: FileId


class ListVersionsQuery:
    """Query for the archived versions of a file, oldest first."""

    def __init__(self, metadata_manager: MetadataManager, version_chain: VersionChainManager):
        self._metadata_manager = metadata_manager
        self._version_chain = version_chain

    async def execute(self, data: ListVersionsData) -> List[VersionEntry]:
        """Raises FileNotFound if the record does not exist."""
        record = await self._metadata_manager.get(data.file_id)
        return self._version_chain.list_versions(record)


def create_list_versions_query(
    metadata_manager: MetadataManager,
    version_chain: VersionChainManager
) -> ListVersionsQuery:
    """Create list versions query."""
    return ListVersionsQuery(metadata_manager=metadata_manager, version_chain=version_chain)
