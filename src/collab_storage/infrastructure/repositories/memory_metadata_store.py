"""In-memory metadata store.

ONLY in-process document storage - keeps file record documents in a dict
with the same revision semantics as the PostgreSQL store.
"""

import copy
from typing import Any, Dict, List, Optional

from ...core.exceptions import MetadataError, ConcurrentModificationError


class InMemoryMetadataStore:
    """Dict-backed implementation of ``MetadataStoreProtocol``.
    
    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """
    
    def __init__(self):
        self._documents: Dict[str, Dict[str, Any]] = {}
    
    async def insert(self, document: Dict[str, Any]) -> None:
        file_id = document["id"]
        if file_id in self._documents:
            raise MetadataError(
                f"File record {file_id} already exists",
                file_id=file_id,
                operation="insert",
                error_code="DUPLICATE_RECORD"
            )
        self._documents[file_id] = copy.deepcopy(document)
    
    async def get(self, file_id: str) -> Optional[Dict[str, Any]]:
        document = self._documents.get(str(file_id))
        return copy.deepcopy(document) if document is not None else None
    
    async def update(self, document: Dict[str, Any], expected_revision: int) -> Dict[str, Any]:
        file_id = document["id"]
        stored = self._documents.get(file_id)
        if stored is None or stored.get("revision", 0) != expected_revision:
            raise ConcurrentModificationError(
                f"File record {file_id} changed since revision {expected_revision}",
                file_id=file_id,
                expected_revision=expected_revision
            )
        new_document = copy.deepcopy(document)
        new_document["revision"] = expected_revision + 1
        self._documents[file_id] = new_document
        return copy.deepcopy(new_document)
    
    async def delete(self, file_id: str) -> bool:
        return self._documents.pop(str(file_id), None) is not None
    
    async def list_all(self) -> List[Dict[str, Any]]:
        documents = sorted(self._documents.values(), key=lambda d: (d["created_at"], d["id"]))
        return [copy.deepcopy(d) for d in documents]
    
    async def ping(self) -> bool:
        return True
    
    def __len__(self) -> int:
        return len(self._documents)
