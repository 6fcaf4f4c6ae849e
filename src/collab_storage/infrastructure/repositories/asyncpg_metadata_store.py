"""AsyncPG implementation of the metadata store.

ONLY PostgreSQL document storage - persists each file record as a JSONB
document with its version chain embedded, guarded by a revision column.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

import asyncpg

from ...core.exceptions import MetadataError, ConcurrentModificationError
from .queries import (
    FILE_RECORDS_CREATE_TABLE,
    FILE_RECORD_INSERT,
    FILE_RECORD_GET_BY_ID,
    FILE_RECORD_UPDATE_IF_REVISION,
    FILE_RECORD_DELETE,
    FILE_RECORD_LIST_ALL,
    FILE_RECORD_PING,
)

logger = logging.getLogger(__name__)


def _load_document(value: Any) -> Dict[str, Any]:
    # asyncpg hands back JSONB as text unless a codec is registered
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return dict(value)


class AsyncPGMetadataStore:
    """
    PostgreSQL implementation of ``MetadataStoreProtocol`` using asyncpg.
    
    One row per file record. The ``revision`` column makes
    ``update`` a compare-and-swap, so two writers holding the same
    snapshot cannot both commit.
    """
    
    def __init__(self, connection_pool: asyncpg.Pool, table: str = "public.file_records"):
        """Initialize with an asyncpg connection pool.
        
        Args:
            connection_pool: asyncpg pool
            table: Schema-qualified table name
        """
        self.connection_pool = connection_pool
        self._table = table
    
    async def ensure_schema(self) -> None:
        """Create the records table if it does not exist."""
        await self._execute("ensure_schema", None, FILE_RECORDS_CREATE_TABLE.format(table=self._table))
    
    async def insert(self, document: Dict[str, Any]) -> None:
        file_id = document["id"]
        query = FILE_RECORD_INSERT.format(table=self._table)
        try:
            async with self.connection_pool.acquire() as conn:
                await conn.execute(query, UUID(file_id), json.dumps(document), document.get("revision", 0))
        except asyncpg.UniqueViolationError as e:
            raise MetadataError(
                f"File record {file_id} already exists",
                file_id=file_id,
                operation="insert",
                error_code="DUPLICATE_RECORD"
            ) from e
        except (asyncpg.PostgresError, OSError) as e:
            raise MetadataError(
                f"Failed to insert file record {file_id}: {e}",
                file_id=file_id,
                operation="insert"
            ) from e
    
    async def get(self, file_id: str) -> Optional[Dict[str, Any]]:
        query = FILE_RECORD_GET_BY_ID.format(table=self._table)
        try:
            async with self.connection_pool.acquire() as conn:
                row = await conn.fetchrow(query, UUID(str(file_id)))
        except (asyncpg.PostgresError, OSError) as e:
            raise MetadataError(
                f"Failed to load file record {file_id}: {e}",
                file_id=file_id,
                operation="get"
            ) from e
        return _load_document(row["document"]) if row else None
    
    async def update(self, document: Dict[str, Any], expected_revision: int) -> Dict[str, Any]:
        file_id = document["id"]
        new_document = dict(document, revision=expected_revision + 1)
        query = FILE_RECORD_UPDATE_IF_REVISION.format(table=self._table)
        try:
            async with self.connection_pool.acquire() as conn:
                row = await conn.fetchrow(
                    query,
                    UUID(file_id),
                    json.dumps(new_document),
                    expected_revision + 1,
                    expected_revision
                )
        except (asyncpg.PostgresError, OSError) as e:
            raise MetadataError(
                f"Failed to update file record {file_id}: {e}",
                file_id=file_id,
                operation="update"
            ) from e
        
        if row is None:
            raise ConcurrentModificationError(
                f"File record {file_id} changed since revision {expected_revision}",
                file_id=file_id,
                expected_revision=expected_revision
            )
        return _load_document(row["document"])
    
    async def delete(self, file_id: str) -> bool:
        query = FILE_RECORD_DELETE.format(table=self._table)
        try:
            async with self.connection_pool.acquire() as conn:
                row = await conn.fetchrow(query, UUID(str(file_id)))
        except (asyncpg.PostgresError, OSError) as e:
            raise MetadataError(
                f"Failed to delete file record {file_id}: {e}",
                file_id=file_id,
                operation="delete"
            ) from e
        return row is not None
    
    async def list_all(self) -> List[Dict[str, Any]]:
        query = FILE_RECORD_LIST_ALL.format(table=self._table)
        try:
            async with self.connection_pool.acquire() as conn:
                rows = await conn.fetch(query)
        except (asyncpg.PostgresError, OSError) as e:
            raise MetadataError(f"Failed to list file records: {e}", operation="list") from e
        return [_load_document(row["document"]) for row in rows]
    
    async def ping(self) -> bool:
        try:
            async with self.connection_pool.acquire() as conn:
                return await conn.fetchval(FILE_RECORD_PING) == 1
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(f"Metadata store ping failed: {e}")
            return False
    
    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self.connection_pool.close()
    
    async def _execute(self, operation: str, file_id: Optional[str], query: str, *args: Any) -> str:
        try:
            async with self.connection_pool.acquire() as conn:
                return await conn.execute(query, *args)
        except (asyncpg.PostgresError, OSError) as e:
            raise MetadataError(
                f"Metadata store {operation} failed: {e}",
                file_id=file_id,
                operation=operation
            ) from e


async def create_asyncpg_metadata_store(
    database_url: str,
    table: str = "public.file_records",
    min_size: int = 1,
    max_size: int = 10
) -> AsyncPGMetadataStore:
    """Create a pool, ensure the table exists, and return the store."""
    pool = await asyncpg.create_pool(database_url, min_size=min_size, max_size=max_size)
    store = AsyncPGMetadataStore(pool, table=table)
    await store.ensure_schema()
    return store
