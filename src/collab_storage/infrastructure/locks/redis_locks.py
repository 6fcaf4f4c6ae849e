"""Redis distributed per-record locks.

ONLY cross-process mutual exclusion - one Redis lock per file id so
several engine processes can share the same roots and metadata store.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as redis
from redis.exceptions import LockError, RedisError

from ...core.exceptions import LockTimeoutError, StorageError

logger = logging.getLogger(__name__)


class RedisRecordLocks:
    """``RecordLockProvider`` backed by ``redis.asyncio`` locks.
    
    ``timeout`` bounds how long a crashed holder can keep a record locked;
    ``blocking_timeout`` bounds how long a caller waits before
    ``LockTimeoutError``.
    """
    
    def __init__(
        self,
        redis_client: redis.Redis,
        key_prefix: str = "collab_storage:file-lock",
        timeout: float = 60.0,
        blocking_timeout: float = 30.0
    ):
        self._client = redis_client
        self._key_prefix = key_prefix
        self._timeout = timeout
        self._blocking_timeout = blocking_timeout
    
    async def close(self) -> None:
        """Close the Redis client."""
        await self._client.aclose()
    
    def key_for(self, file_id: str) -> str:
        """Redis key for a record's lock."""
        return f"{self._key_prefix}:{file_id}"
    
    @asynccontextmanager
    async def lock(self, file_id: str) -> AsyncIterator[None]:
        key = self.key_for(file_id)
        record_lock = self._client.lock(
            key,
            timeout=self._timeout,
            blocking_timeout=self._blocking_timeout
        )
        try:
            acquired = await record_lock.acquire()
        except RedisError as e:
            raise StorageError(
                f"Failed to acquire lock {key}: {e}",
                operation="lock",
                details={"file_id": str(file_id)}
            ) from e
        
        if not acquired:
            logger.warning(f"Timed out waiting {self._blocking_timeout}s for lock {key}")
            raise LockTimeoutError(f"Could not lock file record {file_id}", file_id=str(file_id))
        
        try:
            yield
        finally:
            try:
                await record_lock.release()
            except LockError as e:
                # Lock expired while held; another process may now own it
                logger.error(f"Lock {key} was lost before release: {e}")
            except RedisError as e:
                logger.error(f"Failed to release lock {key}: {e}")


def create_redis_record_locks(
    redis_url: str,
    key_prefix: str = "collab_storage:file-lock",
    timeout: float = 60.0,
    blocking_timeout: float = 30.0
) -> RedisRecordLocks:
    """Create Redis-backed record locks from a connection URL."""
    client = redis.from_url(redis_url)
    return RedisRecordLocks(
        client,
        key_prefix=key_prefix,
        timeout=timeout,
        blocking_timeout=blocking_timeout
    )
