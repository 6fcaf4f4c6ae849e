"""In-process per-record locks.

ONLY single-process mutual exclusion - one asyncio.Lock per file id,
created on demand and dropped once nobody holds or waits for it.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from ...core.exceptions import LockTimeoutError

logger = logging.getLogger(__name__)


class InMemoryRecordLocks:
    """``RecordLockProvider`` backed by asyncio locks.
    
    Locks for different ids are independent; there is no global lock.
    Only valid within one event loop.
    """
    
    def __init__(self, blocking_timeout: Optional[float] = None):
        """Initialize lock registry.
        
        Args:
            blocking_timeout: Seconds to wait for a lock before raising
                ``LockTimeoutError``; None waits forever
        """
        self._blocking_timeout = blocking_timeout
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}
    
    @asynccontextmanager
    async def lock(self, file_id: str) -> AsyncIterator[None]:
        key = str(file_id)
        record_lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            await self._acquire(key, record_lock)
            try:
                yield
            finally:
                record_lock.release()
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]
    
    async def _acquire(self, key: str, record_lock: asyncio.Lock) -> None:
        if self._blocking_timeout is None:
            await record_lock.acquire()
            return
        try:
            await asyncio.wait_for(record_lock.acquire(), timeout=self._blocking_timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Timed out waiting {self._blocking_timeout}s for lock on file {key}")
            raise LockTimeoutError(f"Could not lock file record {key}", file_id=key) from e
    
    def is_locked(self, file_id: str) -> bool:
        """Check whether a record is currently locked."""
        record_lock = self._locks.get(str(file_id))
        return record_lock is not None and record_lock.locked()
    
    @property
    def active_keys(self) -> int:
        """Number of ids with a live lock object."""
        return len(self._locks)
