"""Per-record lock implementations."""

from .memory_locks import InMemoryRecordLocks
from .redis_locks import RedisRecordLocks, create_redis_record_locks

__all__ = [
    "InMemoryRecordLocks",
    "RedisRecordLocks",
    "create_redis_record_locks",
]
