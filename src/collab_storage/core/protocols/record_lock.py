"""Record lock protocol.

ONLY per-record mutual exclusion - serializes mutating operations on the
same file id while leaving different ids independent.
"""

from typing import AsyncContextManager, Protocol, runtime_checkable


@runtime_checkable
class RecordLockProvider(Protocol):
    """Hands out per-file-id locks.
    
    ``lock(file_id)`` returns an async context manager held for the whole
    operation. Implementations raise ``LockTimeoutError`` when the lock
    cannot be acquired in time.
    """
    
    def lock(self, file_id: str) -> AsyncContextManager[None]:
        """Acquire the lock for ``file_id`` for the duration of the block."""
        ...
