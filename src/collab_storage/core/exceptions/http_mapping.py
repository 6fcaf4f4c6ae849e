"""HTTP status code mapping for exceptions.

Lets the route layer translate storage engine failures into responses
without knowing the exception hierarchy.
"""

from typing import Dict, Type

from .base import CollabStorageError
from .not_found import NotFound, FileNotFound, VersionNotFound
from .validation import InvalidFileMetadata
from .storage import (
    StorageError,
    LockTimeoutError,
    MetadataError,
    ConcurrentModificationError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 404 Not Found
    NotFound: 404,
    FileNotFound: 404,
    VersionNotFound: 404,
    
    # 400 Bad Request
    InvalidFileMetadata: 400,
    
    # 409 Conflict
    LockTimeoutError: 409,
    ConcurrentModificationError: 409,
    
    # 500 Internal Server Error
    StorageError: 500,
    MetadataError: 500,
    CollabStorageError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.
    
    Walks the exception's MRO so the most specific mapping wins.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code
    """
    for exc_type in type(exception).__mro__:
        if exc_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exc_type]
    return 500
