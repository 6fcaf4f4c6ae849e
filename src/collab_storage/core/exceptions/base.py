"""Root of the storage engine's error taxonomy.

Every failure an engine operation can raise derives from
CollabStorageError: NotFound for missing records and versions,
InvalidFileMetadata for rejected input, StorageError for backend I/O and
MetadataError for the document store. Drift is not an error here; it is
logged through ``report_drift`` and the operation carries on.
"""

from typing import Any, Dict, Optional


class CollabStorageError(Exception):
    """Failure of a storage engine operation.

    ``error_code`` is a stable machine-readable code (the class name when
    not given) and ``details`` carries the ids and paths involved.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: CollabStorageError) -> Dict[str, Any]:
    """Render a storage engine failure as a response body.

    The route layer pairs this with ``get_http_status_code``.
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
