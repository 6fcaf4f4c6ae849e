"""Input validation exceptions.

ONLY rejected input - raised before any object is written or any record is
touched, so a rejected call leaves storage and metadata unchanged.
"""

from typing import Any, Dict, Optional

from .base import CollabStorageError


class InvalidFileMetadata(CollabStorageError, ValueError):
    """Raised when a filename, storage path or size cannot be recorded.

    Also a ValueError, since the same checks guard FileRecord construction.
    """
    
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if field:
            enhanced_details["field"] = field
            enhanced_details["value"] = value
        
        super().__init__(
            message=message,
            error_code="INVALID_FILE_METADATA",
            details=enhanced_details
        )
        self.field = field
