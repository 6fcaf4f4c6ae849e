"""Not found exceptions for the file storage engine.

ONLY missing resources - raised when a file record, a version of a record,
or the active object behind a record cannot be located.
"""

from typing import Any, Dict, Optional

from .base import CollabStorageError


class NotFound(CollabStorageError):
    """Raised when a requested resource does not exist."""
    pass


class FileNotFound(NotFound):
    """Raised when a file record or its active object cannot be found."""
    
    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        filepath: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if file_id:
            enhanced_details["file_id"] = str(file_id)
        if filepath:
            enhanced_details["filepath"] = filepath
        
        super().__init__(
            message=message,
            error_code=error_code or "FILE_NOT_FOUND",
            details=enhanced_details
        )
        
        self.file_id = file_id
        self.filepath = filepath


class VersionNotFound(NotFound):
    """Raised when a record has no version with the requested number."""
    
    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        version_number: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if file_id:
            enhanced_details["file_id"] = str(file_id)
        if version_number is not None:
            enhanced_details["version_number"] = version_number
        
        super().__init__(
            message=message,
            error_code=error_code or "VERSION_NOT_FOUND",
            details=enhanced_details
        )
        
        self.file_id = file_id
        self.version_number = version_number
