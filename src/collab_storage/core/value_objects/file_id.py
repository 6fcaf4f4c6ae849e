"""File identifier value object.

ONLY file identifier - represents unique file record ID using UUIDv7 for
time-ordered document keys.
"""

from dataclasses import dataclass
from typing import Union
from uuid import UUID

from ...utils import generate_uuid_v7


@dataclass(frozen=True)
class FileId:
    """File identifier value object.
    
    Immutable and hashable for use as dictionary keys, which the per-record
    lock registry relies on.
    """
    
    value: UUID
    
    def __post_init__(self):
        """Validate file ID format."""
        if not isinstance(self.value, UUID):
            raise ValueError(f"FileId must be a UUID, got {type(self.value).__name__}")
    
    @classmethod
    def generate(cls) -> 'FileId':
        """Generate a new time-ordered file ID using UUIDv7."""
        return cls(UUID(generate_uuid_v7()))
    
    @classmethod 
    def from_string(cls, value: str) -> 'FileId':
        """Create FileId from string representation."""
        try:
            return cls(UUID(str(value)))
        except (ValueError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid file ID format: {value}") from e
    
    @classmethod
    def coerce(cls, value: Union['FileId', UUID, str]) -> 'FileId':
        """Accept a FileId, UUID or string and return a FileId."""
        if isinstance(value, FileId):
            return value
        if isinstance(value, UUID):
            return cls(value)
        return cls.from_string(value)
    
    def to_string(self) -> str:
        """Get string representation of file ID."""
        return str(self.value)
    
    @property
    def hex(self) -> str:
        """Compact hex form used inside object names."""
        return self.value.hex
    
    def __str__(self) -> str:
        return self.to_string()
    
    def __repr__(self) -> str:
        return f"FileId('{self.value}')"
