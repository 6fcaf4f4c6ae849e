"""Version entry entity.

ONLY archived snapshot - immutable record of formerly-active content,
owned by exactly one FileRecord.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict

from ...utils import to_utc_string, from_utc_string


@dataclass(frozen=True)
class VersionEntry:
    """Immutable snapshot of content that was once active.
    
    ``version_number`` is 1-based and unique within its record.
    ``filepath`` points into the version archive and never equals an
    active path. ``upload_date`` is when the snapshot originally became
    active; ``archived_at`` is when it was moved into the archive.
    """
    
    version_number: int
    filename: str
    filepath: str
    mimetype: str
    size: int
    upload_date: datetime
    archived_at: datetime
    
    def __post_init__(self):
        if self.version_number < 1:
            raise ValueError("Version number must be positive")
        if self.size < 0:
            raise ValueError("File size cannot be negative")
    
    def to_document(self) -> Dict[str, Any]:
        """Serialize to an embedded sub-document."""
        document = asdict(self)
        document["upload_date"] = to_utc_string(self.upload_date)
        document["archived_at"] = to_utc_string(self.archived_at)
        return document
    
    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'VersionEntry':
        """Deserialize from an embedded sub-document."""
        upload_date = from_utc_string(document["upload_date"])
        archived_at = document.get("archived_at")
        return cls(
            version_number=int(document["version_number"]),
            filename=document["filename"],
            filepath=document["filepath"],
            mimetype=document["mimetype"],
            size=int(document["size"]),
            upload_date=upload_date,
            archived_at=from_utc_string(archived_at) if archived_at else upload_date,
        )
    
    def __repr__(self) -> str:
        return f"VersionEntry(version={self.version_number}, filename='{self.filename}', size={self.size})"
