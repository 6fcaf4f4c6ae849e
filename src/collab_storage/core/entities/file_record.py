"""File record entity.

ONLY file record - represents one logical file: its active content
location, descriptive metadata, and the embedded version chain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...utils import utc_now, to_utc_string, from_utc_string
from ..exceptions import InvalidFileMetadata
from ..value_objects import FileId
from .version_entry import VersionEntry


@dataclass
class FileRecord:
    """Metadata document for one logical file.
    
    A live record has exactly one active storage path. ``versions`` is the
    version chain: append-only, ordered by version number, and reachable
    only through this record. ``revision`` is bumped by the metadata store
    on every persisted update and guards against lost updates.
    """
    
    filename: str
    filepath: str
    mimetype: str
    size: int
    id: FileId = field(default_factory=FileId.generate)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    upload_date: datetime = field(default_factory=utc_now)
    versions: List[VersionEntry] = field(default_factory=list)
    revision: int = 0
    
    def __post_init__(self):
        """Validate entity state after initialization."""
        self.validate_active_fields(self.filename, self.filepath, self.size)
    
    @staticmethod
    def validate_active_fields(filename: str, filepath: str, size: Optional[int]) -> None:
        """Check values that are about to become the active-content fields.
        
        ``size`` may be None when it is not known yet (before the write).
        
        Raises:
            InvalidFileMetadata: If a value could not be loaded back later
        """
        if not filename or not filename.strip():
            raise InvalidFileMetadata("Filename cannot be empty", field="filename", value=filename)
        if not filepath:
            raise InvalidFileMetadata("Active storage path cannot be empty", field="filepath", value=filepath)
        if size is not None and size < 0:
            raise InvalidFileMetadata("File size cannot be negative", field="size", value=size)
    
    @property
    def next_version_number(self) -> int:
        """Number the next archived snapshot will get."""
        return len(self.versions) + 1
    
    @property
    def version_count(self) -> int:
        return len(self.versions)
    
    def get_version(self, version_number: int) -> Optional[VersionEntry]:
        """Find a version entry by number."""
        for version in self.versions:
            if version.version_number == version_number:
                return version
        return None
    
    def append_version(self, entry: VersionEntry) -> None:
        """Append an archived snapshot to the version chain."""
        if entry.version_number != self.next_version_number:
            raise ValueError(
                f"Version {entry.version_number} out of sequence, expected {self.next_version_number}"
            )
        self.versions.append(entry)
    
    def to_document(self) -> Dict[str, Any]:
        """Serialize to a document with embedded versions."""
        return {
            "id": str(self.id),
            "filename": self.filename,
            "filepath": self.filepath,
            "mimetype": self.mimetype,
            "size": self.size,
            "created_at": to_utc_string(self.created_at),
            "updated_at": to_utc_string(self.updated_at),
            "upload_date": to_utc_string(self.upload_date),
            "versions": [version.to_document() for version in self.versions],
            "revision": self.revision,
        }
    
    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'FileRecord':
        """Deserialize from a stored document."""
        return cls(
            id=FileId.from_string(document["id"]),
            filename=document["filename"],
            filepath=document["filepath"],
            mimetype=document["mimetype"],
            size=int(document["size"]),
            created_at=from_utc_string(document["created_at"]),
            updated_at=from_utc_string(document["updated_at"]),
            upload_date=from_utc_string(document["upload_date"]),
            versions=[VersionEntry.from_document(v) for v in document.get("versions", [])],
            revision=int(document.get("revision", 0)),
        )
    
    def __repr__(self) -> str:
        return (
            f"FileRecord(id='{self.id}', filename='{self.filename}', "
            f"versions={len(self.versions)}, revision={self.revision})"
        )
