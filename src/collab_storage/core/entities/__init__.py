"""File storage entities."""

from .version_entry import VersionEntry
from .file_record import FileRecord

__all__ = [
    "VersionEntry",
    "FileRecord",
]
