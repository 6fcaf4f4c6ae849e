"""File storage value objects."""

from .file_id import FileId
from .file_content import FileContent

__all__ = [
    "FileId",
    "FileContent",
]
