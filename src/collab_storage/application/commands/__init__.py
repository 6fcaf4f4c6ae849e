"""File storage commands.

Write operations on file records. Each command handles exactly one write
operation and expects the caller to hold the record's lock.
"""

from .store_file import StoreFileCommand, StoreFileData, create_store_file_command
from .replace_file import ReplaceFileCommand, ReplaceFileData, create_replace_file_command
from .delete_file import DeleteFileCommand, DeleteFileData, DeleteFileResult, create_delete_file_command
from .restore_version import RestoreVersionCommand, RestoreVersionData, create_restore_version_command

__all__ = [
    "StoreFileCommand",
    "StoreFileData",
    "create_store_file_command",
    "ReplaceFileCommand",
    "ReplaceFileData",
    "create_replace_file_command",
    "DeleteFileCommand",
    "DeleteFileData",
    "DeleteFileResult",
    "create_delete_file_command",
    "RestoreVersionCommand",
    "RestoreVersionData",
    "create_restore_version_command",
]
