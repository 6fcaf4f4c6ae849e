"""File storage queries.

Read operations on file records and their content.
"""

from .list_versions import ListVersionsQuery, ListVersionsData, create_list_versions_query
from .download_file import DownloadFileQuery, DownloadFileData, create_download_file_query
from .list_files import ListFilesQuery, create_list_files_query

__all__ = [
    "ListVersionsQuery",
    "ListVersionsData",
    "create_list_versions_query",
    "DownloadFileQuery",
    "DownloadFileData",
    "create_download_file_query",
    "ListFilesQuery",
    "create_list_files_query",
]
