"""Path resolver service.

ONLY storage layout - computes active object paths and collision-free
archive object paths under the two configured roots.
"""

import itertools
import logging
import os
import re
from pathlib import Path
from typing import Union

from ...core.entities import FileRecord
from ...core.protocols import StorageBackendProtocol
from ...utils import generate_uuid_v7, utc_timestamp_ms

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
MAX_NAME_LENGTH = 150
FALLBACK_NAME = "file"


def sanitize_filename(filename: str) -> str:
    """Reduce a client-supplied filename to a safe single path component.

    Directory parts are dropped and anything outside ``[A-Za-z0-9._-]``
    becomes ``_``, so the result can never escape its root.
    """
    name = os.path.basename((filename or "").replace("\\", "/")).strip()
    name = _UNSAFE_CHARS.sub("_", name).lstrip(".")
    if not name:
        return FALLBACK_NAME
    if len(name) > MAX_NAME_LENGTH:
        stem, ext = os.path.splitext(name)
        name = stem[:MAX_NAME_LENGTH - len(ext)] + ext
    return name


class PathResolver:
    """Layout manager for the active root and the version archive root.

    Active objects are named ``<uuid7 hex>-<filename>``. Archive objects
    are named ``<stem>-<record id hex>-<epoch ms>-<counter><ext>``; the
    counter is monotonic per resolver, so two snapshots of the same file
    archived within one millisecond still get distinct paths.
    """

    def __init__(
        self,
        active_root: Union[str, Path],
        archive_root: Union[str, Path],
        storage_backend: StorageBackendProtocol
    ):
        self._active_root = os.fspath(active_root)
        self._archive_root = os.fspath(archive_root)
        self._storage_backend = storage_backend
        self._counter = itertools.count(1)
        self._layout_ready = False

    @property
    def active_root(self) -> str:
        return self._active_root

    @property
    def archive_root(self) -> str:
        return self._archive_root

    async def ensure_layout(self) -> None:
        """Create both roots if missing. Safe to call repeatedly."""
        if self._layout_ready:
            return
        await self._storage_backend.ensure_container(self._active_root)
        await self._storage_backend.ensure_container(self._archive_root)
        self._layout_ready = True
        logger.debug(f"Storage layout ready: active={self._active_root} archive={self._archive_root}")

    async def resolve_active_path(self, filename: str) -> str:
        """Canonical location for newly stored content."""
        await self.ensure_layout()
        unique_prefix = generate_uuid_v7().replace("-", "")
        return os.path.join(self._active_root, f"{unique_prefix}-{sanitize_filename(filename)}")

    async def resolve_archive_path(self, record: FileRecord, candidate_filename: str) -> str:
        """Unique archive location for a snapshot of ``record``."""
        await self.ensure_layout()
        stem, ext = os.path.splitext(sanitize_filename(candidate_filename))
        suffix = f"{record.id.hex}-{utc_timestamp_ms()}-{next(self._counter):06d}"
        return os.path.join(self._archive_root, f"{stem}-{suffix}{ext}")

    def is_archive_path(self, path: str) -> bool:
        """Check whether ``path`` lies inside the archive root."""
        archive_root = os.path.join(self._archive_root, "")
        return os.path.abspath(path).startswith(os.path.abspath(archive_root))
