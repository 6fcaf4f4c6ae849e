"""
Storage configuration for collab-storage.

Replaces process-wide root directory constants with an explicit settings
object that is passed into the file storage engine.
"""
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ALLOWED_MIMETYPES = [
    "image/jpeg",
    "image/png",
    "application/pdf",
    "text/plain",
]

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5 MiB

ARCHIVE_DIRNAME = "versions"


class LockBackend(str, Enum):
    """Per-record lock implementations."""
    MEMORY = "memory"
    REDIS = "redis"


class StorageSettings(BaseSettings):
    """File storage engine settings.

    Values come from keyword arguments, then ``COLLAB_STORAGE_*`` environment
    variables, then ``.env``. When ``archive_root`` is not given it defaults
    to a ``versions`` directory inside ``active_root``.
    """

    model_config = SettingsConfigDict(
        env_prefix="COLLAB_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Layout
    active_root: Path = Field(default=Path("uploads"))
    archive_root: Optional[Path] = Field(default=None)

    # Open-question policies
    cascade_delete_versions: bool = Field(default=False)
    archive_on_restore: bool = Field(default=False)

    # Per-record locking
    lock_backend: LockBackend = Field(default=LockBackend.MEMORY)
    redis_url: Optional[str] = Field(default=None)
    lock_key_prefix: str = Field(default="collab_storage:file-lock")
    lock_timeout_seconds: float = Field(default=60.0, gt=0)
    lock_blocking_timeout_seconds: float = Field(default=30.0, gt=0)

    # Metadata store
    database_url: Optional[str] = Field(default=None)
    metadata_schema: str = Field(default="public")
    metadata_table: str = Field(default="file_records")

    # Upload receiver limits (enforced upstream, not by the engine)
    allowed_mimetypes: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_MIMETYPES))
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, gt=0)

    # Streaming
    read_chunk_size: int = Field(default=64 * 1024, gt=0)

    @field_validator("metadata_schema", "metadata_table")
    @classmethod
    def _validate_identifier(cls, value: str) -> str:
        if not value.replace("_", "").isalnum():
            raise ValueError(f"Invalid SQL identifier: {value}")
        return value

    @model_validator(mode="after")
    def _resolve_roots(self) -> "StorageSettings":
        self.active_root = Path(self.active_root).expanduser().resolve()
        if self.archive_root is None:
            self.archive_root = self.active_root / ARCHIVE_DIRNAME
        else:
            self.archive_root = Path(self.archive_root).expanduser().resolve()
        if self.lock_backend == LockBackend.REDIS and not self.redis_url:
            raise ValueError("redis_url is required when lock_backend is 'redis'")
        return self

    @property
    def metadata_table_name(self) -> str:
        """Schema-qualified metadata table name."""
        return f"{self.metadata_schema}.{self.metadata_table}"


@lru_cache()
def get_settings() -> StorageSettings:
    """Get cached storage settings from the environment."""
    return StorageSettings()
