"""Configuration module for collab-storage.

Settings for the storage engine and centralized logging setup.
"""

from .settings import (
    StorageSettings,
    LockBackend,
    get_settings,
    DEFAULT_ALLOWED_MIMETYPES,
    DEFAULT_MAX_UPLOAD_BYTES,
)
from .logging_config import (
    setup_logging,
    get_logger,
    LoggingConfig,
    LogLevel,
    LogVerbosity,
    LogFormat,
)

__all__ = [
    # Settings
    "StorageSettings",
    "LockBackend",
    "get_settings",
    "DEFAULT_ALLOWED_MIMETYPES",
    "DEFAULT_MAX_UPLOAD_BYTES",
    
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingConfig",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
]
