"""Drift warning.

ONLY metadata/backend disagreement - a non-fatal condition where metadata
says an object should exist but the backend reports it missing. It is
logged and never raised out of the engine.
"""

import logging
from typing import Any, Dict, Optional


class DriftWarning(UserWarning):
    """Metadata and storage backend disagree about an object."""
    
    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        path: Optional[str] = None,
        operation: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.file_id = file_id
        self.path = path
        self.operation = operation
    
    @property
    def details(self) -> Dict[str, Any]:
        """Structured details for log records."""
        return {
            "file_id": str(self.file_id) if self.file_id else None,
            "path": self.path,
            "operation": self.operation,
        }


def report_drift(
    logger: logging.Logger,
    message: str,
    file_id: Optional[str] = None,
    path: Optional[str] = None,
    operation: Optional[str] = None
) -> DriftWarning:
    """Log a drift warning and return it to the caller."""
    drift = DriftWarning(message, file_id=file_id, path=path, operation=operation)
    logger.warning(
        f"{message} (file_id={drift.file_id}, path={path}, operation={operation})",
        extra={"drift": drift.details}
    )
    return drift
