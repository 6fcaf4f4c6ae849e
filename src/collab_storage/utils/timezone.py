"""Timezone utilities for collab-storage.

All timestamps stored in file records are UTC-aware.
"""

from datetime import datetime, timezone
import time as time_module


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone awareness.
    
    Returns:
        Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def utc_timestamp_ms() -> int:
    """
    Get current UTC timestamp in milliseconds.
    
    Used as the disambiguating suffix of archive object names.
    
    Returns:
        Current timestamp in milliseconds since epoch
    """
    return int(time_module.time() * 1000)


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure datetime has UTC timezone.
    
    If datetime is naive (no timezone), assumes it's UTC and adds timezone info.
    If datetime has timezone, converts to UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_string(dt: datetime) -> str:
    """Format datetime as an ISO-8601 UTC string."""
    return ensure_utc(dt).isoformat()


def from_utc_string(value: str) -> datetime:
    """Parse an ISO-8601 string into a UTC-aware datetime."""
    return ensure_utc(datetime.fromisoformat(value))
