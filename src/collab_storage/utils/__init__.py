"""Utilities module for collab-storage."""

from .uuid import generate_uuid_v7
from .timezone import utc_now, utc_timestamp_ms, ensure_utc, to_utc_string, from_utc_string

__all__ = [
    # UUID Generation
    "generate_uuid_v7",
    # Timezone Utilities
    "utc_now",
    "utc_timestamp_ms",
    "ensure_utc",
    "to_utc_string",
    "from_utc_string",
]
