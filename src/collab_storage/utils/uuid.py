"""UUID generation utilities for collab-storage.

Provides UUIDv7 generation for time-ordered identifiers, which keeps
metadata documents and on-disk object names roughly sorted by creation time.
"""

import time
import uuid


def generate_uuid_v7() -> str:
    """
    Generate a UUIDv7 with time-based ordering.
    
    Returns:
        String representation of UUIDv7
    """
    # Get current timestamp in milliseconds
    timestamp_ms = int(time.time() * 1000)
    
    # Create timestamp bytes (48 bits)
    timestamp_bytes = timestamp_ms.to_bytes(6, byteorder='big')
    
    # Generate random bytes for the rest (80 bits)
    random_bytes = uuid.uuid4().bytes[6:]
    
    uuid_bytes = timestamp_bytes + random_bytes
    
    # Set version to 7 (bits 12-15 of the 7th byte)
    uuid_bytes = uuid_bytes[:6] + bytes([(uuid_bytes[6] & 0x0f) | 0x70]) + uuid_bytes[7:]
    
    # Set variant to 10 (bits 6-7 of the 9th byte)
    uuid_bytes = uuid_bytes[:8] + bytes([(uuid_bytes[8] & 0x3f) | 0x80]) + uuid_bytes[9:]
    
    return str(uuid.UUID(bytes=uuid_bytes))

