"""File record SQL query constants.

Centralized SQL for the PostgreSQL document store. Each record is one
JSONB document with its version chain embedded; ``revision`` is mirrored
in a column so updates can be checked atomically.
"""

FILE_RECORDS_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS {table} (
        id UUID PRIMARY KEY,
        document JSONB NOT NULL,
        revision INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
"""

FILE_RECORD_INSERT = """
    INSERT INTO {table} (id, document, revision)
    VALUES ($1, $2::jsonb, $3)
"""

FILE_RECORD_GET_BY_ID = """
    SELECT document FROM {table}
    WHERE id = $1
"""

FILE_RECORD_UPDATE_IF_REVISION = """
    UPDATE {table} SET
        document = $2::jsonb,
        revision = $3,
        updated_at = now()
    WHERE id = $1 AND revision = $4
    RETURNING document
"""

FILE_RECORD_DELETE = """
    DELETE FROM {table}
    WHERE id = $1
    RETURNING id
"""

FILE_RECORD_LIST_ALL = """
    SELECT document FROM {table}
    ORDER BY created_at, id
"""

FILE_RECORD_PING = "SELECT 1"
