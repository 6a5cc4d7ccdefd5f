"""Database initialization and schema management."""

from typing import Any, Dict

from psycopg.errors import DatabaseError

from ..logging_config import create_logger
from .connection import get_connection

logger = create_logger(__name__)


SCHEMA_SQL = """
-- Single-table layout: newspaper metadata and date buckets share one keyspace
CREATE TABLE IF NOT EXISTS newspaper_items (
    pk TEXT NOT NULL,
    sk TEXT NOT NULL,
    gsi1pk TEXT,
    gsi1sk TEXT,
    data JSONB NOT NULL,
    view_count INTEGER NOT NULL DEFAULT 0 CHECK (view_count >= 0),
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (pk, sk)
);

-- Retention index
CREATE INDEX IF NOT EXISTS idx_newspaper_items_gsi1
    ON newspaper_items (gsi1pk, gsi1sk)
    WHERE gsi1pk IS NOT NULL;

-- Update trigger function
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = CURRENT_TIMESTAMP;
    RETURN NEW;
END;
$$ language 'plpgsql';

DROP TRIGGER IF EXISTS update_newspaper_items_updated_at ON newspaper_items;
CREATE TRIGGER update_newspaper_items_updated_at BEFORE UPDATE ON newspaper_items
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
"""


def validate_connection(config: Dict[str, Any]) -> bool:
    """Validate database connection."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False


def init_database(config: Dict[str, Any]) -> None:
    """Initialize database schema."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()
            logger.info("Database schema initialized successfully")
    except DatabaseError as e:
        logger.error("Failed to initialize database schema: %s", e)
        raise
