"""Postgres-backed newspaper store."""

from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional, Sequence

import psycopg
from psycopg.types.json import Jsonb

from ..constants import CATEGORY_PUBLIC, METADATA_SK
from ..errors import StorageError
from ..logging_config import create_logger
from ..models import ItemKey, newspaper_pk
from .connection import get_connection
from .store import IndexEntry, IndexPage, NewspaperStore, check_batch_size

logger = create_logger(__name__)

_KEY_COLUMNS = ("PK", "SK", "GSI1PK", "GSI1SK")


def _row_to_item(row: Dict[str, Any]) -> Dict[str, Any]:
    item = dict(row["data"])
    item["PK"] = row["pk"]
    item["SK"] = row["sk"]
    if row.get("gsi1pk"):
        item["GSI1PK"] = row["gsi1pk"]
        item["GSI1SK"] = row["gsi1sk"]
    # The column is authoritative; JSON data is not rewritten on every read
    item["viewCount"] = row["view_count"]
    return item


class PostgresNewspaperStore(NewspaperStore):
    """Single-table store in ``newspaper_items``."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        """
        Initialize Postgres store.

        Args:
            db_config: Connection settings as returned by Config.get_db_config()
        """
        self.db_config = db_config

    @contextmanager
    def _cursor(self) -> Generator[psycopg.Cursor, None, None]:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    yield cur
                conn.commit()
        except psycopg.Error as e:
            raise StorageError(f"Newspaper store failure: {e}") from e

    def get_item(self, key: ItemKey) -> Optional[Dict[str, Any]]:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT pk, sk, gsi1pk, gsi1sk, data, view_count
                FROM newspaper_items
                WHERE pk = %s AND sk = %s
                """,
                (key.pk, key.sk),
            )
            row = cur.fetchone()
        return _row_to_item(row) if row else None

    def put_item(self, item: Dict[str, Any]) -> None:
        data = {k: v for k, v in item.items() if k not in _KEY_COLUMNS}
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO newspaper_items (pk, sk, gsi1pk, gsi1sk, data, view_count)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON CONFLICT (pk, sk) DO UPDATE SET
                    gsi1pk = EXCLUDED.gsi1pk,
                    gsi1sk = EXCLUDED.gsi1sk,
                    data = EXCLUDED.data,
                    view_count = EXCLUDED.view_count
                """,
                (
                    item["PK"],
                    item["SK"],
                    item.get("GSI1PK"),
                    item.get("GSI1SK"),
                    Jsonb(data),
                    int(data.get("viewCount", 0)),
                ),
            )

    def query_partition(self, pk: str, sk_prefix: str) -> List[Dict[str, Any]]:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT pk, sk, gsi1pk, gsi1sk, data, view_count
                FROM newspaper_items
                WHERE pk = %s AND starts_with(sk, %s)
                ORDER BY sk
                """,
                (pk, sk_prefix),
            )
            rows = cur.fetchall()
        return [_row_to_item(row) for row in rows]

    def increment_view_count(self, newspaper_id: str) -> Optional[int]:
        with self._cursor() as cur:
            cur.execute(
                """
                UPDATE newspaper_items
                SET
                    view_count = view_count + 1,
                    gsi1sk = CASE
                        WHEN gsi1pk = %s
                        THEN 'VIEWS#' || lpad((view_count + 1)::text, 10, '0') || '#' || %s
                        ELSE gsi1sk
                    END
                WHERE pk = %s AND sk = %s
                RETURNING view_count
                """,
                (CATEGORY_PUBLIC, newspaper_id, newspaper_pk(newspaper_id), METADATA_SK),
            )
            row = cur.fetchone()
        return row["view_count"] if row else None

    def query_index(
        self,
        category: str,
        exclusive_start_key: Optional[str] = None,
        limit: int = 100,
    ) -> IndexPage:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT pk, sk, gsi1sk
                FROM newspaper_items
                WHERE gsi1pk = %s AND (%s::text IS NULL OR gsi1sk > %s)
                ORDER BY gsi1sk
                LIMIT %s
                """,
                (category, exclusive_start_key, exclusive_start_key, limit + 1),
            )
            rows = cur.fetchall()

        entries = [IndexEntry(ItemKey(row["pk"], row["sk"]), row["gsi1sk"]) for row in rows[:limit]]
        last_key = entries[-1].index_sk if len(rows) > limit else None
        return IndexPage(entries, last_key)

    def delete_batch(self, keys: Sequence[ItemKey]) -> int:
        check_batch_size(keys)
        if not keys:
            return 0
        with self._cursor() as cur:
            cur.execute(
                """
                DELETE FROM newspaper_items
                WHERE (pk, sk) IN (
                    SELECT * FROM unnest(%s::text[], %s::text[])
                )
                """,
                ([key.pk for key in keys], [key.sk for key in keys]),
            )
            removed = cur.rowcount
        logger.debug("Deleted %d of %d keys", removed, len(keys))
        return removed
