from contextlib import contextmanager
from unittest.mock import MagicMock

import psycopg
import pytest

from rsspress.constants import CATEGORY_HISTORICAL, CATEGORY_PUBLIC
from rsspress.db import InMemoryNewspaperStore, PostgresNewspaperStore
from rsspress.db import postgres as postgres_module
from rsspress.errors import StorageError
from rsspress.models import ItemKey, NewspaperMetadata, NewspaperRecord

from .helpers import make_article


def record(newspaper_id="paper-1", date="2024-06-14", is_public=False, count=3):
    return NewspaperRecord(
        newspaper_id=newspaper_id,
        newspaper_date=date,
        name="Morning Brief",
        articles=[make_article(i, importance=90 - i) for i in range(count)],
        languages=["EN"],
        is_public=is_public,
    )


class TestKeys:

    def test_record_keys(self):
        item = record(is_public=True).to_item()

        assert item["PK"] == "NEWSPAPER#paper-1"
        assert item["SK"] == "DATE#2024-06-14"
        assert item["GSI1PK"] == CATEGORY_PUBLIC
        assert item["GSI1SK"] == "DATE#2024-06-14#paper-1"
        assert item["articles"][0]["feedSource"]
        assert "pubDate" in item["articles"][0]

    def test_private_record_is_historical(self):
        assert record().to_item()["GSI1PK"] == CATEGORY_HISTORICAL

    def test_metadata_keys(self):
        item = NewspaperMetadata(newspaper_id="paper-1", name="Brief", is_public=True, view_count=12).to_item()

        assert item["SK"] == "METADATA"
        assert item["GSI1PK"] == CATEGORY_PUBLIC
        assert item["GSI1SK"] == "VIEWS#0000000012#paper-1"

    def test_private_metadata_is_not_indexed(self):
        item = NewspaperMetadata(newspaper_id="paper-1", name="Brief").to_item()

        assert "GSI1PK" not in item


class TestInMemoryNewspaperStore:

    def test_round_trip(self, store):
        original = record()
        store.save_by_date(original)

        assert store.get_by_date("paper-1", "2024-06-14") == original
        assert store.get_by_date("paper-1", "2024-06-13") is None

    def test_last_write_wins(self, store):
        store.save_by_date(record(count=3))
        store.save_by_date(record(count=5))

        assert len(store.get_by_date("paper-1", "2024-06-14").articles) == 5

    def test_returned_items_are_copies(self, store):
        store.save_by_date(record())

        item = store.get_item(ItemKey("NEWSPAPER#paper-1", "DATE#2024-06-14"))
        item["articles"].clear()

        assert len(store.get_by_date("paper-1", "2024-06-14").articles) == 3

    def test_increment_view_count(self, store):
        store.save_newspaper(NewspaperMetadata(newspaper_id="paper-1", name="Brief", is_public=True))

        assert store.increment_view_count("paper-1") == 1
        assert store.increment_view_count("paper-1") == 2
        item = store.get_item(ItemKey("NEWSPAPER#paper-1", "METADATA"))
        assert item["viewCount"] == 2
        assert item["GSI1SK"] == "VIEWS#0000000002#paper-1"

    def test_increment_without_metadata(self, store):
        assert store.increment_view_count("missing") is None
        assert len(store) == 0

    def test_available_dates(self, store):
        store.save_newspaper(NewspaperMetadata(newspaper_id="paper-1", name="Brief"))
        for date in ("2024-06-10", "2024-06-14", "2024-06-12"):
            store.save_by_date(record(date=date))
        store.save_by_date(record(newspaper_id="paper-2", date="2024-06-11"))

        assert store.get_available_dates("paper-1") == ["2024-06-14", "2024-06-12", "2024-06-10"]

    def test_query_index_pages(self, store):
        for day in range(1, 8):
            store.save_by_date(record(date=f"2024-06-0{day}"))

        first = store.query_index(CATEGORY_HISTORICAL, limit=3)
        second = store.query_index(CATEGORY_HISTORICAL, first.last_evaluated_key, limit=3)
        third = store.query_index(CATEGORY_HISTORICAL, second.last_evaluated_key, limit=3)

        assert [e.index_sk for e in first.items] == [f"DATE#2024-06-0{d}#paper-1" for d in (1, 2, 3)]
        assert len(second.items) == 3
        assert len(third.items) == 1
        assert third.last_evaluated_key is None

    def test_delete_batch(self, store):
        store.save_by_date(record())
        keys = [ItemKey("NEWSPAPER#paper-1", "DATE#2024-06-14"), ItemKey("NEWSPAPER#nope", "DATE#2024-06-14")]

        assert store.delete_batch(keys) == 1
        assert store.delete_batch(keys) == 0

    def test_delete_batch_limit(self, store):
        keys = [ItemKey(f"NEWSPAPER#{i}", "DATE#2024-06-14") for i in range(26)]

        with pytest.raises(ValueError):
            store.delete_batch(keys)


class TestPostgresNewspaperStore:

    @pytest.fixture
    def cursor(self, monkeypatch):
        cursor = MagicMock()
        connection = MagicMock()
        connection.cursor.return_value.__enter__.return_value = cursor

        @contextmanager
        def fake_connection(config):
            yield connection

        monkeypatch.setattr(postgres_module, "get_connection", fake_connection)
        return cursor

    def test_get_item_merges_columns(self, cursor):
        cursor.fetchone.return_value = {
            "pk": "NEWSPAPER#paper-1",
            "sk": "METADATA",
            "gsi1pk": None,
            "gsi1sk": None,
            "data": {"newspaperId": "paper-1", "name": "Brief", "viewCount": 0},
            "view_count": 7,
        }

        metadata = PostgresNewspaperStore({}).get_newspaper("paper-1")

        assert metadata.view_count == 7
        sql, params = cursor.execute.call_args[0]
        assert params == ("NEWSPAPER#paper-1", "METADATA")

    def test_put_item_upserts(self, cursor):
        PostgresNewspaperStore({}).save_by_date(record())

        sql, params = cursor.execute.call_args[0]
        assert "ON CONFLICT (pk, sk) DO UPDATE" in sql
        assert params[:4] == (
            "NEWSPAPER#paper-1",
            "DATE#2024-06-14",
            CATEGORY_HISTORICAL,
            "DATE#2024-06-14#paper-1",
        )

    def test_query_index_reports_more_pages(self, cursor):
        cursor.fetchall.return_value = [
            {"pk": "NEWSPAPER#p", "sk": f"DATE#2024-06-0{d}", "gsi1sk": f"DATE#2024-06-0{d}#p"} for d in (1, 2, 3)
        ]

        page = PostgresNewspaperStore({}).query_index(CATEGORY_PUBLIC, limit=2)

        assert len(page.items) == 2
        assert page.last_evaluated_key == "DATE#2024-06-02#p"
        assert cursor.execute.call_args[0][1][-1] == 3

    def test_errors_are_wrapped(self, cursor):
        cursor.execute.side_effect = psycopg.OperationalError("connection lost")

        with pytest.raises(StorageError):
            PostgresNewspaperStore({}).get_by_date("paper-1", "2024-06-14")

    def test_delete_batch_limit_checked_before_io(self, cursor):
        keys = [ItemKey(f"NEWSPAPER#{i}", "DATE#2024-06-14") for i in range(26)]

        with pytest.raises(ValueError):
            PostgresNewspaperStore({}).delete_batch(keys)
        cursor.execute.assert_not_called()
