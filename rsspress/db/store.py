"""Newspaper store interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from ..constants import DATE_PREFIX, MAX_BATCH_DELETE, METADATA_SK
from ..models import ItemKey, NewspaperMetadata, NewspaperRecord, date_from_sk, date_sk, newspaper_pk


class IndexEntry(NamedTuple):
    """One row of the retention index."""

    key: ItemKey
    index_sk: str


class IndexPage(NamedTuple):
    """A page of index entries; ``last_evaluated_key`` is None on the last page."""

    items: List[IndexEntry]
    last_evaluated_key: Optional[str]


def check_batch_size(keys: Sequence[ItemKey]) -> None:
    if len(keys) > MAX_BATCH_DELETE:
        raise ValueError(f"At most {MAX_BATCH_DELETE} keys per batch delete, got {len(keys)}")


class NewspaperStore(ABC):
    """
    Key-value store for newspapers.

    Items are addressed by ``(PK, SK)``. Newspaper metadata lives at
    ``SK = METADATA`` and date buckets at ``SK = DATE#{date}``. Items may also
    carry a secondary index pair ``(GSI1PK, GSI1SK)``, which is used by the
    retention sweep.
    """

    @abstractmethod
    def get_item(self, key: ItemKey) -> Optional[Dict[str, Any]]:
        """Item by exact key, or None."""

    @abstractmethod
    def put_item(self, item: Dict[str, Any]) -> None:
        """Create or replace an item (last write wins)."""

    @abstractmethod
    def query_partition(self, pk: str, sk_prefix: str) -> List[Dict[str, Any]]:
        """All items of a partition whose sort key starts with ``sk_prefix``."""

    @abstractmethod
    def increment_view_count(self, newspaper_id: str) -> Optional[int]:
        """Add one to the newspaper's view counter; None if it has no metadata."""

    @abstractmethod
    def query_index(
        self,
        category: str,
        exclusive_start_key: Optional[str] = None,
        limit: int = 100,
    ) -> IndexPage:
        """One page of index entries for ``category``, ordered by index sort key."""

    @abstractmethod
    def delete_batch(self, keys: Sequence[ItemKey]) -> int:
        """Delete up to 25 items; missing keys are ignored. Returns rows removed."""

    def get_newspaper(self, newspaper_id: str) -> Optional[NewspaperMetadata]:
        item = self.get_item(ItemKey(newspaper_pk(newspaper_id), METADATA_SK))
        return NewspaperMetadata.from_item(item) if item else None

    def save_newspaper(self, newspaper: NewspaperMetadata) -> None:
        self.put_item(newspaper.to_item())

    def get_by_date(self, newspaper_id: str, date: str) -> Optional[NewspaperRecord]:
        item = self.get_item(ItemKey(newspaper_pk(newspaper_id), date_sk(date)))
        return NewspaperRecord.from_item(item) if item else None

    def save_by_date(self, record: NewspaperRecord) -> None:
        self.put_item(record.to_item())

    def get_available_dates(self, newspaper_id: str) -> List[str]:
        """Dates with a stored bucket, most recent first."""
        items = self.query_partition(newspaper_pk(newspaper_id), DATE_PREFIX)
        dates = [item.get("newspaperDate") or date_from_sk(item["SK"]) for item in items]
        return sorted((d for d in dates if d), reverse=True)
