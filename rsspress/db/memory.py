"""In-memory newspaper store for tests and local runs."""

import copy
import threading
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..constants import CATEGORY_PUBLIC, METADATA_SK
from ..models import ItemKey, newspaper_pk, views_sort_key
from .store import IndexEntry, IndexPage, NewspaperStore, check_batch_size


class InMemoryNewspaperStore(NewspaperStore):
    """Dict-backed store with the same semantics as the Postgres one."""

    def __init__(self) -> None:
        self._items: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, key: ItemKey) -> Optional[Dict[str, Any]]:
        item = self._items.get((key.pk, key.sk))
        return copy.deepcopy(item) if item is not None else None

    def put_item(self, item: Dict[str, Any]) -> None:
        with self._lock:
            self._items[(item["PK"], item["SK"])] = copy.deepcopy(item)

    def query_partition(self, pk: str, sk_prefix: str) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(item)
            for (item_pk, item_sk), item in sorted(self._items.items())
            if item_pk == pk and item_sk.startswith(sk_prefix)
        ]

    def increment_view_count(self, newspaper_id: str) -> Optional[int]:
        with self._lock:
            item = self._items.get((newspaper_pk(newspaper_id), METADATA_SK))
            if item is None:
                return None
            item["viewCount"] = item.get("viewCount", 0) + 1
            if item.get("GSI1PK") == CATEGORY_PUBLIC:
                item["GSI1SK"] = views_sort_key(item["viewCount"], newspaper_id)
            return item["viewCount"]

    def query_index(
        self,
        category: str,
        exclusive_start_key: Optional[str] = None,
        limit: int = 100,
    ) -> IndexPage:
        entries = sorted(
            (
                IndexEntry(ItemKey(item["PK"], item["SK"]), item["GSI1SK"])
                for item in self._items.values()
                if item.get("GSI1PK") == category and item.get("GSI1SK")
            ),
            key=lambda entry: entry.index_sk,
        )
        if exclusive_start_key is not None:
            entries = [e for e in entries if e.index_sk > exclusive_start_key]

        page = entries[:limit]
        last_key = page[-1].index_sk if len(entries) > limit else None
        return IndexPage(page, last_key)

    def delete_batch(self, keys: Sequence[ItemKey]) -> int:
        check_batch_size(keys)
        removed = 0
        with self._lock:
            for key in keys:
                if self._items.pop((key.pk, key.sk), None) is not None:
                    removed += 1
        return removed
