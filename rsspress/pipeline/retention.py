"""Retention sweep for date buckets."""

from typing import List, Set, Tuple

from pydantic import BaseModel, Field

from ..clock import Clock, format_date, reference_now, today_start
from ..constants import CATEGORY_HISTORICAL, CATEGORY_PUBLIC, MAX_BATCH_DELETE, REFERENCE_TIMEZONE, RETENTION_DAYS
from ..db import NewspaperStore
from ..logging_config import create_logger
from ..models import ItemKey, date_from_sk

logger = create_logger(__name__)

SWEPT_CATEGORIES = (CATEGORY_PUBLIC, CATEGORY_HISTORICAL)


class SweepResult(BaseModel):
    """Outcome of one sweep."""

    cutoff_date: str = Field(..., description="Buckets dated before this were deleted")
    scanned: int = Field(0, description="Index entries read")
    deleted: int = Field(0, description="Items removed")
    batches: int = Field(0, description="Batch delete calls issued")


class RetentionSweep:
    """Delete date buckets older than the retention period.

    Newspaper metadata is never touched. Safe to re-run; a failure part way
    leaves already-deleted batches deleted.
    """

    def __init__(
        self,
        store: NewspaperStore,
        retention_days: int = RETENTION_DAYS,
        batch_size: int = MAX_BATCH_DELETE,
        page_size: int = 100,
        clock: Clock = reference_now,
        tz: str = REFERENCE_TIMEZONE,
    ) -> None:
        if not 1 <= batch_size <= MAX_BATCH_DELETE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_DELETE}, got {batch_size}")
        self.store = store
        self.retention_days = retention_days
        self.batch_size = batch_size
        self.page_size = page_size
        self.clock = clock
        self.tz = tz

    def cutoff_date(self) -> str:
        return format_date(today_start(self.clock, self.tz).subtract(days=self.retention_days))

    def _expired_keys(self, category: str, cutoff: str) -> Tuple[List[ItemKey], int]:
        keys: List[ItemKey] = []
        scanned = 0
        start_key = None
        while True:
            page = self.store.query_index(category, exclusive_start_key=start_key, limit=self.page_size)
            scanned += len(page.items)
            for entry in page.items:
                date = date_from_sk(entry.key.sk)
                if date and date < cutoff:
                    keys.append(entry.key)
            start_key = page.last_evaluated_key
            if start_key is None:
                return keys, scanned

    def run(self) -> SweepResult:
        cutoff = self.cutoff_date()
        logger.info("Retention sweep: deleting newspapers dated before %s", cutoff)

        expired: List[ItemKey] = []
        seen: Set[ItemKey] = set()
        scanned = 0
        for category in SWEPT_CATEGORIES:
            keys, count = self._expired_keys(category, cutoff)
            scanned += count
            for key in keys:
                if key not in seen:
                    seen.add(key)
                    expired.append(key)
            logger.debug("%s: %d entries scanned, %d expired", category, count, len(keys))

        deleted = batches = 0
        for i in range(0, len(expired), self.batch_size):
            batch = expired[i : i + self.batch_size]
            deleted += self.store.delete_batch(batch)
            batches += 1
            logger.debug("Deleted batch %d (%d keys)", batches, len(batch))

        logger.info("Retention sweep complete: %d scanned, %d deleted in %d batches", scanned, deleted, batches)
        return SweepResult(cutoff_date=cutoff, scanned=scanned, deleted=deleted, batches=batches)
