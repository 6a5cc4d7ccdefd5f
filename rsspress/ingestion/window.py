"""Ingestion window: parallel feed fetch with an escalating lookback."""

import random
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from ..clock import Clock, parse_date, reference_now, today_start
from ..constants import (
    HISTORICAL_EXTENSION_DAYS,
    HISTORICAL_WINDOWS,
    MIN_ARTICLES,
    NEWSPAPER_WINDOWS,
    REFERENCE_TIMEZONE,
    TARGET_ARTICLES_MAX,
    TARGET_ARTICLES_MIN,
)
from ..logging_config import create_logger
from ..models import Article
from .models import FeedResult, IngestionResult
from .rss_fetcher import RSSFetcher

logger = create_logger(__name__)


class FetchAttempt(NamedTuple):
    """One step of the date-bucketed escalation."""

    days_back: int
    extension_days: int = 0


class _Batch(NamedTuple):
    articles: List[Article]
    feed_languages: Dict[str, str]
    feed_titles: Dict[str, str]
    successful: int
    failed: int


def select_articles(articles: Sequence[Article], target: int, rng: random.Random) -> List[Article]:
    """
    Take the ``target`` newest articles, image-bearing ones first.

    Each group (with / without image) is shuffled independently so the lead
    story varies between generations but is likely to carry an image.
    """
    newest = sorted(articles, key=lambda a: a.pub_date, reverse=True)[:target]

    with_images = [a for a in newest if a.has_image]
    without_images = [a for a in newest if not a.has_image]
    rng.shuffle(with_images)
    rng.shuffle(without_images)

    logger.debug(
        "Articles with images: %d, without images: %d",
        len(with_images),
        len(without_images),
    )
    return with_images + without_images


class IngestionWindow:
    """Fetch a feed set, widening the lookback window until enough articles arrive."""

    def __init__(
        self,
        fetcher: RSSFetcher,
        windows: Sequence[int] = NEWSPAPER_WINDOWS,
        historical_windows: Sequence[int] = HISTORICAL_WINDOWS,
        historical_extension_days: int = HISTORICAL_EXTENSION_DAYS,
        min_articles: int = MIN_ARTICLES,
        target_range: Tuple[int, int] = (TARGET_ARTICLES_MIN, TARGET_ARTICLES_MAX),
        rng: Optional[random.Random] = None,
        clock: Clock = reference_now,
        tz: str = REFERENCE_TIMEZONE,
    ) -> None:
        self.fetcher = fetcher
        self.windows = tuple(windows)
        self.historical_windows = tuple(historical_windows)
        self.historical_extension_days = historical_extension_days
        self.min_articles = min_articles
        self.target_range = target_range
        self.rng = rng or random.Random()
        self.clock = clock
        self.tz = tz

    def draw_target(self) -> int:
        """Random article count so repeated generations of a theme differ."""
        low, high = self.target_range
        return self.rng.randint(low, high)

    def historical_attempts(self) -> List[FetchAttempt]:
        """Escalation steps for a date bucket: each window, then a wider range."""
        attempts = [FetchAttempt(days) for days in self.historical_windows]
        if self.historical_extension_days > 0:
            attempts.append(FetchAttempt(self.historical_windows[-1], self.historical_extension_days))
        return attempts

    async def _fetch(self, feed_urls: List[str], days_back: int) -> _Batch:
        results: List[FeedResult] = await self.fetcher.fetch_all_feeds(feed_urls, days_back)

        articles: List[Article] = []
        feed_languages: Dict[str, str] = {}
        feed_titles: Dict[str, str] = {}
        successful = failed = 0
        for index, result in enumerate(results, 1):
            if not result.success:
                failed += 1
                logger.warning("Feed %d/%d failed: %s (%s)", index, len(results), result.source_url, result.error)
                continue
            successful += 1
            articles.extend(result.articles)
            if result.language:
                feed_languages[result.source_url] = result.language
            if result.feed_title:
                feed_titles[result.source_url] = result.feed_title
            logger.debug(
                "Feed %d/%d succeeded: %s (%d articles, language: %s)",
                index,
                len(results),
                result.source_url,
                len(result.articles),
                result.language or "unknown",
            )

        logger.info(
            "Feed fetch summary (%d days): %d succeeded, %d failed, %d articles",
            days_back,
            successful,
            failed,
            len(articles),
        )
        return _Batch(articles, feed_languages, feed_titles, successful, failed)

    async def fetch_for_newspaper(self, feed_urls: List[str], theme: str = "") -> IngestionResult:
        """Fetch and select articles for a live newspaper."""
        target = self.draw_target()
        logger.info("Fetching %d feeds for theme %r, target article count: %d", len(feed_urls), theme, target)

        if not feed_urls:
            return IngestionResult(target=target)

        batch = None
        window_days = 0
        for window_days in self.windows:
            batch = await self._fetch(feed_urls, window_days)
            if len(batch.articles) >= self.min_articles:
                break
            logger.info("Only %d articles found in %d days", len(batch.articles), window_days)
        else:
            # Soft minimum: proceed with whatever was retrieved
            logger.warning("Only %d articles found (minimum: %d)", len(batch.articles), self.min_articles)

        selected = select_articles(batch.articles, target, self.rng)
        logger.info(
            "Selected %d articles for newspaper (lead story has image: %s)",
            len(selected),
            "yes" if selected and selected[0].has_image else "no",
        )
        return IngestionResult(
            articles=selected,
            feed_languages=batch.feed_languages,
            feed_titles=batch.feed_titles,
            window_days=window_days,
            target=target,
            successful_feeds=batch.successful,
            failed_feeds=batch.failed,
        )

    async def collect_for_date(self, feed_urls: List[str], date: str) -> IngestionResult:
        """
        Articles published on ``date`` (reference timezone), unselected.

        The range is [start of day, end of day], or [start of day, now] for
        today. When the day is short of articles the lookback widens, and as a
        last step the range extends backwards before the target date.
        """
        start = parse_date(date, self.tz)
        now = self.clock().in_timezone(self.tz)
        end = now if start == today_start(self.clock, self.tz) else start.end_of("day")
        logger.info("Collecting articles for %s: %s to %s", date, start.isoformat(), end.isoformat())

        if not feed_urls:
            return IngestionResult()

        fetched: Dict[int, _Batch] = {}
        articles: List[Article] = []
        attempt = None
        for attempt in self.historical_attempts():
            if attempt.days_back not in fetched:
                fetched[attempt.days_back] = await self._fetch(feed_urls, attempt.days_back)
            batch = fetched[attempt.days_back]

            range_start = start.subtract(days=attempt.extension_days)
            articles = [a for a in batch.articles if range_start <= a.pub_date <= end]
            if len(articles) >= self.min_articles:
                break
            logger.info(
                "Insufficient articles (%d) with %d-day window and %d-day extension",
                len(articles),
                attempt.days_back,
                attempt.extension_days,
            )

        batch = fetched[attempt.days_back]
        return IngestionResult(
            articles=articles,
            feed_languages=batch.feed_languages,
            feed_titles=batch.feed_titles,
            window_days=attempt.days_back,
            successful_feeds=batch.successful,
            failed_feeds=batch.failed,
        )

    async def fetch_for_date(self, feed_urls: List[str], date: str) -> IngestionResult:
        """Date-bucketed variant of fetch_for_newspaper."""
        target = self.draw_target()
        result = await self.collect_for_date(feed_urls, date)
        selected = select_articles(result.articles, target, self.rng)
        logger.info("Selected %d articles for %s", len(selected), date)
        return result.model_copy(update={"articles": selected, "target": target})
