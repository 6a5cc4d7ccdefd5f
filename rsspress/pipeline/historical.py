"""Date-bucketed newspapers: validate, get or create, count views."""

import re
from typing import Dict, List, Optional

from ..clock import Clock, format_date, parse_date, reference_now, today_start
from ..constants import DATE_PATTERN, REFERENCE_TIMEZONE, RETENTION_DAYS
from ..db import NewspaperStore
from ..errors import DateTooOld, FutureDate, InvalidDate
from ..ingestion import DefaultFeedCatalog, IngestionResult, IngestionWindow
from ..language import detect_languages
from ..logging_config import create_logger
from ..models import Article, Locale, NewspaperRecord
from ..ranking import ArticleLimiter, ImportanceScorer
from .generator import check_article_count, rank_by_importance

logger = create_logger(__name__)

_DATE_RE = re.compile(DATE_PATTERN)


def merge_articles(*groups: List[Article]) -> List[Article]:
    """Concatenate article lists, dropping repeated links."""
    seen = set()
    merged: List[Article] = []
    for group in groups:
        for article in group:
            if article.link in seen:
                continue
            seen.add(article.link)
            merged.append(article)
    return merged


class HistoricalNewspaperService:
    """
    Serve one newspaper per calendar date.

    The first request for ``(newspaper_id, date)`` generates and stores the
    bucket; later requests return it unchanged. Every served request counts
    one view on the newspaper.
    """

    def __init__(
        self,
        store: NewspaperStore,
        window: IngestionWindow,
        scorer: ImportanceScorer,
        limiter: ArticleLimiter,
        catalog: Optional[DefaultFeedCatalog] = None,
        max_age_days: int = RETENTION_DAYS,
        clock: Clock = reference_now,
        tz: str = REFERENCE_TIMEZONE,
    ) -> None:
        self.store = store
        self.window = window
        self.scorer = scorer
        self.limiter = limiter
        self.catalog = catalog or DefaultFeedCatalog()
        self.max_age_days = max_age_days
        self.clock = clock
        self.tz = tz

    def validate_date(self, date: str) -> None:
        """
        Check that ``date`` is a servable YYYY-MM-DD date.

        Raises:
            InvalidDate: Malformed or not a calendar date
            FutureDate: After today in the reference timezone
            DateTooOld: More than ``max_age_days`` before today
        """
        if not isinstance(date, str) or not _DATE_RE.fullmatch(date):
            raise InvalidDate(str(date), "Invalid date format. Use YYYY-MM-DD")
        try:
            requested = parse_date(date, self.tz)
        except ValueError as e:
            raise InvalidDate(date, f"Invalid date: {date} ({e})") from e

        today = today_start(self.clock, self.tz)
        if requested > today:
            raise FutureDate(date, "Future dates are not allowed")
        oldest = today.subtract(days=self.max_age_days)
        if requested < oldest:
            raise DateTooOld(
                date,
                f"Dates older than {self.max_age_days} days are not available (oldest: {format_date(oldest)})",
            )

    def _record_view(self, newspaper_id: str) -> None:
        count = self.store.increment_view_count(newspaper_id)
        if count is None:
            logger.info("No metadata for newspaper %s, view not counted", newspaper_id)
        else:
            logger.debug("Newspaper %s view count: %d", newspaper_id, count)

    async def _collect_defaults(self, date: str, locale: str) -> IngestionResult:
        urls = [feed.url for feed in self.catalog.get_default_feeds(locale)]
        try:
            return await self.window.collect_for_date(urls, date)
        except Exception as e:
            # Default feeds only pad the newspaper; user feeds may still suffice
            logger.warning("Default feed fetch failed for %s: %s", date, e)
            return IngestionResult()

    async def get_or_create(
        self,
        newspaper_id: str,
        date: str,
        feed_urls: Optional[List[str]] = None,
        theme: Optional[str] = None,
        locale: Optional[Locale] = None,
    ) -> NewspaperRecord:
        """
        Newspaper of ``newspaper_id`` for ``date``, generating it on first request.

        ``feed_urls``, ``theme`` and ``locale`` default to the stored
        newspaper metadata when omitted.

        Raises:
            DateValidationError: ``date`` is not servable; nothing is read
            InsufficientArticles: Fewer than three articles; nothing is written
            StorageError: The store failed
        """
        self.validate_date(date)

        existing = self.store.get_by_date(newspaper_id, date)
        if existing is not None:
            logger.info("Serving stored newspaper %s for %s", newspaper_id, date)
            self._record_view(newspaper_id)
            return existing

        metadata = self.store.get_newspaper(newspaper_id)
        if feed_urls is None:
            feed_urls = list(metadata.feed_urls) if metadata else []
        if locale is None:
            locale = metadata.locale if metadata else "en"
        name = metadata.name if metadata else f"Newspaper for {date}"
        if theme is None:
            theme = name

        user_feeds, _ = self.catalog.split(feed_urls)
        logger.info(
            "Generating newspaper %s for %s from %d user feeds (locale %s)",
            newspaper_id,
            date,
            len(user_feeds),
            locale,
        )

        user_result = await self.window.fetch_for_date(user_feeds, date)
        default_result = await self._collect_defaults(date, locale)

        articles = merge_articles(user_result.articles, default_result.articles)
        feed_languages: Dict[str, str] = {**default_result.feed_languages, **user_result.feed_languages}
        for article in default_result.articles:
            if article.feed_source not in feed_languages:
                language = self.catalog.feed_language(article.feed_source)
                if language:
                    feed_languages[article.feed_source] = language

        check_article_count(len(articles))

        scored = (await self.scorer.score(articles, theme, locale, self.catalog.default_urls())).articles
        limited = self.limiter.limit(scored, self.catalog.feed_metadata(user_feeds, locale))
        target = user_result.target or self.window.draw_target()
        selected = rank_by_importance(limited, target)
        languages = detect_languages(selected, feed_languages)

        now = self.clock()
        record = NewspaperRecord(
            newspaper_id=newspaper_id,
            newspaper_date=date,
            name=name,
            user_name=metadata.user_name if metadata else "System",
            feed_urls=user_feeds,
            articles=selected,
            languages=languages,
            is_public=metadata.is_public if metadata else False,
            locale=locale,
            created_at=now,
            updated_at=now,
        )
        self.store.save_by_date(record)
        logger.info(
            "Saved newspaper %s for %s: %d articles, languages %s",
            newspaper_id,
            date,
            len(selected),
            languages,
        )

        self._record_view(newspaper_id)
        # Same shape a later read returns
        return NewspaperRecord.from_item(record.to_item())

    def get_available_dates(self, newspaper_id: str) -> List[str]:
        return self.store.get_available_dates(newspaper_id)
