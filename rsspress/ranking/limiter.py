"""Per-feed quotas for default feeds."""

from typing import Dict, List, Sequence

from ..constants import MAX_DEFAULT_ARTICLES_PER_FEED, MIN_ARTICLES
from ..logging_config import create_logger
from ..models import Article, FeedMetadata

logger = create_logger(__name__)


def group_by_feed(articles: Sequence[Article]) -> Dict[str, List[Article]]:
    """Group articles by feed source, preserving first-seen order."""
    grouped: Dict[str, List[Article]] = {}
    for article in articles:
        grouped.setdefault(article.feed_source, []).append(article)
    return grouped


def count_articles_by_feed(articles: Sequence[Article]) -> Dict[str, int]:
    return {feed: len(items) for feed, items in group_by_feed(articles).items()}


class ArticleLimiter:
    """
    Cap articles from default feeds while keeping a minimum total.

    Non-default articles are always kept. Each default feed contributes at
    most ``max_per_default_feed`` articles, unless the result would fall
    below ``min_article_count``. In that case the capped-out articles are
    added back in insertion order.
    """

    def __init__(
        self,
        max_per_default_feed: int = MAX_DEFAULT_ARTICLES_PER_FEED,
        min_article_count: int = MIN_ARTICLES,
    ) -> None:
        self.max_per_default_feed = max_per_default_feed
        self.min_article_count = min_article_count

    def limit(self, articles: Sequence[Article], feed_metadata: Sequence[FeedMetadata]) -> List[Article]:
        default_urls = {meta.url for meta in feed_metadata if meta.is_default}

        non_default: List[Article] = []
        capped_default: List[Article] = []
        overflow: List[Article] = []
        for feed_url, feed_articles in group_by_feed(articles).items():
            if feed_url in default_urls:
                capped_default.extend(feed_articles[: self.max_per_default_feed])
                overflow.extend(feed_articles[self.max_per_default_feed :])
            else:
                non_default.extend(feed_articles)

        limited = non_default + capped_default
        if len(limited) < self.min_article_count:
            needed = self.min_article_count - len(limited)
            limited.extend(overflow[:needed])

        logger.info(
            "Article limiter: %d total -> %d after limiting (%d non-default, %d default)",
            len(articles),
            len(limited),
            len(non_default),
            len(limited) - len(non_default),
        )
        return limited
