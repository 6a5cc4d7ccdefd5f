"""RSS ingestion."""

from .default_feeds import DefaultFeedCatalog
from .models import FeedResult, IngestionResult
from .rss_fetcher import RSSFetcher, extract_image_url, print_feed_summary
from .window import FetchAttempt, IngestionWindow, select_articles

__all__ = [
    "DefaultFeedCatalog",
    "FeedResult",
    "FetchAttempt",
    "IngestionResult",
    "IngestionWindow",
    "RSSFetcher",
    "extract_image_url",
    "print_feed_summary",
    "select_articles",
]
