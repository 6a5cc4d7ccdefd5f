"""Shared builders for tests."""

from typing import Dict, List, Optional, Tuple

import pendulum

from rsspress.ingestion import FeedResult
from rsspress.models import Article

TZ = "Asia/Tokyo"
FIXED_NOW = pendulum.datetime(2024, 6, 15, 12, 0, tz=TZ)

USER_FEED = "https://feeds.example.com/user.xml"
OTHER_FEED = "https://feeds.example.com/other.xml"
BBC = "https://www.bbc.com/news/world/rss.xml"
NYT = "https://rss.nytimes.com/services/xml/rss/nyt/World.xml"


def fixed_clock():
    return FIXED_NOW


def make_article(
    index: int,
    feed: str = USER_FEED,
    image: bool = False,
    pub_date: Optional[pendulum.DateTime] = None,
    title: Optional[str] = None,
    description: str = "",
    importance: Optional[int] = None,
) -> Article:
    return Article(
        title=title or f"Story number {index}",
        description=description,
        link=f"{feed}#item-{index}",
        pub_date=pub_date or FIXED_NOW.subtract(hours=index),
        image_url=f"https://img.example.com/{index}.jpg" if image else None,
        feed_source=feed,
        importance=importance,
    )


def feed_result(url: str, articles: List[Article], language: Optional[str] = None) -> FeedResult:
    return FeedResult(
        source_url=url,
        success=True,
        articles=articles,
        language=language,
        item_count=len(articles),
    )


def failed_result(url: str) -> FeedResult:
    return FeedResult(source_url=url, success=False, error=f"Failed to fetch feed {url}: ConnectError")


class StubFetcher:
    """Stands in for RSSFetcher; serves canned results and filters by window."""

    def __init__(self, feeds: Dict[str, Optional[List[Article]]], languages: Optional[Dict[str, str]] = None):
        """
        Args:
            feeds: Feed URL to its articles; None marks a failing feed
            languages: Feed URL to its <language> tag
        """
        self.feeds = feeds
        self.languages = languages or {}
        self.calls: List[Tuple[Tuple[str, ...], int]] = []

    async def fetch_all_feeds(self, urls: List[str], days_back: int) -> List[FeedResult]:
        self.calls.append((tuple(urls), days_back))
        cutoff = FIXED_NOW.subtract(days=days_back)
        results = []
        for url in urls:
            articles = self.feeds.get(url)
            if articles is None:
                results.append(failed_result(url))
                continue
            in_window = [a for a in articles if a.pub_date >= cutoff]
            results.append(feed_result(url, in_window, self.languages.get(url)))
        return results

    @property
    def windows(self) -> List[int]:
        return [days for _, days in self.calls]
