"""Catalog of default (fallback) feeds injected per locale."""

from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..config.models import ConfigModel, DefaultFeedConfig
from ..models import FeedMetadata


class DefaultFeedCatalog:
    """Locale-keyed default feeds."""

    def __init__(self, feeds: Optional[Dict[str, List[DefaultFeedConfig]]] = None) -> None:
        self.feeds = feeds if feeds is not None else ConfigModel().default_feeds
        self._by_url = {feed.url: feed for locale_feeds in self.feeds.values() for feed in locale_feeds}

    def get_default_feeds(self, locale: str) -> List[DefaultFeedConfig]:
        return list(self.feeds.get(locale, []))

    def default_urls(self, locale: Optional[str] = None) -> Set[str]:
        """URLs of the defaults for ``locale``, or of every locale."""
        if locale is None:
            return set(self._by_url)
        return {feed.url for feed in self.get_default_feeds(locale)}

    def is_default_feed(self, url: str) -> bool:
        return url in self._by_url

    def feed_language(self, url: str) -> Optional[str]:
        """Language tag for a default feed, in the form feeds declare it."""
        feed = self._by_url.get(url)
        if feed is None:
            return None
        return "ja" if feed.language.upper() == "JP" else "en"

    def split(self, feed_urls: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Separate user-selected feeds from default feeds."""
        user, defaults = [], []
        for url in feed_urls:
            (defaults if self.is_default_feed(url) else user).append(url)
        return user, defaults

    def feed_metadata(self, feed_urls: Iterable[str], locale: str) -> List[FeedMetadata]:
        """Metadata for the given feeds plus this locale's defaults."""
        metadata: List[FeedMetadata] = []
        seen: Set[str] = set()
        for url in list(feed_urls) + [feed.url for feed in self.get_default_feeds(locale)]:
            if url in seen:
                continue
            seen.add(url)
            default = self._by_url.get(url)
            metadata.append(
                FeedMetadata(
                    url=url,
                    title=default.title if default else None,
                    is_default=default is not None,
                )
            )
        return metadata
