"""RSS feed fetcher with concurrent processing."""

import asyncio
import calendar
import html
import re
from typing import Any, List, Optional, Set

import feedparser
import httpx
import pendulum
from pendulum import DateTime
from rich.console import Console

from ..clock import Clock, reference_now
from ..constants import DESCRIPTION_MAX_CHARS
from ..errors import FetchError
from ..logging_config import create_logger
from ..models import Article
from .models import FeedResult

console = Console()
logger = create_logger(__name__)

_IMG_SRC = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def extract_image_url(entry: Any) -> Optional[str]:
    """Pick an image for a feed entry.

    Priority: image enclosure, media:content, media:thumbnail, then the first
    <img> in the entry body.
    """
    for enclosure in entry.get("enclosures", []) or []:
        if enclosure.get("href") and str(enclosure.get("type", "")).startswith("image/"):
            return enclosure["href"]

    for media in entry.get("media_content", []) or []:
        if media.get("url"):
            return media["url"]

    for thumbnail in entry.get("media_thumbnail", []) or []:
        if thumbnail.get("url"):
            return thumbnail["url"]

    match = _IMG_SRC.search(_entry_body(entry))
    if match:
        return match.group(1)

    return None


def _entry_body(entry: Any) -> str:
    contents = entry.get("content") or []
    if contents and contents[0].get("value"):
        return contents[0]["value"]
    return entry.get("summary") or entry.get("description") or ""


def to_plain_text(markup: str) -> str:
    """Strip tags and collapse whitespace."""
    text = html.unescape(_TAG.sub(" ", markup))
    return _WHITESPACE.sub(" ", text).strip()


def truncate_description(text: str, limit: int = DESCRIPTION_MAX_CHARS) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def parse_published(entry: Any) -> Optional[DateTime]:
    """Publication time of an entry in UTC, if the feed states one."""
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    return pendulum.from_timestamp(calendar.timegm(parsed))


class RSSFetcher:
    """Fetch and parse RSS feeds."""

    def __init__(
        self,
        timeout: float = 5.0,
        max_concurrent: int = 5,
        clock: Clock = reference_now,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        user_agent: str = "rsspress/0.1 (+RSS newspaper)",
    ) -> None:
        """
        Initialize RSS fetcher.

        Args:
            timeout: Per-feed timeout in seconds
            max_concurrent: Maximum feeds fetched at once
            clock: Source of "now" for the lookback window
            transport: Optional httpx transport (tests use httpx.MockTransport)
            user_agent: User-Agent header sent to feed hosts
        """
        self.timeout = timeout
        self.max_concurrent = max_concurrent
        self.clock = clock
        self.transport = transport
        self.user_agent = user_agent

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        )

    async def fetch_feed(self, url: str, days_back: int) -> FeedResult:
        """
        Fetch a single feed and keep the entries from the last ``days_back`` days.

        Raises:
            FetchError: on timeout, HTTP error or unparseable feed
        """
        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(url, e) from e
        except Exception as e:
            # httpx.InvalidURL is not an HTTPError
            raise FetchError(url, e, f"Unexpected error: {e}") from e

        try:
            feed = feedparser.parse(response.content)
        except Exception as e:
            raise FetchError(url, e, "Unexpected parser failure") from e

        if feed.bozo and not feed.entries:
            raise FetchError(url, feed.get("bozo_exception"), f"Invalid RSS feed: {feed.get('bozo_exception')}")

        now = self.clock()
        cutoff = now.subtract(days=days_back)
        feed_meta = feed.get("feed", {})
        feed_title = feed_meta.get("title") or None

        articles: List[Article] = []
        seen_links: Set[str] = set()
        for entry in feed.entries:
            title = (entry.get("title") or "").strip()
            link = (entry.get("link") or "").strip()
            # Skip items without required fields
            if not title or not link or link in seen_links:
                continue
            seen_links.add(link)

            published = parse_published(entry) or now
            if published < cutoff:
                continue

            snippet = entry.get("summary") or _entry_body(entry)
            articles.append(
                Article(
                    title=title,
                    description=truncate_description(to_plain_text(snippet)),
                    link=link,
                    pub_date=published,
                    image_url=extract_image_url(entry),
                    feed_source=url,
                    feed_title=feed_title,
                )
            )

        logger.debug(
            "Parsed %s: %d entries, %d within %d days",
            url,
            len(feed.entries),
            len(articles),
            days_back,
        )

        return FeedResult(
            source_url=url,
            success=True,
            articles=articles,
            language=feed_meta.get("language") or None,
            feed_title=feed_title,
            item_count=len(feed.entries),
        )

    async def fetch_all_feeds(self, urls: List[str], days_back: int) -> List[FeedResult]:
        """Fetch all feeds concurrently; a failing feed never aborts the others."""
        if not urls:
            return []

        # Create semaphore for concurrency control
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def fetch_with_semaphore(url: str) -> FeedResult:
            async with semaphore:
                try:
                    return await self.fetch_feed(url, days_back)
                except FetchError as e:
                    logger.warning("%s", e)
                    return FeedResult(source_url=url, success=False, error=str(e))

        tasks = [fetch_with_semaphore(url) for url in urls]
        return list(await asyncio.gather(*tasks))


def print_feed_summary(results: List[FeedResult]) -> None:
    """Print summary of feed fetch results."""
    total_items = sum(len(r.articles) for r in results)
    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful

    console.print("\n[bold]RSS Feed Summary:[/bold]")
    console.print(f"  Feeds fetched: {len(results)}")
    console.print(f"  Successful: [green]{successful}[/green]")
    console.print(f"  Failed: [red]{failed}[/red]")
    console.print(f"  Articles in window: {total_items}")

    if failed > 0:
        console.print("\n[bold red]Failed feeds:[/bold red]")
        for result in results:
            if not result.success:
                console.print(f"  - {result.source_url}: {result.error}")
