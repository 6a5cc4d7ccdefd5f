from rsspress.models import FeedMetadata
from rsspress.ranking import ArticleLimiter, count_articles_by_feed

from .helpers import BBC, NYT, OTHER_FEED, USER_FEED, make_article

METADATA = [
    FeedMetadata(url=USER_FEED),
    FeedMetadata(url=OTHER_FEED),
    FeedMetadata(url=BBC, title="BBC News", is_default=True),
    FeedMetadata(url=NYT, title="New York Times", is_default=True),
]


class TestArticleLimiter:

    def test_caps_default_feeds_when_enough_articles(self):
        user = [make_article(i) for i in range(6)]
        other = [make_article(10 + i, feed=OTHER_FEED) for i in range(3)]
        bbc = [make_article(20 + i, feed=BBC) for i in range(5)]
        nyt = [make_article(30 + i, feed=NYT) for i in range(4)]

        limited = ArticleLimiter().limit(bbc + user + nyt + other, METADATA)

        counts = count_articles_by_feed(limited)
        assert counts == {USER_FEED: 6, OTHER_FEED: 3, BBC: 2, NYT: 2}
        assert limited[:9] == user + other
        assert limited[9:] == bbc[:2] + nyt[:2]

    def test_backfills_in_insertion_order(self):
        user = [make_article(i) for i in range(2)]
        bbc = [make_article(20 + i, feed=BBC) for i in range(5)]
        nyt = [make_article(30 + i, feed=NYT) for i in range(4)]

        limited = ArticleLimiter().limit(user + bbc + nyt, METADATA)

        assert len(limited) == 8
        assert limited[:6] == user + bbc[:2] + nyt[:2]
        # Overflow: bbc[2:] then nyt[2:], first two taken
        assert limited[6:] == bbc[2:4]

    def test_backfill_stops_when_overflow_runs_out(self):
        bbc = [make_article(20 + i, feed=BBC) for i in range(3)]

        limited = ArticleLimiter().limit(bbc, METADATA)

        assert limited == bbc

    def test_non_default_articles_are_never_dropped(self):
        user = [make_article(i) for i in range(30)]

        limited = ArticleLimiter().limit(user, METADATA)

        assert limited == user

    def test_is_deterministic(self):
        articles = [make_article(i, feed=BBC if i % 3 else USER_FEED) for i in range(15)]
        limiter = ArticleLimiter(max_per_default_feed=1, min_article_count=4)

        assert limiter.limit(articles, METADATA) == limiter.limit(articles, METADATA)

    def test_empty(self):
        assert ArticleLimiter().limit([], METADATA) == []
