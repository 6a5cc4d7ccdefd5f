import random

import pytest

from rsspress.errors import NoArticlesFound, TooFewArticles
from rsspress.ingestion import DefaultFeedCatalog, IngestionWindow
from rsspress.pipeline import NewspaperGenerator, check_article_count, rank_by_importance
from rsspress.ranking import ArticleLimiter, ImportanceScorer, MockScoreProvider

from .helpers import BBC, TZ, USER_FEED, StubFetcher, fixed_clock, make_article


def build_generator(feeds, provider=None, languages=None):
    fetcher = StubFetcher(feeds, languages)
    window = IngestionWindow(fetcher, rng=random.Random(8), clock=fixed_clock, tz=TZ)
    scorer = ImportanceScorer(provider=provider or MockScoreProvider(), rng=random.Random(9))
    return NewspaperGenerator(window, scorer, ArticleLimiter(), DefaultFeedCatalog())


class TestNewspaperGenerator:

    @pytest.mark.asyncio
    async def test_generate(self):
        generator = build_generator({USER_FEED: [make_article(i, image=i < 2) for i in range(20)]})

        newspaper = await generator.generate([USER_FEED], "technology")

        assert 8 <= len(newspaper.articles) <= 15
        assert all(a.importance is not None for a in newspaper.articles)
        assert newspaper.languages == ["EN"]
        assert not newspaper.used_fallback
        assert set(newspaper.stats) == {"fetch", "scoring", "limiting"}
        assert newspaper.stats["fetch"]["stats"]["window_days"] == 3

    @pytest.mark.asyncio
    async def test_fallback_flag_comes_from_this_run(self):
        generator = build_generator(
            {USER_FEED: [make_article(i) for i in range(10)]},
            provider=MockScoreProvider(reply="no json"),
        )

        newspaper = await generator.generate([USER_FEED], "technology")

        assert newspaper.used_fallback
        assert newspaper.stats["scoring"]["stats"]["fallback"] is True

    @pytest.mark.asyncio
    async def test_default_feeds_are_capped(self):
        feeds = {
            USER_FEED: [make_article(i) for i in range(9)],
            BBC: [make_article(10 + i, feed=BBC) for i in range(9)],
        }
        generator = build_generator(feeds)

        newspaper = await generator.generate([USER_FEED, BBC], "world")

        bbc = [a for a in newspaper.articles if a.feed_source == BBC]
        assert len(bbc) <= 2

    @pytest.mark.asyncio
    async def test_no_articles(self):
        generator = build_generator({})

        with pytest.raises(NoArticlesFound):
            await generator.generate([USER_FEED], "world")

    @pytest.mark.asyncio
    async def test_too_few_articles(self):
        generator = build_generator({USER_FEED: [make_article(1), make_article(2)]})

        with pytest.raises(TooFewArticles):
            await generator.generate([USER_FEED], "world")

    def test_check_article_count(self):
        check_article_count(3)
        with pytest.raises(NoArticlesFound):
            check_article_count(0)
        with pytest.raises(TooFewArticles):
            check_article_count(2)

    def test_rank_by_importance_is_stable(self):
        articles = [make_article(i, importance=score) for i, score in enumerate([40, 90, 40, 70])]

        ranked = rank_by_importance(articles, 3)

        assert [a.importance for a in ranked] == [90, 70, 40]
        assert ranked[2] is articles[0]
