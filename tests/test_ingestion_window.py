import random

import pytest

from rsspress.ingestion import FetchAttempt, IngestionWindow, select_articles

from .helpers import FIXED_NOW, OTHER_FEED, TZ, USER_FEED, StubFetcher, fixed_clock, make_article


def build_window(fetcher, seed=7, **kwargs):
    return IngestionWindow(fetcher, rng=random.Random(seed), clock=fixed_clock, tz=TZ, **kwargs)


class TestSelectArticles:

    def test_images_lead_and_newest_are_kept(self):
        articles = [make_article(i, image=(i % 4 == 0)) for i in range(20)]

        selected = select_articles(articles, 10, random.Random(3))

        newest = {a.link for a in articles[:10]}
        assert {a.link for a in selected} == newest
        image_count = sum(1 for a in selected if a.has_image)
        assert image_count == 3
        assert all(a.has_image for a in selected[:image_count])
        assert not any(a.has_image for a in selected[image_count:])

    def test_fewer_articles_than_target(self):
        articles = [make_article(i) for i in range(4)]

        assert len(select_articles(articles, 12, random.Random(0))) == 4


class TestFetchForNewspaper:

    @pytest.mark.asyncio
    async def test_stops_at_first_window_with_enough_articles(self):
        fetcher = StubFetcher({USER_FEED: [make_article(i) for i in range(20)]})
        window = build_window(fetcher)

        result = await window.fetch_for_newspaper([USER_FEED], "tech")

        assert fetcher.windows == [3]
        assert result.window_days == 3
        assert 8 <= result.target <= 15
        assert len(result.articles) == result.target

    @pytest.mark.asyncio
    async def test_escalates_to_seven_days(self):
        recent = [make_article(i) for i in range(4)]
        older = [make_article(100 + i, pub_date=FIXED_NOW.subtract(days=5, hours=i)) for i in range(6)]
        fetcher = StubFetcher({USER_FEED: recent + older})
        window = build_window(fetcher)

        result = await window.fetch_for_newspaper([USER_FEED], "tech")

        assert fetcher.windows == [3, 7]
        assert result.window_days == 7
        assert len(result.articles) == min(result.target, 10)

    @pytest.mark.asyncio
    async def test_soft_minimum_returns_what_was_found(self):
        fetcher = StubFetcher({USER_FEED: [make_article(i) for i in range(5)]})
        window = build_window(fetcher)

        result = await window.fetch_for_newspaper([USER_FEED], "tech")

        assert fetcher.windows == [3, 7]
        assert len(result.articles) == 5

    @pytest.mark.asyncio
    async def test_three_of_four_feeds_failing(self):
        feeds = {
            USER_FEED: [make_article(1), make_article(2)],
            OTHER_FEED: None,
            "https://feeds.example.com/down-1.xml": None,
            "https://feeds.example.com/down-2.xml": None,
        }
        fetcher = StubFetcher(feeds)
        window = build_window(fetcher)

        result = await window.fetch_for_newspaper(list(feeds), "tech")

        assert len(result.articles) == 2
        assert result.successful_feeds == 1
        assert result.failed_feeds == 3

    @pytest.mark.asyncio
    async def test_no_feeds(self):
        fetcher = StubFetcher({})
        result = await build_window(fetcher).fetch_for_newspaper([], "tech")

        assert result.articles == []
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_feed_languages_are_collected(self):
        fetcher = StubFetcher({USER_FEED: [make_article(i) for i in range(10)]}, languages={USER_FEED: "ja"})
        result = await build_window(fetcher).fetch_for_newspaper([USER_FEED], "tech")

        assert result.feed_languages == {USER_FEED: "ja"}

    def test_target_is_drawn_within_range(self):
        window = build_window(StubFetcher({}), seed=99)

        targets = {window.draw_target() for _ in range(200)}
        assert min(targets) >= 8
        assert max(targets) <= 15
        assert len(targets) > 1


class TestCollectForDate:

    def test_historical_attempts(self):
        window = build_window(StubFetcher({}))

        assert window.historical_attempts() == [FetchAttempt(7), FetchAttempt(14), FetchAttempt(14, 7)]

    @pytest.mark.asyncio
    async def test_keeps_only_the_requested_day(self):
        on_day = [make_article(i, pub_date=FIXED_NOW.subtract(days=2).set(hour=9 + i % 10)) for i in range(9)]
        other_day = [make_article(50 + i, pub_date=FIXED_NOW.subtract(days=3, hours=i)) for i in range(3)]
        fetcher = StubFetcher({USER_FEED: on_day + other_day})
        window = build_window(fetcher)

        result = await window.collect_for_date([USER_FEED], "2024-06-13")

        assert fetcher.windows == [7]
        assert {a.link for a in result.articles} == {a.link for a in on_day}

    @pytest.mark.asyncio
    async def test_extends_range_before_the_date(self):
        on_day = [make_article(i, pub_date=FIXED_NOW.subtract(days=2).set(hour=10)) for i in range(3)]
        earlier = [make_article(50 + i, pub_date=FIXED_NOW.subtract(days=5, hours=i)) for i in range(6)]
        fetcher = StubFetcher({USER_FEED: on_day + earlier})
        window = build_window(fetcher)

        result = await window.collect_for_date([USER_FEED], "2024-06-13")

        assert fetcher.windows == [7, 14]
        assert result.window_days == 14
        assert len(result.articles) == 9

    @pytest.mark.asyncio
    async def test_today_ends_at_now(self):
        earlier_today = make_article(1, pub_date=FIXED_NOW.subtract(hours=1))
        later_today = make_article(2, pub_date=FIXED_NOW.add(hours=3))
        fetcher = StubFetcher({USER_FEED: [earlier_today, later_today]})
        window = build_window(fetcher)

        result = await window.collect_for_date([USER_FEED], "2024-06-15")

        assert [a.link for a in result.articles] == [earlier_today.link]

    @pytest.mark.asyncio
    async def test_fetch_for_date_selects_target(self):
        on_day = [make_article(i, pub_date=FIXED_NOW.subtract(days=1).set(hour=i)) for i in range(20)]
        fetcher = StubFetcher({USER_FEED: on_day})
        window = build_window(fetcher)

        result = await window.fetch_for_date([USER_FEED], "2024-06-14")

        assert 8 <= result.target <= 15
        assert len(result.articles) == result.target
