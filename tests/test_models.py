from types import SimpleNamespace

from rsspress.models import Article, FeedMetadata

from .helpers import FIXED_NOW, USER_FEED


class TestCamelModel:

    def test_accepts_field_names_and_aliases(self):
        by_name = Article(title="T", link="https://x.example/1", pub_date=FIXED_NOW, feed_source=USER_FEED)
        by_alias = Article(title="T", link="https://x.example/1", pubDate=FIXED_NOW, feedSource=USER_FEED)

        assert by_name == by_alias
        assert by_alias.feed_source == USER_FEED

    def test_to_dict_uses_aliases_and_drops_none(self):
        data = FeedMetadata(url=USER_FEED, is_default=True).to_dict()

        assert data == {"url": USER_FEED, "isDefault": True}

    def test_validates_from_attributes(self):
        row = SimpleNamespace(url=USER_FEED, title="Example Wire", is_default=False)

        meta = FeedMetadata.model_validate(row)

        assert meta.title == "Example Wire"
        assert not meta.is_default
