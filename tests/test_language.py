from rsspress.language import (
    EN,
    JP,
    detect_article_language,
    detect_language,
    detect_languages,
    normalize_language_tag,
)

from .helpers import OTHER_FEED, USER_FEED, make_article


class TestDetectLanguage:

    def test_empty_text_is_english(self):
        assert detect_language("") == EN
        assert detect_language("   ") == EN

    def test_english_text(self):
        assert detect_language("Markets rally as inflation cools") == EN

    def test_japanese_text(self):
        assert detect_language("東京で新しい技術の発表がありました") == JP

    def test_threshold_is_strictly_more_than_ten_percent(self):
        # 1 Japanese character in 10 is exactly 10%
        assert detect_language("東" + "a" * 9) == EN
        assert detect_language("東京" + "a" * 8) == JP

    def test_mixed_title_with_katakana(self):
        assert detect_language("AI スタートアップが資金調達") == JP

    def test_normalize_language_tag(self):
        assert normalize_language_tag("ja") == JP
        assert normalize_language_tag("ja-JP") == JP
        assert normalize_language_tag("en-us") == EN
        assert normalize_language_tag("fr") == EN


class TestArticleLanguages:

    def test_feed_tag_wins_over_content(self):
        article = make_article(1, title="English headline")

        assert detect_article_language(article, {USER_FEED: "ja"}) == JP

    def test_non_japanese_feed_tag_means_english(self):
        article = make_article(1, title="日本語の見出しです")

        assert detect_article_language(article, {USER_FEED: "en-US"}) == EN

    def test_description_sample_is_used(self):
        article = make_article(1, title="Tokyo", description="今日の東京の天気は晴れです。" * 5)

        assert detect_article_language(article, {}) == JP

    def test_languages_are_ordered_english_first(self):
        articles = [
            make_article(1, feed=OTHER_FEED, title="日本語の見出しです"),
            make_article(2, title="English headline"),
            make_article(3, feed=OTHER_FEED, title="もう一つのニュース"),
        ]

        assert detect_languages(articles, {}) == [EN, JP]

    def test_single_language(self):
        articles = [make_article(1, title="日本語の見出しです")]

        assert detect_languages(articles, {}) == [JP]
        assert detect_languages([], {}) == []
