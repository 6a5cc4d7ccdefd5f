"""
Language detection for articles and newspapers.

A feed's own ``<language>`` tag wins; otherwise the share of Japanese
script (Hiragana, Katakana, Kanji) in the title and the start of the
description decides.
"""

import re
from typing import Iterable, List, Mapping

from .models import Article

EN = "EN"
JP = "JP"
LANGUAGE_ORDER = (EN, JP)

JAPANESE_THRESHOLD = 0.1
DESCRIPTION_SAMPLE_CHARS = 50

_JAPANESE_CHARS = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")


def normalize_language_tag(tag: str) -> str:
    """'ja', 'ja-JP' -> JP; anything else -> EN."""
    return JP if tag.strip().lower().startswith("ja") else EN


def detect_language(text: str) -> str:
    """JP when Japanese characters make up more than 10% of ``text``."""
    if not text or not text.strip():
        return EN

    japanese_count = len(_JAPANESE_CHARS.findall(text))
    return JP if japanese_count > len(text) * JAPANESE_THRESHOLD else EN


def detect_article_language(article: Article, feed_languages: Mapping[str, str]) -> str:
    feed_language = feed_languages.get(article.feed_source)
    if feed_language:
        return normalize_language_tag(feed_language)

    sample = f"{article.title} {(article.description or '')[:DESCRIPTION_SAMPLE_CHARS]}"
    return detect_language(sample)


def detect_languages(articles: Iterable[Article], feed_languages: Mapping[str, str]) -> List[str]:
    """Distinct languages of a newspaper, EN before JP."""
    found = {detect_article_language(article, feed_languages) for article in articles}
    return [language for language in LANGUAGE_ORDER if language in found]
