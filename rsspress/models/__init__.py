"""Data models for rsspress."""

from .article import Article, FeedMetadata
from .keys import ItemKey, date_from_sk, date_sk, index_sort_key, newspaper_pk, views_sort_key
from .newspaper import Locale, NewspaperMetadata, NewspaperRecord

__all__ = [
    "Article",
    "FeedMetadata",
    "ItemKey",
    "Locale",
    "NewspaperMetadata",
    "NewspaperRecord",
    "date_from_sk",
    "date_sk",
    "index_sort_key",
    "newspaper_pk",
    "views_sort_key",
]
