"""Newspaper metadata and date-bucket records."""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ..constants import CATEGORY_HISTORICAL, CATEGORY_PUBLIC, METADATA_SK
from .article import Article
from .base import CamelModel
from .keys import ItemKey, date_sk, index_sort_key, newspaper_pk, views_sort_key

Locale = Literal["en", "ja"]

_KEY_ATTRIBUTES = ("PK", "SK", "GSI1PK", "GSI1SK")


def _strip_keys(item: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in item.items() if k not in _KEY_ATTRIBUTES}


class NewspaperMetadata(CamelModel):
    """Newspaper-level record; owns the view counter."""

    newspaper_id: str = Field(..., alias="newspaperId")
    name: str = Field(..., description="Newspaper name")
    user_name: str = Field("System", alias="userName")
    feed_urls: List[str] = Field(default_factory=list, alias="feedUrls")
    view_count: int = Field(0, alias="viewCount", ge=0)
    is_public: bool = Field(False, alias="isPublic")
    locale: Locale = Field("en")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @property
    def key(self) -> ItemKey:
        return ItemKey(newspaper_pk(self.newspaper_id), METADATA_SK)

    def to_item(self) -> Dict[str, Any]:
        item = {"PK": self.key.pk, "SK": self.key.sk, **self.to_dict()}
        if self.is_public:
            item["GSI1PK"] = CATEGORY_PUBLIC
            item["GSI1SK"] = views_sort_key(self.view_count, self.newspaper_id)
        return item

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "NewspaperMetadata":
        return cls.model_validate(_strip_keys(item))


class NewspaperRecord(CamelModel):
    """Snapshot of one newspaper for one calendar date.

    Articles are immutable once written; only the view counter changes.
    """

    newspaper_id: str = Field(..., alias="newspaperId")
    newspaper_date: str = Field(..., alias="newspaperDate", description="YYYY-MM-DD")
    name: str = Field(..., description="Newspaper name")
    user_name: str = Field("System", alias="userName")
    feed_urls: List[str] = Field(default_factory=list, alias="feedUrls")
    articles: List[Article] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    summary: Optional[str] = Field(None)
    view_count: int = Field(0, alias="viewCount", ge=0)
    is_public: bool = Field(False, alias="isPublic")
    locale: Locale = Field("en")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @property
    def key(self) -> ItemKey:
        return ItemKey(newspaper_pk(self.newspaper_id), date_sk(self.newspaper_date))

    @property
    def category(self) -> str:
        return CATEGORY_PUBLIC if self.is_public else CATEGORY_HISTORICAL

    def to_item(self) -> Dict[str, Any]:
        return {
            "PK": self.key.pk,
            "SK": self.key.sk,
            "GSI1PK": self.category,
            "GSI1SK": index_sort_key(self.newspaper_date, self.newspaper_id),
            **self.to_dict(),
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "NewspaperRecord":
        return cls.model_validate(_strip_keys(item))
