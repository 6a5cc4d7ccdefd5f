"""Article and feed metadata models."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class Article(CamelModel):
    """A single news article flowing through the pipeline.

    ``importance`` is unset on raw-fetched articles and always set once the
    scorer has run.
    """

    title: str = Field(..., min_length=1, description="Article title")
    description: str = Field("", description="Plain-text description, possibly empty")
    link: str = Field(..., description="Article URL")
    pub_date: datetime = Field(..., alias="pubDate", description="Publication timestamp")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Lead image URL")
    feed_source: str = Field(..., alias="feedSource", description="URL of the origin feed")
    feed_title: Optional[str] = Field(None, alias="feedTitle", description="Display name of the feed")
    importance: Optional[int] = Field(None, ge=0, le=100, description="Importance score 0-100")

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)


class FeedMetadata(CamelModel):
    """Feed identity plus whether it was injected as a default feed."""

    url: str = Field(..., description="RSS feed URL")
    title: Optional[str] = Field(None, description="Feed display name")
    is_default: bool = Field(False, alias="isDefault", description="Injected fallback feed")
