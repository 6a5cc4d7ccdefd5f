"""Data models for ingestion."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import Article


class FeedResult(BaseModel):
    """Result of fetching an RSS feed."""

    source_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether fetch was successful")
    articles: List[Article] = Field(default_factory=list, description="Articles within the lookback window")
    language: Optional[str] = Field(None, description="Feed-level <language> tag")
    feed_title: Optional[str] = Field(None, description="Feed-level <title>")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of entries in the feed before filtering")


class IngestionResult(BaseModel):
    """Articles selected by an ingestion window, plus feed metadata."""

    articles: List[Article] = Field(default_factory=list)
    feed_languages: Dict[str, str] = Field(default_factory=dict, description="Feed URL to language tag")
    feed_titles: Dict[str, str] = Field(default_factory=dict, description="Feed URL to feed title")
    window_days: int = Field(0, description="Lookback window that produced the articles")
    target: Optional[int] = Field(None, description="Drawn target article count")
    successful_feeds: int = Field(0)
    failed_feeds: int = Field(0)
