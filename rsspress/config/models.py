"""Configuration models."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import (
    DEFAULT_FEED_PENALTY,
    HISTORICAL_EXTENSION_DAYS,
    HISTORICAL_WINDOWS,
    MAX_BATCH_DELETE,
    MAX_DEFAULT_ARTICLES_PER_FEED,
    MIN_ARTICLES,
    NEWSPAPER_WINDOWS,
    REFERENCE_TIMEZONE,
    RETENTION_DAYS,
    TARGET_ARTICLES_MAX,
    TARGET_ARTICLES_MIN,
)


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("rsspress", description="Database name")
    user: str = Field("rsspress_user", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")
    pool_size: int = Field(10, description="Maximum pooled connections", ge=1)
    connect_timeout: int = Field(5, description="Connection timeout in seconds", ge=1)


class StorageConfig(BaseModel):
    """Newspaper store backend."""

    backend: str = Field("postgres", description="Store backend (postgres, memory)")

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        if v not in ("postgres", "memory"):
            raise ValueError(f"Unknown storage backend: {v}")
        return v


class LLMConfig(BaseModel):
    """Relevance model provider configuration."""

    provider: str = Field("openai", description="LLM provider (openai, mock)")
    model: str = Field("gpt-4o-mini", description="Model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API (e.g., for a local gateway)")
    timeout_seconds: float = Field(10.0, description="Scoring call timeout", gt=0)


class IngestionConfig(BaseModel):
    """Feed ingestion parameters."""

    fetch_timeout: float = Field(5.0, description="Per-feed fetch timeout in seconds", gt=0)
    max_concurrent: int = Field(5, description="Concurrent feed fetches", ge=1, le=50)
    min_articles: int = Field(MIN_ARTICLES, description="Soft minimum before widening the window", ge=1)
    target_min: int = Field(TARGET_ARTICLES_MIN, description="Lower bound of the random target count", ge=1)
    target_max: int = Field(TARGET_ARTICLES_MAX, description="Upper bound of the random target count", ge=1)
    windows: List[int] = Field(default_factory=lambda: list(NEWSPAPER_WINDOWS))
    historical_windows: List[int] = Field(default_factory=lambda: list(HISTORICAL_WINDOWS))
    historical_extension_days: int = Field(HISTORICAL_EXTENSION_DAYS, ge=0)

    @field_validator("windows", "historical_windows")
    @classmethod
    def validate_windows(cls, v: List[int]) -> List[int]:
        """Windows must be non-empty and strictly widening."""
        if not v:
            raise ValueError("At least one lookback window is required")
        if any(b <= a for a, b in zip(v, v[1:])) or v[0] <= 0:
            raise ValueError(f"Lookback windows must be positive and increasing, got {v}")
        return v

    @model_validator(mode="after")
    def validate_target_range(self) -> "IngestionConfig":
        if self.target_min > self.target_max:
            raise ValueError(
                f"target_min ({self.target_min}) must not exceed target_max ({self.target_max})"
            )
        return self


class ScoringConfig(BaseModel):
    """Importance scoring parameters."""

    default_feed_penalty: int = Field(DEFAULT_FEED_PENALTY, ge=0, le=100)


class LimiterConfig(BaseModel):
    """Default-feed quota parameters."""

    max_default_articles_per_feed: int = Field(MAX_DEFAULT_ARTICLES_PER_FEED, ge=0)
    min_article_count: int = Field(MIN_ARTICLES, ge=0)


class RetentionConfig(BaseModel):
    """Retention sweep parameters."""

    retention_days: int = Field(RETENTION_DAYS, ge=1)
    batch_size: int = Field(MAX_BATCH_DELETE, ge=1, le=MAX_BATCH_DELETE)
    page_size: int = Field(100, ge=1, le=1000)


class DefaultFeedConfig(BaseModel):
    """A default (fallback) feed injected into every newspaper of a locale."""

    url: str = Field(..., description="RSS feed URL")
    title: str = Field(..., description="Feed display name")
    language: str = Field("EN", description="Feed language tag (EN, JP)")


def _default_feed_catalog() -> Dict[str, List[DefaultFeedConfig]]:
    return {
        "en": [
            DefaultFeedConfig(url="https://www.bbc.com/news/world/rss.xml", title="BBC News", language="EN"),
            DefaultFeedConfig(url="https://rss.nytimes.com/services/xml/rss/nyt/World.xml", title="New York Times", language="EN"),
            DefaultFeedConfig(url="https://www.theguardian.com/world/rss", title="The Guardian", language="EN"),
            DefaultFeedConfig(url="https://www.reuters.com/rssFeed/worldNews", title="Reuters", language="EN"),
        ],
        "ja": [
            DefaultFeedConfig(url="https://www.nhk.or.jp/rss/news/cat0.xml", title="NHK News", language="JP"),
            DefaultFeedConfig(url="https://news.yahoo.co.jp/rss/topics/top-picks.xml", title="Yahoo News", language="JP"),
            DefaultFeedConfig(url="https://www.asahi.com/rss/asahi/newsheadlines.rdf", title="Asahi Shimbun", language="JP"),
            DefaultFeedConfig(url="https://rss.itmedia.co.jp/rss/2.0/news_bursts.xml", title="ITmedia", language="JP"),
        ],
    }


class ConfigModel(BaseModel):
    """Main configuration model."""

    timezone: str = Field(REFERENCE_TIMEZONE, description="Reference timezone for date arithmetic")
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    limiter: LimiterConfig = Field(default_factory=LimiterConfig)
    retention: RetentionConfig = Field(default_factory=RetentionConfig)
    default_feeds: Dict[str, List[DefaultFeedConfig]] = Field(default_factory=_default_feed_catalog)
